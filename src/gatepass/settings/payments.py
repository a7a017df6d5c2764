from decouple import config

PAYMENT_CURRENCY = config("PAYMENT_CURRENCY", default="INR")
RAZORPAY_KEY_ID = config("RAZORPAY_KEY_ID", default="rzp_test_...")
RAZORPAY_KEY_SECRET = config("RAZORPAY_KEY_SECRET", default="rzp_test_secret_...")
# Empty keeps the SDK's own API root.
RAZORPAY_API_BASE_URL = config("RAZORPAY_API_BASE_URL", default="")
PAYMENT_GATEWAY_TIMEOUT_SECONDS = config("PAYMENT_GATEWAY_TIMEOUT_SECONDS", default=10.0, cast=float)
# Signature value a client sends to register for a zero-fee event. Rejected on paid events.
FREE_EVENT_SIGNATURE = config("FREE_EVENT_SIGNATURE", default="FREE")
