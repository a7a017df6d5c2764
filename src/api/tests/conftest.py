from events.tests.conftest import event_factory, free_event

__all__ = ["event_factory", "free_event"]
