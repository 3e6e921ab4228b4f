from .events import extract_events

__all__ = ["extract_events"]
