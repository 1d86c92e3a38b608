from .scroll_trigger import ScrollTrigger

__all__ = ["ScrollTrigger"]
