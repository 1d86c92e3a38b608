from .debounce import Debouncer, debounce

__all__ = ["Debouncer", "debounce"]
