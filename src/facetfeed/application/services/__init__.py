from .query_builder import build_query

__all__ = ["build_query"]
