from .search_results_model import ResultRoles, SearchResultsModel, item_title

__all__ = ["ResultRoles", "SearchResultsModel", "item_title"]
