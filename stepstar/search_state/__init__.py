from .search_state import SearchState, SuccessorEnumerationError
