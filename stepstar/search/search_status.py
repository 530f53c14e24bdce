from enum import Enum


class SearchStatus(Enum):
    """
    The state machine of an ``AStarSearch``. ``SUCCEEDED`` and ``FAILED`` are
    terminal: once reached, further steps leave the search unchanged.
    """

    NOT_INITIALIZED = "not_initialized"
    SEARCHING = "searching"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (SearchStatus.SUCCEEDED, SearchStatus.FAILED)
