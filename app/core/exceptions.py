class SearchError(Exception):
    """Base class for search failures surfaced to callers."""


class SearchBackendUnavailable(SearchError):
    """The content-object index could not be queried."""

    def __init__(self, message: str = "Search backend unavailable"):
        super().__init__(message)
        self.message = message
