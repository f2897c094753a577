class InvalidInputError(ValueError):
    """Raised when a scrape request contains no usable URL."""


class SearchError(RuntimeError):
    """Raised when the search provider cannot be queried or parsed."""
