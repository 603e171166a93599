class FeedFetchError(Exception):
    """Raised when an RSS feed cannot be fetched or parsed."""


class UnknownCategoryError(LookupError):
    """Raised when a category has no configuration in the aggregator."""
