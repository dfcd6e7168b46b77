"""
Custom exceptions for content retrieval and view-model assembly.
"""


class ContentError(Exception):
    """Base exception for content errors."""
    pass


class ContentGatewayError(ContentError):
    """Raised when the content API cannot be reached, authenticated or queried."""
    pass


class MissingOrderingError(ContentError):
    """Raised when the ordering document for a collection is absent."""

    def __init__(self, ordering_type: str):
        self.ordering_type = ordering_type
        super().__init__(
            f"Content is missing the '{ordering_type}' ordering document; "
            f"the collection it orders cannot be built."
        )
