"""Error taxonomy for menu API fetches.

The client raises these; the view model turns them into the error text shown
to the user. None of them are retried.
"""


class MenuFetchError(Exception):
    """Base class for failures while fetching menu data."""

    error_type = "fetch_error"


class TransportError(MenuFetchError):
    """Network or connection failure, or a non-success HTTP status."""

    error_type = "transport"


class EmptyResponseError(MenuFetchError):
    """Request succeeded but the response carried no body."""

    error_type = "empty_response"


class DecodeError(MenuFetchError):
    """Response body does not match the expected envelope."""

    error_type = "decode"


class ApplicationError(MenuFetchError):
    """Well-formed envelope with ``status: false``."""

    error_type = "status_false"


class InvalidCategoryIdError(ValueError):
    """Raised when a dish fetch is requested without a category identifier."""

    def __init__(self, category_id: str) -> None:
        super().__init__(f"Category id must be a non-empty string, got {category_id!r}")
        self.category_id = category_id
