"""Exception types raised by the lookup pipeline."""

from __future__ import annotations

from .validator import Invalid

NOT_FOUND_MESSAGE = (
    "The requested information was not found in our database. Please verify the input and try again."
)


class InputValidationError(ValueError):
    """Raised when raw input fails its category grammar; no request is made."""

    def __init__(self, result: Invalid) -> None:
        super().__init__(result.message)
        self.result = result

    @property
    def reason(self) -> str:
        return self.result.reason.value


class LookupServiceError(RuntimeError):
    """Base class for failed lookups."""

    user_message = NOT_FOUND_MESSAGE


class LookupHTTPError(LookupServiceError):
    """Upstream service answered with a non-success status."""

    def __init__(self, status_code: int) -> None:
        super().__init__(f"API request failed with status: {status_code}")
        self.status_code = status_code


class EmptyLookupError(LookupServiceError):
    """Upstream service answered with no usable data."""

    def __init__(self, message: str = "No data found for the provided input") -> None:
        super().__init__(message)


class LookupTransportError(LookupServiceError):
    """The request never produced a decodable reply."""

    @property
    def user_message(self) -> str:  # type: ignore[override]
        return str(self)


class NoChainedLookupError(LookupServiceError):
    """A chained lookup was requested without a linked Aadhaar number."""

    def __init__(self) -> None:
        super().__init__("No Aadhaar number available to fetch")

    @property
    def user_message(self) -> str:  # type: ignore[override]
        return str(self)
