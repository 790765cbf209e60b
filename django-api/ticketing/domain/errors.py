"""Domain error codes for the ticketing module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    MALFORMED_CREDENTIAL = "MALFORMED_CREDENTIAL"
    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    ALREADY_USED = "ALREADY_USED"
    EXPIRED = "EXPIRED"
    INVALID_INPUT = "INVALID_INPUT"
    TRANSIENT_FAILURE = "TRANSIENT_FAILURE"


USER_MESSAGES = {
    ErrorCode.MALFORMED_CREDENTIAL: "Invalid ticket",
    ErrorCode.NOT_FOUND: "Ticket not found",
    ErrorCode.UNAUTHORIZED: "Not authorized",
    ErrorCode.ALREADY_USED: "Ticket already used",
    ErrorCode.EXPIRED: "Ticket expired",
    ErrorCode.INVALID_INPUT: "Invalid ID",
    ErrorCode.TRANSIENT_FAILURE: "Something went wrong, please try again",
}


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class MalformedCredentialError(DomainError):
    """Raised when a ticket token cannot be decoded."""

    def __init__(self, detail: str = "") -> None:
        super().__init__(
            code=ErrorCode.MALFORMED_CREDENTIAL,
            message=USER_MESSAGES[ErrorCode.MALFORMED_CREDENTIAL],
        )
        self.detail = detail


class TransientStoreError(DomainError):
    """Raised by stores when the database is unreachable or times out."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.TRANSIENT_FAILURE,
            message=USER_MESSAGES[ErrorCode.TRANSIENT_FAILURE],
        )
