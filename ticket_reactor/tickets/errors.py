from __future__ import annotations


class TicketReactorError(RuntimeError):
    """Base error for ticket reaction issues."""


class TicketStoreError(TicketReactorError):
    """Raised when the ticket store could not serve a request."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TicketNotFoundError(TicketStoreError):
    """Raised when a ticket could not be located."""


class SignalError(TicketReactorError):
    """Raised when the workflow engine rejects a success or failure signal."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
