from __future__ import annotations


class ApplicationError(Exception):
    def __init__(self, message: str, details: str | None = None) -> None:
        super().__init__(message)
        self.details = details


class ValidationError(ApplicationError):
    pass


class NotFoundError(ApplicationError):
    pass


class MenuItemNotFoundError(NotFoundError):
    pass


class UserNotFoundError(NotFoundError):
    pass


class OrderNotFoundError(NotFoundError):
    pass


class NoValidItemsError(ApplicationError):
    pass


class MenuItemsUnavailableError(ApplicationError):
    pass


class IdempotencyReplayMismatchError(ApplicationError):
    pass


class TransactionError(ApplicationError):
    pass
