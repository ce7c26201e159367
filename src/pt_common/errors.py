"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth/User
  2xxx: Account
  3xxx: Instrument
  4xxx: Trade
  5xxx: Position
  9xxx: System

Validation errors are 4xx and never leave partial state behind.
Persistence errors derive from PersistenceError and are 5xx, so callers can
tell "your trade was invalid" apart from "we could not save your trade".
"""

from decimal import Decimal


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Auth/User ---

class EmailExistsError(AppError):
    def __init__(self) -> None:
        super().__init__(1002, "User with this email already exists", 409)


class InvalidCredentialsError(AppError):
    def __init__(self) -> None:
        super().__init__(1003, "Invalid email or password", 401)


class AccountDisabledError(AppError):
    def __init__(self) -> None:
        super().__init__(1004, "Your account has been blocked by the administrator", 403)


class ReservedEmailError(AppError):
    def __init__(self) -> None:
        super().__init__(1005, "This email address is reserved", 409)


class AdminRequiredError(AppError):
    def __init__(self) -> None:
        super().__init__(1006, "Administrator account required", 403)


# --- 2xxx: Account ---

class InsufficientFundsError(AppError):
    def __init__(self, required: Decimal, available: Decimal) -> None:
        super().__init__(
            2001,
            f"Insufficient funds: required {required}, available {available}",
            422,
        )


class AccountNotFoundError(AppError):
    def __init__(self, user_id: str) -> None:
        super().__init__(2002, f"Account not found: {user_id}", 404)


# --- 3xxx: Instrument ---

class UnknownInstrumentError(AppError):
    def __init__(self, symbol: str) -> None:
        super().__init__(3001, f"Unknown instrument: {symbol}", 404)


class QuoteUnavailableError(AppError):
    def __init__(self, symbol: str) -> None:
        super().__init__(3002, f"Quote source unavailable for {symbol}", 503)


# --- 4xxx: Trade ---

class InvalidQuantityError(AppError):
    def __init__(self, shares: object) -> None:
        super().__init__(4001, f"Share count must be a positive integer, got {shares!r}", 422)


class InvalidTradeSideError(AppError):
    def __init__(self, side: object) -> None:
        super().__init__(4002, f"Trade side must be 'buy' or 'sell', got {side!r}", 422)


# --- 5xxx: Position ---

class InsufficientSharesError(AppError):
    def __init__(self, symbol: str, requested: int, held: int) -> None:
        super().__init__(
            5001,
            f"Not enough shares to sell: requested {requested} {symbol}, held {held}",
            422,
        )


class PositionNotFoundError(AppError):
    def __init__(self, symbol: str) -> None:
        super().__init__(5002, f"Stock not found in portfolio: {symbol}", 422)


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)


class PersistenceError(AppError):
    """Base for ledger store faults (infrastructure, not validation)."""


class StorageError(PersistenceError):
    def __init__(self, detail: str) -> None:
        super().__init__(9003, f"Ledger store failure: {detail}", 503)


class CorruptSnapshotError(PersistenceError):
    def __init__(self, key: str, detail: str) -> None:
        super().__init__(9004, f"Ledger snapshot '{key}' cannot be decoded: {detail}", 500)
