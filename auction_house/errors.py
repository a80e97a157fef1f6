"""Error taxonomy for listing discovery.

Error code ranges:
  1xxx: Input / addresses
  2xxx: Account data
  3xxx: Ledger transport
  4xxx: Lifecycle (cancellation)

``UnreachableCaseError`` is deliberately outside this tree: it signals a
caller bug, not a data or transport condition.
"""

from typing import Any, Optional


class AuctionHouseError(Exception):
    """Base error for auction house reads."""

    def __init__(self, code: int, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(message)


# --- 1xxx: Input ---

class InvalidAddressError(AuctionHouseError):
    def __init__(self, value: Any, reason: Optional[str] = None) -> None:
        self.value = value
        detail = f"Invalid address: {value!r}"
        if reason:
            detail = f"{detail} ({reason})"
        super().__init__(1001, detail)


# --- 2xxx: Account data ---

class DecodeError(AuctionHouseError):
    def __init__(self, account_type: str, address: Any, reason: str) -> None:
        self.account_type = account_type
        self.address = address
        super().__init__(2001, f"Cannot decode {account_type} account {address}: {reason}")


class AccountNotFoundError(AuctionHouseError):
    def __init__(self, account_type: str, address: Any) -> None:
        self.account_type = account_type
        self.address = address
        super().__init__(2002, f"{account_type} account {address} not found")


# --- 3xxx: Transport ---

class QueryExecutionError(AuctionHouseError):
    def __init__(self, method: str, reason: str) -> None:
        self.method = method
        super().__init__(3001, f"RPC {method} failed: {reason}")


# --- 4xxx: Lifecycle ---

class OperationCanceledError(AuctionHouseError):
    def __init__(self, reason: Optional[str] = None) -> None:
        self.reason = reason
        super().__init__(4001, f"Operation canceled: {reason}" if reason else "Operation canceled")


class UnreachableCaseError(RuntimeError):
    """A closed set of cases received a value outside of it."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(f"Unreachable case: {value!r}")
