# Area: Shared
"""
ttt_client.errors — Custom exception classes
=============================================

Defines the exception hierarchy for the client.
Each exception stores its context so the orchestrator can report it
and the file log can record it in structured form.
"""

from __future__ import annotations
from typing import Any, List, Optional
import json


class TicTacToeClientError(Exception):
    """Base exception for all ttt_client errors."""
    pass


class ConfigError(TicTacToeClientError):
    """Raised when the client configuration is missing or invalid."""

    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__(f"Invalid configuration: {errors}")


class TransportError(TicTacToeClientError):
    """Raised when the RPC endpoint cannot be reached or answers garbage."""
    pass


class RecordDecodeError(TicTacToeClientError):
    """Raised when a ledger record does not match the expected layout."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Malformed game record: {reason}")


class PollCancelledError(TicTacToeClientError):
    """Raised when a polling wait is cancelled before a change is observed."""
    pass


# ── Input errors (phase-local retry) ─────────────────────────


class InputError(TicTacToeClientError):
    """Raised when user input is malformed."""
    pass


class ZeroStakeError(InputError):
    def __init__(self):
        super().__init__("The amount of tokens to be staked must be greater than zero")


class StakePrecisionError(InputError):
    """Raised when a stake has more fractional digits than the mint allows."""

    def __init__(self, decimals_given: int, decimals_allowed: int):
        self.decimals_given = decimals_given
        self.decimals_allowed = decimals_allowed
        super().__init__(
            f"Your input has {decimals_given} decimals, "
            f"where maximum decimals allowed = {decimals_allowed}"
        )


class StakeExceedsBalanceError(InputError):
    def __init__(self, amount: int, balance: int):
        self.amount = amount
        self.balance = balance
        super().__init__(
            f"The stake amount {amount} exceeds the token account balance {balance}"
        )


class InvalidSelectionError(TicTacToeClientError):
    """Raised when a 1-based choice is non-numeric or out of range."""

    def __init__(self, answer: str, count: int):
        self.answer = answer
        self.count = count
        super().__init__(f"Invalid selection {answer!r}: expected a number from 1 to {count}")


# ── Lookup errors (abort the action) ─────────────────────────


class LookupFailure(TicTacToeClientError):
    """Base class for failed ledger lookups."""
    pass


class MintNotFoundError(LookupFailure):
    def __init__(self, mint: str):
        self.mint = mint
        super().__init__(
            f"Error fetching token mint {mint}. The address provided might not be a mint"
        )


class NoFundingAccountError(LookupFailure):
    """Raised when the owner holds no token account at all for the mint."""

    def __init__(self, owner: str, mint: str):
        self.owner = owner
        self.mint = mint
        super().__init__("You do not have any token account with the specified mint")


class InsufficientFundsError(LookupFailure):
    """Raised when token accounts exist but none holds the required balance."""

    def __init__(self, owner: str, mint: str, required: int, best_balance: int):
        self.owner = owner
        self.mint = mint
        self.required = required
        self.best_balance = best_balance
        super().__init__(
            "You do not have any token account with sufficient funds to stake "
            f"(required {required}, largest balance {best_balance})"
        )


class NoGamesFoundError(LookupFailure):
    def __init__(self, purpose: str):
        self.purpose = purpose
        messages = {
            "accept": "You have no games to accept, check that your opponent has initiated a game",
            "resume": "You have no ongoing games at the moment",
        }
        super().__init__(messages.get(purpose, f"No games found to {purpose}"))


class RecordNotFoundError(LookupFailure):
    def __init__(self, address: str):
        self.address = address
        super().__init__(f"Game record {address} does not exist")


# ── Submission errors ────────────────────────────────────────


class SubmitError(TicTacToeClientError):
    """Raised when the remote program (or the RPC node) rejects an instruction."""

    def __init__(
        self,
        instruction: str,
        reason: str,
        rpc_error: Optional[Any] = None,
    ):
        self.instruction = instruction
        self.reason = reason
        self.rpc_error = rpc_error
        super().__init__(f"Instruction '{instruction}' failed: {reason}")

    def format_error_log(self) -> str:
        from datetime import datetime, timezone

        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"
        lines = [
            "",
            "=" * 64,
            " INSTRUCTION REJECTED",
            "=" * 64,
            f" Timestamp:    {timestamp}",
            f" Instruction:  {self.instruction}",
            f" Reason:       {self.reason}",
        ]
        if self.rpc_error is not None:
            lines.append("")
            lines.append(" ── RPC ERROR " + "─" * 50)
            lines.append(_indent_json(self.rpc_error))
        lines.append("=" * 64)
        return "\n".join(lines)


def _indent_json(data: Any, indent: int = 2) -> str:
    """Format JSON with indentation for error logs."""
    try:
        formatted = json.dumps(data, indent=indent, default=str)
        return "\n".join(" " + line for line in formatted.split("\n"))
    except (TypeError, ValueError):
        return f" {repr(data)}"
