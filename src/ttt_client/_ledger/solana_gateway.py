# Area: Ledger
"""
ttt_client._ledger.solana_gateway — Solana implementation of LedgerGateway
==========================================================================

Fetches game records and token accounts over JSON-RPC and submits
signed transactions for the four game instructions. After sending,
the signature status is polled until it reaches the configured
commitment.
"""

from __future__ import annotations
import base64
import json
import logging
import time
from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence, Tuple

from solders.hash import Hash
from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.message import Message
from solders.pubkey import Pubkey
from solders.transaction import Transaction

from .._client_config import ClientConfig
from .._game.layout import decode_game
from .._game.models import FundingAccount, Game, MintInfo
from .._shared.activity_logger import get_activity_logger
from ..errors import ConfigError, RecordDecodeError, SubmitError, TransportError
from .gateway import LedgerGateway
from .instructions import (
    build_accept_instruction,
    build_close_instruction,
    build_initialize_instruction,
    build_play_instruction,
)
from .rpc_client import RpcClient, RpcError

logger = logging.getLogger("ttt_client.ledger")

_COMMITMENT_RANK = {"processed": 0, "confirmed": 1, "finalized": 2}


def load_keypair(path: str) -> Keypair:
    """
    Load a Solana CLI keypair file (a JSON array of 64 integers).

    Raises:
        ConfigError: If the file is missing or does not hold a keypair
    """
    keypair_path = Path(path)
    if not keypair_path.exists():
        raise ConfigError([f"keypair_path: file not found: {path}"])
    try:
        with open(keypair_path, encoding="utf-8") as f:
            secret = json.load(f)
        return Keypair.from_bytes(bytes(secret))
    except (ValueError, TypeError) as e:
        raise ConfigError([
            f"keypair_path: could not retrieve keypair from {path} ({e})"
        ]) from e


class SolanaGateway(LedgerGateway):
    """LedgerGateway backed by a Solana JSON-RPC node."""

    def __init__(
        self,
        config: ClientConfig,
        keypair: Keypair,
        rpc: Optional[RpcClient] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config
        self.keypair = keypair
        self.program_id = Pubkey.from_string(config.program_id)
        self.rpc = rpc or RpcClient(config.rpc_url, timeout=config.request_timeout_seconds)
        self._sleep = sleep

    @property
    def local_address(self) -> str:
        return str(self.keypair.pubkey())

    # ── Fetch ─────────────────────────────────────────────────

    def fetch_record(self, address: str) -> Optional[Game]:
        result = self._query(
            "getAccountInfo",
            [address, {"encoding": "base64", "commitment": self.config.commitment}],
        )
        value = result.get("value")
        if value is None:
            return None
        return decode_game(self._account_bytes(value))

    def fetch_records_by_discriminator(self, discriminator: bytes) -> List[Tuple[str, Game]]:
        memcmp = {
            "offset": 0,
            "bytes": base64.b64encode(discriminator).decode("ascii"),
            "encoding": "base64",
        }
        result = self._query(
            "getProgramAccounts",
            [
                str(self.program_id),
                {
                    "encoding": "base64",
                    "commitment": self.config.commitment,
                    "filters": [{"memcmp": memcmp}],
                },
            ],
        )
        records: List[Tuple[str, Game]] = []
        for entry in result:
            address = entry["pubkey"]
            try:
                records.append((address, decode_game(self._account_bytes(entry["account"]))))
            except RecordDecodeError as e:
                logger.warning("Skipping undecodable record %s: %s", address, e)
        return records

    def fetch_token_accounts(self, owner: str, mint: str) -> List[FundingAccount]:
        result = self._query(
            "getTokenAccountsByOwner",
            [
                owner,
                {"mint": mint},
                {"encoding": "jsonParsed", "commitment": self.config.commitment},
            ],
        )
        accounts = []
        for entry in result.get("value", []):
            info = entry["account"]["data"]["parsed"]["info"]
            accounts.append(FundingAccount(
                address=entry["pubkey"],
                owning_mint=info["mint"],
                owner_address=info["owner"],
                balance=int(info["tokenAmount"]["amount"]),
            ))
        return accounts

    def fetch_mint_info(self, mint: str) -> Optional[MintInfo]:
        try:
            result = self.rpc.call(
                "getAccountInfo",
                [mint, {"encoding": "jsonParsed", "commitment": self.config.commitment}],
            )
        except RpcError as e:
            logger.info("Mint lookup rejected for %s: %s", mint, e)
            return None
        value = result.get("value")
        if value is None:
            return None
        data = value.get("data")
        if not isinstance(data, dict) or data.get("parsed", {}).get("type") != "mint":
            return None
        info = data["parsed"]["info"]
        return MintInfo(address=mint, decimals=int(info["decimals"]), supply=int(info["supply"]))

    # ── Submit ────────────────────────────────────────────────

    def submit_create(
        self,
        player_one: str,
        player_two: str,
        stake: int,
        funding_account: FundingAccount,
    ) -> str:
        game_keypair = Keypair()
        instruction = build_initialize_instruction(
            program_id=self.program_id,
            player_one=Pubkey.from_string(player_one),
            player_two=Pubkey.from_string(player_two),
            game=game_keypair.pubkey(),
            stake_mint=Pubkey.from_string(funding_account.owning_mint),
            token_account=Pubkey.from_string(funding_account.address),
            stake_amount=stake,
        )
        self._send("initialize", [instruction], extra_signers=[game_keypair])
        game_address = str(game_keypair.pubkey())
        logger.info("Created game account %s", game_address)
        return game_address

    def submit_accept(self, game_address: str, funding_account: FundingAccount) -> str:
        instruction = build_accept_instruction(
            program_id=self.program_id,
            player_two=self.keypair.pubkey(),
            game=Pubkey.from_string(game_address),
            stake_mint=Pubkey.from_string(funding_account.owning_mint),
            token_account=Pubkey.from_string(funding_account.address),
        )
        return self._send("accept", [instruction])

    def submit_move(self, game_address: str, row: int, column: int) -> str:
        instruction = build_play_instruction(
            program_id=self.program_id,
            player=self.keypair.pubkey(),
            game=Pubkey.from_string(game_address),
            row=row,
            column=column,
        )
        return self._send("play", [instruction])

    def submit_close(self, game_address: str) -> str:
        game = self.fetch_record(game_address)
        if game is None:
            raise SubmitError("close", f"game record {game_address} not found")

        payout_accounts = []
        for label, player in zip(("one", "two"), game.players):
            accounts = self.fetch_token_accounts(player, game.stake_mint)
            if not accounts:
                raise SubmitError(
                    "close", f"could not fetch any token account for player {label}"
                )
            payout_accounts.append(Pubkey.from_string(accounts[0].address))

        instruction = build_close_instruction(
            program_id=self.program_id,
            game=Pubkey.from_string(game_address),
            player_one=Pubkey.from_string(game.players[0]),
            player_two=Pubkey.from_string(game.players[1]),
            stake_mint=Pubkey.from_string(game.stake_mint),
            token_account_one=payout_accounts[0],
            token_account_two=payout_accounts[1],
        )
        return self._send("close", [instruction])

    # ── Internals ─────────────────────────────────────────────

    def _query(self, method: str, params: List[Any]) -> Any:
        """Read-only call; node errors are treated as transport failures."""
        try:
            return self.rpc.call(method, params)
        except RpcError as e:
            raise TransportError(str(e)) from e

    @staticmethod
    def _account_bytes(account: dict) -> bytes:
        data = account["data"]
        if not isinstance(data, list) or len(data) != 2 or data[1] != "base64":
            raise RecordDecodeError("account data is not base64 encoded")
        return base64.b64decode(data[0])

    def _send(
        self,
        instruction_name: str,
        instructions: List[Instruction],
        extra_signers: Sequence[Keypair] = (),
    ) -> str:
        blockhash_result = self._query(
            "getLatestBlockhash", [{"commitment": self.config.commitment}]
        )
        blockhash = Hash.from_string(blockhash_result["value"]["blockhash"])

        message = Message.new_with_blockhash(instructions, self.keypair.pubkey(), blockhash)
        tx = Transaction.new_unsigned(message)
        tx.sign([self.keypair, *extra_signers], blockhash)

        encoded = base64.b64encode(bytes(tx)).decode("ascii")
        try:
            signature = self.rpc.call(
                "sendTransaction",
                [encoded, {"encoding": "base64", "preflightCommitment": self.config.commitment}],
            )
        except RpcError as e:
            raise SubmitError(instruction_name, str(e), rpc_error=e.error) from e

        self._confirm(instruction_name, signature)
        get_activity_logger().log_sent(instruction_name, signature)
        return signature

    def _confirm(self, instruction_name: str, signature: str) -> None:
        wanted = _COMMITMENT_RANK[self.config.commitment]
        for _ in range(self.config.confirm_attempts):
            result = self._query("getSignatureStatuses", [[signature]])
            status = (result.get("value") or [None])[0]
            if status is not None:
                if status.get("err") is not None:
                    raise SubmitError(
                        instruction_name, "transaction failed", rpc_error=status["err"]
                    )
                reached = _COMMITMENT_RANK.get(status.get("confirmationStatus") or "", -1)
                if reached >= wanted:
                    return
            self._sleep(self.config.poll_interval_seconds)
        raise SubmitError(
            instruction_name,
            f"transaction {signature} not confirmed after "
            f"{self.config.confirm_attempts} attempts",
        )
