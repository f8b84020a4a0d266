# Area: Ledger
"""
ttt_client._ledger.instructions — Instruction builders for the game program
===========================================================================

Builds the four program instructions (initialize, accept, play, close)
in Anchor's encoding: ``sha256("global:<name>")[:8]`` followed by the
borsh-encoded arguments. Account order matches the program's account
structs.
"""

from __future__ import annotations
import hashlib
import struct
from typing import Tuple

from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey
from solders.system_program import ID as SYSTEM_PROGRAM_ID

TOKEN_PROGRAM_ID = Pubkey.from_string("TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA")
ASSOCIATED_TOKEN_PROGRAM_ID = Pubkey.from_string("ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL")

AUTHORITY_SEED = b"authority"


def instruction_discriminator(name: str) -> bytes:
    return hashlib.sha256(f"global:{name}".encode("utf-8")).digest()[:8]


def derive_authority(program_id: Pubkey) -> Tuple[Pubkey, int]:
    """PDA that owns the stake vault."""
    return Pubkey.find_program_address([AUTHORITY_SEED], program_id)


def derive_associated_token_account(owner: Pubkey, mint: Pubkey) -> Pubkey:
    seeds = [bytes(owner), bytes(TOKEN_PROGRAM_ID), bytes(mint)]
    ata, _ = Pubkey.find_program_address(seeds, ASSOCIATED_TOKEN_PROGRAM_ID)
    return ata


def derive_stake_vault(program_id: Pubkey, mint: Pubkey) -> Pubkey:
    authority, _ = derive_authority(program_id)
    return derive_associated_token_account(authority, mint)


def build_initialize_instruction(
    program_id: Pubkey,
    player_one: Pubkey,
    player_two: Pubkey,
    game: Pubkey,
    stake_mint: Pubkey,
    token_account: Pubkey,
    stake_amount: int,
) -> Instruction:
    """Create a game and move player one's stake into the vault."""
    authority, _ = derive_authority(program_id)
    accounts = [
        AccountMeta(player_one, is_signer=True, is_writable=True),
        AccountMeta(player_two, is_signer=False, is_writable=False),
        AccountMeta(game, is_signer=True, is_writable=True),
        AccountMeta(authority, is_signer=False, is_writable=False),
        AccountMeta(stake_mint, is_signer=False, is_writable=False),
        AccountMeta(derive_stake_vault(program_id, stake_mint), is_signer=False, is_writable=True),
        AccountMeta(token_account, is_signer=False, is_writable=True),
        AccountMeta(TOKEN_PROGRAM_ID, is_signer=False, is_writable=False),
        AccountMeta(ASSOCIATED_TOKEN_PROGRAM_ID, is_signer=False, is_writable=False),
        AccountMeta(SYSTEM_PROGRAM_ID, is_signer=False, is_writable=False),
    ]
    data = instruction_discriminator("initialize") + struct.pack("<Q", stake_amount)
    return Instruction(program_id, data, accounts)


def build_accept_instruction(
    program_id: Pubkey,
    player_two: Pubkey,
    game: Pubkey,
    stake_mint: Pubkey,
    token_account: Pubkey,
) -> Instruction:
    """Accept a game and move player two's stake into the vault."""
    authority, _ = derive_authority(program_id)
    accounts = [
        AccountMeta(player_two, is_signer=True, is_writable=False),
        AccountMeta(authority, is_signer=False, is_writable=False),
        AccountMeta(stake_mint, is_signer=False, is_writable=False),
        AccountMeta(derive_stake_vault(program_id, stake_mint), is_signer=False, is_writable=True),
        AccountMeta(token_account, is_signer=False, is_writable=True),
        AccountMeta(game, is_signer=False, is_writable=True),
        AccountMeta(TOKEN_PROGRAM_ID, is_signer=False, is_writable=False),
    ]
    return Instruction(program_id, instruction_discriminator("accept"), accounts)


def build_play_instruction(
    program_id: Pubkey,
    player: Pubkey,
    game: Pubkey,
    row: int,
    column: int,
) -> Instruction:
    accounts = [
        AccountMeta(player, is_signer=True, is_writable=False),
        AccountMeta(game, is_signer=False, is_writable=True),
    ]
    data = instruction_discriminator("play") + struct.pack("<BB", row, column)
    return Instruction(program_id, data, accounts)


def build_close_instruction(
    program_id: Pubkey,
    game: Pubkey,
    player_one: Pubkey,
    player_two: Pubkey,
    stake_mint: Pubkey,
    token_account_one: Pubkey,
    token_account_two: Pubkey,
) -> Instruction:
    """Pay out the vault and close the game record (rent goes to player one)."""
    authority, _ = derive_authority(program_id)
    accounts = [
        AccountMeta(game, is_signer=False, is_writable=True),
        AccountMeta(player_one, is_signer=False, is_writable=True),
        AccountMeta(player_two, is_signer=False, is_writable=False),
        AccountMeta(authority, is_signer=False, is_writable=False),
        AccountMeta(stake_mint, is_signer=False, is_writable=False),
        AccountMeta(derive_stake_vault(program_id, stake_mint), is_signer=False, is_writable=True),
        AccountMeta(token_account_one, is_signer=False, is_writable=True),
        AccountMeta(token_account_two, is_signer=False, is_writable=True),
        AccountMeta(TOKEN_PROGRAM_ID, is_signer=False, is_writable=False),
    ]
    return Instruction(program_id, instruction_discriminator("close"), accounts)
