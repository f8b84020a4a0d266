# Area: Ledger Tests
"""Tests for the game program instruction builders."""

import hashlib
import struct

from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.system_program import ID as SYSTEM_PROGRAM_ID

from ttt_client._client_config import DEFAULT_PROGRAM_ID
from ttt_client._ledger.instructions import (
    ASSOCIATED_TOKEN_PROGRAM_ID,
    TOKEN_PROGRAM_ID,
    build_accept_instruction,
    build_close_instruction,
    build_initialize_instruction,
    build_play_instruction,
    derive_associated_token_account,
    derive_authority,
    derive_stake_vault,
    instruction_discriminator,
)

PROGRAM_ID = Pubkey.from_string(DEFAULT_PROGRAM_ID)


def key():
    return Keypair().pubkey()


class TestDerivations:
    """Tests for discriminators and program-derived addresses."""

    def test_instruction_discriminator(self):
        assert instruction_discriminator("play") == hashlib.sha256(b"global:play").digest()[:8]

    def test_authority_is_pda_of_seed(self):
        authority, bump = derive_authority(PROGRAM_ID)
        assert authority == Pubkey.create_program_address([b"authority", bytes([bump])], PROGRAM_ID)

    def test_stake_vault_is_authority_token_account(self):
        mint = key()
        authority, _ = derive_authority(PROGRAM_ID)
        assert derive_stake_vault(PROGRAM_ID, mint) == derive_associated_token_account(authority, mint)

    def test_associated_token_account_is_deterministic(self):
        owner, mint = key(), key()
        assert derive_associated_token_account(owner, mint) == derive_associated_token_account(owner, mint)
        assert derive_associated_token_account(owner, mint) != derive_associated_token_account(mint, owner)


class TestBuilders:
    """Tests for instruction data and account order."""

    def test_initialize(self):
        player_one, player_two, game, mint, source = key(), key(), key(), key(), key()
        ix = build_initialize_instruction(
            PROGRAM_ID, player_one, player_two, game, mint, source, 1_500_000
        )
        assert ix.program_id == PROGRAM_ID
        assert ix.data == instruction_discriminator("initialize") + struct.pack("<Q", 1_500_000)
        keys = [meta.pubkey for meta in ix.accounts]
        assert keys == [
            player_one,
            player_two,
            game,
            derive_authority(PROGRAM_ID)[0],
            mint,
            derive_stake_vault(PROGRAM_ID, mint),
            source,
            TOKEN_PROGRAM_ID,
            ASSOCIATED_TOKEN_PROGRAM_ID,
            SYSTEM_PROGRAM_ID,
        ]
        signers = [meta.pubkey for meta in ix.accounts if meta.is_signer]
        assert signers == [player_one, game]

    def test_accept(self):
        player_two, game, mint, source = key(), key(), key(), key()
        ix = build_accept_instruction(PROGRAM_ID, player_two, game, mint, source)
        assert ix.data == instruction_discriminator("accept")
        assert ix.accounts[0].pubkey == player_two
        assert ix.accounts[0].is_signer is True
        assert ix.accounts[5].pubkey == game
        assert ix.accounts[5].is_writable is True

    def test_play(self):
        player, game = key(), key()
        ix = build_play_instruction(PROGRAM_ID, player, game, 2, 1)
        assert ix.data == instruction_discriminator("play") + bytes([2, 1])
        assert [meta.pubkey for meta in ix.accounts] == [player, game]

    def test_close(self):
        game, one, two, mint, acc_one, acc_two = key(), key(), key(), key(), key(), key()
        ix = build_close_instruction(PROGRAM_ID, game, one, two, mint, acc_one, acc_two)
        assert ix.data == instruction_discriminator("close")
        keys = [meta.pubkey for meta in ix.accounts]
        assert keys[:3] == [game, one, two]
        assert keys[6:8] == [acc_one, acc_two]
        assert not any(meta.is_signer for meta in ix.accounts)
