"""Tests for program-derived address derivation."""

import pytest
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from spl.token.instructions import get_associated_token_address as spl_get_associated_token_address

from pump_launch.core import addresses
from pump_launch.core.addresses import (
    derive_token_addresses,
    find_program_address,
    get_associated_token_address,
    get_bonding_curve_addresses,
    get_metadata_address,
)
from pump_launch.core.exceptions import AddressDerivationError
from pump_launch.core.pubkeys import DEVNET_ADDRESSES, MAINNET_ADDRESSES, SolanaProgramAddresses
from tests.conftest import AlwaysOnCurvePubkey


# ── find_program_address ─────────────────────────────────────────────


class TestFindProgramAddress:
    def test_matches_solders_derivation(self) -> None:
        mint = Keypair().pubkey()
        seeds = [b"bonding-curve", bytes(mint)]
        expected = Pubkey.find_program_address(seeds, MAINNET_ADDRESSES.program_id)
        assert find_program_address(seeds, MAINNET_ADDRESSES.program_id) == expected

    def test_result_is_off_curve(self) -> None:
        pda, bump = find_program_address([b"seed"], MAINNET_ADDRESSES.program_id)
        assert not pda.is_on_curve()
        assert 0 <= bump <= 255

    def test_deterministic(self) -> None:
        mint = Keypair().pubkey()
        first = find_program_address([bytes(mint)], MAINNET_ADDRESSES.program_id)
        second = find_program_address([bytes(mint)], MAINNET_ADDRESSES.program_id)
        assert first == second

    def test_seed_too_long(self) -> None:
        with pytest.raises(AddressDerivationError, match="No viable bump seed") as exc_info:
            find_program_address([b"x" * 33], MAINNET_ADDRESSES.program_id)
        assert exc_info.value.cause is not None

    def test_too_many_seeds(self) -> None:
        with pytest.raises(AddressDerivationError):
            find_program_address([b"s"] * 16, MAINNET_ADDRESSES.program_id)

    def test_exhausted_bumps_raise(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(addresses, "Pubkey", AlwaysOnCurvePubkey)
        with pytest.raises(AddressDerivationError, match="No viable bump seed") as exc_info:
            find_program_address([b"seed"], MAINNET_ADDRESSES.program_id)
        assert AlwaysOnCurvePubkey.attempts[-256:] == list(range(255, -1, -1))
        assert isinstance(exc_info.value.cause, ValueError)


# ── Token addresses ──────────────────────────────────────────────────


class TestTokenAddresses:
    def test_associated_token_address_matches_spl(self) -> None:
        owner = Keypair().pubkey()
        mint = Keypair().pubkey()
        assert get_associated_token_address(owner, mint) == spl_get_associated_token_address(owner, mint)

    def test_metadata_address(self) -> None:
        mint = Keypair().pubkey()
        program = SolanaProgramAddresses.TOKEN_METADATA_PROGRAM_ID
        expected, _ = Pubkey.find_program_address([b"metadata", bytes(program), bytes(mint)], program)
        assert get_metadata_address(mint) == expected

    def test_associated_bonding_curve_is_curve_ata(self) -> None:
        mint = Keypair().pubkey()
        curve = get_bonding_curve_addresses(mint, MAINNET_ADDRESSES)
        assert curve.associated_bonding_curve == get_associated_token_address(curve.bonding_curve, mint)

    def test_derivation_is_pure(self) -> None:
        mint = Keypair().pubkey()
        assert derive_token_addresses(mint, MAINNET_ADDRESSES) == derive_token_addresses(mint, MAINNET_ADDRESSES)

    def test_distinct_mints_distinct_curves(self) -> None:
        a = derive_token_addresses(Keypair().pubkey(), MAINNET_ADDRESSES)
        b = derive_token_addresses(Keypair().pubkey(), MAINNET_ADDRESSES)
        assert a.bonding_curve != b.bonding_curve
        assert a.metadata != b.metadata

    def test_network_does_not_change_derived_addresses(self) -> None:
        mint = Keypair().pubkey()
        assert derive_token_addresses(mint, MAINNET_ADDRESSES) == derive_token_addresses(mint, DEVNET_ADDRESSES)

    def test_exhaustion_propagates(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(addresses, "Pubkey", AlwaysOnCurvePubkey)
        with pytest.raises(AddressDerivationError):
            derive_token_addresses(Keypair().pubkey(), MAINNET_ADDRESSES)
