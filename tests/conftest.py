"""Shared test fixtures.

The RPC layer is replaced by ``FakeSolanaClient``, an in-memory stand-in that
records every call so tests can assert which network interactions happened.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import pytest
from solders.hash import Hash
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solana.rpc.commitment import Finalized

from pump_launch.core import pubkeys
from pump_launch.core.curve import GLOBAL_ACCOUNT_LAYOUT
from pump_launch.core.priority_fee import PriorityFeeManager

# Values of the live pump.fun global account.
INITIAL_VIRTUAL_TOKEN_RESERVES = 1_073_000_000_000_000
INITIAL_VIRTUAL_SOL_RESERVES = 30_000_000_000
INITIAL_REAL_TOKEN_RESERVES = 793_100_000_000_000
TOKEN_TOTAL_SUPPLY = 1_000_000_000_000_000
FEE_BASIS_POINTS = 100


def make_global_account_data(
    *,
    initialized: bool = True,
    virtual_token: int = INITIAL_VIRTUAL_TOKEN_RESERVES,
    virtual_sol: int = INITIAL_VIRTUAL_SOL_RESERVES,
    real_token: int = INITIAL_REAL_TOKEN_RESERVES,
    total_supply: int = TOKEN_TOTAL_SUPPLY,
    fee_bps: int = FEE_BASIS_POINTS,
    trailing: bytes = b"",
) -> bytes:
    """Raw global account bytes: 8-byte discriminator + layout (+ optional newer fields)."""
    body = GLOBAL_ACCOUNT_LAYOUT.build({
        "initialized": initialized,
        "authority": bytes(Keypair().pubkey()),
        "fee_recipient": bytes(pubkeys.MAINNET_ADDRESSES.fee_recipient),
        "initial_virtual_token_reserves": virtual_token,
        "initial_virtual_sol_reserves": virtual_sol,
        "initial_real_token_reserves": real_token,
        "token_total_supply": total_supply,
        "fee_basis_points": fee_bps,
    })
    return bytes(8) + body + trailing


class AlwaysOnCurvePubkey:
    """Stands in for ``Pubkey`` where every derived candidate lands on the curve."""

    attempts: List[int] = []

    @staticmethod
    def create_program_address(seeds: List[bytes], program_id: Pubkey) -> Pubkey:
        AlwaysOnCurvePubkey.attempts.append(seeds[-1][0])
        raise ValueError("Invalid seeds, address must fall off the curve")


class FakeSolanaClient:
    """Records calls; returns canned fee samples, blockhash and account data."""

    def __init__(
        self,
        fee_samples: Optional[List[int]] = None,
        accounts: Optional[Dict[Pubkey, bytes]] = None,
        blockhash_error: Optional[Exception] = None,
        send_error: Optional[Exception] = None,
        confirm_error: Optional[Exception] = None,
    ) -> None:
        self.fee_samples = [100, 200, 300] if fee_samples is None else list(fee_samples)
        self.accounts = {} if accounts is None else dict(accounts)
        self.blockhash = Hash.new_unique()
        self.last_valid_block_height = 1_000
        self.balance = 5_000_000_000
        self.blockhash_error = blockhash_error
        self.send_error = send_error
        self.confirm_error = confirm_error

        self.calls: List[Tuple[str, Any]] = []
        self.fee_queries: List[List[Pubkey]] = []
        self.sent: List[Any] = []
        self.confirmed: List[Dict[str, Any]] = []

    async def __aenter__(self) -> "FakeSolanaClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        return None

    @property
    def call_names(self) -> List[str]:
        return [name for name, _ in self.calls]

    async def get_recent_prioritization_fees(self, accounts: List[Pubkey]) -> List[int]:
        self.calls.append(("get_recent_prioritization_fees", accounts))
        self.fee_queries.append(list(accounts))
        return list(self.fee_samples)

    async def get_latest_blockhash(self, commitment=Finalized):
        self.calls.append(("get_latest_blockhash", commitment))
        if self.blockhash_error:
            raise self.blockhash_error
        return self.blockhash, self.last_valid_block_height

    async def get_account_data(self, pubkey: Pubkey, commitment=None) -> Optional[bytes]:
        self.calls.append(("get_account_data", pubkey))
        return self.accounts.get(pubkey)

    async def get_balance_lamports(self, pubkey: Pubkey) -> int:
        self.calls.append(("get_balance_lamports", pubkey))
        return self.balance

    async def send_transaction(self, transaction, opts=None):
        self.calls.append(("send_transaction", transaction))
        if self.send_error:
            raise self.send_error
        self.sent.append(transaction)
        return transaction.signatures[0]

    async def confirm_transaction(self, tx_sig, commitment=Finalized, timeout_seconds=None,
                                  last_valid_block_height=None, sleep_seconds=0.5) -> None:
        self.calls.append(("confirm_transaction", tx_sig))
        self.confirmed.append({
            "signature": tx_sig,
            "commitment": commitment,
            "timeout_seconds": timeout_seconds,
            "last_valid_block_height": last_valid_block_height,
        })
        if self.confirm_error:
            raise self.confirm_error


@pytest.fixture(autouse=True)
def mainnet_addresses(monkeypatch: pytest.MonkeyPatch):
    """Every test starts (and ends) in mainnet mode."""
    monkeypatch.setattr(pubkeys, "_active_addresses", pubkeys.MAINNET_ADDRESSES)
    yield


@pytest.fixture
def user() -> Keypair:
    return Keypair()


@pytest.fixture
def mint() -> Keypair:
    return Keypair()


@pytest.fixture
def fake_client() -> FakeSolanaClient:
    return FakeSolanaClient(
        accounts={pubkeys.MAINNET_ADDRESSES.global_account: make_global_account_data()},
    )


@pytest.fixture
def fee_manager(fake_client: FakeSolanaClient) -> PriorityFeeManager:
    return PriorityFeeManager(client=fake_client, enable_dynamic_fee=True)
