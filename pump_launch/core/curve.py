# pump_launch/core/curve.py

from dataclasses import dataclass
from typing import Optional

# --- Solana/Borsh Imports ---
from construct import Bytes, ConstructError, Flag, Int64ul, Struct
from solders.pubkey import Pubkey
from solana.rpc.commitment import Commitment, Confirmed

from .exceptions import NetworkFetchError, TransactionBuildError
from .pubkeys import PumpAddresses
from ..utils.logger import get_logger

logger = get_logger(__name__)

ANCHOR_DISCRIMINATOR_SIZE = 8
FEE_BASIS_POINTS_DENOMINATOR = 10_000

# --- Global Account Layout ---
# Fields after the 8-byte Anchor discriminator. Newer program versions append
# more fields; only this prefix is read.
GLOBAL_ACCOUNT_LAYOUT = Struct(
    "initialized" / Flag,
    "authority" / Bytes(32),
    "fee_recipient" / Bytes(32),
    "initial_virtual_token_reserves" / Int64ul,
    "initial_virtual_sol_reserves" / Int64ul,
    "initial_real_token_reserves" / Int64ul,
    "token_total_supply" / Int64ul,
    "fee_basis_points" / Int64ul,
)


@dataclass
class GlobalState:
    initialized: bool
    authority: Pubkey
    fee_recipient: Pubkey
    initial_virtual_token_reserves: int
    initial_virtual_sol_reserves: int
    initial_real_token_reserves: int
    token_total_supply: int
    fee_basis_points: int

    def calculate_initial_tokens_out(self, sol_in_lamports: int) -> int:
        """
        Tokens the first buyer of a freshly created curve receives for
        ``sol_in_lamports`` (fee included), using pump.fun's constant-product
        quote on the initial virtual reserves, capped at the real reserves.
        """
        if sol_in_lamports <= 0:
            return 0
        # The program charges its fee on top of the curve cost.
        sol_for_curve = sol_in_lamports * FEE_BASIS_POINTS_DENOMINATOR // (
            FEE_BASIS_POINTS_DENOMINATOR + self.fee_basis_points)
        denominator = self.initial_virtual_sol_reserves + sol_for_curve
        if denominator == 0:
            return 0
        tokens_out = self.initial_virtual_token_reserves * sol_for_curve // denominator
        return min(tokens_out, self.initial_real_token_reserves)


def decode_global_account(raw_data: bytes) -> GlobalState:
    """Decodes the pump.fun global account (discriminator included)."""
    expected = ANCHOR_DISCRIMINATOR_SIZE + GLOBAL_ACCOUNT_LAYOUT.sizeof()
    if len(raw_data) < expected:
        raise TransactionBuildError(
            f"Global account data too short: {len(raw_data)} bytes, expected at least {expected}")
    try:
        parsed = GLOBAL_ACCOUNT_LAYOUT.parse(raw_data[ANCHOR_DISCRIMINATOR_SIZE:expected])
    except ConstructError as e:
        raise TransactionBuildError(f"Construct error decoding global account: {e}", cause=e) from e
    return GlobalState(
        initialized=bool(parsed.initialized),
        authority=Pubkey(parsed.authority),
        fee_recipient=Pubkey(parsed.fee_recipient),
        initial_virtual_token_reserves=parsed.initial_virtual_token_reserves,
        initial_virtual_sol_reserves=parsed.initial_virtual_sol_reserves,
        initial_real_token_reserves=parsed.initial_real_token_reserves,
        token_total_supply=parsed.token_total_supply,
        fee_basis_points=parsed.fee_basis_points,
    )


class GlobalStateManager:
    """Fetches and decodes the pump.fun global account."""

    def __init__(self, client, addresses: PumpAddresses):
        self.client = client  # Expects SolanaClient (your wrapper)
        self.addresses = addresses

    async def get_global_state(self, commitment: Optional[Commitment] = Confirmed) -> GlobalState:
        account = self.addresses.global_account
        logger.debug(f"Fetching pump.fun global state {account}")
        raw_data = await self.client.get_account_data(account, commitment=commitment)
        if raw_data is None:
            raise NetworkFetchError(f"pump.fun global account {account} not found")
        state = decode_global_account(raw_data)
        if not state.initialized:
            raise TransactionBuildError(f"pump.fun global account {account} is not initialized")
        logger.debug(f"Global state: {state}")
        return state
