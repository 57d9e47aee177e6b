# pump_launch/core/addresses.py

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from solders.pubkey import Pubkey
from spl.token.instructions import get_associated_token_address as spl_get_associated_token_address

from .constants import BONDING_CURVE_SEED, METADATA_SEED
from .exceptions import AddressDerivationError
from .pubkeys import PumpAddresses, SolanaProgramAddresses


@dataclass(frozen=True)
class BondingCurveAddresses:
    bonding_curve: Pubkey
    associated_bonding_curve: Pubkey


@dataclass(frozen=True)
class TokenAddresses:
    """Every derived account a create instruction needs for one mint."""
    bonding_curve: Pubkey
    associated_bonding_curve: Pubkey
    metadata: Pubkey


def find_program_address(seeds: Sequence[bytes], program_id: Pubkey) -> Tuple[Pubkey, int]:
    """
    Searches bump seeds from 255 down to 0 for the first valid program address.

    Same result as ``Pubkey.find_program_address``, but bad seeds and an
    exhausted search surface as ``AddressDerivationError``.
    """
    base_seeds: List[bytes] = [bytes(s) for s in seeds]
    last_error: Optional[Exception] = None
    for bump in range(255, -1, -1):
        try:
            return Pubkey.create_program_address(base_seeds + [bytes([bump])], program_id), bump
        except Exception as e:  # on-curve candidate or invalid seeds
            last_error = e
    raise AddressDerivationError(
        f"No viable bump seed for seeds {[s.hex() for s in base_seeds]} under program {program_id}: {last_error}",
        cause=last_error,
    )


def get_associated_token_address(owner: Pubkey, mint: Pubkey) -> Pubkey:
    """Calculates the Associated Token Account address for a given owner and mint."""
    return spl_get_associated_token_address(owner, mint)


def get_bonding_curve_addresses(mint: Pubkey, addresses: PumpAddresses) -> BondingCurveAddresses:
    bonding_curve, _ = find_program_address([BONDING_CURVE_SEED, bytes(mint)], addresses.program_id)
    return BondingCurveAddresses(
        bonding_curve=bonding_curve,
        associated_bonding_curve=get_associated_token_address(bonding_curve, mint),
    )


def get_metadata_address(mint: Pubkey) -> Pubkey:
    """Metaplex metadata PDA for the mint."""
    metadata_program = SolanaProgramAddresses.TOKEN_METADATA_PROGRAM_ID
    pda, _ = find_program_address([METADATA_SEED, bytes(metadata_program), bytes(mint)], metadata_program)
    return pda


def derive_token_addresses(mint: Pubkey, addresses: PumpAddresses) -> TokenAddresses:
    curve = get_bonding_curve_addresses(mint, addresses)
    return TokenAddresses(
        bonding_curve=curve.bonding_curve,
        associated_bonding_curve=curve.associated_bonding_curve,
        metadata=get_metadata_address(mint),
    )
