# pump_launch/core/pubkeys.py

from dataclasses import dataclass, replace

from solders.pubkey import Pubkey
from solders.system_program import ID as SYSTEM_PROGRAM_ID_SOLDERS  # Renamed to avoid conflict
from spl.token.constants import (
    ASSOCIATED_TOKEN_PROGRAM_ID as ASSOCIATED_TOKEN_PROGRAM_ID_SPL,
    TOKEN_PROGRAM_ID as TOKEN_PROGRAM_ID_SPL,
)

from ..utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class PumpAddresses:
    """The pump.fun accounts every create/buy instruction refers to."""
    program_id: Pubkey
    mint_authority: Pubkey
    event_authority: Pubkey
    fee_recipient: Pubkey
    global_account: Pubkey


MAINNET_ADDRESSES = PumpAddresses(
    program_id=Pubkey.from_string("6EF8rrecthR5Dkzon8Nwu78hRvfCKubJ14M5uBEwF6P"),
    mint_authority=Pubkey.from_string("TSLvdd1pWpHVjahSpsvCXUbgwsL3JAcvokwaKt1eokM"),
    event_authority=Pubkey.from_string("Ce6TQqeHC9p8KetsN6JsjHK7UTZk7nasjjnr7XxXp9F1"),
    fee_recipient=Pubkey.from_string("CebN5WGQ4jvEPvsVU4EoHEpgzq1VV7AbicfhtW4xC9iM"),
    global_account=Pubkey.from_string("4wTV1YmiEkRvAtNtsSGPtUrqRYQMe5SKy2uB4Jjaxnjf"),
)

# The mainnet fee recipient is not initialized on devnet; everything else is shared.
DEVNET_ADDRESSES = replace(
    MAINNET_ADDRESSES,
    fee_recipient=Pubkey.from_string("68yFSZxzLWJXkxxRGydZ63C6mHx1NLEDWmwN9Lb5yySg"),
)

_NETWORKS = {
    "mainnet": MAINNET_ADDRESSES,
    "mainnet-beta": MAINNET_ADDRESSES,
    "devnet": DEVNET_ADDRESSES,
}

# Written once at startup, before any TokenCreator is built. Not lock-protected:
# switching while transactions are being assembled is undefined.
_active_addresses: PumpAddresses = MAINNET_ADDRESSES


def use_devnet_addresses() -> None:
    """Selects the devnet pump.fun addresses for the rest of the process. Idempotent."""
    global _active_addresses
    if _active_addresses is not DEVNET_ADDRESSES:
        logger.info(f"Switching pump.fun fee recipient to devnet: {DEVNET_ADDRESSES.fee_recipient}")
    _active_addresses = DEVNET_ADDRESSES


def get_active_addresses() -> PumpAddresses:
    return _active_addresses


def addresses_for_network(network: str) -> PumpAddresses:
    try:
        return _NETWORKS[network.strip().lower()]
    except KeyError:
        raise ValueError(f"Unknown Solana network '{network}'. Expected one of: {sorted(_NETWORKS)}") from None


class SolanaProgramAddresses:
    SYSTEM_PROGRAM_ID: Pubkey = SYSTEM_PROGRAM_ID_SOLDERS
    TOKEN_PROGRAM_ID: Pubkey = TOKEN_PROGRAM_ID_SPL
    ASSOCIATED_TOKEN_ACCOUNT_PROGRAM_ID: Pubkey = ASSOCIATED_TOKEN_PROGRAM_ID_SPL
    RENT_SYSVAR_PUBKEY: Pubkey = Pubkey.from_string(
        "SysvarRent111111111111111111111111111111111"
    )
    COMPUTE_BUDGET_PROGRAM_ID: Pubkey = Pubkey.from_string(
        "ComputeBudget111111111111111111111111111111"
    )
    TOKEN_METADATA_PROGRAM_ID: Pubkey = Pubkey.from_string(
        "metaqbxxUerdq28cj1RbAWkYQm3ybzjb6a8bt518x1s"
    )
