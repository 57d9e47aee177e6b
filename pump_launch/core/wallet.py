# pump_launch/core/wallet.py

from typing import Optional

import base58
from solders.keypair import Keypair

from ..utils.logger import get_logger

logger = get_logger(__name__)


def keypair_from_base58(private_key_bs58: str) -> Keypair:
    """Decodes a base58 64-byte secret key (Phantom/solana-keygen export format)."""
    if not private_key_bs58:
        raise ValueError("Private key is empty")
    try:
        private_key_bytes: bytes = base58.b58decode(private_key_bs58.strip())
    except ValueError as e:
        raise ValueError("Invalid private key format") from e
    try:
        return Keypair.from_bytes(private_key_bytes)
    except Exception as e:
        raise ValueError(f"Failed to create Keypair from {len(private_key_bytes)} bytes") from e


class Wallet:
    """ Represents the user's wallet with keypair for signing. """
    def __init__(self, private_key_bs58: str):
        try:
            self.keypair = keypair_from_base58(private_key_bs58)
        except ValueError as e:
            logger.error(f"Invalid base58 private key provided: {e}")
            raise
        self.pubkey = self.keypair.pubkey()
        logger.info(f"Wallet initialized for pubkey: {self.pubkey}")

    def __repr__(self) -> str:
        return f"Wallet(pubkey={self.pubkey})"


def load_mint_keypair(private_key_bs58: Optional[str] = None) -> Keypair:
    """Returns the supplied mint keypair, or a freshly generated one (e.g. for a new token)."""
    if private_key_bs58:
        return keypair_from_base58(private_key_bs58)
    mint = Keypair()
    logger.info(f"Generated new mint keypair: {mint.pubkey()}")
    return mint
