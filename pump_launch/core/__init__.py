# pump_launch/core/__init__.py

# Import directly available classes/modules via relative imports
from .client import SolanaClient
from .wallet import Wallet
from .transactions import compile_transaction, sign_transaction, signer_map
from .instruction_builder import InstructionBuilder
from .addresses import BondingCurveAddresses, TokenAddresses, derive_token_addresses
from .curve import GlobalState, GlobalStateManager
from .pubkeys import (
    DEVNET_ADDRESSES,
    MAINNET_ADDRESSES,
    PumpAddresses,
    SolanaProgramAddresses,
    get_active_addresses,
    use_devnet_addresses,
)

__all__ = [
    "SolanaClient",
    "Wallet",
    "compile_transaction",
    "sign_transaction",
    "signer_map",
    "InstructionBuilder",
    "BondingCurveAddresses",
    "TokenAddresses",
    "derive_token_addresses",
    "GlobalState",
    "GlobalStateManager",
    "PumpAddresses",
    "SolanaProgramAddresses",
    "MAINNET_ADDRESSES",
    "DEVNET_ADDRESSES",
    "get_active_addresses",
    "use_devnet_addresses",
]
