# pump_launch/core/priority_fee/manager.py

from dataclasses import dataclass
from typing import List, Optional, Sequence

from solders.pubkey import Pubkey

from ...utils.logger import get_logger
from ..exceptions import FeeEstimationError
from ..pubkeys import PumpAddresses, SolanaProgramAddresses
from . import PriorityFeePlugin
from .dynamic_fee import RecentFeesPriorityFeePlugin
from .fixed_fee import FixedPriorityFee

logger = get_logger(__name__)


@dataclass
class PriorityFeeDetails:
    """Data structure to hold calculated priority fee details."""
    fee: int  # Fee in microlamports


def fee_accounts_for_create(payer: Pubkey, addresses: PumpAddresses) -> List[Pubkey]:
    """Accounts a token-create transaction touches, used to sample recent fees."""
    return [
        payer,
        addresses.program_id,
        addresses.mint_authority,
        addresses.global_account,
        SolanaProgramAddresses.TOKEN_METADATA_PROGRAM_ID,
        SolanaProgramAddresses.SYSTEM_PROGRAM_ID,
        SolanaProgramAddresses.TOKEN_PROGRAM_ID,
        SolanaProgramAddresses.ASSOCIATED_TOKEN_ACCOUNT_PROGRAM_ID,
        SolanaProgramAddresses.RENT_SYSVAR_PUBKEY,
        addresses.event_authority,
    ]


class PriorityFeeManager:
    """
    Manages the calculation of priority fees using different strategies (plugins).

    The highest fee suggested by any plugin wins, ``extra_fee`` is added on top
    and the result is clamped to ``hard_cap``. Errors raised by a plugin are not
    swallowed: a transaction is never priced off a failed estimate.
    """

    def __init__(self,
                 client,  # Expects SolanaClient
                 enable_dynamic_fee: bool = True,
                 enable_fixed_fee: bool = False,
                 fixed_fee: int = 10000,  # Microlamports
                 extra_fee: int = 0,  # Microlamports to add on top
                 hard_cap: Optional[int] = None,  # Max fee in Microlamports
                 ):
        self.client = client
        self.plugins: List[PriorityFeePlugin] = []

        if enable_fixed_fee:
            self.plugins.append(FixedPriorityFee(fixed_fee))
            logger.info(f"Initialized FixedPriorityFee with fee={fixed_fee}")

        if enable_dynamic_fee:
            self.plugins.append(RecentFeesPriorityFeePlugin(client))
            logger.info("Initialized RecentFeesPriorityFeePlugin")

        self.extra_fee = max(0, extra_fee)
        self.hard_cap = hard_cap

        log_plugins = [type(p).__name__ for p in self.plugins]
        logger.info(
            f"PriorityFeeManager initialized. Plugins={log_plugins}, ExtraFee={self.extra_fee}, HardCap={self.hard_cap}")

    async def get_priority_fee(self, accounts_to_check: Sequence[Pubkey]) -> PriorityFeeDetails:
        """Calculates the compute unit price for a transaction locking ``accounts_to_check``."""
        if not self.plugins:
            raise FeeEstimationError("No priority fee plugin enabled")

        highest_plugin_fee = 0
        for plugin in self.plugins:
            plugin_name = type(plugin).__name__
            result = await plugin.get_priority_fee(accounts_to_check)
            if result is None:
                logger.debug(f"Plugin {plugin_name} returned no fee.")
                continue
            if result < 0:
                raise FeeEstimationError(f"Plugin {plugin_name} suggested a negative fee: {result}")
            logger.debug(f"Plugin {plugin_name} suggested fee: {result}")
            highest_plugin_fee = max(highest_plugin_fee, int(result))

        final_fee = highest_plugin_fee + self.extra_fee

        if self.hard_cap is not None and final_fee > self.hard_cap:
            logger.info(f"Priority fee ({final_fee}) exceeded hard cap ({self.hard_cap}). Capping fee.")
            final_fee = self.hard_cap

        logger.info(f"Final Priority Fee: {final_fee} microlamports (Base={highest_plugin_fee}, Extra={self.extra_fee})")
        return PriorityFeeDetails(fee=final_fee)
