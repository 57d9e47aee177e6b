from abc import ABC, abstractmethod
from typing import Optional, Sequence

from solders.pubkey import Pubkey


class PriorityFeePlugin(ABC):
    """Base class for priority fee calculation plugins."""

    @abstractmethod
    async def get_priority_fee(self, accounts: Sequence[Pubkey]) -> Optional[int]:
        """
        Calculate the priority fee.

        Args:
            accounts: Accounts the transaction will lock; plugins that sample
                the network restrict their query to these.

        Returns:
            Optional[int]: Compute unit price in micro-lamports, or None if
            the plugin has no opinion.
        """
        pass


# pump_launch/core/priority_fee/__init__.py
from .dynamic_fee import RecentFeesPriorityFeePlugin, mean_priority_fee
from .fixed_fee import FixedPriorityFee
from .manager import PriorityFeeDetails, PriorityFeeManager, fee_accounts_for_create

__all__ = [
    "PriorityFeePlugin",
    "RecentFeesPriorityFeePlugin",
    "FixedPriorityFee",
    "PriorityFeeDetails",
    "PriorityFeeManager",
    "fee_accounts_for_create",
    "mean_priority_fee",
]
