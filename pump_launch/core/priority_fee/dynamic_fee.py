# pump_launch/core/priority_fee/dynamic_fee.py
from typing import List, Optional, Sequence

from solders.pubkey import Pubkey

from ...utils.logger import get_logger
from ..exceptions import InsufficientSampleDataError
from . import PriorityFeePlugin

logger = get_logger(__name__)


def mean_priority_fee(samples: Sequence[int]) -> int:
    """Arithmetic mean of the fee samples, floored to whole micro-lamports."""
    if not samples:
        raise InsufficientSampleDataError(
            "getRecentPrioritizationFees returned no samples; cannot average an empty set")
    return sum(samples) // len(samples)


class RecentFeesPriorityFeePlugin(PriorityFeePlugin):
    """Prices compute units at the mean of recent fees paid for the same accounts."""

    def __init__(self, client):
        # Expects SolanaClient (or anything exposing get_recent_prioritization_fees)
        self.client = client

    async def get_priority_fee(self, accounts: Sequence[Pubkey]) -> Optional[int]:
        """
        Fetches recent prioritization fees for ``accounts`` and averages them.

        Raises:
            NetworkFetchError: the RPC call failed.
            InsufficientSampleDataError: the node returned no samples.
        """
        logger.debug(f"Fetching recent prioritization fees for {len(accounts)} accounts...")
        samples: List[int] = await self.client.get_recent_prioritization_fees(list(accounts))
        fee = mean_priority_fee(samples)
        logger.debug(f"Dynamic fee calc: {len(samples)} samples, mean={fee}")
        return fee
