# pump_launch/core/priority_fee/fixed_fee.py
from typing import Optional, Sequence

from solders.pubkey import Pubkey

from . import PriorityFeePlugin


class FixedPriorityFee(PriorityFeePlugin):
    """Returns the same configured compute unit price for every transaction."""

    def __init__(self, fixed_fee: int):
        if fixed_fee < 0:
            raise ValueError("Fixed priority fee cannot be negative")
        self.fixed_fee = fixed_fee

    async def get_priority_fee(self, accounts: Sequence[Pubkey]) -> Optional[int]:
        return self.fixed_fee if self.fixed_fee > 0 else None
