# pump_launch/launch/buyer.py
import math
from typing import List, Optional, Protocol

from solders.instruction import Instruction
from solders.pubkey import Pubkey

from ..core.addresses import get_bonding_curve_addresses
from ..core.curve import GlobalState, GlobalStateManager
from ..core.exceptions import TransactionBuildError
from ..core.instruction_builder import InstructionBuilder
from ..core.pubkeys import PumpAddresses
from ..utils.logger import get_logger

logger = get_logger(__name__)


class BuyInstructionBuilder(Protocol):
    async def build(self, mint: Pubkey, buyer: Pubkey, lamports: int,
                    slippage_percent: float) -> List[Instruction]:
        ...


class InitialBuyInstructionBuilder:
    """
    Builds the first purchase on a bonding curve created in the same transaction.

    The curve account does not exist yet when the transaction is assembled, so
    the quote is taken from the global account's initial virtual reserves, which
    is exactly the state the create instruction initializes the curve with.
    """

    def __init__(self, client, addresses: PumpAddresses,
                 global_state_manager: Optional[GlobalStateManager] = None):
        self.client = client
        self.addresses = addresses
        self.global_state_manager = global_state_manager or GlobalStateManager(client, addresses)

    @staticmethod
    def max_sol_cost(lamports: int, slippage_percent: float) -> int:
        """Upper bound the program may charge: ``lamports`` plus ``slippage_percent`` percent."""
        if slippage_percent < 0:
            raise TransactionBuildError(f"Slippage cannot be negative: {slippage_percent}")
        return math.floor(lamports * (1 + slippage_percent / 100.0))

    def _calculate_tokens_out(self, global_state: GlobalState, lamports: int, mint: Pubkey) -> int:
        tokens_out = global_state.calculate_initial_tokens_out(lamports)
        if tokens_out <= 0:
            raise TransactionBuildError(f"Buy of {lamports} lamports yields no tokens for {mint}")
        logger.info(f"Initial buy estimation for {mint}: SOL_in={lamports}, Est.Tokens={tokens_out}")
        return tokens_out

    async def build(self, mint: Pubkey, buyer: Pubkey, lamports: int,
                    slippage_percent: float) -> List[Instruction]:
        if lamports <= 0:
            raise TransactionBuildError(f"Buy amount must be positive, got {lamports} lamports")
        max_cost = self.max_sol_cost(lamports, slippage_percent)

        global_state = await self.global_state_manager.get_global_state()
        tokens_out = self._calculate_tokens_out(global_state, lamports, mint)
        curve = get_bonding_curve_addresses(mint, self.addresses)

        create_ata_ix = InstructionBuilder.get_create_ata_idempotent_instruction(
            payer=buyer, owner=buyer, mint=mint
        )
        buy_ix = InstructionBuilder.build_pump_fun_buy_instruction(
            user_wallet_pubkey=buyer, mint_pubkey=mint,
            bonding_curve_pubkey=curve.bonding_curve,
            assoc_bonding_curve_token_account_pubkey=curve.associated_bonding_curve,
            token_amount=tokens_out,
            max_sol_cost_lamports=max_cost,
            addresses=self.addresses,
        )
        logger.debug(f"Buy instructions for {mint}: tokens={tokens_out}, max_sol_cost={max_cost}")
        return [create_ata_ix, buy_ix]
