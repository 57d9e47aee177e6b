# pump_launch/launch/assembler.py
from typing import List, Optional

from solders.instruction import Instruction
from solders.pubkey import Pubkey

from ..core.addresses import TokenAddresses
from ..core.constants import DEFAULT_COMPUTE_UNIT_LIMIT, sol_to_lamports
from ..core.exceptions import LaunchError, TransactionBuildError
from ..core.instruction_builder import InstructionBuilder
from ..core.priority_fee import PriorityFeeManager, fee_accounts_for_create
from ..core.pubkeys import PumpAddresses
from ..utils.logger import get_logger
from .buyer import BuyInstructionBuilder

logger = get_logger(__name__)


class CreateInstructionAssembler:
    """
    Orders the instructions of a token-create transaction:

        0. compute unit limit
        1. compute unit price
        2. pump.fun create
        3.. buy instructions (only when a buy amount is given)

    Compute budget goes first so it bounds everything after it; buys go last
    because the bonding curve must exist before it can be bought from.
    """

    def __init__(self,
                 fee_manager: PriorityFeeManager,
                 addresses: PumpAddresses,
                 buy_builder: Optional[BuyInstructionBuilder] = None,
                 compute_unit_limit: int = DEFAULT_COMPUTE_UNIT_LIMIT):
        self.fee_manager = fee_manager
        self.addresses = addresses
        self.buy_builder = buy_builder
        self.compute_unit_limit = compute_unit_limit

    async def assemble(self,
                       user: Pubkey,
                       mint: Pubkey,
                       name: str,
                       symbol: str,
                       uri: str,
                       token_addresses: TokenAddresses,
                       buy_amount_sol: float = 0.0,
                       slippage_percent: float = 0.0) -> List[Instruction]:
        fee_details = await self.fee_manager.get_priority_fee(
            accounts_to_check=fee_accounts_for_create(user, self.addresses)
        )

        try:
            create_ix = InstructionBuilder.build_pump_fun_create_instruction(
                name=name, symbol=symbol, uri=uri,
                mint_pubkey=mint, user_wallet_pubkey=user,
                token_addresses=token_addresses, addresses=self.addresses,
            )
        except Exception as e:
            raise TransactionBuildError(f"Failed to build create instruction for {symbol}: {e}", cause=e) from e

        instructions: List[Instruction] = [
            InstructionBuilder.set_compute_unit_limit(self.compute_unit_limit),
            InstructionBuilder.set_compute_unit_price(fee_details.fee),
            create_ix,
        ]

        if buy_amount_sol > 0:
            instructions.extend(await self._build_buy(mint, user, buy_amount_sol, slippage_percent))

        logger.info(
            f"Assembled {len(instructions)} instructions for {symbol} ({mint}): "
            f"CU limit={self.compute_unit_limit}, CU price={fee_details.fee}, buy={buy_amount_sol} SOL")
        return instructions

    async def _build_buy(self, mint: Pubkey, user: Pubkey, buy_amount_sol: float,
                         slippage_percent: float) -> List[Instruction]:
        if self.buy_builder is None:
            raise TransactionBuildError("A buy amount was given but no buy instruction builder is configured")
        lamports = sol_to_lamports(buy_amount_sol)
        try:
            buy_instructions = await self.buy_builder.build(mint, user, lamports, slippage_percent)
        except LaunchError:
            raise
        except Exception as e:
            raise TransactionBuildError(f"Failed to get buy instructions: {e}", cause=e) from e
        if not buy_instructions:
            raise TransactionBuildError("Buy instruction builder returned no instructions")
        return list(buy_instructions)
