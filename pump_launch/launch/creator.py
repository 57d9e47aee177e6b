# pump_launch/launch/creator.py
from typing import Optional

from solders.keypair import Keypair
from solana.rpc.commitment import Commitment, Finalized

from ..core.addresses import derive_token_addresses
from ..core.constants import DEFAULT_COMPUTE_UNIT_LIMIT
from ..core.exceptions import ConfirmationError, LaunchError, TransactionBuildError
from ..core.priority_fee import PriorityFeeManager
from ..core.pubkeys import PumpAddresses, get_active_addresses
from ..core.transactions import compile_transaction, sign_transaction, signer_map
from ..utils.audit_logger import LaunchAuditLogger
from ..utils.logger import get_logger
from .assembler import CreateInstructionAssembler
from .base import LaunchContext, LaunchStage
from .buyer import BuyInstructionBuilder, InitialBuyInstructionBuilder

logger = get_logger(__name__)

DEFAULT_SLIPPAGE_PERCENT = 10.0


class TokenCreator:
    """
    Creates a pump.fun token and its bonding curve in one transaction,
    optionally buying into it in the same transaction.

    The pump.fun addresses are captured once at construction: call
    ``use_devnet_addresses()`` before building a TokenCreator, or pass
    ``addresses`` explicitly.
    """

    def __init__(self,
                 client,  # Expects SolanaClient
                 fee_manager: PriorityFeeManager,
                 addresses: Optional[PumpAddresses] = None,
                 buy_builder: Optional[BuyInstructionBuilder] = None,
                 compute_unit_limit: int = DEFAULT_COMPUTE_UNIT_LIMIT,
                 confirm_commitment: Commitment = Finalized,
                 confirm_timeout_seconds: int = 60,
                 audit_logger: Optional[LaunchAuditLogger] = None,
                 ):
        self.client = client
        self.addresses = addresses or get_active_addresses()
        self.buy_builder = buy_builder or InitialBuyInstructionBuilder(client, self.addresses)
        self.assembler = CreateInstructionAssembler(
            fee_manager=fee_manager,
            addresses=self.addresses,
            buy_builder=self.buy_builder,
            compute_unit_limit=compute_unit_limit,
        )
        self.confirm_commitment = confirm_commitment
        self.confirm_timeout_seconds = confirm_timeout_seconds
        self.audit_logger = audit_logger
        logger.info(
            f"TokenCreator Init: Program={self.addresses.program_id}, FeeRecipient={self.addresses.fee_recipient}, "
            f"CU Limit={compute_unit_limit}, Confirm={confirm_commitment}")

    async def create_token(self,
                           user: Keypair,
                           mint: Keypair,
                           name: str,
                           symbol: str,
                           uri: str,
                           buy_amount_sol: float = 0.0,
                           slippage_percent: float = DEFAULT_SLIPPAGE_PERCENT) -> str:
        """
        Creates the token and returns the confirmed transaction signature.

        Raises a ``LaunchError`` subclass tagged with the stage it failed at.
        Failures before SUBMITTED guarantee nothing was broadcast; a
        ``ConfirmationError`` means the transaction may have landed.
        """
        context = LaunchContext(mint=mint.pubkey(), user=user.pubkey(), name=name, symbol=symbol)
        logger.info(f"Creating token {symbol} ({context.mint_str}) for {context.user}, buy={buy_amount_sol} SOL")
        try:
            signature = await self._run(context, user, mint, uri, buy_amount_sol, slippage_percent)
        except LaunchError as e:
            self._fail(context, e, buy_amount_sol)
            raise
        except Exception as e:
            err = self._wrap_unexpected(context, e)
            self._fail(context, err, buy_amount_sol)
            raise err from e
        logger.info(f"LAUNCH_SUCCESS: {symbol} ({context.mint_str}). Tx: {signature}")
        self._audit("LAUNCH_SUCCESS", context, buy_amount_sol)
        return signature

    async def _run(self, context: LaunchContext, user: Keypair, mint: Keypair, uri: str,
                   buy_amount_sol: float, slippage_percent: float) -> str:
        context.token_addresses = derive_token_addresses(context.mint, self.addresses)

        context.instructions = await self.assembler.assemble(
            user=context.user, mint=context.mint,
            name=context.name, symbol=context.symbol, uri=uri,
            token_addresses=context.token_addresses,
            buy_amount_sol=buy_amount_sol, slippage_percent=slippage_percent,
        )
        context.advance(LaunchStage.INSTRUCTIONS_ASSEMBLED)

        # Finalized: a confirmed-but-not-finalized blockhash can be dropped with its fork.
        blockhash, last_valid_block_height = await self.client.get_latest_blockhash(Finalized)
        message = compile_transaction(context.user, context.instructions, blockhash)
        context.advance(LaunchStage.UNSIGNED)

        tx = sign_transaction(message, signer_map([user, mint]))
        context.signature = str(tx.signatures[0])
        context.advance(LaunchStage.SIGNED)

        tx_signature = await self.client.send_transaction(tx)
        context.advance(LaunchStage.SUBMITTED)

        await self.client.confirm_transaction(
            tx_signature,
            commitment=self.confirm_commitment,
            timeout_seconds=self.confirm_timeout_seconds,
            last_valid_block_height=last_valid_block_height,
        )
        context.advance(LaunchStage.CONFIRMED)
        return context.signature

    def _wrap_unexpected(self, context: LaunchContext, error: Exception) -> LaunchError:
        """Tags an exception from outside the launch error hierarchy with the current stage."""
        if context.stage in (LaunchStage.SIGNED, LaunchStage.SUBMITTED):
            # The signed transaction may already be on the wire.
            return ConfirmationError(
                f"Unexpected error after signing, outcome unknown: {error!r}",
                signature=context.signature, stage=context.stage, cause=error,
            )
        return TransactionBuildError(f"Unexpected error: {error!r}", stage=context.stage, cause=error)

    def _fail(self, context: LaunchContext, error: LaunchError, buy_amount_sol: float) -> None:
        if error.stage is None:
            error.stage = context.stage
        context.fail()
        logger.error(f"LAUNCH_FAIL: {context.symbol} ({context.mint_str}) at {context.failed_at.value}: {error}")
        self._audit("LAUNCH_FAIL", context, buy_amount_sol, error=error)

    def _audit(self, event_type: str, context: LaunchContext, buy_amount_sol: float,
               error: Optional[BaseException] = None) -> None:
        if self.audit_logger is not None:
            self.audit_logger.log_launch_event(event_type, context, buy_amount_sol=buy_amount_sol, error=error)
