# pump_launch/core/client.py

import asyncio
from typing import List, Optional, Tuple

from solders.hash import Hash
from solders.pubkey import Pubkey
from solders.rpc.responses import (
    GetAccountInfoResp,
    GetBalanceResp,
    GetLatestBlockhashResp,
    GetRecentPrioritizationFeesResp,
    SendTransactionResp,
)
from solders.signature import Signature
from solders.transaction import VersionedTransaction

from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment, Confirmed, Finalized
from solana.rpc.core import RPCException
from solana.rpc.types import TxOpts
from solana.exceptions import SolanaRpcException

from .exceptions import ConfirmationError, NetworkFetchError, SubmissionError
from ..utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 60
DEFAULT_CONFIRM_SLEEP_SECONDS = 0.5


class SolanaClient:
    """
    Async wrapper over solana-py's ``AsyncClient``.

    Every call either returns a usable value or raises one of the launch
    errors, so callers can chain steps without checking for ``None``.
    """

    def __init__(
        self,
        rpc_endpoint: str,
        commitment: Commitment = Confirmed,
        timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS,
        skip_preflight: bool = False,
    ) -> None:
        self.rpc_endpoint = rpc_endpoint
        self.async_client = AsyncClient(
            rpc_endpoint, commitment=commitment, timeout=timeout_seconds
        )
        self.commitment = commitment
        self.timeout_seconds = timeout_seconds
        self.skip_preflight = skip_preflight
        self.tx_opts = TxOpts(
            skip_preflight=self.skip_preflight, preflight_commitment=self.commitment
        )
        logger.info(f"SolanaClient initialized: {rpc_endpoint} @ {self.commitment}")

    async def __aenter__(self) -> "SolanaClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        try:
            await self.async_client.close()
            logger.info("SolanaClient connection closed.")
        except Exception as e:
            logger.warning(f"Error closing SolanaClient: {e}")

    async def get_latest_blockhash(self, commitment: Commitment = Finalized) -> Tuple[Hash, int]:
        """Returns ``(blockhash, last_valid_block_height)`` at the given commitment."""
        try:
            resp: GetLatestBlockhashResp = await self.async_client.get_latest_blockhash(commitment)
        except (SolanaRpcException, RPCException, OSError) as e:
            raise NetworkFetchError(f"getLatestBlockhash failed: {e}", cause=e) from e
        if resp is None or resp.value is None:
            raise NetworkFetchError("getLatestBlockhash returned no value")
        return resp.value.blockhash, resp.value.last_valid_block_height

    async def get_recent_prioritization_fees(self, accounts: List[Pubkey]) -> List[int]:
        """Recent per-slot prioritization fees (micro-lamports) for ``accounts``."""
        try:
            resp: GetRecentPrioritizationFeesResp = await self.async_client.get_recent_prioritization_fees(
                accounts
            )
        except (SolanaRpcException, RPCException, OSError) as e:
            raise NetworkFetchError(f"getRecentPrioritizationFees failed: {e}", cause=e) from e
        if resp is None or resp.value is None:
            raise NetworkFetchError("getRecentPrioritizationFees returned no value")
        return [item.prioritization_fee for item in resp.value]

    async def get_account_data(
        self, pubkey: Pubkey, commitment: Optional[Commitment] = None
    ) -> Optional[bytes]:
        """Raw account data, or None when the account does not exist."""
        try:
            resp: GetAccountInfoResp = await self.async_client.get_account_info(
                pubkey, commitment=commitment or self.commitment, encoding="base64"
            )
        except (SolanaRpcException, RPCException, OSError) as e:
            raise NetworkFetchError(f"getAccountInfo {pubkey} failed: {e}", cause=e) from e
        if resp is None or resp.value is None:
            return None
        return bytes(resp.value.data)

    async def get_balance_lamports(self, pubkey: Pubkey) -> int:
        try:
            resp: GetBalanceResp = await self.async_client.get_balance(pubkey, self.commitment)
        except (SolanaRpcException, RPCException, OSError) as e:
            raise NetworkFetchError(f"getBalance {pubkey} failed: {e}", cause=e) from e
        if resp is None or resp.value is None:
            raise NetworkFetchError(f"getBalance {pubkey} returned no value")
        return resp.value

    async def send_transaction(
        self, transaction: VersionedTransaction, opts: Optional[TxOpts] = None
    ) -> Signature:
        """Sends a signed transaction once. The node's rejection is a SubmissionError."""
        _opts = opts or self.tx_opts
        try:
            resp: SendTransactionResp = await self.async_client.send_transaction(transaction, opts=_opts)
        except RPCException as err:
            # Preflight/validation rejection: the node did not forward the transaction.
            raise SubmissionError(f"sendTransaction rejected: {err}", cause=err) from err
        except (SolanaRpcException, OSError) as err:
            # The request may or may not have reached the leader.
            signature = str(transaction.signatures[0]) if transaction.signatures else None
            raise ConfirmationError(
                f"sendTransaction transport failure, outcome unknown: {err}",
                signature=signature, cause=err,
            ) from err
        logger.info(f"Tx sent: {resp.value}")
        return resp.value

    async def confirm_transaction(
        self,
        tx_sig: Signature,
        commitment: Commitment = Finalized,
        timeout_seconds: Optional[int] = None,
        last_valid_block_height: Optional[int] = None,
        sleep_seconds: float = DEFAULT_CONFIRM_SLEEP_SECONDS,
    ) -> None:
        """Waits until ``tx_sig`` reaches ``commitment``; raises ConfirmationError otherwise."""
        _timeout = timeout_seconds or self.timeout_seconds
        logger.info(f"Confirming {tx_sig} @ {commitment} timeout={_timeout}")
        try:
            resp = await asyncio.wait_for(
                self.async_client.confirm_transaction(
                    tx_sig,
                    commitment,
                    sleep_seconds=sleep_seconds,
                    last_valid_block_height=last_valid_block_height,
                ),
                timeout=_timeout,
            )
        except asyncio.TimeoutError as e:
            raise ConfirmationError(
                f"Tx {tx_sig} not confirmed at {commitment} within {_timeout}s",
                signature=str(tx_sig), cause=e,
            ) from e
        except Exception as e:
            # UnconfirmedTxError, blockheight exceeded, transport errors.
            raise ConfirmationError(
                f"Tx {tx_sig} confirmation failed: {e}", signature=str(tx_sig), cause=e
            ) from e

        status = resp.value[0] if resp and resp.value else None
        if status is None:
            raise ConfirmationError(f"Tx {tx_sig} has no status after confirmation", signature=str(tx_sig))
        if status.err is not None:
            raise ConfirmationError(
                f"Tx {tx_sig} confirmed WITH ON-CHAIN ERROR: {status.err}",
                signature=str(tx_sig), on_chain_error=status.err,
            )
