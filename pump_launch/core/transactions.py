# pump_launch/core/transactions.py

from typing import Dict, Iterable, List, Mapping, Sequence

from solders.hash import Hash as Blockhash
from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.message import MessageV0
from solders.pubkey import Pubkey
from solders.transaction import VersionedTransaction

from .exceptions import SigningError, TransactionBuildError
from ..utils.logger import get_logger

logger = get_logger(__name__)


def signer_map(keypairs: Iterable[Keypair]) -> Dict[Pubkey, Keypair]:
    """Indexes keypairs by public key for ``sign_transaction``."""
    return {kp.pubkey(): kp for kp in keypairs}


def compile_transaction(
        payer: Pubkey,
        instructions: Sequence[Instruction],
        recent_blockhash: Blockhash,
) -> MessageV0:
    """Compiles the unsigned v0 message. No lookup tables are used."""
    if not instructions:
        raise TransactionBuildError("Cannot build a transaction without instructions")
    try:
        return MessageV0.try_compile(
            payer=payer,
            instructions=list(instructions),
            address_lookup_table_accounts=[],
            recent_blockhash=recent_blockhash,
        )
    except Exception as e:
        raise TransactionBuildError(f"Failed to compile transaction message: {e}", cause=e) from e


def required_signers(message: MessageV0) -> List[Pubkey]:
    """Accounts that must sign ``message``, fee payer first."""
    return list(message.account_keys[:message.header.num_required_signatures])


def sign_transaction(message: MessageV0, signers: Mapping[Pubkey, Keypair]) -> VersionedTransaction:
    """
    Signs ``message`` with the keypair of every required signer.

    All-or-nothing: if any required public key has no keypair in ``signers``
    nothing is signed and ``SigningError`` lists the missing keys.
    """
    required = required_signers(message)
    missing = [key for key in required if key not in signers]
    if missing:
        raise SigningError(
            f"No keypair for required signer(s): {', '.join(str(k) for k in missing)}",
            missing=missing,
        )
    ordered = [signers[key] for key in required]
    try:
        tx = VersionedTransaction(message, ordered)
    except Exception as e:
        raise SigningError(f"Signing failed: {e}", cause=e) from e
    logger.debug(f"Signed transaction with {len(ordered)} signer(s): {[str(k) for k in required]}")
    return tx
