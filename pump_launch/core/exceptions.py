# pump_launch/core/exceptions.py

from typing import Optional


class LaunchError(Exception):
    """Base class for custom exceptions in this application.

    Carries the launch stage the failure happened at (a ``LaunchStage`` value,
    filled in by the orchestrator) and whether retrying the same call may help.
    """
    retryable: bool = False

    def __init__(self, message: str, *, stage=None, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.stage = stage
        self.cause = cause

    def __str__(self) -> str:
        base = super().__str__()
        if self.stage is not None:
            stage_name = getattr(self.stage, "value", self.stage)
            return f"[{stage_name}] {base}"
        return base


class AddressDerivationError(LaunchError):
    """For program-derived address searches that exhaust every bump seed."""
    pass


class FeeEstimationError(LaunchError):
    """For errors reducing prioritization fee samples to a compute unit price."""
    pass


class InsufficientSampleDataError(FeeEstimationError):
    """The network returned no prioritization fee samples to average."""
    retryable = True


class NetworkFetchError(LaunchError):
    """For RPC reads (blockhash, fee samples, account data) that failed."""
    retryable = True


class TransactionBuildError(LaunchError):
    """For errors during instruction or transaction construction."""
    pass


class SigningError(LaunchError):
    """A required signer could not be resolved to a keypair."""

    def __init__(self, message: str, *, missing=None, **kwargs):
        super().__init__(message, **kwargs)
        self.missing = list(missing or [])


class SubmissionError(LaunchError):
    """The RPC node rejected the transaction; nothing was broadcast."""
    broadcast: bool = False

    def __init__(self, message: str, *, signature: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.signature = signature


class ConfirmationError(SubmissionError):
    """The transaction was sent but its confirmation was not observed.

    The outcome is ambiguous: check ``signature`` on the ledger before
    resubmitting. ``on_chain_error`` is set when the cluster reported the
    transaction as failed.
    """
    broadcast = True

    def __init__(self, message: str, *, signature: Optional[str] = None, on_chain_error=None, **kwargs):
        super().__init__(message, signature=signature, **kwargs)
        self.on_chain_error = on_chain_error
