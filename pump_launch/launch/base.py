# pump_launch/launch/base.py
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from solders.instruction import Instruction
from solders.pubkey import Pubkey

from ..core.addresses import TokenAddresses


class LaunchStage(Enum):
    UNBUILT = "UNBUILT"  # Nothing derived or fetched yet
    INSTRUCTIONS_ASSEMBLED = "INSTRUCTIONS_ASSEMBLED"  # Compute budget + create (+ buy) ready
    UNSIGNED = "UNSIGNED"  # Message compiled against a finalized blockhash
    SIGNED = "SIGNED"  # Every required signer attached
    SUBMITTED = "SUBMITTED"  # Sent to the RPC node, awaiting confirmation
    CONFIRMED = "CONFIRMED"  # Reached the requested commitment
    FAILED = "FAILED"


@dataclass
class LaunchContext:
    """Per-call state of one create_token run. Never shared between calls."""
    mint: Pubkey
    user: Pubkey
    name: str
    symbol: str
    stage: LaunchStage = LaunchStage.UNBUILT
    token_addresses: Optional[TokenAddresses] = None
    instructions: List[Instruction] = field(default_factory=list)
    signature: Optional[str] = None
    failed_at: Optional[LaunchStage] = None
    started_at: int = field(default_factory=lambda: int(datetime.now(timezone.utc).timestamp()))

    @property
    def mint_str(self) -> str:
        return str(self.mint)

    def advance(self, stage: LaunchStage) -> None:
        self.stage = stage

    def fail(self) -> None:
        self.failed_at = self.stage
        self.stage = LaunchStage.FAILED
