# pump_launch/launch/__init__.py

from .base import LaunchContext, LaunchStage
from .assembler import CreateInstructionAssembler
from .buyer import BuyInstructionBuilder, InitialBuyInstructionBuilder
from .creator import TokenCreator

__all__ = [
    "LaunchContext",
    "LaunchStage",
    "CreateInstructionAssembler",
    "BuyInstructionBuilder",
    "InitialBuyInstructionBuilder",
    "TokenCreator",
]
