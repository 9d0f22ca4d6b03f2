"""Deduction engine exports."""

from .board import Board
from .controller import NoMoveReason, Placement, SolveController
from .groups import CellGroup, Direction
from .possibilities import PossibilityMatrix

__all__ = [
    "Board",
    "CellGroup",
    "Direction",
    "NoMoveReason",
    "Placement",
    "PossibilityMatrix",
    "SolveController",
]
