"""Draft board utilities (grid view, export, etc.)."""

from .draft_board import DraftBoard, DraftBoardRound, DraftBoardSlot, build_draft_board
from .export import export_cascade_to_csv

__all__ = [
    "DraftBoard",
    "DraftBoardRound",
    "DraftBoardSlot",
    "build_draft_board",
    "export_cascade_to_csv",
]
