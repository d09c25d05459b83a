"""
Type definitions used across layers
"""

from enum import StrEnum


class Outcome(StrEnum):
    CREATED = "created"
    LOADED = "loaded"
    MOVE_ACCEPTED = "move accepted"
    UNDONE = "undone"
    REDONE = "redone"
    NOTHING_TO_UNDO = "nothing to undo"
    NOTHING_TO_REDO = "nothing to redo"
