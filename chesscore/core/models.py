"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass, field


@dataclass
class GameModel:
    """Transport-safe representation of a game session used between API, Service, DB, and Game layers."""

    position: str
    undo_moves: list[str] = field(default_factory=list)
    redo_moves: list[str] = field(default_factory=list)
