# cogniflow/interaction/state.py
"""
Activation and reveal state - immutable snapshots produced by the accumulator.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import FrozenSet

from cogniflow.core.math3d import Position, as_position


class RevealStage(Enum):
    IDLE = auto()           # count below the keyword threshold
    REVEALING = auto()      # keywords visible
    TRANSFORMING = auto()   # completion scheduled


@dataclass(frozen=True)
class RevealState:
    """Both flags only ever go False -> True."""
    show_keywords: bool = False
    transforming: bool = False

    @property
    def stage(self) -> RevealStage:
        if self.transforming:
            return RevealStage.TRANSFORMING
        if self.show_keywords:
            return RevealStage.REVEALING
        return RevealStage.IDLE

    def advance(self, count: int, keyword_threshold: int, transform_threshold: int) -> RevealState:
        return RevealState(
            show_keywords=self.show_keywords or count >= keyword_threshold,
            transforming=self.transforming or count >= transform_threshold,
        )


@dataclass(frozen=True)
class ActivationState:
    """
    Everything the interactions of one session have switched on.

    Sets only grow and the counter only increases; a new instance is produced
    per interaction.
    """
    active_positions: FrozenSet[Position] = frozenset()
    active_edge_ids: FrozenSet[str] = frozenset()
    interaction_count: int = 0
    reveal: RevealState = field(default_factory=RevealState)

    @property
    def show_keywords(self) -> bool:
        return self.reveal.show_keywords

    @property
    def transforming(self) -> bool:
        return self.reveal.transforming

    @property
    def stage(self) -> RevealStage:
        return self.reveal.stage

    def is_position_active(self, position) -> bool:
        return as_position(position) in self.active_positions

    def is_edge_active(self, edge_id: str) -> bool:
        return edge_id in self.active_edge_ids

    def summary(self) -> str:
        return (
            f"count={self.interaction_count} nodes={len(self.active_positions)} "
            f"edges={len(self.active_edge_ids)} stage={self.stage.name}"
        )
