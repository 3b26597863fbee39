"""Animation module - per-frame node, edge and particle attributes."""

from cogniflow.animation.driver import (
    AnimationDriver,
    particle_fraction,
    particle_fractions,
    particle_positions,
    edge_opacity,
    particle_opacity,
)

__all__ = [
    'AnimationDriver',
    'particle_fraction',
    'particle_fractions',
    'particle_positions',
    'edge_opacity',
    'particle_opacity',
]
