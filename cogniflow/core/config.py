# cogniflow/core/config.py
"""
Configuration dataclasses for a network session.

One config per component, aggregated by SessionConfig which round-trips
through plain dicts and JSON files.
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields, asdict
from typing import Any, Dict, Optional
import json
import logging

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised for configuration values no session can run with."""


@dataclass
class GraphConfig:
    node_count: int = 30
    bounds: float = 10.0            # Side of the cube centred at the origin
    edge_threshold: float = 5.0     # Strict: distance < threshold
    size_min: float = 0.2
    size_max: float = 0.5

    def validate(self):
        if self.node_count < 0:
            raise ConfigError(f"node_count must be >= 0, got {self.node_count}")
        if self.bounds < 0:
            raise ConfigError(f"bounds must be >= 0, got {self.bounds}")
        if self.edge_threshold <= 0:
            raise ConfigError(f"edge_threshold must be > 0, got {self.edge_threshold}")
        if self.size_min > self.size_max:
            raise ConfigError(f"size range is empty: [{self.size_min}, {self.size_max}]")


@dataclass
class InteractionConfig:
    nearby_radius: float = 4.0
    keyword_threshold: int = 5
    transform_threshold: int = 15
    completion_delay: float = 3.0   # Seconds after entering TRANSFORMING

    def validate(self):
        if self.nearby_radius < 0:
            raise ConfigError(f"nearby_radius must be >= 0, got {self.nearby_radius}")
        if self.keyword_threshold < 1:
            raise ConfigError(f"keyword_threshold must be >= 1, got {self.keyword_threshold}")
        if self.transform_threshold < self.keyword_threshold:
            raise ConfigError(
                f"transform_threshold ({self.transform_threshold}) must not be below "
                f"keyword_threshold ({self.keyword_threshold})"
            )
        if self.completion_delay < 0:
            raise ConfigError(f"completion_delay must be >= 0, got {self.completion_delay}")


@dataclass
class AnimationConfig:
    rotation_step_x: float = 0.002  # rad per frame
    rotation_step_y: float = 0.003
    lit_opacity: float = 0.9
    idle_opacity_min: float = 0.3
    idle_opacity_max: float = 0.8
    lit_emissive: float = 2.0
    idle_emissive: float = 1.0
    edge_active_opacity: float = 0.6
    edge_idle_opacity: float = 0.2
    particle_count: int = 5
    particle_spacing: float = 0.1   # Phase offset between consecutive particles
    particle_opacity: float = 0.8

    def validate(self):
        if self.idle_opacity_min > self.idle_opacity_max:
            raise ConfigError(
                f"idle opacity range is empty: [{self.idle_opacity_min}, {self.idle_opacity_max}]"
            )
        if self.particle_count < 0:
            raise ConfigError(f"particle_count must be >= 0, got {self.particle_count}")


@dataclass
class SessionConfig:
    graph: GraphConfig = field(default_factory=GraphConfig)
    interaction: InteractionConfig = field(default_factory=InteractionConfig)
    animation: AnimationConfig = field(default_factory=AnimationConfig)
    skip_delay: float = 3.0         # Seconds before skipping is offered
    color: str = "#7E3ACE"
    seed: Optional[int] = None

    def validate(self) -> SessionConfig:
        self.graph.validate()
        self.interaction.validate()
        self.animation.validate()
        if self.skip_delay < 0:
            raise ConfigError(f"skip_delay must be >= 0, got {self.skip_delay}")
        return self

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> SessionConfig:
        """Build from a (possibly partial) dict; unknown keys are rejected."""
        if not isinstance(data, dict):
            raise ConfigError(f"Session config must be a mapping, got {type(data).__name__}")
        _reject_unknown(SessionConfig, data)
        return SessionConfig(
            graph=_section(GraphConfig, data.get('graph', {})),
            interaction=_section(InteractionConfig, data.get('interaction', {})),
            animation=_section(AnimationConfig, data.get('animation', {})),
            skip_delay=data.get('skip_delay', 3.0),
            color=data.get('color', "#7E3ACE"),
            seed=data.get('seed'),
        )


def _reject_unknown(cls, data: Dict[str, Any]):
    known = {f.name for f in fields(cls)}
    unknown = set(data) - known
    if unknown:
        raise ConfigError(f"Unknown {cls.__name__} keys: {sorted(unknown)}")


def _section(cls, data: Dict[str, Any]):
    if not isinstance(data, dict):
        raise ConfigError(f"{cls.__name__} section must be a mapping, got {type(data).__name__}")
    _reject_unknown(cls, data)
    return cls(**data)


def load_config(path: str) -> SessionConfig:
    with open(path, 'r') as f:
        data = json.load(f)
    config = SessionConfig.from_dict(data).validate()
    logger.debug("Loaded session config from %s", path)
    return config


def save_config(config: SessionConfig, path: str):
    with open(path, 'w') as f:
        json.dump(config.to_dict(), f, indent=2)
