"""Light and material configuration."""

from __future__ import annotations
from enum import Enum
from typing import Any, ClassVar, Dict, Union
from dataclasses import dataclass, field
import numpy as np


DEFAULT_LIGHT_STRENGTH = np.array([1.0, 1.0, 1.0], dtype=np.float32)
DEFAULT_LIGHT_DIRECTION = np.array([0.0, -1.0, 0.0], dtype=np.float32)
DEFAULT_LIGHT_POSITION = np.array([0.0, 5.0, 0.0], dtype=np.float32)

DEFAULT_FALLOFF_START = 1.0
DEFAULT_FALLOFF_END = 10.0
DEFAULT_SPOT_POWER = 64.0

DEFAULT_DIFFUSE_ALBEDO = np.array([1.0, 1.0, 1.0, 1.0], dtype=np.float32)
DEFAULT_FRESNEL_R0 = np.array([0.01, 0.01, 0.01], dtype=np.float32)
DEFAULT_SHININESS = 0.75

EPSILON_DIRECTION = 1e-8


class LightType(str, Enum):
    """Light variant discriminant."""
    DIRECTIONAL = 'directional'
    POINT = 'point'
    SPOT = 'spot'


def _rgb(value) -> np.ndarray:
    return np.asarray(value, dtype=np.float32).reshape(3)


def _unit_direction(value) -> np.ndarray:
    """Normalize an aim direction, falling back to straight down."""
    direction = np.asarray(value, dtype=np.float32).reshape(3)
    length = float(np.linalg.norm(direction))
    if length < EPSILON_DIRECTION:
        return DEFAULT_LIGHT_DIRECTION.copy()
    return direction / length


@dataclass(frozen=True, eq=False)
class DirectionalLight:
    """
    Light infinitely far away, shining along one direction.

    Attributes:
        strength: RGB radiant intensity
        direction: Unit direction from the light into the scene
        cast_shadows: Whether the shadow visibility applies to this light
    """
    kind: ClassVar[LightType] = LightType.DIRECTIONAL

    strength: np.ndarray = field(default_factory=DEFAULT_LIGHT_STRENGTH.copy)
    direction: np.ndarray = field(default_factory=DEFAULT_LIGHT_DIRECTION.copy)
    cast_shadows: bool = True

    def __post_init__(self):
        object.__setattr__(self, 'strength', _rgb(self.strength))
        object.__setattr__(self, 'direction', _unit_direction(self.direction))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.kind.value,
            'strength': self.strength.tolist(),
            'direction': self.direction.tolist(),
            'cast_shadows': self.cast_shadows,
        }


@dataclass(frozen=True, eq=False)
class PointLight:
    """
    Omnidirectional light with a linear falloff range.

    Attributes:
        strength: RGB radiant intensity
        position: World-space position
        falloff_start: Distance where attenuation begins
        falloff_end: Distance beyond which the light contributes nothing
        cast_shadows: Whether the shadow visibility applies to this light
    """
    kind: ClassVar[LightType] = LightType.POINT

    strength: np.ndarray = field(default_factory=DEFAULT_LIGHT_STRENGTH.copy)
    position: np.ndarray = field(default_factory=DEFAULT_LIGHT_POSITION.copy)
    falloff_start: float = DEFAULT_FALLOFF_START
    falloff_end: float = DEFAULT_FALLOFF_END
    cast_shadows: bool = True

    def __post_init__(self):
        object.__setattr__(self, 'strength', _rgb(self.strength))
        object.__setattr__(self, 'position', _rgb(self.position))
        object.__setattr__(self, 'falloff_start', float(self.falloff_start))
        object.__setattr__(self, 'falloff_end', float(self.falloff_end))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.kind.value,
            'strength': self.strength.tolist(),
            'position': self.position.tolist(),
            'falloff_start': self.falloff_start,
            'falloff_end': self.falloff_end,
            'cast_shadows': self.cast_shadows,
        }


@dataclass(frozen=True, eq=False)
class SpotLight:
    """
    Positioned light restricted to a cone around its aim direction.

    Attributes:
        strength: RGB radiant intensity
        position: World-space position
        direction: Unit aim direction
        falloff_start: Distance where attenuation begins
        falloff_end: Distance beyond which the light contributes nothing
        spot_power: Cone sharpness exponent (>= 0)
        cast_shadows: Whether the shadow visibility applies to this light
    """
    kind: ClassVar[LightType] = LightType.SPOT

    strength: np.ndarray = field(default_factory=DEFAULT_LIGHT_STRENGTH.copy)
    position: np.ndarray = field(default_factory=DEFAULT_LIGHT_POSITION.copy)
    direction: np.ndarray = field(default_factory=DEFAULT_LIGHT_DIRECTION.copy)
    falloff_start: float = DEFAULT_FALLOFF_START
    falloff_end: float = DEFAULT_FALLOFF_END
    spot_power: float = DEFAULT_SPOT_POWER
    cast_shadows: bool = True

    def __post_init__(self):
        object.__setattr__(self, 'strength', _rgb(self.strength))
        object.__setattr__(self, 'position', _rgb(self.position))
        object.__setattr__(self, 'direction', _unit_direction(self.direction))
        object.__setattr__(self, 'falloff_start', float(self.falloff_start))
        object.__setattr__(self, 'falloff_end', float(self.falloff_end))
        object.__setattr__(self, 'spot_power', float(self.spot_power))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.kind.value,
            'strength': self.strength.tolist(),
            'position': self.position.tolist(),
            'direction': self.direction.tolist(),
            'falloff_start': self.falloff_start,
            'falloff_end': self.falloff_end,
            'spot_power': self.spot_power,
            'cast_shadows': self.cast_shadows,
        }


Light = Union[DirectionalLight, PointLight, SpotLight]


def light_from_dict(cfg: Dict[str, Any]) -> Light:
    """
    Create a light variant from a configuration dictionary.

    Args:
        cfg: Mapping with a 'type' key ('directional', 'point' or 'spot')
            and the fields of the matching variant

    Returns:
        DirectionalLight, PointLight or SpotLight

    Raises:
        ValueError: If the light type is unknown
    """
    light_type = str(cfg.get('type', 'directional')).lower().strip()

    strength = cfg.get('strength', DEFAULT_LIGHT_STRENGTH)
    cast_shadows = bool(cfg.get('cast_shadows', True))

    if light_type == LightType.DIRECTIONAL.value:
        return DirectionalLight(
            strength=strength,
            direction=cfg.get('direction', DEFAULT_LIGHT_DIRECTION),
            cast_shadows=cast_shadows,
        )
    elif light_type == LightType.POINT.value:
        return PointLight(
            strength=strength,
            position=cfg.get('position', DEFAULT_LIGHT_POSITION),
            falloff_start=cfg.get('falloff_start', DEFAULT_FALLOFF_START),
            falloff_end=cfg.get('falloff_end', DEFAULT_FALLOFF_END),
            cast_shadows=cast_shadows,
        )
    elif light_type == LightType.SPOT.value:
        return SpotLight(
            strength=strength,
            position=cfg.get('position', DEFAULT_LIGHT_POSITION),
            direction=cfg.get('direction', DEFAULT_LIGHT_DIRECTION),
            falloff_start=cfg.get('falloff_start', DEFAULT_FALLOFF_START),
            falloff_end=cfg.get('falloff_end', DEFAULT_FALLOFF_END),
            spot_power=cfg.get('spot_power', DEFAULT_SPOT_POWER),
            cast_shadows=cast_shadows,
        )
    else:
        raise ValueError(f"Unknown light type: {light_type}")


@dataclass(frozen=True, eq=False)
class Material:
    """
    Surface reflectance parameters.

    Attributes:
        diffuse_albedo: RGBA albedo (4,); alpha is carried, not lit
        fresnel_r0: RGB reflectance at normal incidence [0, 1]
        shininess: Normalized glossiness [0, 1], scaled to an exponent
    """
    diffuse_albedo: np.ndarray = field(default_factory=DEFAULT_DIFFUSE_ALBEDO.copy)
    fresnel_r0: np.ndarray = field(default_factory=DEFAULT_FRESNEL_R0.copy)
    shininess: float = DEFAULT_SHININESS

    def __post_init__(self):
        object.__setattr__(self, 'diffuse_albedo', np.asarray(self.diffuse_albedo, dtype=np.float32).reshape(4))
        object.__setattr__(self, 'fresnel_r0', _rgb(self.fresnel_r0))
        object.__setattr__(self, 'shininess', float(self.shininess))
