"""Per-fragment, per-pass and per-material shading inputs."""

from __future__ import annotations
from typing import Any, Dict, Sequence, Tuple
from dataclasses import dataclass, field
import numpy as np

from ..lighting.config import (
    Light,
    Material,
    DirectionalLight,
    light_from_dict,
    DEFAULT_DIFFUSE_ALBEDO,
    DEFAULT_FRESNEL_R0,
)
from ..utils.conversion import as_vector_rows


DEFAULT_EYE_POSITION = np.array([0.0, 5.0, -10.0], dtype=np.float32)
DEFAULT_AMBIENT_LIGHT = np.array([0.25, 0.25, 0.35, 1.0], dtype=np.float32)
DEFAULT_ROUGHNESS = 0.25


def _matrix4(value) -> np.ndarray:
    """Accept a 4x4 matrix or 16 flat values."""
    mat = np.asarray(value, dtype=np.float32)
    if mat.size != 16:
        raise ValueError(f"Expected 4x4 matrix or 16 values, got {mat.shape}")
    return mat.reshape(4, 4)


@dataclass(frozen=True, eq=False)
class FragmentInput:
    """
    Interpolated attributes of a batch of fragments.

    Attributes:
        world_pos: World-space positions (N, 3)
        normal: Interpolated normals (N, 3), not necessarily unit length
        shadow_pos: Projected shadow-space positions (N, 4)
    """
    world_pos: np.ndarray
    normal: np.ndarray
    shadow_pos: np.ndarray

    def __post_init__(self):
        object.__setattr__(self, 'world_pos', as_vector_rows(self.world_pos))
        object.__setattr__(self, 'normal', as_vector_rows(self.normal))
        object.__setattr__(self, 'shadow_pos', as_vector_rows(self.shadow_pos, width=4))

    def __len__(self) -> int:
        return int(self.world_pos.shape[0])


@dataclass(frozen=True, eq=False)
class PassConstants:
    """
    Constants shared by every fragment of a pass.

    The matrices are carried for the upstream stages; shading reads
    eye_pos, ambient_light and lights only.

    Attributes:
        eye_pos: Camera position in world space (3,)
        ambient_light: Ambient RGBA (4,)
        lights: Ordered lights, summed during shading
        view: World-to-view matrix (4, 4)
        proj: Projection matrix (4, 4)
        shadow_transform: World-to-shadow-texture matrix (4, 4)
    """
    eye_pos: np.ndarray = field(default_factory=DEFAULT_EYE_POSITION.copy)
    ambient_light: np.ndarray = field(default_factory=DEFAULT_AMBIENT_LIGHT.copy)
    lights: Tuple[Light, ...] = field(default_factory=lambda: (DirectionalLight(),))
    view: np.ndarray = field(default_factory=lambda: np.eye(4, dtype=np.float32))
    proj: np.ndarray = field(default_factory=lambda: np.eye(4, dtype=np.float32))
    shadow_transform: np.ndarray = field(default_factory=lambda: np.eye(4, dtype=np.float32))

    def __post_init__(self):
        object.__setattr__(self, 'eye_pos', np.asarray(self.eye_pos, dtype=np.float32).reshape(3))
        object.__setattr__(self, 'ambient_light', np.asarray(self.ambient_light, dtype=np.float32).reshape(4))
        object.__setattr__(self, 'lights', tuple(self.lights))
        object.__setattr__(self, 'view', _matrix4(self.view))
        object.__setattr__(self, 'proj', _matrix4(self.proj))
        object.__setattr__(self, 'shadow_transform', _matrix4(self.shadow_transform))

    @classmethod
    def from_dict(cls, cfg: Dict[str, Any]) -> 'PassConstants':
        """Create PassConstants from dictionary."""
        lights_cfg: Sequence[Dict[str, Any]] = cfg.get('lights') or [{'type': 'directional'}]
        eye = np.eye(4, dtype=np.float32)
        return cls(
            eye_pos=cfg.get('eye_pos', DEFAULT_EYE_POSITION),
            ambient_light=cfg.get('ambient_light', DEFAULT_AMBIENT_LIGHT),
            lights=tuple(light_from_dict(light) for light in lights_cfg),
            view=cfg.get('view', eye),
            proj=cfg.get('proj', eye),
            shadow_transform=cfg.get('shadow_transform', eye),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'eye_pos': self.eye_pos.tolist(),
            'ambient_light': self.ambient_light.tolist(),
            'lights': [light.to_dict() for light in self.lights],
            'view': self.view.tolist(),
            'proj': self.proj.tolist(),
            'shadow_transform': self.shadow_transform.tolist(),
        }


@dataclass(frozen=True, eq=False)
class MaterialConstants:
    """
    Per-material constants.

    Attributes:
        diffuse_albedo: RGBA albedo multiplied into the texture color (4,)
        fresnel_r0: RGB reflectance at normal incidence (3,)
        roughness: Surface roughness [0, 1], inverted into shininess
        mat_transform: Texture-coordinate transform (4, 4), used upstream
    """
    diffuse_albedo: np.ndarray = field(default_factory=DEFAULT_DIFFUSE_ALBEDO.copy)
    fresnel_r0: np.ndarray = field(default_factory=DEFAULT_FRESNEL_R0.copy)
    roughness: float = DEFAULT_ROUGHNESS
    mat_transform: np.ndarray = field(default_factory=lambda: np.eye(4, dtype=np.float32))

    def __post_init__(self):
        object.__setattr__(self, 'diffuse_albedo', np.asarray(self.diffuse_albedo, dtype=np.float32).reshape(4))
        object.__setattr__(self, 'fresnel_r0', np.asarray(self.fresnel_r0, dtype=np.float32).reshape(3))
        object.__setattr__(self, 'roughness', float(self.roughness))
        object.__setattr__(self, 'mat_transform', _matrix4(self.mat_transform))

    @property
    def shininess(self) -> float:
        return 1.0 - self.roughness

    def to_material(self) -> Material:
        """Build the lighting material with shininess = 1 - roughness."""
        return Material(
            diffuse_albedo=self.diffuse_albedo,
            fresnel_r0=self.fresnel_r0,
            shininess=self.shininess,
        )

    @classmethod
    def from_dict(cls, cfg: Dict[str, Any]) -> 'MaterialConstants':
        """Create MaterialConstants from dictionary."""
        return cls(
            diffuse_albedo=cfg.get('diffuse_albedo', DEFAULT_DIFFUSE_ALBEDO),
            fresnel_r0=cfg.get('fresnel_r0', DEFAULT_FRESNEL_R0),
            roughness=float(cfg.get('roughness', DEFAULT_ROUGHNESS)),
            mat_transform=cfg.get('mat_transform', np.eye(4, dtype=np.float32)),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'diffuse_albedo': self.diffuse_albedo.tolist(),
            'fresnel_r0': self.fresnel_r0.tolist(),
            'roughness': self.roughness,
            'mat_transform': self.mat_transform.tolist(),
        }


@dataclass
class ShadeConfig:
    """Configuration for shading output."""

    return_torch: bool = False
    device: str = "cpu"
    validate: bool = True
