"""Shadow map and comparison sampler."""

from __future__ import annotations
from typing import Any, Dict
from dataclasses import dataclass, field
import numpy as np

from ..utils.validation import validate_shadow_map


DEFAULT_COMPARISON = 'less_equal'
DEFAULT_FILTER = 'linear'
DEFAULT_ADDRESS_MODE = 'border'
DEFAULT_BORDER_DEPTH = 1.0

# Comparison passes (texel lit) when func(reference, sampled_depth) is true
COMPARISON_FUNCS = {
    'less_equal': np.less_equal,
    'less': np.less,
    'greater_equal': np.greater_equal,
    'greater': np.greater,
    'equal': np.equal,
    'not_equal': np.not_equal,
    'always': lambda ref, depth: np.ones(np.broadcast(ref, depth).shape, dtype=bool),
    'never': lambda ref, depth: np.zeros(np.broadcast(ref, depth).shape, dtype=bool),
}

FILTER_MODES = ('linear', 'point')
ADDRESS_MODES = ('border', 'clamp')


@dataclass(frozen=True)
class ComparisonSampler:
    """
    Depth comparison sampler state.

    Attributes:
        comparison: Name of the comparison function, see COMPARISON_FUNCS
        filter: 'linear' (bilinear-weighted comparisons) or 'point'
        address_mode: 'border' or 'clamp' for coordinates outside [0, 1]
        border_depth: Depth read outside the map in 'border' mode
    """
    comparison: str = DEFAULT_COMPARISON
    filter: str = DEFAULT_FILTER
    address_mode: str = DEFAULT_ADDRESS_MODE
    border_depth: float = DEFAULT_BORDER_DEPTH

    def __post_init__(self):
        if self.comparison not in COMPARISON_FUNCS:
            raise ValueError(f"Unknown comparison function: {self.comparison}")
        if self.filter not in FILTER_MODES:
            raise ValueError(f"Unknown filter mode: {self.filter}")
        if self.address_mode not in ADDRESS_MODES:
            raise ValueError(f"Unknown address mode: {self.address_mode}")

    @classmethod
    def from_dict(cls, cfg: Dict[str, Any]) -> 'ComparisonSampler':
        """Create ComparisonSampler from dictionary."""
        return cls(
            comparison=str(cfg.get('comparison', DEFAULT_COMPARISON)).lower(),
            filter=str(cfg.get('filter', DEFAULT_FILTER)).lower(),
            address_mode=str(cfg.get('address_mode', DEFAULT_ADDRESS_MODE)).lower(),
            border_depth=float(cfg.get('border_depth', DEFAULT_BORDER_DEPTH)),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'comparison': self.comparison,
            'filter': self.filter,
            'address_mode': self.address_mode,
            'border_depth': self.border_depth,
        }


@dataclass(frozen=True, eq=False)
class ShadowMap:
    """
    Read-only depth texture bound with a comparison sampler.

    The depth values come from an external shadow pass; texture
    coordinate u runs along columns and v along rows.

    Attributes:
        depth: Light-space depth texture (H, W)
        sampler: Comparison sampler state
    """
    depth: np.ndarray
    sampler: ComparisonSampler = field(default_factory=ComparisonSampler)

    def __post_init__(self):
        depth = np.array(self.depth, dtype=np.float32)
        validate_shadow_map(depth)
        depth.setflags(write=False)
        object.__setattr__(self, 'depth', depth)

    @property
    def height(self) -> int:
        return int(self.depth.shape[0])

    @property
    def width(self) -> int:
        return int(self.depth.shape[1])

    @property
    def texel_size(self) -> float:
        """Texel size in texture coordinates along u."""
        return 1.0 / float(self.width)

    def _fetch(self, ix: np.ndarray, iy: np.ndarray) -> np.ndarray:
        """Read texels at integer coordinates, applying the address mode."""
        if self.sampler.address_mode == 'clamp':
            ix = np.clip(ix, 0, self.width - 1)
            iy = np.clip(iy, 0, self.height - 1)
            return self.depth[iy, ix]

        inside = (ix >= 0) & (ix < self.width) & (iy >= 0) & (iy < self.height)
        values = self.depth[np.clip(iy, 0, self.height - 1), np.clip(ix, 0, self.width - 1)]
        return np.where(inside, values, np.float32(self.sampler.border_depth))

    def _compare(self, reference: np.ndarray, ix: np.ndarray, iy: np.ndarray) -> np.ndarray:
        func = COMPARISON_FUNCS[self.sampler.comparison]
        return func(reference, self._fetch(ix, iy)).astype(np.float32)

    def sample_cmp(self, uv: np.ndarray, reference: np.ndarray) -> np.ndarray:
        """
        Compare a reference depth against the map at texture coordinates.

        With the 'linear' filter the four texels around the sample point are
        compared individually and the binary results are bilinearly weighted,
        as comparison samplers do in hardware.

        Args:
            uv: Texture coordinates (N, 2)
            reference: Reference depths (N,)

        Returns:
            Fraction of passing comparisons (N,) in [0, 1]
        """
        uv = np.asarray(uv, dtype=np.float32).reshape(-1, 2)
        reference = np.asarray(reference, dtype=np.float32).reshape(-1)

        tx = uv[:, 0] * self.width - 0.5
        ty = uv[:, 1] * self.height - 0.5

        if self.sampler.filter == 'point':
            ix = np.floor(tx + 0.5).astype(np.int64)
            iy = np.floor(ty + 0.5).astype(np.int64)
            return self._compare(reference, ix, iy)

        x0 = np.floor(tx)
        y0 = np.floor(ty)
        fx = (tx - x0).astype(np.float32)
        fy = (ty - y0).astype(np.float32)
        x0 = x0.astype(np.int64)
        y0 = y0.astype(np.int64)

        c00 = self._compare(reference, x0, y0)
        c10 = self._compare(reference, x0 + 1, y0)
        c01 = self._compare(reference, x0, y0 + 1)
        c11 = self._compare(reference, x0 + 1, y0 + 1)

        top = c00 * (1.0 - fx) + c10 * fx
        bottom = c01 * (1.0 - fx) + c11 * fx

        return (top * (1.0 - fy) + bottom * fy).astype(np.float32)
