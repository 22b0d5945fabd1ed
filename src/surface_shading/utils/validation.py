"""Input validation utilities."""

from __future__ import annotations
import numpy as np


def validate_fragment_inputs(
    world_pos: np.ndarray,
    normal: np.ndarray,
    shadow_pos: np.ndarray,
    base_color: np.ndarray
):
    """
    Validate per-fragment shading inputs.

    Args:
        world_pos: World-space positions (N, 3)
        normal: Interpolated normals (N, 3)
        shadow_pos: Shadow-space positions (N, 4)
        base_color: Texture-sampled base colors (N, 4) or (4,)

    Raises:
        ValueError: If inputs are invalid
    """
    if world_pos.ndim != 2 or world_pos.shape[1] != 3:
        raise ValueError(f"world_pos must be (N, 3), got {world_pos.shape}")

    if normal.shape != world_pos.shape:
        raise ValueError(f"normal must be {world_pos.shape}, got {normal.shape}")

    if shadow_pos.ndim != 2 or shadow_pos.shape != (world_pos.shape[0], 4):
        raise ValueError(f"shadow_pos must be ({world_pos.shape[0]}, 4), got {shadow_pos.shape}")

    if base_color.shape not in ((4,), (world_pos.shape[0], 4)):
        raise ValueError(f"base_color must be (4,) or ({world_pos.shape[0]}, 4), got {base_color.shape}")

    if not np.isfinite(world_pos).all():
        raise ValueError("world_pos contains NaN or Inf")

    if not np.isfinite(normal).all():
        raise ValueError("normal contains NaN or Inf")


def validate_shadow_map(depth: np.ndarray):
    """
    Validate a shadow depth texture.

    Args:
        depth: Depth texture (H, W)

    Raises:
        ValueError: If the texture is not a non-empty 2D array
    """
    if depth.ndim != 2:
        raise ValueError(f"shadow depth must be (H, W), got {depth.shape}")

    if depth.shape[0] == 0 or depth.shape[1] == 0:
        raise ValueError(f"shadow depth must be non-empty, got {depth.shape}")
