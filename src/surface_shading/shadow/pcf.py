"""Percentage-closer filtered shadow visibility."""

from __future__ import annotations
import numpy as np

from .config import ShadowMap
from ..utils.conversion import as_vector_rows
from ..utils.debug import debug_array_info


# 3x3 kernel in texel units, row-major
PCF_OFFSETS = tuple(
    (float(ox), float(oy))
    for oy in (-1, 0, 1)
    for ox in (-1, 0, 1)
)


def compute_visibility(
    shadow_pos: np.ndarray,
    shadow_map: ShadowMap
) -> np.ndarray:
    """
    Soft shadow visibility from a 3x3 PCF kernel.

    Steps:
        1. ndc = shadow_pos.xyz / shadow_pos.w
        2. reference depth = ndc.z
        3. dx = 1 / shadow map width
        4. compare at ndc.xy + (i, j) * dx for i, j in {-1, 0, 1}
        5. average the nine results

    Fragments with w <= 0 lie outside the light frustum and are fully lit.

    Args:
        shadow_pos: Projected shadow-space positions (N, 4) or (4,)
        shadow_map: Shadow depth texture with comparison sampler

    Returns:
        Visibility (N,) in [0, 1]
    """
    shadow_pos = as_vector_rows(shadow_pos, width=4)

    w = shadow_pos[:, 3]
    in_front = w > 0.0

    ndc = shadow_pos[:, :3] / np.where(in_front, w, 1.0)[:, None]
    uv = ndc[:, :2]
    reference = ndc[:, 2]

    dx = shadow_map.texel_size

    total = np.zeros(shadow_pos.shape[0], dtype=np.float32)
    for ox, oy in PCF_OFFSETS:
        offset = np.array([ox * dx, oy * dx], dtype=np.float32)
        total += shadow_map.sample_cmp(uv + offset, reference)

    visibility = total / float(len(PCF_OFFSETS))
    visibility = np.where(in_front, visibility, 1.0).astype(np.float32)

    debug_array_info("Shadow", visibility)

    return visibility
