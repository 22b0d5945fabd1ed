"""Light vector and falloff computation."""

from __future__ import annotations
from typing import Optional, Tuple
import numpy as np


EPSILON_NORMALIZE = 1e-9
DEFAULT_FALLBACK_DIRECTION = np.array([0.0, 0.0, 1.0], dtype=np.float32)


def dot_rows(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Row-wise dot product of (N, 3) arrays, returned as (N, 1)."""
    return (a * b).sum(axis=-1, keepdims=True)


def safe_normalize(
    vectors: np.ndarray,
    fallback: Optional[np.ndarray] = None,
    eps: float = EPSILON_NORMALIZE
) -> np.ndarray:
    """
    Safely normalize vectors along the last axis.

    Rows shorter than eps have no defined direction and are replaced by
    the fallback instead of turning into NaN.

    Args:
        vectors: Input vectors (..., 3)
        fallback: Replacement direction, broadcastable to vectors
            (default: +Z)
        eps: Minimum length treated as a valid direction

    Returns:
        Unit vectors with same shape
    """
    vectors = np.asarray(vectors, dtype=np.float32)

    if fallback is None:
        fallback = DEFAULT_FALLBACK_DIRECTION
    fallback = np.broadcast_to(np.asarray(fallback, dtype=np.float32), vectors.shape)

    norm = np.linalg.norm(vectors, axis=-1, keepdims=True)
    valid = norm > eps
    unit = vectors / np.where(valid, norm, 1.0)

    return np.where(valid, unit, fallback).astype(np.float32)


def attenuation(
    distance,
    falloff_start: float,
    falloff_end: float
) -> np.ndarray:
    """
    Linear falloff between two distances.

    Formula:
        att = clamp((end - d) / (end - start), 0, 1)

    A range with end <= start has no ramp and acts as a step:
    1 up to and including end, 0 beyond it.

    Args:
        distance: Distances to the light (any shape)
        falloff_start: Distance where attenuation begins
        falloff_end: Distance where attenuation reaches zero

    Returns:
        Attenuation factors in [0, 1], same shape as distance
    """
    d = np.asarray(distance, dtype=np.float32)
    falloff_start = float(falloff_start)
    falloff_end = float(falloff_end)

    width = falloff_end - falloff_start
    if width <= 0.0:
        return np.where(d <= falloff_end, 1.0, 0.0).astype(np.float32)

    return np.clip((falloff_end - d) / width, 0.0, 1.0).astype(np.float32)


def lambert_term(L: np.ndarray, N: np.ndarray) -> np.ndarray:
    """Cosine-weighted incidence max(0, L·N), shaped (N, 1)."""
    return np.maximum(dot_rows(L, N), 0.0).astype(np.float32)


def spot_factor(
    L: np.ndarray,
    spot_direction: np.ndarray,
    spot_power: float
) -> np.ndarray:
    """
    Cone falloff of a spot light.

    Formula:
        spot = max(0, -L·D)^power

    Args:
        L: Directions from surface toward the light (N, 3)
        spot_direction: Light aim direction (3,)
        spot_power: Cone sharpness exponent

    Returns:
        Spot factors (N, 1)
    """
    cos_angle = dot_rows(-L, np.asarray(spot_direction, dtype=np.float32).reshape(1, 3))
    return np.power(np.maximum(cos_angle, 0.0), spot_power).astype(np.float32)


def compute_point_light_vectors(
    xyz: np.ndarray,
    light_position: np.ndarray,
    fallback: Optional[np.ndarray] = None
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Compute light vectors for a positioned light.

    Args:
        xyz: Surface positions (N, 3)
        light_position: Light position in world space (3,)
        fallback: Direction used where the surface coincides with the light

    Returns:
        L: Incident light direction (N, 3) - from point toward light
        distance: Distance from point to light (N, 1)
    """
    vec = np.asarray(light_position, dtype=np.float32).reshape(1, 3) - xyz
    distance = np.linalg.norm(vec, axis=1, keepdims=True)

    L = safe_normalize(vec, fallback=fallback)

    return L, distance.astype(np.float32)
