"""Per-light evaluation and multi-light accumulation."""

from __future__ import annotations
from typing import Optional, Sequence
import numpy as np

from .config import Light, LightType, Material, DirectionalLight, PointLight, SpotLight
from .lights import (
    attenuation,
    lambert_term,
    spot_factor,
    compute_point_light_vectors,
)
from .models import blinn_phong
from ..utils.conversion import as_vector_rows
from ..utils.debug import debug_log


def evaluate_directional(
    light: DirectionalLight,
    material: Material,
    normal: np.ndarray,
    to_eye: np.ndarray
) -> np.ndarray:
    """
    Reflected radiance from a directional light.

    Args:
        light: Directional light
        material: Surface material
        normal: Unit surface normals (N, 3) or (3,)
        to_eye: Unit view directions (N, 3) or (3,)

    Returns:
        RGB radiance (N, 3)
    """
    normal = as_vector_rows(normal)
    to_eye = as_vector_rows(to_eye)

    L = np.broadcast_to(-light.direction.reshape(1, 3), normal.shape)

    strength = light.strength.reshape(1, 3) * lambert_term(L, normal)

    return blinn_phong(strength, L, normal, to_eye, material)


def _evaluate_positioned(
    light,
    material: Material,
    xyz: np.ndarray,
    normal: np.ndarray,
    to_eye: np.ndarray,
    cone: bool
) -> np.ndarray:
    xyz = as_vector_rows(xyz)
    normal = as_vector_rows(normal)
    to_eye = as_vector_rows(to_eye)

    L, distance = compute_point_light_vectors(xyz, light.position, fallback=normal)

    # Hard cutoff outside the light range
    in_range = distance <= light.falloff_end

    strength = light.strength.reshape(1, 3) * lambert_term(L, normal)
    strength = strength * attenuation(distance, light.falloff_start, light.falloff_end)

    if cone:
        strength = strength * spot_factor(L, light.direction, light.spot_power)

    radiance = blinn_phong(strength, L, normal, to_eye, material)

    return np.where(in_range, radiance, 0.0).astype(np.float32)


def evaluate_point(
    light: PointLight,
    material: Material,
    xyz: np.ndarray,
    normal: np.ndarray,
    to_eye: np.ndarray
) -> np.ndarray:
    """
    Reflected radiance from a point light.

    Surfaces farther than falloff_end receive exactly zero.

    Args:
        light: Point light
        material: Surface material
        xyz: Surface positions (N, 3) or (3,)
        normal: Unit surface normals (N, 3) or (3,)
        to_eye: Unit view directions (N, 3) or (3,)

    Returns:
        RGB radiance (N, 3)
    """
    return _evaluate_positioned(light, material, xyz, normal, to_eye, cone=False)


def evaluate_spot(
    light: SpotLight,
    material: Material,
    xyz: np.ndarray,
    normal: np.ndarray,
    to_eye: np.ndarray
) -> np.ndarray:
    """
    Reflected radiance from a spot light.

    Same as evaluate_point, additionally scaled by the cone factor
    max(0, -L·D)^spot_power.

    Returns:
        RGB radiance (N, 3)
    """
    return _evaluate_positioned(light, material, xyz, normal, to_eye, cone=True)


def evaluate_light(
    light: Light,
    material: Material,
    xyz: np.ndarray,
    normal: np.ndarray,
    to_eye: np.ndarray
) -> np.ndarray:
    """
    Dispatch to the evaluator matching the light variant.

    Raises:
        ValueError: If the light kind is not supported
    """
    kind = getattr(light, 'kind', None)

    if kind == LightType.DIRECTIONAL:
        return evaluate_directional(light, material, normal, to_eye)
    elif kind == LightType.POINT:
        return evaluate_point(light, material, xyz, normal, to_eye)
    elif kind == LightType.SPOT:
        return evaluate_spot(light, material, xyz, normal, to_eye)
    else:
        raise ValueError(f"Unknown light type: {kind}")


def compute_lighting(
    lights: Sequence[Light],
    material: Material,
    xyz: np.ndarray,
    normal: np.ndarray,
    to_eye: np.ndarray,
    shadow_factor: Optional[np.ndarray] = None
) -> np.ndarray:
    """
    Sum reflected radiance over an ordered sequence of lights.

    Args:
        lights: Lights of any variant
        material: Surface material
        xyz: Surface positions (N, 3)
        normal: Unit surface normals (N, 3)
        to_eye: Unit view directions (N, 3)
        shadow_factor: Per-fragment visibility (N,) applied to lights
            with cast_shadows set, or None for no shadowing

    Returns:
        RGB radiance (N, 3)

    Examples:
        >>> lit = compute_lighting(
        ...     [DirectionalLight(strength=[1, 1, 1], direction=[0, -1, 0])],
        ...     Material(shininess=0.5),
        ...     xyz=points, normal=normals, to_eye=view_dirs,
        ... )
    """
    xyz = as_vector_rows(xyz)
    normal = as_vector_rows(normal)
    to_eye = as_vector_rows(to_eye)

    total = np.zeros_like(normal, dtype=np.float32)

    if shadow_factor is not None:
        shadow_factor = np.asarray(shadow_factor, dtype=np.float32).reshape(-1, 1)

    for light in lights:
        radiance = evaluate_light(light, material, xyz, normal, to_eye)

        if shadow_factor is not None and light.cast_shadows:
            radiance = radiance * shadow_factor

        total += radiance

    debug_log("Lighting", f"Accumulated {len(lights)} light(s) over {normal.shape[0]} fragment(s)")

    return total
