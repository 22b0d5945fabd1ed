"""Reflectance models (Schlick Fresnel, normalized Blinn-Phong)."""

from __future__ import annotations
import numpy as np

from .config import Material
from .lights import safe_normalize, dot_rows


SHININESS_SCALE = 256.0
BLINN_PHONG_NORM = 8.0


def fresnel_schlick(
    r0: np.ndarray,
    normal: np.ndarray,
    light_dir: np.ndarray
) -> np.ndarray:
    """
    Schlick approximation of Fresnel reflectance.

    Formula:
        c = clamp(N·L, 0, 1)
        F = R0 + (1 - R0) * (1 - c)^5

    When called from blinn_phong, normal is the half-vector (the microfacet
    normal), not the geometric surface normal.

    Args:
        r0: Reflectance at normal incidence (3,) or (N, 3)
        normal: Facet normals (N, 3)
        light_dir: Light directions (N, 3)

    Returns:
        Reflectance (N, 3) in [0, 1]
    """
    r0 = np.asarray(r0, dtype=np.float32)

    cos_incident = np.clip(dot_rows(normal, light_dir), 0.0, 1.0)
    f0 = 1.0 - cos_incident

    reflectance = r0 + (1.0 - r0) * (f0 ** 5)
    return reflectance.astype(np.float32)


def blinn_phong(
    light_strength: np.ndarray,
    light_dir: np.ndarray,
    normal: np.ndarray,
    to_eye: np.ndarray,
    material: Material
) -> np.ndarray:
    """
    Energy-normalized Blinn-Phong reflectance.

    Formula:
        m = shininess * 256
        H = normalize(V + L)
        roughness = (m + 8) * max(0, N·H)^m / 8
        spec = F(R0, H, L) * roughness
        spec = spec / (spec + 1)
        out = (albedo.rgb + spec) * strength

    Args:
        light_strength: Incident light already scaled by Lambert,
            attenuation and cone terms (N, 3)
        light_dir: Directions from surface toward the light (N, 3)
        normal: Unit surface normals (N, 3)
        to_eye: Unit directions from surface toward the eye (N, 3)
        material: Surface material

    Returns:
        Reflected radiance (N, 3), non-negative
    """
    m = material.shininess * SHININESS_SCALE

    # V and L opposite: no defined half-vector, use the surface normal
    H = safe_normalize(to_eye + light_dir, fallback=normal)

    ndoth = np.maximum(dot_rows(H, normal), 0.0)
    roughness_factor = (m + BLINN_PHONG_NORM) * np.power(ndoth, m) / BLINN_PHONG_NORM

    fresnel = fresnel_schlick(material.fresnel_r0, H, light_dir)

    specular = fresnel * roughness_factor
    specular = specular / (specular + 1.0)

    albedo = material.diffuse_albedo[:3]
    return ((albedo + specular) * light_strength).astype(np.float32)
