"""Lighting engine: analytic light evaluation and reflectance."""

from .config import (
    LightType,
    DirectionalLight,
    PointLight,
    SpotLight,
    Light,
    Material,
    light_from_dict,
)
from .lights import (
    safe_normalize,
    attenuation,
    lambert_term,
    spot_factor,
)
from .models import (
    fresnel_schlick,
    blinn_phong,
)
from .compute import (
    evaluate_directional,
    evaluate_point,
    evaluate_spot,
    evaluate_light,
    compute_lighting,
)

__all__ = [
    # Config
    "LightType",
    "DirectionalLight",
    "PointLight",
    "SpotLight",
    "Light",
    "Material",
    "light_from_dict",

    # Light terms
    "safe_normalize",
    "attenuation",
    "lambert_term",
    "spot_factor",

    # Models
    "fresnel_schlick",
    "blinn_phong",

    # Evaluation
    "evaluate_directional",
    "evaluate_point",
    "evaluate_spot",
    "evaluate_light",
    "compute_lighting",
]
