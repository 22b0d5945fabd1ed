"""
surface_shading - Fragment Surface Shading

Per-fragment radiance from a normalized Blinn-Phong model with
directional, point and spot lights, softened by a 3x3 percentage-closer
filtered shadow test. Vectorized over batches of fragments with NumPy.

Components:
    - Lighting: Light variants, falloff, Fresnel and reflectance
    - Shadow: Comparison-sampled shadow map and PCF visibility
    - Composite: Ambient + shadowed lighting over surface color
    - Utils: Conversion, validation and debug output

Example:
    >>> from surface_shading import (
    ...     DirectionalLight, FragmentInput, MaterialConstants,
    ...     PassConstants, ShadingComposer, ShadowMap,
    ... )
    >>>
    >>> composer = ShadingComposer(ShadowMap(depth))
    >>> rgba = composer.shade(
    ...     FragmentInput(world_pos, normal, shadow_pos),
    ...     PassConstants(eye_pos=[0, 5, -10], lights=[DirectionalLight()]),
    ...     MaterialConstants(roughness=0.5),
    ...     base_color,
    ... )
"""

__version__ = "1.0.0"

# Lighting
from .lighting import (
    LightType,
    DirectionalLight,
    PointLight,
    SpotLight,
    Material,
    light_from_dict,
    attenuation,
    fresnel_schlick,
    blinn_phong,
    evaluate_directional,
    evaluate_point,
    evaluate_spot,
    evaluate_light,
    compute_lighting,
)

# Shadow
from .shadow import (
    ComparisonSampler,
    ShadowMap,
    compute_visibility,
)

# Composite
from .composite import (
    FragmentInput,
    PassConstants,
    MaterialConstants,
    ShadeConfig,
    ShadingComposer,
    shade_fragments,
)

# Scene
from .scene import load_scene

__all__ = [
    "__version__",

    # Lighting
    "LightType",
    "DirectionalLight",
    "PointLight",
    "SpotLight",
    "Material",
    "light_from_dict",
    "attenuation",
    "fresnel_schlick",
    "blinn_phong",
    "evaluate_directional",
    "evaluate_point",
    "evaluate_spot",
    "evaluate_light",
    "compute_lighting",

    # Shadow
    "ComparisonSampler",
    "ShadowMap",
    "compute_visibility",

    # Composite
    "FragmentInput",
    "PassConstants",
    "MaterialConstants",
    "ShadeConfig",
    "ShadingComposer",
    "shade_fragments",

    # Scene
    "load_scene",
]
