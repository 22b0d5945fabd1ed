"""Fragment shading composer."""

from __future__ import annotations
from typing import Optional
import numpy as np

from .config import FragmentInput, PassConstants, MaterialConstants, ShadeConfig
from ..lighting.compute import compute_lighting
from ..lighting.lights import safe_normalize
from ..shadow.config import ShadowMap
from ..shadow.pcf import compute_visibility
from ..utils.conversion import normalize_to_float32, to_torch_tensor
from ..utils.validation import validate_fragment_inputs
from ..utils.debug import debug_log, debug_array_info


class ShadingComposer:
    """
    Combine ambient, shadowed direct lighting and surface color.

    The shadow map and its comparison sampler are bound once at
    construction and read-only afterwards.

    Example:
        >>> composer = ShadingComposer(ShadowMap(depth))
        >>> rgba = composer.shade(fragment, pass_constants, material_constants, base_color)
    """

    def __init__(self, shadow_map: ShadowMap, config: Optional[ShadeConfig] = None):
        self.shadow_map = shadow_map
        self.config = config or ShadeConfig()

        debug_log("Composer", f"Bound {shadow_map.width}x{shadow_map.height} shadow map "
                  f"({shadow_map.sampler.comparison}, {shadow_map.sampler.filter})")

    def shade(
        self,
        fragment: FragmentInput,
        pass_constants: PassConstants,
        material_constants: MaterialConstants,
        base_color
    ):
        """
        Shade a batch of fragments.

        Steps:
            1. diffuse = base_color * diffuse_albedo
            2. normalize the interpolated normal
            3. to_eye = normalize(eye_pos - world_pos)
            4. shininess = 1 - roughness
            5. visibility = PCF shadow test
            6. lit = sum of light contributions, shadowed by visibility
            7. out = diffuse * (ambient + [lit, 1]), alpha = diffuse.a

        Args:
            fragment: Interpolated fragment attributes
            pass_constants: Eye position, ambient light and lights
            material_constants: Albedo, Fresnel R0 and roughness
            base_color: Texture-sampled RGBA (4,) or (N, 4); float colors
                are used as given (HDR values pass through), integer
                texels are scaled to [0, 1]

        Returns:
            RGBA colors (N, 4), NumPy array or torch tensor

        Raises:
            ValueError: If input shapes are invalid
        """
        base_color = normalize_to_float32(base_color)

        if self.config.validate:
            validate_fragment_inputs(
                fragment.world_pos, fragment.normal, fragment.shadow_pos, base_color
            )

        n_frag = len(fragment)

        diffuse = np.broadcast_to(base_color, (n_frag, 4)) * material_constants.diffuse_albedo.reshape(1, 4)
        diffuse = diffuse.astype(np.float32)

        normal = safe_normalize(fragment.normal)

        to_eye = safe_normalize(
            pass_constants.eye_pos.reshape(1, 3) - fragment.world_pos,
            fallback=normal
        )

        # Texture color enters once, in the final modulation
        material = material_constants.to_material()

        visibility = compute_visibility(fragment.shadow_pos, self.shadow_map)

        lit = compute_lighting(
            pass_constants.lights,
            material,
            fragment.world_pos,
            normal,
            to_eye,
            shadow_factor=visibility
        )

        ambient = pass_constants.ambient_light.reshape(1, 4)
        light_rgba = np.concatenate([lit, np.ones((n_frag, 1), dtype=np.float32)], axis=1)

        color = diffuse * (ambient + light_rgba)
        color[:, 3] = diffuse[:, 3]
        color = color.astype(np.float32)

        debug_array_info("Composer", color)

        if self.config.return_torch:
            return to_torch_tensor(color, device=self.config.device)

        return color


def shade_fragments(
    fragment: FragmentInput,
    pass_constants: PassConstants,
    material_constants: MaterialConstants,
    base_color,
    shadow_map: ShadowMap,
    return_torch: bool = False
):
    """
    Shade fragments with a one-off composer.

    Returns:
        RGBA colors (N, 4)
    """
    composer = ShadingComposer(shadow_map, ShadeConfig(return_torch=return_torch))
    return composer.shade(fragment, pass_constants, material_constants, base_color)
