"""YAML scene loading."""

from __future__ import annotations
from pathlib import Path
from typing import Tuple, Union

from omegaconf import OmegaConf

from .composite.config import PassConstants, MaterialConstants
from .shadow.config import ComparisonSampler
from .utils.debug import debug_log


REQUIRED_SECTIONS = ("pass", "material", "shadow")


def load_scene(
    config_path: Union[str, Path]
) -> Tuple[PassConstants, MaterialConstants, ComparisonSampler]:
    """
    Load pass, material and shadow sampler constants from YAML.

    Expected layout:
        pass:     eye_pos, ambient_light, lights[...] (+ optional matrices)
        material: diffuse_albedo, fresnel_r0, roughness
        shadow:   comparison, filter, address_mode, border_depth

    Args:
        config_path: Path to YAML scene file

    Returns:
        (PassConstants, MaterialConstants, ComparisonSampler)

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If a required section is missing
    """
    if not Path(config_path).exists():
        raise FileNotFoundError(f"Scene file not found: {config_path}")

    config = OmegaConf.load(config_path)

    for section in REQUIRED_SECTIONS:
        if section not in config:
            raise ValueError(f"Missing required scene section: {section}")

    cfg = OmegaConf.to_container(config, resolve=True)

    pass_constants = PassConstants.from_dict(cfg["pass"] or {})
    material_constants = MaterialConstants.from_dict(cfg["material"] or {})
    sampler = ComparisonSampler.from_dict(cfg["shadow"] or {})

    debug_log("Scene", f"Loaded {config_path}: {len(pass_constants.lights)} light(s), "
              f"roughness={material_constants.roughness}")

    return pass_constants, material_constants, sampler
