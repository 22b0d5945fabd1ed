"""
Demo Entry Point for Fragment Surface Shading

Shades a textured ground plane seen from above:
1. Load pass, material and shadow sampler settings from YAML
2. Build a synthetic occluder depth map (stand-in for a shadow pass)
3. Generate ground-plane fragments and their shadow-space positions
4. Shade with Blinn-Phong lighting and 3x3 PCF shadows
5. Save the result as a PNG

Usage:
    python run.py --config configs/scene.yaml
    python run.py --config configs/scene.yaml --size 256 --output ground.png
"""

import argparse
import sys
from pathlib import Path

import numpy as np
from omegaconf import OmegaConf
from PIL import Image

# Add project paths
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from surface_shading import (
    FragmentInput,
    ShadingComposer,
    ShadowMap,
    load_scene,
)

GROUND_EXTENT = 5.0
CHECKER_TILES = 8


def parse_args():
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        description="Blinn-Phong + PCF fragment shading demo",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run.py --config configs/scene.yaml
  python run.py --config configs/scene.yaml --size 256 --output ground.png
        """
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        default="configs/scene.yaml",
        help="Path to YAML scene file"
    )

    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Override output image path from config"
    )

    parser.add_argument(
        "--size", "-s",
        type=int,
        default=None,
        help="Override output image size from config"
    )

    return parser.parse_args()


def build_occluder_depth(size: int, extent: float, depth: float) -> np.ndarray:
    """
    Depth map of a square occluder centered in an empty (far) map.

    Args:
        size: Shadow map resolution
        extent: Half-width of the occluder in texture coordinates
        depth: Light-space depth of the occluder

    Returns:
        (size, size) float32 depth map
    """
    depth_map = np.ones((size, size), dtype=np.float32)

    centers = (np.arange(size, dtype=np.float32) + 0.5) / size
    inside = np.abs(centers - 0.5) <= extent
    depth_map[np.ix_(inside, inside)] = depth

    return depth_map


def build_ground_fragments(size: int, shadow_transform: np.ndarray, depth_bias: float):
    """
    Fragments of the y = 0 ground plane on a size x size grid.

    Returns:
        fragment: FragmentInput for size * size fragments
        base_color: (size * size, 4) uint8 checkerboard texels
    """
    coords = np.linspace(-GROUND_EXTENT, GROUND_EXTENT, size, dtype=np.float32)
    xx, zz = np.meshgrid(coords, coords)

    world_pos = np.stack([xx.ravel(), np.zeros(xx.size, dtype=np.float32), zz.ravel()], axis=1)
    normal = np.tile(np.array([0.0, 1.0, 0.0], dtype=np.float32), (world_pos.shape[0], 1))

    homogeneous = np.concatenate([world_pos, np.ones((world_pos.shape[0], 1), dtype=np.float32)], axis=1)
    shadow_pos = homogeneous @ shadow_transform.T
    shadow_pos[:, 2] -= depth_bias * shadow_pos[:, 3]

    tile = ((xx + GROUND_EXTENT) / (2 * GROUND_EXTENT) * CHECKER_TILES).astype(np.int32) \
        + ((zz + GROUND_EXTENT) / (2 * GROUND_EXTENT) * CHECKER_TILES).astype(np.int32)
    checker = np.where((tile.ravel() % 2) == 0, 230, 140).astype(np.uint8)
    base_color = np.stack([checker, checker, checker, np.full_like(checker, 255)], axis=1)

    return FragmentInput(world_pos, normal, shadow_pos), base_color


def main():
    args = parse_args()

    if not Path(args.config).exists():
        raise FileNotFoundError(f"Config file not found: {args.config}")

    config = OmegaConf.load(args.config)
    demo = config.get("demo", OmegaConf.create({}))

    size = args.size if args.size is not None else int(demo.get("size", 128))
    output = args.output if args.output is not None else str(demo.get("output", "shaded.png"))

    print(f"[Config] Loaded scene from: {args.config}")
    print(f"  - Image: {size}x{size}")
    print(f"  - Output: {output}")

    pass_constants, material_constants, sampler = load_scene(args.config)
    print(f"  - Lights: {len(pass_constants.lights)}")

    depth_map = build_occluder_depth(
        int(demo.get("shadow_map_size", 64)),
        float(demo.get("occluder_extent", 0.25)),
        float(demo.get("occluder_depth", 0.3)),
    )
    composer = ShadingComposer(ShadowMap(depth_map, sampler))

    fragment, base_color = build_ground_fragments(
        size, pass_constants.shadow_transform, float(demo.get("depth_bias", 0.002))
    )

    rgba = composer.shade(fragment, pass_constants, material_constants, base_color)

    image = (np.clip(rgba, 0.0, 1.0) * 255.0 + 0.5).astype(np.uint8).reshape(size, size, 4)
    Image.fromarray(image).save(output)

    print(f"[Output] Saved shaded image: {output}")


if __name__ == "__main__":
    main()
