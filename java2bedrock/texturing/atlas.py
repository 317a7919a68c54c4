"""
Namespace texture atlas builder.

Packs every texture a namespace's models reference into one PNG and writes
the matching spritesheet JSON next to it. Animated textures (those with a
`.mcmeta` sidecar) are stacked frames; only the first square frame is packed,
registered under a `_cropped` path so lookups can tell it apart.

Failures never raise: the builder logs a warning and returns None, and
conversion falls back to pass-through UVs.
"""

import json
import logging
import os
from typing import Dict, List, Optional, Sequence

from PIL import Image

from java2bedrock.texturing.packer import pack_rectangles
from java2bedrock.texturing.spritesheet import AtlasData, AtlasFrame, CROPPED_SUFFIX, IMAGE_EXT

logger = logging.getLogger(__name__)

MCMETA_EXT = ".mcmeta"


def is_animated(texture_path: str) -> bool:
    """A texture is animated when it ships a `.mcmeta` sidecar."""
    return os.path.exists(texture_path + MCMETA_EXT)


def crop_first_frame(image: Image.Image) -> Image.Image:
    """Crop the top-left square (one animation frame) out of a frame strip."""
    side = min(image.size)
    return image.crop((0, 0, side, side))


def cropped_path(texture_path: str) -> str:
    """'.../fire.png' -> '.../fire_cropped.png'"""
    stem, ext = os.path.splitext(texture_path)
    return stem + CROPPED_SUFFIX + (ext or IMAGE_EXT)


def _load_textures(texture_paths: Sequence[str]) -> Dict[str, Image.Image]:
    """Open each texture once, keyed by the path it is registered under."""
    images: Dict[str, Image.Image] = {}
    for texture_path in texture_paths:
        texture_path = os.path.abspath(texture_path)
        try:
            with Image.open(texture_path) as img:
                image = img.convert('RGBA')
        except OSError as e:
            logger.warning(f"Could not read texture {texture_path}: {e}")
            continue

        if is_animated(texture_path):
            image = crop_first_frame(image)
            key = cropped_path(texture_path)
            logger.info(f"Cropped animated texture: {os.path.basename(texture_path)}")
        else:
            key = texture_path

        if key not in images:
            images[key] = image
    return images


def build_atlas(
    texture_paths: Sequence[str],
    output_stem: str,
    padding: int = 0
) -> Optional[AtlasData]:
    """
    Pack textures into `<output_stem>.png` and describe them in `<output_stem>.json`.

    Args:
        texture_paths: PNG files to pack (duplicates are ignored)
        output_stem: Output path without extension
        padding: Empty pixels between packed textures

    Returns:
        AtlasData for the written atlas, or None if nothing could be packed
    """
    images = _load_textures(texture_paths)
    if not images:
        logger.warning("No readable textures to pack, skipping atlas")
        return None

    rects = [(img.width, img.height, key) for key, img in images.items()]
    try:
        placements, atlas_size = pack_rectangles(rects, padding=padding)
    except RuntimeError as e:
        logger.warning(f"Atlas packing failed: {e}")
        return None
    atlas_w = atlas_h = atlas_size

    # Transparent background so unused space stays empty
    atlas_img = Image.new('RGBA', (atlas_w, atlas_h), (0, 0, 0, 0))
    frames: Dict[str, AtlasFrame] = {}
    for placement in placements:
        atlas_img.paste(images[placement.id], (placement.x, placement.y))
        frames[placement.id] = AtlasFrame(x=placement.x, y=placement.y, w=placement.width, h=placement.height)

    png_path = output_stem + IMAGE_EXT
    json_path = output_stem + ".json"
    atlas = AtlasData(frames=frames, width=atlas_w, height=atlas_h, image=os.path.basename(png_path))

    try:
        out_dir = os.path.dirname(png_path)
        if out_dir:
            os.makedirs(out_dir, exist_ok=True)
        atlas_img.save(png_path, format='PNG')
        with open(json_path, 'w') as f:
            json.dump(atlas.to_spritesheet(), f, indent=2)
    except OSError as e:
        logger.warning(f"Could not write atlas {png_path}: {e}")
        return None

    logger.info(f"Packed {len(frames)} textures into {atlas_w}x{atlas_h} atlas {png_path}")
    return atlas


def collect_texture_files(texture_paths: List[str], textures_dir: str) -> List[str]:
    """
    Map clean texture paths ('block/stone') to existing PNG files under
    `textures_dir`, dropping the ones that don't exist. Order is kept.
    """
    files: List[str] = []
    for texture_path in texture_paths:
        candidate = os.path.join(textures_dir, *texture_path.split("/")) + IMAGE_EXT
        if os.path.exists(candidate) and candidate not in files:
            files.append(candidate)
    return files
