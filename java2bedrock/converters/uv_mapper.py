"""
UV Mapper - translates Java face UVs into Bedrock per-face UVs.

Java convention:
- UVs are [u0, v0, u1, v1] on a 16-unit grid per texture (1 unit = 1/16 of
  the texture, whatever its resolution)
- Reversed corners mirror the face

Bedrock convention:
- {"uv": [u, v], "uv_size": [w, h]} relative to the whole atlas, expressed in
  a 16-unit logical space

Two modes:
- Pass-through: no atlas data (or the texture is not in it). Java UVs are
  copied as origin + size, which matches single-texture models.
- Atlas: each corner is moved into the texture's atlas frame, normalized to
  the logical space, then pulled inwards by UV_INSET so neighbouring frames
  don't bleed.
"""
import logging
from typing import Dict, List, Mapping, Optional

from java2bedrock.converters.geometry import round4, Number
from java2bedrock.texturing.spritesheet import AtlasData

logger = logging.getLogger(__name__)

# ===================================================================
# Mappings and Constants
# ===================================================================

TEXEL_SCALE = 0.0625          # 1 Java UV unit = 1/16 of the texture
LOGICAL_UV_SIZE = 16          # Bedrock UVs are normalized to a 16-unit space
UV_INSET = 0.016              # Anti-bleed inset in logical units

MAX_REFERENCE_DEPTH = 16      # '#a' -> '#b' -> ... chain limit

# ===================================================================
# Texture references
# ===================================================================

def clean_texture_path(value: str) -> Optional[str]:
    """'minecraft:block\\stone' -> 'block/stone'"""
    if ":" in value:
        value = value.split(":", 1)[1]
    value = value.replace("\\", "/")
    return value or None


def resolve_texture(reference: Optional[str], textures: Mapping[str, str]) -> Optional[str]:
    """
    Dereference a face texture variable to a clean texture path.

    Face textures are always variables: '#0' is looked up in the model's
    texture table, and table values that are themselves '#other' references
    are followed. A reference without the '#' prefix is not a variable and
    does not resolve.

    Returns None when the reference cannot be resolved (not a variable,
    unknown key or a reference cycle).

    Examples:
        >>> resolve_texture("#0", {"0": "minecraft:block/stone"})
        'block/stone'
        >>> resolve_texture("#side", {"side": "#all", "all": "block\\\\oak_planks"})
        'block/oak_planks'
    """
    if not reference or not reference.startswith("#"):
        return None

    value = reference
    seen = set()
    while value.startswith("#"):
        key = value[1:]
        if key in seen or len(seen) >= MAX_REFERENCE_DEPTH:
            logger.warning(f"Texture reference cycle at {reference!r}")
            return None
        seen.add(key)
        if key not in textures:
            return None
        value = textures[key]

    return clean_texture_path(value)

# ===================================================================
# UV conversion
# ===================================================================

def passthrough_uv(uv: List[float]) -> Dict[str, List[Number]]:
    """Java rect -> Bedrock origin + size without any atlas remapping."""
    u0, v0, u1, v1 = uv
    return {
        "uv": [round4(u0), round4(v0)],
        "uv_size": [round4(u1 - u0), round4(v1 - v0)],
    }


def _clamp_unit(value: float) -> float:
    return max(-1, min(1, value))


def calculate_uv(
    uv: List[float],
    texture_path: Optional[str],
    atlas: Optional[AtlasData] = None
) -> Dict[str, List[Number]]:
    """
    Convert one face UV rect to Bedrock space.

    Args:
        uv: Java [u0, v0, u1, v1]
        texture_path: Dereferenced texture path (see resolve_texture)
        atlas: Atlas snapshot for the batch, or None for pass-through

    Returns:
        {"uv": [u, v], "uv_size": [w, h]}
    """
    if atlas is None or not texture_path:
        return passthrough_uv(uv)

    frame = atlas.find_frame(texture_path)
    if frame is None:
        logger.debug(f"Texture {texture_path!r} not in atlas, using pass-through UVs")
        return passthrough_uv(uv)

    scale_u = LOGICAL_UV_SIZE / atlas.width
    scale_v = LOGICAL_UV_SIZE / atlas.height

    # Java UV -> atlas pixel -> logical atlas space
    u0 = ((uv[0] * frame.w * TEXEL_SCALE) + frame.x) * scale_u
    v0 = ((uv[1] * frame.h * TEXEL_SCALE) + frame.y) * scale_v
    u1 = ((uv[2] * frame.w * TEXEL_SCALE) + frame.x) * scale_u
    v1 = ((uv[3] * frame.h * TEXEL_SCALE) + frame.y) * scale_v

    # Clamped, not a pure sign: spans under one unit get a proportional inset
    sign_u = _clamp_unit(u1 - u0)
    sign_v = _clamp_unit(v1 - v0)

    return {
        "uv": [
            round4(u0 + UV_INSET * sign_u),
            round4(v0 + UV_INSET * sign_v),
        ],
        "uv_size": [
            round4((u1 - u0) - UV_INSET * sign_u),
            round4((v1 - v0) - UV_INSET * sign_v),
        ],
    }
