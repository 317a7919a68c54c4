"""
Atlas snapshot: where each source texture landed inside a packed atlas.

The on-disk contract is the spritesheet JSON written by `build_atlas` (and by
external packers such as spritesheet-js):

    {
      "frames": {"/abs/path/block/stone.png": {"frame": {"x": 0, "y": 0, "w": 16, "h": 16}}},
      "meta": {"size": {"w": 64, "h": 64}, "image": "minecraft.png"}
    }

An AtlasData is built once per namespace and only read afterwards, so a
single instance can be shared by every model converted against it.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

# Suffix given to the single-frame copy of an animated texture
CROPPED_SUFFIX = "_cropped"
IMAGE_EXT = ".png"


@dataclass(frozen=True)
class AtlasFrame:
    """Pixel rectangle of one source texture inside the atlas."""
    x: int
    y: int
    w: int
    h: int


def _normalize(path: str) -> str:
    return path.replace("\\", "/")


@dataclass(frozen=True)
class AtlasData:
    """Immutable frame table plus total atlas size."""
    frames: Mapping[str, AtlasFrame]
    width: int
    height: int
    image: Optional[str] = None
    _normalized: Tuple[Tuple[str, str], ...] = field(default=(), init=False, repr=False, compare=False)

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Atlas size must be positive, got {self.width}x{self.height}")
        object.__setattr__(self, "frames", MappingProxyType(dict(self.frames)))
        object.__setattr__(self, "_normalized", tuple((_normalize(p), p) for p in self.frames))

    @classmethod
    def from_spritesheet(cls, data: Dict[str, Any]) -> "AtlasData":
        """
        Build from spritesheet JSON.

        Raises:
            ValueError: If frames or meta.size are missing or malformed
        """
        try:
            size = data["meta"]["size"]
            frames = {
                path: AtlasFrame(
                    x=int(entry["frame"]["x"]),
                    y=int(entry["frame"]["y"]),
                    w=int(entry["frame"]["w"]),
                    h=int(entry["frame"]["h"]),
                )
                for path, entry in data["frames"].items()
            }
            return cls(
                frames=frames,
                width=int(size["w"]),
                height=int(size["h"]),
                image=data["meta"].get("image"),
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise ValueError(f"Invalid spritesheet data: {e}")

    def to_spritesheet(self) -> Dict[str, Any]:
        """Serialize back to the spritesheet JSON contract."""
        meta: Dict[str, Any] = {"size": {"w": self.width, "h": self.height}}
        if self.image:
            meta["image"] = self.image
        return {
            "frames": {
                path: {"frame": {"x": f.x, "y": f.y, "w": f.w, "h": f.h}}
                for path, f in self.frames.items()
            },
            "meta": meta,
        }

    def find_frame(self, texture_path: str) -> Optional[AtlasFrame]:
        """
        Find the frame for a texture path such as 'block/stone'.

        Match order:
        1. Full path: a frame path ending in '/block/stone.png'
        2. Cropped copy: a frame path ending in '/block/stone_cropped.png'
        3. Filename only: a frame whose file name (cropped suffix removed) is 'stone.png'
        """
        clean = _normalize(texture_path).strip("/")
        if not clean:
            return None

        for suffix in (IMAGE_EXT, CROPPED_SUFFIX + IMAGE_EXT):
            target = clean + suffix
            for normalized, original in self._normalized:
                if normalized == target or normalized.endswith("/" + target):
                    return self.frames[original]

        filename = clean.rsplit("/", 1)[-1] + IMAGE_EXT
        for normalized, original in self._normalized:
            frame_name = normalized.rsplit("/", 1)[-1].replace(CROPPED_SUFFIX + IMAGE_EXT, IMAGE_EXT)
            if frame_name == filename:
                return self.frames[original]

        return None


def load_atlas(json_path: str) -> Optional[AtlasData]:
    """
    Load an atlas snapshot from a spritesheet JSON file.

    Returns None (and logs a warning) when the file is missing or malformed;
    callers fall back to pass-through UVs.
    """
    if not os.path.exists(json_path):
        logger.warning(f"Atlas data not found: {json_path}")
        return None

    try:
        with open(json_path, 'r') as f:
            data = json.load(f)
        atlas = AtlasData.from_spritesheet(data)
    except (OSError, ValueError) as e:
        logger.warning(f"Could not read atlas data {json_path}: {e}")
        return None

    logger.info(f"Loaded atlas {json_path} ({atlas.width}x{atlas.height}, {len(atlas.frames)} frames)")
    return atlas
