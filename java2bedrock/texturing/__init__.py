"""
Texturing utilities for Bedrock conversion.

Includes atlas packing for a namespace's textures and the read-only atlas
snapshot used for UV remapping.
"""
from .atlas import build_atlas, collect_texture_files
from .packer import pack_rectangles
from .spritesheet import AtlasData, AtlasFrame, load_atlas

__all__ = [
    'build_atlas',
    'collect_texture_files',
    'pack_rectangles',
    'AtlasData',
    'AtlasFrame',
    'load_atlas',
]
