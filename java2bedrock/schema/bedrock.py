"""
Bedrock geometry schema (target format).

COORDINATE SYSTEM:
- Model space is centered on the origin (the Java block center (8, 0, 8)
  maps to (0, 0, 0))
- Cubes are positioned by their min corner (`origin`) plus `size`
- Rotations are Euler degrees around a `pivot`; X and Y turn the opposite
  way to Java, Z turns the same way

HIERARCHY:
- Bones form a tree through `parent` names
- Every converted model carries the scaffold root -> root_x -> root_y -> root_z
  and one rot_<n> bone per distinct (pivot, rotation) pair

UV:
- Per-face {"uv": [u, v], "uv_size": [w, h]} in atlas-normalized units

Serialize with `model_dump(exclude_none=True)` so optional fields are omitted
while empty cube lists are kept.
"""

from __future__ import annotations
from typing import Dict, List, Optional, Union
from pydantic import BaseModel, Field, ConfigDict, model_validator

Number = Union[int, float]
Vec2 = List[Number]
Vec3 = List[Number]


class BedrockFaceUV(BaseModel):
    model_config = ConfigDict(extra='forbid')

    uv: Vec2 = Field(..., description="Face UV origin [u, v].", min_length=2, max_length=2)
    uv_size: Vec2 = Field(..., description="Face UV extent [w, h]; negative values mirror.", min_length=2, max_length=2)


class BedrockCube(BaseModel):
    model_config = ConfigDict(extra='forbid')

    origin: Vec3 = Field(..., description="Min corner relative to the model center.", min_length=3, max_length=3)
    size: Vec3 = Field(..., description="Extents along x/y/z.", min_length=3, max_length=3)
    uv: Optional[Dict[str, BedrockFaceUV]] = Field(None, description="Per-face UV placement.")
    pivot: Optional[Vec3] = Field(None, description="Rotation pivot. Present exactly when rotation is.")
    rotation: Optional[Vec3] = Field(None, description="Euler rotation; only one axis is non-zero.")

    @model_validator(mode='after')
    def validate_pivot_rotation(self):
        if (self.pivot is None) != (self.rotation is None):
            raise ValueError("'pivot' and 'rotation' must be set together")
        return self

    def without_rotation(self) -> "BedrockCube":
        """Copy of this cube with pivot and rotation removed (they move to the bone)."""
        return self.model_copy(update={"pivot": None, "rotation": None})


class BedrockBone(BaseModel):
    model_config = ConfigDict(extra='forbid')

    name: str
    parent: Optional[str] = None
    binding: Optional[str] = Field(None, description="Molang expression attaching the bone to an item slot.")
    pivot: Optional[Vec3] = None
    rotation: Optional[Vec3] = None
    cubes: Optional[List[BedrockCube]] = None


class GeometryDescription(BaseModel):
    model_config = ConfigDict(extra='forbid')

    identifier: str
    texture_width: int
    texture_height: int
    visible_bounds_width: Number
    visible_bounds_height: Number
    visible_bounds_offset: Vec3


class Geometry(BaseModel):
    model_config = ConfigDict(extra='forbid')

    description: GeometryDescription
    bones: List[BedrockBone]
