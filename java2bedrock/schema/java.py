"""
Java Edition block model schema (source format).

COORDINATE SYSTEM:
- Elements live in a 16x16x16 texel grid, X/Z centered at (8, 0, 8)
- Each element is an axis-aligned box given by two opposing corners
- Y is up and starts at 0 (the bottom of the block)

UV SPACE:
- Face UVs are [u0, v0, u1, v1] in a 16-wide grid regardless of the
  texture's real resolution (1 UV unit = 1/16 of the texture)
- u1 < u0 or v1 < v0 mirrors the face

ROTATION:
- At most one axis per element: {"origin": [x, y, z], "angle": a, "axis": "x"|"y"|"z"}
- The axis is deliberately kept as a plain string so that malformed values
  reach the geometry transform instead of failing validation.

Storage: {"from": [x1,y1,z1], "to": [x2,y2,z2], "faces": {...}, "rotation": {...}}
"""

from __future__ import annotations
from typing import Dict, List, Optional
from pydantic import BaseModel, Field, ConfigDict

Vec3 = List[float]

# Face names in the order Java models usually list them
JAVA_FACES = ("north", "east", "south", "west", "up", "down")


class JavaFace(BaseModel):
    model_config = ConfigDict(extra='ignore')

    uv: Optional[List[float]] = Field(None, description="[u0, v0, u1, v1] in 16-unit texel space. Derived from the element bounds when omitted.", min_length=4, max_length=4)
    texture: Optional[str] = Field(None, description="Texture variable reference, e.g. '#0'.")
    rotation: Optional[int] = Field(None, description="UV rotation in degrees (0, 90, 180, 270).")
    cullface: Optional[str] = None
    tintindex: Optional[int] = None


class JavaRotation(BaseModel):
    model_config = ConfigDict(extra='ignore')

    origin: Vec3 = Field(default=[8, 8, 8], description="Pivot point in texel space.", min_length=3, max_length=3)
    angle: float = Field(0.0, description="Rotation angle in degrees.")
    axis: str = Field('y', description="Rotation axis, one of x/y/z.")
    rescale: bool = False


class JavaElement(BaseModel):
    model_config = ConfigDict(extra='ignore', populate_by_name=True)

    from_: Vec3 = Field(..., alias='from', description="Min corner [x, y, z].", min_length=3, max_length=3)
    to: Vec3 = Field(..., description="Max corner [x, y, z].", min_length=3, max_length=3)
    faces: Dict[str, JavaFace] = Field(default_factory=dict, description="Per-face UV and texture reference.")
    rotation: Optional[JavaRotation] = None
    name: Optional[str] = None


class JavaModel(BaseModel):
    model_config = ConfigDict(extra='ignore')

    parent: Optional[str] = Field(None, description="Parent model reference (not followed).")
    textures: Dict[str, str] = Field(default_factory=dict, description="Texture variables: key -> 'namespace:path' or '#other'.")
    texture_size: Optional[List[int]] = Field(None, description="Declared [width, height] of the texture.", min_length=2, max_length=2)
    elements: Optional[List[JavaElement]] = None
