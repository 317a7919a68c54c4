"""
Java model → Bedrock geometry exporter

Converts Java Edition block models into Bedrock geometry documents.

Output layout:
- Four scaffold bones (root → root_x → root_y → root_z), all pivoted at
  SCAFFOLD_PIVOT; root_z owns every unrotated cube
- One rot_<n> bone per rotation group, parented to root_z

The scaffold is emitted even for models without unrotated cubes (root_z
then has `cubes: []`) so downstream animation/attachment code can rely on it.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from pydantic import ValidationError

from java2bedrock.converters.geometry import HALF_EXTENT, VALID_AXES, transform_element
from java2bedrock.converters.grouping import RotationGroup, group_by_rotation
from java2bedrock.converters.uv_mapper import calculate_uv, resolve_texture
from java2bedrock.exceptions import InvalidInputError
from java2bedrock.schema.bedrock import (
    BedrockBone, BedrockCube, BedrockFaceUV, Geometry, GeometryDescription
)
from java2bedrock.schema.java import JAVA_FACES, JavaElement, JavaModel
from java2bedrock.texturing.spritesheet import AtlasData

logger = logging.getLogger(__name__)

# Constants
FORMAT_VERSION = "1.21.0"
DEFAULT_NAMESPACE = "minecraft"
DEFAULT_TEXTURE_SIZE = 16
SCAFFOLD_PIVOT = [0, 8, 0]
SCAFFOLD_BONES = ("root", "root_x", "root_y", "root_z")
ROTATION_BONE_PREFIX = "rot_"
ITEM_SLOT_BINDING = "c.item_slot == 'head' ? 'head' : q.item_slot_to_bone_name(c.item_slot)"
VISIBLE_BOUNDS_WIDTH = 4
VISIBLE_BOUNDS_HEIGHT = 4.5
VISIBLE_BOUNDS_OFFSET = [0, 0.75, 0]


@dataclass
class ConversionResult:
    """
    A converted model plus the non-fatal problems met on the way.

    Attributes:
        document: Bedrock geometry document (JSON-ready dict)
        warnings: Unresolved textures, atlas misses, malformed rotations
    """
    document: Dict[str, Any]
    warnings: List[str] = field(default_factory=list)

    def to_json(self) -> str:
        return json.dumps(self.document, indent=2)

    def save(self, path: str) -> None:
        """Write the document as indented JSON."""
        with open(path, 'w') as f:
            f.write(self.to_json())


def parse_java_model(java_data: Union[Dict, str, JavaModel]) -> JavaModel:
    """Validate a Java model given as dict, JSON string or JavaModel."""
    if isinstance(java_data, JavaModel):
        return java_data
    if isinstance(java_data, str):
        try:
            java_data = json.loads(java_data)
        except ValueError as e:
            raise InvalidInputError(f"Invalid Java model JSON: {e}")
    try:
        return JavaModel.model_validate(java_data)
    except ValidationError as e:
        raise InvalidInputError(f"Invalid Java model: {e}")


def convert_element(
    element: JavaElement,
    textures: Dict[str, str],
    atlas: Optional[AtlasData] = None,
    warnings: Optional[List[str]] = None,
    half_extent: float = HALF_EXTENT
) -> BedrockCube:
    """
    Convert one Java element to a Bedrock cube (pivot/rotation still attached).

    Faces without a texture or uv, with an unknown face name, or whose
    texture variable can't be resolved are left out of the cube's UV map.
    """
    if warnings is None:
        warnings = []

    geometry = transform_element(element, half_extent)
    if element.rotation is not None and element.rotation.axis not in VALID_AXES:
        label = element.name or "element"
        warnings.append(f"{label} has invalid rotation axis {element.rotation.axis!r}; using zero rotation")

    uv_map: Dict[str, BedrockFaceUV] = {}
    for face_name, face in element.faces.items():
        if face_name not in JAVA_FACES:
            warnings.append(f"Unknown face {face_name!r} ignored")
            continue
        if not face.texture:
            continue

        texture_path = resolve_texture(face.texture, textures)
        if texture_path is None:
            warnings.append(f"Unresolved texture {face.texture!r} on face {face_name}")
            continue

        if face.uv is None:
            warnings.append(f"Face {face_name} has no uv, left out")
            continue
        if atlas is not None and atlas.find_frame(texture_path) is None:
            warnings.append(f"Texture {texture_path!r} not in atlas, using pass-through UVs")
        uv_map[face_name] = BedrockFaceUV(**calculate_uv(face.uv, texture_path, atlas))

    if uv_map:
        geometry["uv"] = uv_map
    return BedrockCube(**geometry)


def build_bones(
    cubes_without_rotation: Sequence[BedrockCube],
    rotation_groups: Sequence[RotationGroup],
    binding: Optional[str] = ITEM_SLOT_BINDING
) -> List[BedrockBone]:
    """Scaffold chain followed by one rot_<n> bone per rotation group."""
    bones: List[BedrockBone] = []
    parent = None
    for name in SCAFFOLD_BONES:
        bones.append(BedrockBone(
            name=name,
            parent=parent,
            binding=binding if parent is None else None,
            pivot=list(SCAFFOLD_PIVOT),
            # Last scaffold bone always carries a cube list, even an empty one
            cubes=list(cubes_without_rotation) if name == SCAFFOLD_BONES[-1] else None,
        ))
        parent = name

    for index, group in enumerate(rotation_groups, start=1):
        bones.append(BedrockBone(
            name=f"{ROTATION_BONE_PREFIX}{index}",
            parent=SCAFFOLD_BONES[-1],
            pivot=list(group.pivot),
            rotation=list(group.rotation),
            cubes=list(group.cubes),
        ))
    return bones


def resolve_texture_size(model: JavaModel, atlas: Optional[AtlasData] = None) -> Tuple[int, int]:
    """Texture size priority: atlas size, then declared texture_size, then 16x16."""
    if atlas is not None:
        return atlas.width, atlas.height
    if model.texture_size:
        return int(model.texture_size[0]), int(model.texture_size[1])
    return DEFAULT_TEXTURE_SIZE, DEFAULT_TEXTURE_SIZE


def assemble_document(
    bones: List[BedrockBone],
    model_name: str,
    texture_width: int,
    texture_height: int,
    namespace: str = DEFAULT_NAMESPACE
) -> Dict[str, Any]:
    """Wrap bones in the geometry envelope."""
    geometry = Geometry(
        description=GeometryDescription(
            identifier=f"geometry.{model_name}",
            texture_width=texture_width,
            texture_height=texture_height,
            visible_bounds_width=VISIBLE_BOUNDS_WIDTH,
            visible_bounds_height=VISIBLE_BOUNDS_HEIGHT,
            visible_bounds_offset=list(VISIBLE_BOUNDS_OFFSET),
        ),
        bones=bones,
    )
    return {
        "format_version": FORMAT_VERSION,
        f"{namespace}:geometry": [geometry.model_dump(exclude_none=True)],
    }


def convert_model(
    java_data: Union[Dict, str, JavaModel],
    model_name: str,
    atlas: Optional[AtlasData] = None,
    namespace: str = DEFAULT_NAMESPACE,
    binding: Optional[str] = ITEM_SLOT_BINDING
) -> ConversionResult:
    """
    Convert a Java block model to a Bedrock geometry document.

    Args:
        java_data: Java model dict, JSON string or parsed JavaModel
        model_name: Used for the geometry identifier ('geometry.<model_name>')
        atlas: Atlas snapshot for the model's namespace; None for pass-through UVs
        namespace: Geometry key namespace ('<namespace>:geometry')
        binding: Item-slot binding for the root bone; None to omit

    Returns:
        ConversionResult with the document and any warnings

    Raises:
        InvalidInputError: If the model is malformed or has no elements
    """
    model = parse_java_model(java_data)
    if not model.elements:
        raise InvalidInputError("No elements found in model")

    logger.info(f"Converting '{model_name}' ({len(model.elements)} elements, "
                f"{'atlas' if atlas is not None else 'pass-through'} UVs)")

    warnings: List[str] = []
    try:
        cubes = [convert_element(el, model.textures, atlas, warnings) for el in model.elements]
    except ValueError as e:
        raise InvalidInputError(f"Invalid element in model: {e}")
    cubes_without_rotation, rotation_groups = group_by_rotation(cubes)

    bones = build_bones(cubes_without_rotation, rotation_groups, binding)
    texture_width, texture_height = resolve_texture_size(model, atlas)
    document = assemble_document(bones, model_name, texture_width, texture_height, namespace)

    for warning in warnings:
        logger.warning(f"{model_name}: {warning}")
    return ConversionResult(document=document, warnings=warnings)
