"""
Rotation grouping for Bedrock bones.

Bedrock rotates bones, not cubes, so rotated cubes are collected into one
synthetic bone per distinct (pivot, rotation). Keys are built from values
already passed through round4(), so float noise can't split a group.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from java2bedrock.converters.geometry import Number
from java2bedrock.schema.bedrock import BedrockCube

logger = logging.getLogger(__name__)

GroupKey = Tuple[Tuple[Number, ...], Tuple[Number, ...]]


@dataclass
class RotationGroup:
    """Cubes sharing one pivot and rotation."""
    pivot: List[Number]
    rotation: List[Number]
    cubes: List[BedrockCube] = field(default_factory=list)


def group_by_rotation(cubes: Sequence[BedrockCube]) -> Tuple[List[BedrockCube], List[RotationGroup]]:
    """
    Split converted cubes into unrotated cubes and rotation groups.

    Both outputs keep source order; groups appear in the order their first
    cube does. Grouped cubes lose pivot/rotation, which move to the group.

    Returns:
        (cubes_without_rotation, rotation_groups)
    """
    without_rotation: List[BedrockCube] = []
    groups: Dict[GroupKey, RotationGroup] = {}

    for cube in cubes:
        if cube.rotation is None:
            without_rotation.append(cube.without_rotation())
            continue

        key = (tuple(cube.pivot), tuple(cube.rotation))
        group = groups.get(key)
        if group is None:
            group = RotationGroup(pivot=list(cube.pivot), rotation=list(cube.rotation))
            groups[key] = group
        group.cubes.append(cube.without_rotation())

    logger.debug(f"Grouped {len(cubes)} cubes: {len(without_rotation)} unrotated, {len(groups)} rotation groups")
    # dicts keep insertion order, which is encounter order
    return without_rotation, list(groups.values())
