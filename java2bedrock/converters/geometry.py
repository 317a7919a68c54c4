"""
Coordinate transformation utilities for Java -> Bedrock conversion.

Coordinate Systems:
- Java: texel grid, block center at (8, 0, 8), elements as from/to corners
- Bedrock: model center at (0, 0, 0), cubes as min-corner origin + size

The three axes are NOT treated alike:
- X is flipped and re-based (Java +X runs the other way in Bedrock), so the
  Bedrock min corner comes from the Java *max* X
- Y is unchanged
- Z is a plain offset

Rotations: Bedrock turns X and Y the opposite way to Java, Z the same way.

Every emitted number goes through round4() so serialized output is stable.
"""

import logging
import math
from typing import Dict, List, Tuple, Union

from java2bedrock.schema.java import JavaElement, JavaRotation

logger = logging.getLogger(__name__)

Number = Union[int, float]

# Half extent of the Java block grid; Java center is (HALF_EXTENT, 0, HALF_EXTENT)
HALF_EXTENT = 8
COORDINATE_PRECISION = 4  # Decimal places kept in output

VALID_AXES = ("x", "y", "z")

_SCALE = 10 ** COORDINATE_PRECISION


def round4(value: float) -> Number:
    """
    Round half away from zero at 4 decimal places.

    Integral results come back as int and -0 collapses to 0, so JSON output
    reads `8` instead of `8.0` and never `-0.0`.

    Examples:
        >>> round4(0.333333)
        0.3333
        >>> round4(-0.00004)
        0
        >>> round4(16.0)
        16

    Raises:
        ValueError: If the value (or its scaled form) is not finite
    """
    scaled = abs(value) * _SCALE
    if not math.isfinite(scaled):
        raise ValueError(f"Coordinate out of range: {value!r}")
    rounded = math.floor(scaled + 0.5) / _SCALE
    if rounded == 0:
        return 0
    if value < 0:
        rounded = -rounded
    if rounded.is_integer():
        return int(rounded)
    return rounded


def java_point_to_bedrock(point: List[float], half_extent: float = HALF_EXTENT) -> List[Number]:
    """
    Map a Java point (rotation origin) to Bedrock model space.

    Mapping:
    - Java X → Bedrock C - X (flip around the center)
    - Java Y → Bedrock Y (unchanged)
    - Java Z → Bedrock Z - C (offset to the center)
    """
    x, y, z = point
    return [round4(half_extent - x), round4(y), round4(z - half_extent)]


def cube_origin(from_: List[float], to: List[float], half_extent: float = HALF_EXTENT) -> List[Number]:
    """
    Bedrock min-corner origin for a Java element.

    X uses `to` because flipping the axis turns the Java max corner into the
    Bedrock min corner.
    """
    return [
        round4(half_extent - to[0]),
        round4(from_[1]),
        round4(from_[2] - half_extent),
    ]


def cube_size(from_: List[float], to: List[float]) -> List[Number]:
    """Extents along each axis. Degenerate elements give zero, not an error."""
    return [round4(to[i] - from_[i]) for i in range(3)]


def rotation_vector(angle: float, axis: str) -> List[Number]:
    """
    Convert a single-axis Java rotation to a Bedrock Euler vector.

    X and Y angles are negated, Z is kept. An unknown axis yields a zero
    vector.
    """
    if axis not in VALID_AXES:
        logger.warning(f"Unknown rotation axis {axis!r}, using zero rotation")
        return [0, 0, 0]
    return [
        round4(-angle) if axis == "x" else 0,
        round4(-angle) if axis == "y" else 0,
        round4(angle) if axis == "z" else 0,
    ]


def convert_rotation(
    rotation: JavaRotation,
    half_extent: float = HALF_EXTENT
) -> Tuple[List[Number], List[Number]]:
    """Return (pivot, rotation) in Bedrock space for a Java element rotation."""
    pivot = java_point_to_bedrock(rotation.origin, half_extent)
    return pivot, rotation_vector(rotation.angle, rotation.axis)


def transform_element(element: JavaElement, half_extent: float = HALF_EXTENT) -> Dict[str, List[Number]]:
    """
    Transform one Java element into Bedrock cube geometry.

    Args:
        element: Parsed Java element
        half_extent: Half size of the Java block grid (8 for standard models)

    Returns:
        Dict with 'origin' and 'size', plus 'pivot' and 'rotation' when the
        element is rotated

    Example:
        >>> el = JavaElement.model_validate({"from": [0, 0, 0], "to": [16, 16, 16]})
        >>> transform_element(el)
        {'origin': [-8, 0, -8], 'size': [16, 16, 16]}
    """
    geometry = {
        "origin": cube_origin(element.from_, element.to, half_extent),
        "size": cube_size(element.from_, element.to),
    }

    if element.rotation is not None:
        pivot, rotation = convert_rotation(element.rotation, half_extent)
        geometry["pivot"] = pivot
        geometry["rotation"] = rotation

    return geometry
