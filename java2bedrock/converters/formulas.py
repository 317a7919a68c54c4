"""
Transform diagnostics.

The Java → Bedrock transform has several plausible sign/axis conventions and
the only real ground truth is how the result looks in a Bedrock viewer. This
module renders one model with each candidate convention so they can be
compared side by side, and summarizes a model's extents and rotations.

`current` is the convention used by the converter; the alternates are kept
for comparison only.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Set, Union

from java2bedrock.converters.geometry import (
    HALF_EXTENT, Number, cube_origin, cube_size, java_point_to_bedrock, round4, rotation_vector
)
from java2bedrock.converters.bedrock.exporter import (
    DEFAULT_TEXTURE_SIZE, parse_java_model, assemble_document, build_bones
)
from java2bedrock.exceptions import InvalidInputError
from java2bedrock.schema.bedrock import BedrockCube
from java2bedrock.schema.java import JavaModel

logger = logging.getLogger(__name__)

C = HALF_EXTENT

OriginFn = Callable[[List[float], List[float]], List[float]]
PivotFn = Callable[[List[float]], List[float]]
RotationFn = Callable[[float, str], List[float]]


@dataclass(frozen=True)
class FormulaVariant:
    """One candidate convention for origin, pivot and rotation."""
    name: str
    origin: OriginFn
    pivot: PivotFn
    rotation: RotationFn


def _negate_xy(angle: float, axis: str) -> List[float]:
    return [
        -angle if axis == "x" else 0,
        -angle if axis == "y" else 0,
        angle if axis == "z" else 0,
    ]


def _offset_pivot(o: List[float]) -> List[float]:
    return [C - o[0], o[1], o[2] - C]


FORMULAS: Dict[str, FormulaVariant] = {
    "current": FormulaVariant(
        name="Current (flip X, offset Z, negate X/Y rotation)",
        origin=lambda f, t: cube_origin(f, t),
        pivot=lambda o: java_point_to_bedrock(o),
        rotation=lambda a, axis: rotation_vector(a, axis),
    ),
    "alt1": FormulaVariant(
        name="Alt1: Inverted Z",
        origin=lambda f, t: [C - t[0], f[1], -(f[2] - C)],
        pivot=lambda o: [C - o[0], o[1], -(o[2] - C)],
        rotation=_negate_xy,
    ),
    "alt2": FormulaVariant(
        name="Alt2: Use from[0]",
        origin=lambda f, t: [C - f[0], f[1], f[2] - C],
        pivot=_offset_pivot,
        rotation=_negate_xy,
    ),
    "alt3": FormulaVariant(
        name="Alt3: Center-based",
        origin=lambda f, t: [C - (f[0] + t[0]) / 2, f[1], (f[2] + t[2]) / 2 - C],
        pivot=_offset_pivot,
        rotation=_negate_xy,
    ),
    "alt4": FormulaVariant(
        name="Alt4: No rotation negation",
        origin=lambda f, t: [C - t[0], f[1], f[2] - C],
        pivot=_offset_pivot,
        rotation=lambda a, axis: [
            a if axis == "x" else 0,
            a if axis == "y" else 0,
            a if axis == "z" else 0,
        ],
    ),
    "alt5": FormulaVariant(
        name="Alt5: Swap X and Z",
        origin=lambda f, t: [f[2] - C, f[1], C - t[0]],
        pivot=lambda o: [o[2] - C, o[1], C - o[0]],
        rotation=lambda a, axis: [
            -a if axis == "z" else 0,
            -a if axis == "y" else 0,
            a if axis == "x" else 0,
        ],
    ),
}


@dataclass
class ModelAnalysis:
    """Summary of a Java model's elements."""
    total_elements: int
    has_rotations: bool = False
    rotation_axes: Set[str] = field(default_factory=set)
    bounds_min: List[float] = field(default_factory=lambda: [float("inf")] * 3)
    bounds_max: List[float] = field(default_factory=lambda: [float("-inf")] * 3)

    @property
    def center(self) -> List[float]:
        return [(self.bounds_min[i] + self.bounds_max[i]) / 2 for i in range(3)]


def _load_elements(java_data: Union[Dict, str, JavaModel]) -> JavaModel:
    model = parse_java_model(java_data)
    if not model.elements:
        raise InvalidInputError("No elements in model")
    return model


def analyze_model(java_data: Union[Dict, str, JavaModel]) -> ModelAnalysis:
    """
    Element count, rotation axes and bounding box of a Java model.

    The box spans every element's from/to corners as written.

    Raises:
        InvalidInputError: If the model has no elements
    """
    model = _load_elements(java_data)
    analysis = ModelAnalysis(total_elements=len(model.elements))

    for element in model.elements:
        for i in range(3):
            analysis.bounds_min[i] = min(analysis.bounds_min[i], element.from_[i])
            analysis.bounds_max[i] = max(analysis.bounds_max[i], element.to[i])
        if element.rotation is not None:
            analysis.has_rotations = True
            analysis.rotation_axes.add(element.rotation.axis)

    return analysis


def convert_with_formula(java_data: Union[Dict, str, JavaModel], formula_key: str) -> Dict[str, Any]:
    """
    Render a model with one candidate convention.

    Every cube lands on the last scaffold bone with its own pivot/rotation;
    there is no rotation grouping and no UV data.

    Raises:
        KeyError: If formula_key is not in FORMULAS
        InvalidInputError: If the model has no elements
    """
    formula = FORMULAS[formula_key]
    model = _load_elements(java_data)

    cubes: List[BedrockCube] = []
    for element in model.elements:
        geometry: Dict[str, List[Number]] = {
            "origin": [round4(v) for v in formula.origin(element.from_, element.to)],
            "size": cube_size(element.from_, element.to),
        }
        if element.rotation is not None:
            geometry["pivot"] = [round4(v) for v in formula.pivot(element.rotation.origin)]
            geometry["rotation"] = [round4(v) for v in formula.rotation(element.rotation.angle, element.rotation.axis)]
        cubes.append(BedrockCube(**geometry))

    logger.debug(f"Rendered {len(cubes)} cubes with formula {formula_key}")
    bones = build_bones(cubes, [])
    return assemble_document(bones, f"test_{formula_key}", DEFAULT_TEXTURE_SIZE, DEFAULT_TEXTURE_SIZE)
