"""Format converters for Java block models"""

from java2bedrock.converters.geometry import round4, transform_element
from java2bedrock.converters.uv_mapper import calculate_uv, resolve_texture
from java2bedrock.converters.grouping import RotationGroup, group_by_rotation
from java2bedrock.converters.bedrock.exporter import ConversionResult, convert_element, convert_model
from java2bedrock.converters.formulas import FORMULAS, analyze_model, convert_with_formula

__all__ = [
    "round4",
    "transform_element",
    "calculate_uv",
    "resolve_texture",
    "RotationGroup",
    "group_by_rotation",
    "ConversionResult",
    "convert_element",
    "convert_model",
    "FORMULAS",
    "analyze_model",
    "convert_with_formula",
]
