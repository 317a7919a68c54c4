"""
java2bedrock - Convert Java Edition block models to Bedrock geometry

Maps corner-based Java elements onto Bedrock bones and cubes, groups rotated
elements into pivot bones, and remaps face UVs into a packed texture atlas.
"""

from java2bedrock.converters.bedrock.exporter import ConversionResult, convert_model
from java2bedrock.convert import convert, convert_pack, BatchReport
from java2bedrock.exceptions import ConversionError, InvalidInputError

__version__ = "0.1.0"
__all__ = [
    "ConversionResult",
    "convert_model",
    "convert",
    "convert_pack",
    "BatchReport",
    "ConversionError",
    "InvalidInputError",
]
