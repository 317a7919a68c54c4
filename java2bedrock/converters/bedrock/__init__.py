"""
Java → Bedrock Converter

Converts Java Edition block models into Bedrock geometry documents with
rotation bones and atlas-remapped UVs.
"""

from .exporter import ConversionResult, convert_element, convert_model

__all__ = ['ConversionResult', 'convert_element', 'convert_model']
