"""Custom exceptions for model conversion"""


class ConversionError(Exception):
    """Base exception for conversion errors"""
    pass


class InvalidInputError(ConversionError, ValueError):
    """Source document has no elements or does not match the Java model schema"""
    pass
