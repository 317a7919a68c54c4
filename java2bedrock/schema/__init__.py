"""Source (Java) and target (Bedrock) model schemas."""
from .java import (
    JAVA_FACES,
    JavaFace,
    JavaRotation,
    JavaElement,
    JavaModel,
)
from .bedrock import (
    BedrockFaceUV,
    BedrockCube,
    BedrockBone,
    GeometryDescription,
    Geometry,
)

__all__ = [
    "JAVA_FACES",
    "JavaFace",
    "JavaRotation",
    "JavaElement",
    "JavaModel",
    "BedrockFaceUV",
    "BedrockCube",
    "BedrockBone",
    "GeometryDescription",
    "Geometry",
]
