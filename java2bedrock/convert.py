"""
Conversion entry points

Converts single Java model files or whole resource packs to Bedrock geometry.

Resource pack layout:
    <input_root>/assets/<namespace>/models/**/<model>.json
    <input_root>/assets/<namespace>/textures/**/<texture>.png

Each namespace gets one atlas, shared by all of its models:
    <output_root>/<namespace>/<namespace>.png (+ .json frame table)
    <output_root>/<namespace>/<model subpath>/<model>.json
"""

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from java2bedrock.converters.bedrock.exporter import (
    DEFAULT_NAMESPACE, ConversionResult, convert_model
)
from java2bedrock.converters.uv_mapper import clean_texture_path
from java2bedrock.exceptions import InvalidInputError
from java2bedrock.texturing.atlas import build_atlas, collect_texture_files
from java2bedrock.texturing.spritesheet import AtlasData, load_atlas

logger = logging.getLogger(__name__)

ASSETS_DIR = "assets"
MODELS_DIR = "models"
TEXTURES_DIR = "textures"


def convert(
    input_path: str,
    output_path: str,
    model_name: Optional[str] = None,
    atlas_json: Optional[str] = None,
    namespace: str = DEFAULT_NAMESPACE
) -> ConversionResult:
    """
    Convert one Java model file to a Bedrock geometry file.

    Args:
        input_path: Path to the Java model JSON
        output_path: Path for the Bedrock geometry JSON
        model_name: Geometry name; defaults to the input file name
        atlas_json: Optional spritesheet JSON for atlas UVs
        namespace: Geometry key namespace

    Raises:
        FileNotFoundError: If input file doesn't exist
        InvalidInputError: If the model has no elements or is malformed

    Examples:
        >>> convert("campfire.json", "campfire.geo.json")
        >>> convert("lamp.json", "lamp.geo.json", atlas_json="blocks.json")
    """
    if not os.path.exists(input_path):
        raise FileNotFoundError(f"Input file not found: {input_path}")

    if model_name is None:
        model_name = os.path.splitext(os.path.basename(input_path))[0]

    atlas = load_atlas(atlas_json) if atlas_json else None

    java_data = _read_json(input_path)
    result = convert_model(java_data, model_name, atlas=atlas, namespace=namespace)

    out_dir = os.path.dirname(output_path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    result.save(output_path)
    return result


def _read_json(path: str) -> Dict:
    with open(path, 'r', encoding='utf-8') as f:
        try:
            return json.load(f)
        except ValueError as e:
            raise InvalidInputError(f"Invalid JSON in {path}: {e}")


# ===================================================================
# Batch conversion
# ===================================================================

@dataclass
class FailedModel:
    name: str
    path: str
    error: str


@dataclass
class BatchReport:
    """Outcome counts of a batch conversion."""
    output_root: str
    succeeded: int = 0
    skipped: int = 0
    failed: List[FailedModel] = field(default_factory=list)
    namespaces: int = 0

    @property
    def total(self) -> int:
        return self.succeeded + self.skipped + len(self.failed)


def find_model_files(assets_dir: str) -> List[str]:
    """All *.json files below a 'models' directory, sorted for stable output."""
    model_files = []
    for dirpath, dirnames, filenames in os.walk(assets_dir):
        dirnames.sort()
        rel_parts = os.path.relpath(dirpath, assets_dir).split(os.sep)
        if MODELS_DIR not in rel_parts:
            continue
        for filename in sorted(filenames):
            if filename.endswith(".json"):
                model_files.append(os.path.join(dirpath, filename))
    return model_files


def group_by_namespace(model_files: List[str], assets_dir: str) -> Dict[str, List[str]]:
    """Group model files by the first directory under assets/."""
    by_namespace: Dict[str, List[str]] = {}
    for path in model_files:
        namespace = os.path.relpath(path, assets_dir).split(os.sep)[0]
        by_namespace.setdefault(namespace, []).append(path)
    return by_namespace


def model_identity(path: str, assets_dir: str) -> Dict[str, str]:
    """
    Name and output subpath for a model file.

    assets/acme/models/block/lamp/tall.json ->
        {'namespace': 'acme', 'subpath': 'block/lamp', 'file': 'tall',
         'name': 'acme_block_lamp_tall'}
    """
    parts = os.path.relpath(path, assets_dir).split(os.sep)
    namespace = parts[0]
    subpath = "/".join(parts[2:-1])
    file_stem = os.path.splitext(parts[-1])[0]
    name = f"{namespace}_{subpath + '_' if subpath else ''}{file_stem}".replace("/", "_")
    return {"namespace": namespace, "subpath": subpath, "file": file_stem, "name": name}


def collect_namespace_textures(model_files: List[str], textures_dir: str) -> List[str]:
    """
    Texture files referenced by the namespace's models that have elements.

    Unreadable models are skipped here; they are reported during conversion.
    """
    texture_paths: List[str] = []
    for model_file in model_files:
        try:
            data = _read_json(model_file)
        except (OSError, InvalidInputError):
            continue
        if not isinstance(data, dict) or not data.get("elements"):
            continue
        textures = data.get("textures") or {}
        if not isinstance(textures, dict):
            continue
        for value in textures.values():
            # '#other' entries point at values collected on their own
            if not isinstance(value, str) or value.startswith("#"):
                continue
            clean = clean_texture_path(value)
            if clean and clean not in texture_paths:
                texture_paths.append(clean)
    return collect_texture_files(texture_paths, textures_dir)


def _namespace_atlas(namespace: str, model_files: List[str], namespace_assets: str, namespace_output: str) -> Optional[AtlasData]:
    texture_files = collect_namespace_textures(model_files, os.path.join(namespace_assets, TEXTURES_DIR))
    if not texture_files:
        logger.warning(f"No textures found in namespace {namespace}, using pass-through UVs")
        return None

    logger.info(f"Found {len(texture_files)} texture(s) in namespace {namespace}")
    atlas = build_atlas(texture_files, os.path.join(namespace_output, namespace))
    if atlas is None:
        logger.warning(f"Atlas generation failed for namespace {namespace}, using pass-through UVs")
    return atlas


def convert_pack(
    input_root: str,
    output_root: str,
    build_atlases: bool = True
) -> BatchReport:
    """
    Convert every model in a resource pack.

    Models without elements are skipped; any other per-model error is
    recorded in the report and the batch continues. A missing or failed
    atlas only degrades UVs to pass-through.

    Args:
        input_root: Pack root containing assets/
        output_root: Directory for generated geometry and atlases
        build_atlases: Pack one atlas per namespace (False = pass-through UVs)

    Raises:
        FileNotFoundError: If assets/ is missing or holds no models
    """
    assets_dir = os.path.join(input_root, ASSETS_DIR)
    if not os.path.isdir(assets_dir):
        raise FileNotFoundError(f"Assets directory not found: {assets_dir}")

    logger.info(f"Scanning for models in {assets_dir}")
    model_files = find_model_files(assets_dir)
    if not model_files:
        raise FileNotFoundError(f"No model files found in {assets_dir}")

    by_namespace = group_by_namespace(model_files, assets_dir)
    logger.info(f"Found {len(model_files)} model files in {len(by_namespace)} namespace(s)")

    os.makedirs(output_root, exist_ok=True)
    report = BatchReport(output_root=output_root, namespaces=len(by_namespace))

    for namespace, files in by_namespace.items():
        logger.info(f"Processing namespace: {namespace}")
        namespace_assets = os.path.join(assets_dir, namespace)
        namespace_output = os.path.join(output_root, namespace)
        os.makedirs(namespace_output, exist_ok=True)

        atlas = None
        if build_atlases:
            atlas = _namespace_atlas(namespace, files, namespace_assets, namespace_output)

        for path in files:
            _convert_pack_model(path, assets_dir, namespace_output, atlas, report)

    logger.info(f"Conversion finished: {report.succeeded} succeeded, "
                f"{report.skipped} skipped, {len(report.failed)} failed")
    return report


def _convert_pack_model(
    path: str,
    assets_dir: str,
    namespace_output: str,
    atlas: Optional[AtlasData],
    report: BatchReport
) -> None:
    identity = model_identity(path, assets_dir)
    rel_path = os.path.relpath(path, assets_dir)
    logger.info(f"[{report.total + 1}] {rel_path}")

    try:
        java_data = _read_json(path)
        if not isinstance(java_data, dict) or not java_data.get("elements"):
            logger.info(f"Skipped {rel_path} (no elements)")
            report.skipped += 1
            return

        result = convert_model(java_data, identity["name"], atlas=atlas)

        model_output = os.path.join(namespace_output, *identity["subpath"].split("/")) if identity["subpath"] else namespace_output
        os.makedirs(model_output, exist_ok=True)
        output_path = os.path.join(model_output, f"{identity['file']}.json")
        result.save(output_path)
        report.succeeded += 1
        logger.info(f"Converted → {os.path.relpath(output_path, report.output_root)}")

    except Exception as e:
        # One broken model must not end the batch
        logger.error(f"Failed {rel_path}: {e}")
        report.failed.append(FailedModel(name=identity["name"], path=rel_path, error=str(e)))
