"""
java2bedrock CLI - Command-line interface for converting Java block models
"""

import click
import json
import logging
import os
import sys
from pathlib import Path
from java2bedrock import __version__
from java2bedrock.convert import convert as convert_file, convert_pack
from java2bedrock.converters.formulas import FORMULAS, analyze_model, convert_with_formula
from java2bedrock.exceptions import ConversionError


def _setup_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")


def _load_model(path: str) -> dict:
    if not Path(path).exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def _fail(message: str, verbose: bool = False) -> None:
    click.secho(message, fg='red', err=True)
    if verbose:
        import traceback
        traceback.print_exc()
    sys.exit(1)


@click.group()
@click.version_option(version=__version__)
def cli():
    """
    java2bedrock - Convert Java block models to Bedrock geometry.

    Examples:
        java2bedrock convert campfire.json campfire.geo.json
        java2bedrock batch ./my_pack ./output
    """
    pass


@cli.command()
@click.argument('input_path')
@click.argument('output_path')
@click.option('--name', default=None, help='Geometry name (default: input file name)')
@click.option('--atlas-json', default=None, help='Spritesheet JSON with atlas frames for UV remapping')
@click.option('--namespace', default='minecraft', show_default=True, help='Geometry namespace')
@click.option('--verbose', '-v', is_flag=True, help='Show detailed conversion info')
def convert(input_path, output_path, name, atlas_json, namespace, verbose):
    """
    Convert a single Java model to Bedrock geometry.

    Without --atlas-json, face UVs are copied as-is (single texture models).

    Examples:
        java2bedrock convert campfire.json campfire.geo.json
        java2bedrock convert lamp.json lamp.geo.json --atlas-json blocks.json
    """
    _setup_logging(verbose)
    try:
        if verbose:
            click.echo(f"Converting: {input_path} → {output_path}")

        result = convert_file(input_path, output_path, model_name=name, atlas_json=atlas_json, namespace=namespace)

        for warning in result.warnings:
            click.secho(f"Warning: {warning}", fg='yellow', err=True)
        click.secho(f"✓ Success! Converted to {output_path}", fg='green')

    except FileNotFoundError as e:
        _fail(f"Error: {e}")
    except (ConversionError, ValueError) as e:
        _fail(f"Error: {e}")
    except Exception as e:
        _fail(f"Unexpected error: {e}", verbose)


@cli.command()
@click.argument('input_root')
@click.argument('output_root', required=False)
@click.option('--no-atlas', is_flag=True, help='Skip atlas generation and keep face UVs as-is')
@click.option('--verbose', '-v', is_flag=True, help='Show per-model progress')
def batch(input_root, output_root, no_atlas, verbose):
    """
    Convert every model in a resource pack.

    INPUT_ROOT must contain an assets/ directory. OUTPUT_ROOT defaults to
    ./output.

    Examples:
        java2bedrock batch ./my_pack
        java2bedrock batch ./my_pack ./bedrock_out --no-atlas
    """
    _setup_logging(verbose)
    if output_root is None:
        output_root = os.path.join(os.getcwd(), "output")

    try:
        report = convert_pack(input_root, output_root, build_atlases=not no_atlas)
    except FileNotFoundError as e:
        _fail(f"Error: {e}")
    except Exception as e:
        _fail(f"Unexpected error: {e}", verbose)

    click.echo("\nConversion Summary")
    click.secho(f"  Successful: {report.succeeded}", fg='green')
    click.echo(f"  Skipped: {report.skipped}")
    click.secho(f"  Failed: {len(report.failed)}", fg='red' if report.failed else None)
    click.echo(f"  Output: {report.output_root}")

    if report.failed:
        click.echo("\nFailed models:")
        for failed in report.failed:
            click.echo(f"  - {failed.path}: {failed.error}")


@cli.command()
@click.argument('input_path')
def analyze(input_path):
    """
    Print element count, rotations and bounding box of a Java model.

    Example:
        java2bedrock analyze campfire.json
    """
    try:
        analysis = analyze_model(_load_model(input_path))
    except FileNotFoundError as e:
        _fail(f"Error: {e}")
    except (ConversionError, ValueError) as e:
        _fail(f"Error: {e}")

    lo, hi = analysis.bounds_min, analysis.bounds_max
    click.echo(f"Elements: {analysis.total_elements}")
    click.echo(f"Has Rotations: {analysis.has_rotations}")
    click.echo(f"Rotation Axes: {', '.join(sorted(analysis.rotation_axes)) or 'none'}")
    click.echo(f"Bounding Box: X[{lo[0]}, {hi[0]}] Y[{lo[1]}, {hi[1]}] Z[{lo[2]}, {hi[2]}]")
    click.echo(f"Center: [{', '.join(f'{v:.2f}' for v in analysis.center)}]")


@cli.command()
@click.argument('input_path')
@click.option('--output-dir', default=None, help='Where to write the variants (default: formula_tests/ next to the input)')
def formulas(input_path, output_dir):
    """
    Render a model with every candidate transform for visual comparison.

    Import each output into a Bedrock viewer and compare against the Java
    model in game.

    Example:
        java2bedrock formulas campfire.json
    """
    try:
        java_data = _load_model(input_path)
        if output_dir is None:
            output_dir = os.path.join(os.path.dirname(os.path.abspath(input_path)), "formula_tests")
        os.makedirs(output_dir, exist_ok=True)

        for key, formula in FORMULAS.items():
            document = convert_with_formula(java_data, key)
            output_path = os.path.join(output_dir, f"{key}.json")
            with open(output_path, 'w') as f:
                json.dump(document, f, indent=2)
            click.echo(f"✓ {formula.name}")
            click.echo(f"  → {output_path}")

    except FileNotFoundError as e:
        _fail(f"Error: {e}")
    except (ConversionError, ValueError) as e:
        _fail(f"Error: {e}")

    click.secho(f"✓ All variants saved to {output_dir}", fg='green')


def main():
    """Entry point for the CLI"""
    cli()


if __name__ == '__main__':
    main()
