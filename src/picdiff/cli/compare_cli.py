# -*- coding: utf-8 -*-
"""CLI commands for comparing pictures."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

import typer
from PIL import UnidentifiedImageError

from picdiff.config import ConfigError, load_config, options_from_config
from picdiff.models.comparison import CompareMode, CompareOptions
from picdiff.models.picture import Picture
from picdiff.models.position import Position
from picdiff.pipeline.differ import DimensionMismatchError, Differ
from picdiff.pipeline.pixel_grid import TruncatedBufferError
from picdiff.utils.file_utils import write_json_file
from picdiff.utils.image_utils import load_picture

app = typer.Typer(help="Pixel-by-pixel picture comparison")
logger = logging.getLogger(__name__)

EXIT_DIFFERENT = 1
EXIT_ERROR = 2


def _fail(message: str) -> typer.Exit:
    typer.echo(message, err=True)
    return typer.Exit(EXIT_ERROR)


def _settings(config: Path | None) -> dict[str, Any]:
    try:
        return load_config(config)
    except ConfigError as e:
        raise _fail(f"Invalid settings: {e}")


def _load(path: Path, strict_buffer: bool = False) -> Picture:
    """Decode a picture; unreadable files exit with EXIT_ERROR, never EXIT_DIFFERENT."""
    try:
        return load_picture(path, strict_buffer=strict_buffer)
    except (UnidentifiedImageError, OSError) as e:
        logger.error("Cannot decode %s: %s", path, e)
        raise _fail(f"Cannot decode {path}: {e}")


@app.command()
def compare(
    reference: Path = typer.Argument(..., exists=True, dir_okay=False, help="Reference picture"),
    candidate: Path = typer.Argument(..., exists=True, dir_okay=False, help="Picture aligned onto the reference"),
    x: int = typer.Option(0, min=0, help="Column offset into the reference"),
    y: int = typer.Option(0, min=0, help="Row offset into the reference"),
    threshold: Optional[float] = typer.Option(None, min=0.0, max=1.0, help="Maximum allowed normalized difference"),
    allowed: Optional[int] = typer.Option(None, min=0, help="Maximum number of differing pixels"),
    config: Optional[Path] = typer.Option(None, help="Settings JSON (default: picdiff.json)"),
    lenient: bool = typer.Option(False, help="Compare only the overlap when sizes do not match"),
) -> None:
    """Exit 0 when the pictures are equal under the chosen mode, 1 otherwise."""
    if threshold is not None and allowed is not None:
        raise _fail("Use either --threshold or --allowed, not both")
    settings = _settings(config)

    offset = Position(x, y)
    if threshold is not None:
        options = CompareOptions.within_threshold(threshold, offset)
    elif allowed is not None:
        options = CompareOptions.within_count(allowed, offset)
    else:
        options = options_from_config(settings, offset)

    strict_geometry = settings["comparison"]["strict_geometry"] and not lenient
    strict_buffer = settings["decoding"]["strict_buffer"]
    picture_a = _load(reference, strict_buffer)
    picture_b = _load(candidate, strict_buffer)
    try:
        equal = Differ(strict_geometry=strict_geometry).compare_equal(picture_a, picture_b, options)
    except (DimensionMismatchError, TruncatedBufferError) as e:
        raise _fail(str(e))

    mode = options.mode.value
    if options.mode is CompareMode.THRESHOLD:
        mode = f"{mode} <= {options.threshold}"
    elif options.mode is CompareMode.COUNT:
        mode = f"{mode} <= {options.allowed_differences}"
    typer.echo(f"{'EQUAL' if equal else 'DIFFERENT'} ({mode})")
    if not equal:
        raise typer.Exit(EXIT_DIFFERENT)


@app.command()
def stats(
    reference: Path = typer.Argument(..., exists=True, dir_okay=False, help="Reference picture"),
    candidate: Path = typer.Argument(..., exists=True, dir_okay=False, help="Picture aligned onto the reference"),
    x: int = typer.Option(0, min=0, help="Column offset into the reference"),
    y: int = typer.Option(0, min=0, help="Row offset into the reference"),
    output: Optional[Path] = typer.Option(None, help="Also write the summary to this JSON file"),
    config: Optional[Path] = typer.Option(None, help="Settings JSON (default: picdiff.json)"),
    lenient: bool = typer.Option(False, help="Compare only the overlap when sizes do not match"),
) -> None:
    """Print difference metrics as JSON."""
    settings = _settings(config)
    strict_geometry = settings["comparison"]["strict_geometry"] and not lenient
    strict_buffer = settings["decoding"]["strict_buffer"]
    picture_a = _load(reference, strict_buffer)
    picture_b = _load(candidate, strict_buffer)
    try:
        summary = Differ(strict_geometry=strict_geometry).summarize(picture_a, picture_b, Position(x, y))
    except (DimensionMismatchError, TruncatedBufferError) as e:
        raise _fail(str(e))

    data = summary.to_dict()
    data["reference"] = str(reference)
    data["candidate"] = str(candidate)
    typer.echo(json.dumps(data, indent=2))
    if output is not None:
        write_json_file(output, data)
        logger.info("Summary written to %s", output)


@app.command()
def pixel(
    image: Path = typer.Argument(..., exists=True, dir_okay=False, help="Picture to inspect"),
    x: int = typer.Argument(..., min=0, help="Column"),
    y: int = typer.Argument(..., min=0, help="Row"),
) -> None:
    """Print the packed ARGB value of one pixel."""
    picture = _load(image)
    if x >= picture.width or y >= picture.height:
        raise _fail(f"({x}, {y}) is outside the {picture.width}x{picture.height} picture")
    typer.echo(f"0x{int(picture.pixel_values[y, x]):08X}")


if __name__ == "__main__":
    app()
