#!/usr/bin/env python3
"""
binary_normalizer.cli.cli

Typer-based CLI for normalizing payloads into base64 transport envelopes.

Examples
--------
Encode a file as raw bytes:

    binary-normalizer encode image.png --content-type image/png

Encode text, letting the base64 detector decide how to read it:

    binary-normalizer encode payload.txt --mode text

Inspect which normalization branch a payload takes:

    binary-normalizer classify payload.txt --mode text

Suggest a filename for a downloaded payload:

    binary-normalizer filename https://example.com/logo --content-type image/png
"""

from __future__ import annotations

import json
import logging
import sys
import traceback
from dataclasses import replace
from enum import StrEnum
from pathlib import Path

import typer

from binary_normalizer.content_types import (
    is_binary_content_type,
    parse_mime_type,
    suggest_filename,
)
from binary_normalizer.errors import NormalizerError, exception_text
from binary_normalizer.options import NormalizerOptions
from binary_normalizer.schemas import load_options

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="binary-normalizer",
    help="Normalize arbitrary payloads into base64 transport envelopes.",
    no_args_is_help=True,
)

STDIN_PATH = Path("-")
MAX_SIZE_HELP = "Maximum payload size in bytes (defaults to configured limit)."
MODE_HELP = "Read input as raw bytes, or as text passed through base64 detection."
CONTENT_TYPE_HELP = "Content type label for the envelope; parameters are dropped."


class InputMode(StrEnum):
    """How the CLI hands file content to the normalizer."""

    BYTES = "bytes"
    TEXT = "text"


def _read_input(path: Path, mode: InputMode) -> bytes | str:
    """Read payload from a file, or from stdin when ``path`` is ``-``.

    Parameters
    ----------
    path : Path
        Source file path or ``-``.
    mode : InputMode
        Whether to return raw bytes or text with one character per byte.
    """
    if path == STDIN_PATH:
        raw = sys.stdin.buffer.read()
    else:
        if not path.is_file():
            raise typer.BadParameter(f"Input file '{path}' does not exist.")
        raw = path.read_bytes()
    if mode is InputMode.TEXT:
        return raw.decode("latin-1")
    return raw


def _print_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly error and return the process exit code."""
    typer.echo(f"✗ {type(exc).__name__}: {exception_text(exc)}", err=True)
    if debug:
        typer.echo("\nTraceback:", err=True)
        typer.echo("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)), err=True)
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


def _load_options(max_size: int | None) -> NormalizerOptions:
    """Load environment-configured options, applying a CLI size override."""
    options = load_options()
    if max_size is not None:
        options = replace(options, max_size=max_size)
    return options


# -----------------------------
# Global options
# -----------------------------
@app.callback()
def _main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging and tracebacks."),
) -> None:
    """Initialize shared CLI state and logging."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = {"debug": debug}


# -----------------------------
# Commands
# -----------------------------
@app.command("encode")
def encode_cmd(
    ctx: typer.Context,
    input_path: Path = typer.Argument(..., help="Input file, or '-' for stdin."),
    content_type: str | None = typer.Option(None, "--content-type", help=CONTENT_TYPE_HELP),
    mode: InputMode = typer.Option(InputMode.BYTES, "--mode", help=MODE_HELP),
    max_size: int | None = typer.Option(None, "--max-size", min=1, help=MAX_SIZE_HELP),
) -> None:
    """Normalize a payload and print its JSON envelope.

    Parameters
    ----------
    ctx : typer.Context
        Typer context containing global options.
    input_path : Path
        File to encode, or ``-`` to read stdin.
    content_type : str | None
        Content type recorded in the envelope, reduced to its media type.
        Defaults to ``application/octet-stream``.
    mode : InputMode
        ``bytes`` keeps content as-is; ``text`` decodes base64 text payloads.
    max_size : int | None
        Size limit override.
    """
    debug: bool = bool(ctx.obj.get("debug", False))
    payload = _read_input(input_path, mode)
    mime_type = parse_mime_type(content_type)
    if not is_binary_content_type(mime_type):
        logger.info("encoding payload labeled with non-binary content type %s", mime_type)

    try:
        from binary_normalizer.normalizer.core import build_binary_output

        envelope = build_binary_output(
            payload,
            mime_type,
            options=_load_options(max_size),
        )
    except NormalizerError as exc:
        raise typer.Exit(code=_print_error(exc, debug))
    except Exception as exc:
        logger.exception("unexpected error while encoding payload")
        raise typer.Exit(code=_print_error(exc, debug))
    typer.echo(json.dumps(envelope.to_payload()))


@app.command("classify")
def classify_cmd(
    input_path: Path = typer.Argument(..., help="Input file, or '-' for stdin."),
    mode: InputMode = typer.Option(InputMode.BYTES, "--mode", help=MODE_HELP),
) -> None:
    """Print the normalization variant chosen for a payload."""
    from binary_normalizer.normalizer.dispatch import classify

    typer.echo(classify(_read_input(input_path, mode)))


@app.command("filename")
def filename_cmd(
    url: str = typer.Argument(..., help="URL the payload was downloaded from."),
    content_type: str | None = typer.Option(
        None, "--content-type", help="Content type used to pick a missing extension."
    ),
) -> None:
    """Print a download filename for a payload served from ``url``."""
    typer.echo(suggest_filename(url, content_type))


@app.command("doctor")
def doctor_cmd(ctx: typer.Context) -> None:
    """Print installed dependency versions and active limits."""
    import importlib.metadata as metadata

    typer.echo(f"Python: {sys.version.split()[0]}")
    for module in ("binary-content-normalizer", "numpy", "pydantic", "typer"):
        try:
            typer.echo(f"{module}: {metadata.version(module)}")
        except metadata.PackageNotFoundError:
            typer.echo(f"{module}: <not installed>")

    try:
        options = _load_options(None)
    except NormalizerError as exc:
        raise typer.Exit(code=_print_error(exc, bool(ctx.obj.get("debug", False))))
    typer.echo(f"max_size: {options.max_size}")
    typer.echo(f"base64_min_length: {options.base64_min_length}")
    typer.echo(f"max_depth: {options.max_depth}")


if __name__ == "__main__":
    app()
