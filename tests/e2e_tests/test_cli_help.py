"""End-to-end smoke test for CLI help output."""

from __future__ import annotations

import json
import subprocess

import binary_normalizer


def test_package_import_smoke() -> None:
    """Ensure package can be imported in the test process."""
    assert binary_normalizer.__version__


def test_cli_help_smoke() -> None:
    """Ensure the installed CLI entrypoint responds to --help."""
    result = subprocess.run(
        ["binary-normalizer", "--help"],
        capture_output=True,
        text=True,
        check=False,
    )

    assert result.returncode == 0, result.stderr
    assert "base64 transport envelopes" in result.stdout


def test_cli_encode_stdin() -> None:
    """Ensure the installed CLI encodes stdin input."""
    result = subprocess.run(
        ["binary-normalizer", "encode", "-", "--content-type", "text/plain"],
        input="hello",
        capture_output=True,
        text=True,
        check=False,
    )

    assert result.returncode == 0, result.stderr
    assert json.loads(result.stdout) == {
        "binary": "aGVsbG8=",
        "contentType": "text/plain",
        "size": 5,
    }


def test_cli_missing_input_fails_cleanly() -> None:
    """Ensure CLI returns a user-facing error for a missing input path."""
    result = subprocess.run(
        ["binary-normalizer", "encode", "/tmp/missing.bin"],
        capture_output=True,
        text=True,
        check=False,
    )

    assert result.returncode != 0
    assert "does not exist" in result.stderr.lower()
