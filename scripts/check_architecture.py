#!/usr/bin/env python3
"""Architecture boundary checks."""

from __future__ import annotations

from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]

CORE_BANNED = [
    "import typer",
    "from typer",
    "import os",
    "import subprocess",
    "import socket",
    "open(",
]


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _assert_no_imports(path: Path, banned: list[str]) -> None:
    text = _read(path)
    for token in banned:
        if token in text:
            raise SystemExit(f"Architecture violation in {path}: found '{token}'")


def main(root: Path = ROOT) -> None:
    """Run repository architecture boundary checks."""
    core_dir = root / "src/binary_normalizer/normalizer"
    paths = sorted(core_dir.glob("*.py"))
    if not paths:
        raise SystemExit(f"No normalizer modules found under {core_dir}")
    for path in paths:
        _assert_no_imports(path, CORE_BANNED)

    for name in ("options.py", "results.py", "types.py", "errors.py"):
        _assert_no_imports(root / "src/binary_normalizer" / name, CORE_BANNED)

    print("Architecture checks passed.")


if __name__ == "__main__":
    main()
