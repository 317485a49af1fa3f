from __future__ import annotations

from pathlib import Path


def test_required_package_paths_exist() -> None:
    root = Path(__file__).resolve().parents[1]
    required = [
        "src/codemap/cli.py",
        "src/codemap/config.py",
        "src/codemap/context.py",
        "src/codemap/models.py",
        "src/codemap/extract/__init__.py",
        "src/codemap/index/__init__.py",
        "src/codemap/render/__init__.py",
        "src/codemap/logging/__init__.py",
    ]
    for rel in required:
        assert (root / rel).exists(), rel
