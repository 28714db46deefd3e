"""Shared fixtures: schema trees on disk and a recording fake compiler."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable, Sequence

import pytest

from protogen.config import GeneratorConfig
from protogen.errors import CompilationError
from protogen.logging import get_logger
from protogen.naming import unit_name_for


# ---------------------------------------------------------------------------
# Logging: handlers installed by main() must not outlive the captured stderr
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def reset_protogen_logger():
    yield
    logger = get_logger()
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


# ---------------------------------------------------------------------------
# Schema trees
# ---------------------------------------------------------------------------

@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[Iterable[str]], Path]:
    """Return a callable that creates files (relative paths) under tmp/protos."""
    def _make(files: Iterable[str], root_name: str = "protos") -> Path:
        root = tmp_path / root_name
        root.mkdir(parents=True, exist_ok=True)
        for rel in files:
            target = root / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text('syntax = "proto3";\n', encoding="utf-8")
        return root
    return _make


@pytest.fixture
def out_dir(tmp_path: Path) -> Path:
    return tmp_path / "out"


@pytest.fixture
def make_config(out_dir: Path) -> Callable[..., GeneratorConfig]:
    def _make(input_root: Path, **overrides) -> GeneratorConfig:
        return GeneratorConfig(input_root=input_root, output_root=out_dir, **overrides)
    return _make


# ---------------------------------------------------------------------------
# Fake compiler
# ---------------------------------------------------------------------------

class FakeCompiler:
    """SchemaCompiler stand-in that records calls.

    Writes an empty module and service stub for each file the way protoc
    would lay them out, or raises CompilationError with ``diagnostics`` when given.
    """

    def __init__(self, diagnostics: str | None = None) -> None:
        self.diagnostics = diagnostics
        self.calls: list[tuple] = []

    def compile(self, files: Sequence[Path], import_root: Path, out_dir: Path) -> None:
        self.calls.append((list(files), import_root, out_dir))
        if self.diagnostics is not None:
            raise CompilationError(self.diagnostics, 1)
        for path in files:
            unit = unit_name_for(path, import_root)
            target = Path(out_dir, *unit.split(".")).with_suffix(".py")
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text("", encoding="utf-8")
            target.with_name(target.stem + "_grpc.py").write_text("", encoding="utf-8")


@pytest.fixture
def fake_compiler() -> FakeCompiler:
    return FakeCompiler()
