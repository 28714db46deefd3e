"""Data passed between the discovery, compile and manifest stages."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class SchemaFile:
    """One discovered schema file.

    ``unit`` is the dotted import path, relative to the output root, of the
    module protoc writes for this file (``payment.v1_pb2`` for
    ``payment.v1.proto``).
    """

    path: Path
    module_name: str
    unit: str

    @property
    def package(self) -> str:
        """Dotted subpackage holding the generated unit, '' at the root."""
        package, _, _ = self.unit.rpartition(".")
        return package

    @property
    def leaf(self) -> str:
        return self.unit.rpartition(".")[2]

    @property
    def stub_leaf(self) -> str:
        """Leaf name of the service stub module grpc_tools writes beside the unit."""
        return self.leaf + "_grpc"


@dataclass(frozen=True)
class GenerationJob:
    """Every schema file of a run plus the roots they are read from and written to."""

    schemas: tuple[SchemaFile, ...]
    input_root: Path
    output_root: Path

    @property
    def paths(self) -> list[Path]:
        return [schema.path for schema in self.schemas]

    @property
    def module_names(self) -> list[str]:
        return [schema.module_name for schema in self.schemas]


@dataclass(frozen=True)
class Manifest:
    """The written manifest: its location and its lines in order."""

    path: Path
    lines: tuple[str, ...]

    @property
    def text(self) -> str:
        return "".join(f"{line}\n" for line in self.lines)
