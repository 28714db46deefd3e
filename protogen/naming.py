"""Derive module names and generated-unit names from schema file paths.

Module names come from the file's base name, cut at the first dot:
  order.proto              -> order
  order_service.v2.proto   -> order_service
  readme                   -> readme

Generated-unit names follow protoc's Python output naming, relative to the
import root: strip a trailing .proto, turn '-' into '_' and '/' into '.',
then append _pb2:
  order.proto              -> order_pb2
  billing/invoice.proto    -> billing.invoice_pb2
  payment.v1.proto         -> payment.v1_pb2   (written as payment/v1_pb2.py)

With service stubs enabled the manifest also exports <module>_grpc, bound to
protoc's <unit>_grpc module.
"""

from __future__ import annotations

import keyword
from collections import defaultdict
from pathlib import Path, PurePath
from typing import Iterable

from .errors import InvalidModuleNameError, ModuleNameCollisionError
from .models import SchemaFile

# Suffixes protoc strips before naming the generated module
_PROTO_SUFFIXES = (".protodevel", ".proto")

_UNIT_SUFFIX = "_pb2"
STUB_SUFFIX = "_grpc"


def module_name_for(basename: str) -> str:
    """Return the text before the first '.', or the whole name if there is none."""
    return basename.split(".", 1)[0]


def _strip_proto(name: str) -> str:
    for suffix in _PROTO_SUFFIXES:
        if name.endswith(suffix):
            return name[: -len(suffix)]
    return name


def unit_name_for(path: Path, import_root: Path) -> str:
    """Return the dotted name protoc gives the Python module generated for ``path``."""
    relative = PurePath(path).relative_to(import_root).as_posix()
    stem = _strip_proto(relative)
    stem = stem.replace("-", "_").replace("/", ".")
    return stem + _UNIT_SUFFIX


def is_valid_module_name(name: str) -> bool:
    """Module names must be importable Python identifiers."""
    return name.isidentifier() and not keyword.iskeyword(name)


def exported_names(schema: SchemaFile, grpc: bool = False) -> list[str]:
    """Names the manifest binds for ``schema``."""
    names = [schema.module_name]
    if grpc:
        names.append(schema.module_name + STUB_SUFFIX)
    return names


def find_duplicate_module_names(
    schemas: Iterable[SchemaFile], grpc: bool = False
) -> dict[str, list[str]]:
    """Map each exported name bound by more than one file to those files' paths."""
    by_name: dict[str, list[str]] = defaultdict(list)
    for schema in schemas:
        for name in exported_names(schema, grpc):
            by_name[name].append(str(schema.path))
    return {name: paths for name, paths in by_name.items() if len(paths) > 1}


def invalid_names(schema: SchemaFile) -> list[str]:
    """Module name and unit path segments that would not parse in an import."""
    candidates = [schema.module_name, *schema.unit.split(".")]
    return [name for name in candidates if not is_valid_module_name(name)]


def check_module_names(schemas: Iterable[SchemaFile], grpc: bool = False) -> None:
    """Reject invalid or colliding names before anything is compiled."""
    schemas = list(schemas)
    invalid = [name for schema in schemas for name in invalid_names(schema)]
    if invalid:
        raise InvalidModuleNameError(invalid)

    duplicates = find_duplicate_module_names(schemas, grpc)
    if duplicates:
        raise ModuleNameCollisionError(duplicates)
