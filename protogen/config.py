"""Build-environment configuration for a generator run."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from .codegen import MANIFEST_NAME
from .errors import ConfigError
from .loader import PROTOS_DIR

OUT_DIR_VAR = "OUT_DIR"
PROTOS_DIR_VAR = "PROTOGEN_PROTOS_DIR"
GRPC_VAR = "PROTOGEN_GRPC"
STRICT_VAR = "PROTOGEN_STRICT"
VERBOSE_VAR = "PROTOGEN_VERBOSE"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass
class GeneratorConfig:
    """Everything a Driver needs: where to read schemas and where to write."""

    input_root: Path
    output_root: Path
    manifest_name: str = MANIFEST_NAME
    grpc: bool = True
    strict_module_names: bool = True
    verbose: bool = False


def load_config(
    environ: Mapping[str, str] | None = None, base_dir: Path | None = None
) -> GeneratorConfig:
    """Read a GeneratorConfig from environment variables.

    ``OUT_DIR`` is required. A relative ``PROTOGEN_PROTOS_DIR`` (default
    ``protos``) is resolved against ``base_dir`` when one is given.
    """
    env = os.environ if environ is None else environ

    out_dir = env.get(OUT_DIR_VAR, "").strip()
    if not out_dir:
        raise ConfigError(f"{OUT_DIR_VAR} is not set")

    protos_dir = Path(env.get(PROTOS_DIR_VAR, "").strip() or PROTOS_DIR)
    if base_dir is not None and not protos_dir.is_absolute():
        protos_dir = Path(base_dir) / protos_dir

    return GeneratorConfig(
        input_root=protos_dir,
        output_root=Path(out_dir),
        grpc=_as_bool(env, GRPC_VAR, True),
        strict_module_names=_as_bool(env, STRICT_VAR, True),
        verbose=_as_bool(env, VERBOSE_VAR, False),
    )


def _as_bool(env: Mapping[str, str], key: str, default: bool) -> bool:
    raw = env.get(key)
    if raw is None or not raw.strip():
        return default
    lowered = raw.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ConfigError(f"{key} must be a boolean, got {raw!r}")
