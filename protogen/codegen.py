"""Render the manifest template and write it into the output root.

Takes the context from context_builder and produces <out_dir>/__init__.py,
which re-exports every generated unit under its module name.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2

from .errors import ManifestWriteError
from .logging import get_logger
from .models import Manifest

TEMPLATE_DIR = Path(__file__).parent / "templates"
MANIFEST_TEMPLATE = "manifest.py.j2"
MANIFEST_NAME = "__init__.py"

logger = get_logger("codegen")


def _environment() -> jinja2.Environment:
    return jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=jinja2.StrictUndefined,
    )


def render_manifest(context: dict[str, Any]) -> str:
    """Render the manifest source for ``context['modules']``."""
    template = _environment().get_template(MANIFEST_TEMPLATE)
    return template.render(**context)


def generate(
    context: dict[str, Any], out_dir: Path, name: str = MANIFEST_NAME
) -> Manifest:
    """Render the manifest and write it to ``out_dir/name``, replacing any old copy."""
    output = render_manifest(context)
    output_path = Path(out_dir) / name
    try:
        with open(output_path, "w", encoding="utf-8", newline="\n") as f:
            f.write(output)
    except OSError as exc:
        raise ManifestWriteError(f"cannot write manifest {output_path}: {exc}") from exc

    logger.info("Generated %s (%d modules)", output_path, context["module_count"])
    return Manifest(path=output_path, lines=tuple(output.splitlines()))
