"""Build the manifest template context from a generation job."""

from __future__ import annotations

from typing import Any

from .models import GenerationJob
from .naming import STUB_SUFFIX


def build_context(job: GenerationJob, grpc: bool = False) -> dict[str, Any]:
    """Build the template context, one module entry per schema in job order.

    With ``grpc`` set each entry also names the service stub module and the
    alias it is exported under.
    """
    modules: list[dict[str, str]] = []
    for schema in job.schemas:
        module = {
            "name": schema.module_name,
            "package": schema.package,
            "unit": schema.leaf,
        }
        if grpc:
            module["stub"] = schema.stub_leaf
            module["stub_name"] = schema.module_name + STUB_SUFFIX
        modules.append(module)

    return {
        "modules": modules,
        "module_count": len(modules),
        "grpc": grpc,
    }
