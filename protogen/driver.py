"""Run discovery, compilation and manifest writing as one job.

Stages run strictly in order:

  PENDING -> DISCOVERING -> COMPILING -> WRITING_MANIFEST -> DONE

Any stage may move to FAILED instead, and the first error is re-raised to
the caller unchanged. Nothing is retried.
"""

from __future__ import annotations

import enum

from .codegen import generate
from .compiler import ProtocCompiler, SchemaCompiler
from .config import GeneratorConfig
from .context_builder import build_context
from .errors import FilesystemError
from .loader import build_job
from .logging import get_logger
from .models import GenerationJob, Manifest
from .naming import check_module_names, find_duplicate_module_names

logger = get_logger("driver")


class Stage(enum.Enum):
    PENDING = "pending"
    DISCOVERING = "discovering"
    COMPILING = "compiling"
    WRITING_MANIFEST = "writing_manifest"
    DONE = "done"
    FAILED = "failed"


class Driver:
    """Owns one GenerationJob from discovery to the written manifest."""

    def __init__(
        self, config: GeneratorConfig, compiler: SchemaCompiler | None = None
    ) -> None:
        self.config = config
        self.compiler = compiler or ProtocCompiler(grpc=config.grpc)
        self.state = Stage.PENDING
        self.job: GenerationJob | None = None

    def _enter(self, stage: Stage) -> None:
        logger.debug("%s -> %s", self.state.value, stage.value)
        self.state = stage

    def run(self) -> Manifest:
        """Run every stage; return the manifest or raise the first failure."""
        if self.state is not Stage.PENDING:
            raise RuntimeError(f"driver already ran (state: {self.state.value})")

        try:
            self._enter(Stage.DISCOVERING)
            job = build_job(self.config.input_root, self.config.output_root)
            self.job = job
            self._check_names(job)
            self._prepare_output(job)

            self._enter(Stage.COMPILING)
            self.compiler.compile(job.paths, job.input_root, job.output_root)

            self._enter(Stage.WRITING_MANIFEST)
            context = build_context(job, self.config.grpc)
            manifest = generate(context, job.output_root, self.config.manifest_name)
        except Exception:
            self._enter(Stage.FAILED)
            raise

        self._enter(Stage.DONE)
        return manifest

    def _check_names(self, job: GenerationJob) -> None:
        if self.config.strict_module_names:
            check_module_names(job.schemas, self.config.grpc)
            return
        duplicates = find_duplicate_module_names(job.schemas, self.config.grpc)
        for name, paths in duplicates.items():
            logger.warning("Module name %r derived from %d files: %s",
                           name, len(paths), ", ".join(paths))

    def _prepare_output(self, job: GenerationJob) -> None:
        try:
            job.output_root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FilesystemError(
                f"cannot create output directory {job.output_root}: {exc}"
            ) from exc
