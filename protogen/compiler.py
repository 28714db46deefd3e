"""Invoke the protobuf compiler on a discovered schema set.

protoc is run as ``python -m grpc_tools.protoc`` in a child process so its
diagnostics can be captured and passed on unchanged. The grpc_tools entry
point adds the bundled well-known types to the include path itself.
"""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path
from typing import Callable, Protocol, Sequence

from .errors import CompilationError
from .logging import get_logger

logger = get_logger("compiler")


class SchemaCompiler(Protocol):
    """Anything that turns a list of schema files into generated modules."""

    def compile(self, files: Sequence[Path], import_root: Path, out_dir: Path) -> None:
        """Compile ``files``, resolving imports against ``import_root``.

        Raises CompilationError when any file is rejected.
        """
        ...


class ProtocCompiler:
    """SchemaCompiler backed by grpcio-tools' bundled protoc."""

    def __init__(
        self,
        *,
        grpc: bool = True,
        python: str | None = None,
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
    ) -> None:
        self.grpc = grpc
        self.python = python or sys.executable
        self._runner = runner

    def build_args(
        self, files: Sequence[Path], import_root: Path, out_dir: Path
    ) -> list[str]:
        """Return the full command line for one protoc invocation."""
        args = [
            self.python,
            "-m",
            "grpc_tools.protoc",
            f"--proto_path={import_root}",
            f"--python_out={out_dir}",
        ]
        if self.grpc:
            args.append(f"--grpc_python_out={out_dir}")
        args.extend(str(f) for f in files)
        return args

    def compile(self, files: Sequence[Path], import_root: Path, out_dir: Path) -> None:
        if not files:
            logger.debug("No schema files given; skipping protoc")
            return

        args = self.build_args(files, import_root, out_dir)
        logger.debug("Running %s", " ".join(args))
        try:
            result = self._runner(args, capture_output=True, text=True, check=False)
        except OSError as exc:
            raise CompilationError(f"could not start protoc: {exc}") from exc

        if result.returncode != 0:
            raise CompilationError(result.stderr or result.stdout or "", result.returncode)
        if result.stderr:
            # protoc reports warnings (e.g. unused imports) on stderr with exit 0
            logger.warning("%s", result.stderr.rstrip())
        logger.info("Compiled %d schema file(s) into %s", len(files), out_dir)
