"""Error types raised by the generator stages."""

from __future__ import annotations

from typing import Iterable


class GeneratorError(RuntimeError):
    """Base class for every fatal generation failure."""


class ConfigError(GeneratorError):
    """Raised when the build environment does not describe a usable job."""


class FilesystemError(GeneratorError):
    """Raised when the input tree cannot be read or the output root created."""


class CompilationError(GeneratorError):
    """Raised when protoc rejects the schema set.

    ``diagnostics`` holds the compiler's stderr exactly as it was emitted.
    """

    def __init__(self, diagnostics: str, returncode: int | None = None) -> None:
        self.diagnostics = diagnostics
        self.returncode = returncode
        if returncode is None:
            message = "schema compilation failed"
        else:
            message = f"schema compilation failed (exit code {returncode})"
        if diagnostics.strip():
            message = f"{message}:\n{diagnostics.rstrip()}"
        super().__init__(message)


class ManifestWriteError(GeneratorError):
    """Raised when the manifest file cannot be created or written."""


class ModuleNameCollisionError(GeneratorError):
    """Raised when distinct schema files derive the same module name."""

    def __init__(self, duplicates: dict[str, list[str]]) -> None:
        self.duplicates = duplicates
        details = "; ".join(
            f"{name}: {', '.join(paths)}" for name, paths in sorted(duplicates.items())
        )
        super().__init__(f"duplicate module names: {details}")


class InvalidModuleNameError(GeneratorError):
    """Raised when a derived module name is not a usable Python identifier."""

    def __init__(self, names: Iterable[str]) -> None:
        self.names = sorted(set(names))
        super().__init__(
            "invalid module names: " + ", ".join(repr(n) for n in self.names)
        )
