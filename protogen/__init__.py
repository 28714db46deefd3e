"""protogen: compile a directory of .proto files into an importable package."""

__version__ = "0.1.0"
