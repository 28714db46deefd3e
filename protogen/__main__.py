"""Entry point: python -m protogen

Reads protos/ (or $PROTOGEN_PROTOS_DIR), compiles every file into $OUT_DIR
and writes $OUT_DIR/__init__.py re-exporting each generated module.

protoc's Python output imports sibling schemas and service stubs import
their messages by absolute name, so consumers put $OUT_DIR itself on
sys.path as well as its parent.
"""

from __future__ import annotations

from typing import Mapping

from .config import load_config
from .driver import Driver
from .errors import GeneratorError
from .logging import configure_logging


def main(environ: Mapping[str, str] | None = None) -> int:
    logger = configure_logging()
    try:
        config = load_config(environ)
        if config.verbose:
            logger = configure_logging(verbose=True)
        Driver(config).run()
    except GeneratorError as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
