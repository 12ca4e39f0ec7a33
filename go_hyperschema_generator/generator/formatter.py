"""Formatting of generated Go source with ``gofmt``."""

from __future__ import annotations

import logging
import shutil
import subprocess
from typing import Final

from go_hyperschema_generator.errors import GoFormatError

logger = logging.getLogger(__name__)

GOFMT_BINARY: Final = "gofmt"


def find_gofmt() -> str | None:
    """Path of the gofmt binary on ``PATH``, if any."""
    return shutil.which(GOFMT_BINARY)


def format_go_source(source: str, gofmt: str | None = None) -> str:
    """Run Go source through gofmt.

    When no gofmt binary is available the source is returned unchanged.

    Args:
        source: Generated Go source.
        gofmt: Explicit path to the gofmt binary; looked up on ``PATH`` when omitted.

    Returns:
        The formatted source.

    Raises:
        GoFormatError: If gofmt rejects the source. The unformatted source is
            attached to the error.
    """
    binary = gofmt or find_gofmt()
    if binary is None:
        logger.warning("gofmt not found on PATH, leaving generated source unformatted")
        return source

    logger.debug("Formatting generated source with %s", binary)
    result = subprocess.run(  # noqa: S603
        [binary],
        input=source,
        capture_output=True,
        text=True,
        check=False,
    )
    if result.returncode != 0:
        raise GoFormatError(result.stderr.strip(), source)
    return result.stdout
