"""Errors raised while rendering ``*.tmpl`` files.

Every error carries the offending template ``path`` and the underlying
``cause``.  Directory-walk failures are not wrapped; they propagate as the
original :class:`OSError`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union


class RenderError(Exception):
    """Base class for per-template render failures."""

    message = "failed to render template"

    def __init__(self, path: Union[str, Path], cause: BaseException) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"{self.message} [{self.path}]: {cause}")


class OutputOpenError(RenderError):
    """The rendered output file could not be opened or written."""

    message = "failed to open output file when rendering env"


class TemplateParseError(RenderError):
    """The template could not be read or parsed."""

    message = "failed to create template"


class TemplateExecuteError(RenderError):
    """The template parsed but failed while being executed."""

    message = "failed to render env template"
