"""Template rendering (``*.tmpl`` → rendered sibling) for host environments."""

from clusterenv.render.errors import (
    OutputOpenError,
    RenderError,
    TemplateExecuteError,
    TemplateParseError,
)
from clusterenv.render.renderer import (
    build_environment,
    build_environments,
    iter_templates,
    output_path_for,
    render_all,
    render_file,
)

__all__ = [
    "OutputOpenError",
    "RenderError",
    "TemplateExecuteError",
    "TemplateParseError",
    "build_environment",
    "build_environments",
    "iter_templates",
    "output_path_for",
    "render_all",
    "render_file",
]
