"""Template renderer: writes ``foo`` next to every ``foo.tmpl``.

Walks a directory tree in lexical order.  Each file ending in the template
suffix is parsed and executed with jinja2 against a host's resolved
environment, and the result is written to the same path with the suffix
stripped.  The first failure aborts the walk.

Template context: scalar variables are plain strings and multi-valued
variables are lists, so templates can branch on arity::

    {% if IP is string %}{{ IP }}{% else %}{{ IP | join(",") }}{% endif %}

Templates may ``{% include %}`` other files by path relative to the
walk root.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Union

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    Template,
    TemplateError,
    Undefined,
)

from clusterenv.config.models import RenderOptions
from clusterenv.env.values import EnvValue, to_template_context
from clusterenv.render.errors import (
    OutputOpenError,
    TemplateExecuteError,
    TemplateParseError,
)

logger = logging.getLogger(__name__)

LF = "\n"
CRLF = "\r\n"
NEWLINE_SEQUENCES = (LF, CRLF)


def _raise_walk_error(exc: OSError) -> None:
    raise exc


def _is_template_name(name: str, suffix: str) -> bool:
    # A file named exactly like the suffix has no output name.
    return name.endswith(suffix) and len(name) > len(suffix)


def output_path_for(template_path: Union[str, Path], suffix: str) -> Path:
    """``/a/b/conf.yaml.tmpl`` → ``/a/b/conf.yaml``."""
    template_path = Path(template_path)
    return template_path.with_name(template_path.name[: -len(suffix)])


def iter_templates(root: Union[str, Path], suffix: str) -> Iterator[Path]:
    """Yield every template file under *root*, in lexical walk order.

    *root* may itself be a template file.  Traversal errors (missing root,
    permission denied) are raised unchanged.
    """
    root = Path(root)
    if root.is_file():
        if _is_template_name(root.name, suffix):
            yield root
        return

    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise_walk_error):
        dirnames.sort()
        for name in sorted(filenames):
            path = Path(dirpath) / name
            if not _is_template_name(name, suffix):
                logger.debug("Skipping non-template %s", path)
                continue
            if not path.is_file():
                logger.debug("Skipping non-regular file %s", path)
                continue
            yield path


def build_environment(
    search_root: Path,
    options: RenderOptions,
    newline_sequence: str = LF,
) -> Environment:
    """Create a jinja2 environment for one render pass and line ending."""
    return Environment(
        loader=FileSystemLoader(str(search_root), encoding=options.encoding),
        autoescape=False,
        keep_trailing_newline=True,
        newline_sequence=newline_sequence,
        undefined=StrictUndefined if options.strict_undefined else Undefined,
    )


def build_environments(search_root: Path, options: RenderOptions) -> Dict[str, Environment]:
    """One environment per supported line ending, keyed by newline sequence.

    jinja2 rewrites every line break of a template to the environment's
    ``newline_sequence``.  Each environment has its own template cache, so
    an include compiled for LF is never served to a CRLF template.
    """
    return {
        newline: build_environment(search_root, options, newline)
        for newline in NEWLINE_SEQUENCES
    }


def _load_template(
    environments: Mapping[str, Environment],
    path: Path,
    search_root: Path,
) -> Template:
    name = path.relative_to(search_root).as_posix()
    lf_env = environments[LF]
    try:
        source, _, _ = lf_env.loader.get_source(lf_env, name)
        newline = CRLF if CRLF in source else LF
        return environments[newline].get_template(name)
    except (TemplateError, OSError, UnicodeDecodeError) as exc:
        raise TemplateParseError(path, exc) from exc


def render_file(
    environments: Mapping[str, Environment],
    path: Path,
    search_root: Path,
    context: Dict[str, Any],
    options: RenderOptions,
) -> Path:
    """Render a single template and write its output; return the output path.

    The template is fully rendered before the output file is opened, so a
    failing template never leaves an output file behind.  Templates that
    contain CRLF line breaks are rendered with CRLF line breaks.

    Raises:
        TemplateParseError: Template unreadable or syntactically invalid.
        TemplateExecuteError: Rendering raised.
        OutputOpenError: Output file could not be opened or written.
    """
    template = _load_template(environments, path, search_root)
    try:
        rendered = template.render(context)
    except Exception as exc:
        raise TemplateExecuteError(path, exc) from exc

    output = output_path_for(path, options.suffix)
    try:
        with open(output, "w", encoding=options.encoding, newline="") as fh:
            fh.write(rendered)
    except OSError as exc:
        raise OutputOpenError(path, exc) from exc

    logger.info("Rendered %s -> %s", path, output)
    return output


def render_all(
    env: Mapping[str, EnvValue],
    root: Union[str, Path],
    options: Optional[RenderOptions] = None,
) -> List[Path]:
    """Render every template under *root* against *env*.

    Parameters
    ----------
    env:
        Resolved host environment (see
        :func:`clusterenv.env.resolver.resolve_host_env`).
    root:
        Directory to walk, or a single template file.
    options:
        Render options; defaults to :class:`RenderOptions` ``()``.

    Returns
    -------
    list[Path]
        Output files written, in walk order.

    Raises
    ------
    RenderError
        On the first template that fails (subclass names the failure kind).
    OSError
        If the walk itself fails.
    """
    if options is None:
        options = RenderOptions()

    root = Path(root)
    search_root = root.parent if root.is_file() else root
    environments = build_environments(search_root, options)
    context = to_template_context(env)

    written: List[Path] = []
    for path in iter_templates(root, options.suffix):
        written.append(render_file(environments, path, search_root, context, options))

    logger.debug("Rendered %d template(s) under %s", len(written), root)
    return written
