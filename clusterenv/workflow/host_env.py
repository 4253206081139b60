"""Orchestrators behind the ``show``, ``wrap`` and ``render`` commands.

Each workflow loads the Clusterfile, resolves the env of one host and
returns a process exit code.  Failures are logged, reported through
:mod:`clusterenv.ui` and mapped to an exit code instead of raised.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

from clusterenv import ui
from clusterenv.config.loader import ClusterfileError, load_cluster
from clusterenv.config.models import Cluster, RenderOptions
from clusterenv.processor import Processor
from clusterenv.render.errors import RenderError

logger = logging.getLogger(__name__)

# Exit codes
EXIT_SUCCESS = 0
EXIT_RENDER_FAILURE = 1
EXIT_CLUSTERFILE_ERROR = 2


def _load(clusterfile: Union[str, Path]) -> Optional[Cluster]:
    """Load *clusterfile*, reporting failures; ``None`` means abort."""
    try:
        return load_cluster(clusterfile)
    except (FileNotFoundError, ClusterfileError) as exc:
        logger.error("Clusterfile load failed: %s", exc)
        ui.fail(str(exc))
        return None


def _warn_unknown_host(cluster: Cluster, host: str) -> None:
    if host not in cluster.spec.host_ips():
        logger.warning("Host %s not in Clusterfile; using cluster env only.", host)
        ui.warn(f"Host {host} not found in Clusterfile, using cluster env only.")


# ---------------------------------------------------------------------------
# show
# ---------------------------------------------------------------------------


def run_show(
    clusterfile: Union[str, Path],
    host: str,
    *,
    json_output: bool = False,
) -> int:
    """Print the resolved env of *host*."""
    cluster = _load(clusterfile)
    if cluster is None:
        return EXIT_CLUSTERFILE_ERROR

    env = Processor(cluster).get_host_env(host)

    if json_output:
        payload = {key: value.template_value() for key, value in env.items()}
        ui.plain(json.dumps(payload, indent=2))
        return EXIT_SUCCESS

    _warn_unknown_host(cluster, host)
    ui.phase(f"ENV {host}")
    for key, value in env.items():
        ui.detail(key, str(value))
    return EXIT_SUCCESS


# ---------------------------------------------------------------------------
# wrap
# ---------------------------------------------------------------------------


def run_wrap(
    clusterfile: Union[str, Path],
    host: str,
    command: Sequence[str],
) -> int:
    """Print *command* prefixed with the env of *host*.

    Only the wrapped command goes to stdout so the output can be piped
    straight into a shell.
    """
    cluster = _load(clusterfile)
    if cluster is None:
        return EXIT_CLUSTERFILE_ERROR

    wrapped = Processor(cluster).wrapper_shell(host, " ".join(command))
    logger.debug("Wrapped shell for %s: %s", host, wrapped)
    ui.plain(wrapped)
    return EXIT_SUCCESS


# ---------------------------------------------------------------------------
# render
# ---------------------------------------------------------------------------


def run_render(
    clusterfile: Union[str, Path],
    host: str,
    root: Union[str, Path],
    *,
    strict: bool = False,
) -> int:
    """Render every template under *root* for *host*."""
    cluster = _load(clusterfile)
    if cluster is None:
        return EXIT_CLUSTERFILE_ERROR

    _warn_unknown_host(cluster, host)

    options = RenderOptions.from_env()
    if strict:
        options = options.model_copy(update={"strict_undefined": True})

    ui.phase("RENDER")
    ui.step(f"Rendering templates under {root} for {host} ...")
    try:
        written: List[Path] = Processor(cluster, options).render_all(host, root)
    except RenderError as exc:
        logger.error("Render failed: %s", exc)
        ui.error_panel("Render failed", str(exc))
        return EXIT_RENDER_FAILURE
    except OSError as exc:
        logger.error("Directory walk failed: %s", exc)
        ui.error_panel("Render failed", str(exc))
        return EXIT_RENDER_FAILURE

    for output in written:
        ui.ok(str(output))
    if not written:
        ui.warn(f"No templates found under {root}.")
    logger.info("Rendered %d template(s) for %s", len(written), host)
    return EXIT_SUCCESS
