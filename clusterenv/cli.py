"""CLI entry point for clusterenv, built on cli-core-yo.

Provides ``show``, ``wrap`` and ``render`` commands operating on the
resolved environment of one host in a Clusterfile.

Usage::

    clusterenv --help
    clusterenv show --clusterfile Clusterfile --host 192.168.0.2
    clusterenv --json show --clusterfile Clusterfile --host 192.168.0.2
    clusterenv wrap --clusterfile Clusterfile --host 192.168.0.2 -- cat /etc/hosts
    clusterenv render --clusterfile Clusterfile --host 192.168.0.2 ./rootfs/etc
"""

from __future__ import annotations

import logging
import os
import sys
from typing import List

import typer
from cli_core_yo import output
from cli_core_yo.app import create_app
from cli_core_yo.runtime import _reset, initialize
from cli_core_yo.spec import CliSpec, XdgSpec

# ── App specification ────────────────────────────────────────────────────────

spec = CliSpec(
    prog_name="clusterenv",
    app_display_name="Cluster Env",
    dist_name="clusterenv",
    root_help=(
        "Resolve per-host environment variables from a Clusterfile and "
        "inject them into shell commands and *.tmpl templates."
    ),
    xdg=XdgSpec(app_dir_name="clusterenv"),
)

app = create_app(spec)

_CLUSTERFILE_HELP = "Path to the Clusterfile YAML."
_HOST_HELP = "Host IP whose environment is resolved."


# ── Root callback (global options) ───────────────────────────────────────────


@app.callback()
def _root_callback(
    ctx: typer.Context,
    json_flag: bool = typer.Option(
        False, "--json", "-j", help="Output as JSON."
    ),
) -> None:
    """Cluster env resolver."""
    _reset()
    debug = os.environ.get("CLI_CORE_YO_DEBUG") == "1"
    xdg_paths = app._cli_core_yo_xdg_paths  # type: ignore[attr-defined]
    initialize(spec, xdg_paths, json_mode=json_flag, debug=debug)
    ctx.obj = {"json": json_flag}


def _json_mode(ctx: typer.Context) -> bool:
    """Whether the root ``--json`` flag was given."""
    return bool((ctx.obj or {}).get("json", False))


# ── show command ─────────────────────────────────────────────────────────────


@app.command()
def show(
    ctx: typer.Context,
    clusterfile: str = typer.Option(..., "--clusterfile", "-f", help=_CLUSTERFILE_HELP),
    host: str = typer.Option(..., "--host", help=_HOST_HELP),
    debug: bool = typer.Option(False, "--debug", help="Enable debug output."),
) -> None:
    """Show the merged environment of a host.

    Host entries take precedence; cluster entries are appended unless the
    identical KEY=VALUE string is already present.  With the root --json
    flag the env is printed as a JSON object.
    """
    from clusterenv.workflow.host_env import run_show

    if debug:
        logging.basicConfig(level=logging.DEBUG)

    raise typer.Exit(run_show(clusterfile, host, json_output=_json_mode(ctx)))


# ── wrap command ─────────────────────────────────────────────────────────────


@app.command()
def wrap(
    command: List[str] = typer.Argument(
        ..., help="Shell command to prefix (use -- before it)."
    ),
    clusterfile: str = typer.Option(..., "--clusterfile", "-f", help=_CLUSTERFILE_HELP),
    host: str = typer.Option(..., "--host", help=_HOST_HELP),
    debug: bool = typer.Option(False, "--debug", help="Enable debug output."),
) -> None:
    """Print a shell command prefixed with KEY=VALUE pairs for a host."""
    from clusterenv.workflow.host_env import run_wrap

    if debug:
        logging.basicConfig(level=logging.DEBUG)

    raise typer.Exit(run_wrap(clusterfile, host, command))


# ── render command ───────────────────────────────────────────────────────────


@app.command()
def render(
    directory: str = typer.Argument(
        ..., help="Directory to walk (or a single .tmpl file)."
    ),
    clusterfile: str = typer.Option(..., "--clusterfile", "-f", help=_CLUSTERFILE_HELP),
    host: str = typer.Option(..., "--host", help=_HOST_HELP),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Fail on template variables missing from the host env.",
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug output."),
) -> None:
    """Render every *.tmpl file under DIRECTORY next to its template.

    Environment variables:
      CLUSTERENV_STRICT_UNDEFINED   Set to 1 to behave as if --strict was given.
    """
    from clusterenv.workflow.host_env import EXIT_SUCCESS, run_render

    if debug:
        logging.basicConfig(level=logging.DEBUG)

    output.action(f"Rendering env for {host} ...")
    rc = run_render(clusterfile, host, directory, strict=strict)
    if rc == EXIT_SUCCESS:
        output.success("Render complete.")
    else:
        output.error("Render failed.")
    raise typer.Exit(rc)


# ── Entry point ──────────────────────────────────────────────────────────────


def main() -> int:
    """Run the CLI and return an exit code."""
    try:
        app()
        return 0
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 0


if __name__ == "__main__":
    sys.exit(main())
