"""Command workflows (show, wrap, render) returning exit codes."""

from clusterenv.workflow.host_env import (
    EXIT_CLUSTERFILE_ERROR,
    EXIT_RENDER_FAILURE,
    EXIT_SUCCESS,
    run_render,
    run_show,
    run_wrap,
)

__all__ = [
    "EXIT_CLUSTERFILE_ERROR",
    "EXIT_RENDER_FAILURE",
    "EXIT_SUCCESS",
    "run_render",
    "run_show",
    "run_wrap",
]
