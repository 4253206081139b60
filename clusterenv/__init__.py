"""clusterenv - per-host environment resolution for Clusterfiles.

Resolves the environment of a single host from a cluster specification
and injects it into shell commands and ``*.tmpl`` templates.
"""

try:
    from importlib.metadata import version

    __version__ = version("clusterenv")
except Exception:
    __version__ = "0.0.0.dev0"

__all__ = ["__version__"]
