"""Env processor: the two host-env operations behind one interface.

Usage::

    cluster = load_cluster("Clusterfile")
    processor = new_env_processor(cluster)
    processor.wrapper_shell("192.168.0.2", "cat /etc/hosts")
    processor.render_all("192.168.0.2", "/var/lib/rootfs/etc")
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Protocol, Union

from clusterenv.config.models import Cluster, RenderOptions
from clusterenv.env.resolver import resolve_host_env
from clusterenv.env.shell import wrap_shell
from clusterenv.env.values import ResolvedEnv
from clusterenv.render.renderer import render_all


class EnvProcessor(Protocol):
    def wrapper_shell(self, host: str, shell: str) -> str:
        """Prefix *shell* with the env of *host*.

        Input shell:  ``cat /etc/hosts``
        Output shell: ``DATADISK=/data cat /etc/hosts``
        """
        ...

    def render_all(self, host: str, dir: Union[str, Path]) -> List[Path]:
        """Render the env of *host* into every template under *dir*."""
        ...


class Processor:
    """:class:`EnvProcessor` backed by a read-only :class:`Cluster`."""

    def __init__(
        self,
        cluster: Cluster,
        options: Optional[RenderOptions] = None,
    ) -> None:
        self.cluster = cluster
        self.options = options if options is not None else RenderOptions()

    def get_host_env(self, host_ip: str) -> ResolvedEnv:
        """Host env merged over cluster env; see :mod:`clusterenv.env.resolver`."""
        return resolve_host_env(self.cluster, host_ip)

    def wrapper_shell(self, host: str, shell: str) -> str:
        return wrap_shell(self.get_host_env(host), shell)

    def render_all(self, host: str, dir: Union[str, Path]) -> List[Path]:
        return render_all(self.get_host_env(host), dir, self.options)


def new_env_processor(
    cluster: Cluster,
    options: Optional[RenderOptions] = None,
) -> EnvProcessor:
    return Processor(cluster, options)
