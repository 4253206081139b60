"""Host environment resolution.

Merges a host's own ``KEY=VALUE`` list with the cluster-wide list and
groups the result by key.

Merge rule: host entries come first; a cluster entry is appended only if
the *exact same string* is not already in the host list.  The comparison
is on the whole ``KEY=VALUE`` string, not on the key, so ``A=1`` (host)
and ``A=2`` (cluster) both survive and ``A`` resolves to a :class:`Multi`.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List

from clusterenv.config.models import Cluster
from clusterenv.env.values import Multi, ResolvedEnv, Scalar

logger = logging.getLogger(__name__)


def merge_list(dst: Iterable[str], src: Iterable[str]) -> List[str]:
    """Return *dst* followed by every entry of *src* not already present.

    Neither input is modified.
    """
    merged = list(dst)
    for entry in src:
        if entry in merged:
            continue
        merged.append(entry)
    return merged


def convert_env(env_list: Iterable[str]) -> ResolvedEnv:
    """Group ``KEY=VALUE`` strings by key.

    ``["IP=127.0.0.1", "IP=192.168.0.2", "Key=value"]`` becomes
    ``{"IP": Multi(("127.0.0.1", "192.168.0.2")), "Key": Scalar("value")}``.

    Entries are split on the first ``=``; entries without one are dropped.
    """
    grouped: Dict[str, List[str]] = {}
    for entry in env_list:
        key, sep, value = entry.partition("=")
        if not sep:
            logger.debug("Ignoring malformed env entry %r (no '=')", entry)
            continue
        grouped.setdefault(key, []).append(value)

    env: ResolvedEnv = {}
    for key, values in grouped.items():
        if len(values) > 1:
            env[key] = Multi(tuple(values))
        else:
            env[key] = Scalar(values[0])
    return env


def host_env_list(cluster: Cluster, host_ip: str) -> List[str]:
    """Return the raw env list of the host owning *host_ip*.

    Returns an empty list when no host lists the IP.  When several hosts
    list it, the last one wins.
    """
    env: List[str] = []
    for host in cluster.spec.hosts:
        if host_ip in host.ips:
            env = host.env
    return env


def resolve_host_env(cluster: Cluster, host_ip: str) -> ResolvedEnv:
    """Merge host and cluster env for *host_ip* and group by key."""
    merged = merge_list(host_env_list(cluster, host_ip), cluster.spec.env)
    return convert_env(merged)
