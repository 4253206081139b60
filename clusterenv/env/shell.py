"""Shell command wrapping.

Prefixes a command with the host's variables so scripts can read them::

    cat /etc/hosts  →  DATADISK=/data cat /etc/hosts
"""

from __future__ import annotations

from typing import Mapping

from clusterenv.env.values import EnvValue


def wrap_shell(env: Mapping[str, EnvValue], shell: str) -> str:
    """Return *shell* prefixed with ``KEY=VALUE `` for every entry of *env*.

    Values are inserted verbatim; nothing is quoted or escaped.
    """
    prefix = "".join(f"{key}={value} " for key, value in env.items())
    return f"{prefix}{shell}"
