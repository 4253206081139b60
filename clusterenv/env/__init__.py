"""Host environment resolution and shell wrapping."""

from clusterenv.env.values import (
    EnvValue,
    Multi,
    ResolvedEnv,
    Scalar,
    to_template_context,
)
from clusterenv.env.resolver import (
    convert_env,
    host_env_list,
    merge_list,
    resolve_host_env,
)
from clusterenv.env.shell import wrap_shell

__all__ = [
    "EnvValue",
    "Multi",
    "ResolvedEnv",
    "Scalar",
    "convert_env",
    "host_env_list",
    "merge_list",
    "resolve_host_env",
    "to_template_context",
    "wrap_shell",
]
