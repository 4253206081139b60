"""Cluster specification models and Clusterfile loading."""

from clusterenv.config.loader import (
    CLUSTER_KIND,
    ClusterfileError,
    load_cluster,
    parse_cluster,
)
from clusterenv.config.models import (
    STRICT_UNDEFINED_ENV_VAR,
    TEMPLATE_SUFFIX,
    Cluster,
    ClusterMetadata,
    ClusterSpec,
    Host,
    RenderOptions,
)

__all__ = [
    "CLUSTER_KIND",
    "Cluster",
    "ClusterMetadata",
    "ClusterSpec",
    "ClusterfileError",
    "Host",
    "RenderOptions",
    "STRICT_UNDEFINED_ENV_VAR",
    "TEMPLATE_SUFFIX",
    "load_cluster",
    "parse_cluster",
]
