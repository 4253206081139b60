"""Clusterfile loading.

A Clusterfile is a (possibly multi-document) YAML file.  The first
document whose ``kind`` is ``Cluster`` is parsed into a :class:`Cluster`;
other documents (configs, plugins) are ignored.

- :func:`load_cluster`: read and parse a Clusterfile from disk
- :func:`parse_cluster`: parse already-loaded YAML text
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List

import yaml
from pydantic import ValidationError

from clusterenv.config.models import Cluster

logger = logging.getLogger(__name__)

CLUSTER_KIND = "Cluster"


class ClusterfileError(ValueError):
    """Raised when a Clusterfile cannot be turned into a :class:`Cluster`."""


def _select_document(docs: List[Any]) -> Dict[str, Any]:
    mappings = [d for d in docs if isinstance(d, dict)]
    for doc in mappings:
        if doc.get("kind") == CLUSTER_KIND:
            return doc
    if len(mappings) == 1 and "kind" not in mappings[0]:
        return mappings[0]
    raise ClusterfileError(
        f"No document of kind '{CLUSTER_KIND}' found "
        f"({len(docs)} document(s) inspected)"
    )


def parse_cluster(text: str) -> Cluster:
    """Parse Clusterfile YAML *text* into a :class:`Cluster`.

    Raises:
        ClusterfileError: On YAML syntax errors, when no cluster document
            is present, or when the document does not match the model.
    """
    try:
        docs = [d for d in yaml.safe_load_all(text) if d is not None]
    except yaml.YAMLError as exc:
        raise ClusterfileError(f"Invalid YAML: {exc}") from exc

    doc = _select_document(docs)
    try:
        return Cluster.model_validate(doc)
    except ValidationError as exc:
        raise ClusterfileError(f"Invalid cluster document: {exc}") from exc


def load_cluster(path: str | Path) -> Cluster:
    """Load and parse the Clusterfile at *path*.

    Raises:
        FileNotFoundError: If *path* does not exist.
        ClusterfileError: Propagated from :func:`parse_cluster`.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Clusterfile not found: {path}")

    cluster = parse_cluster(path.read_text(encoding="utf-8"))
    logger.debug(
        "Loaded cluster %r from %s (%d host(s))",
        cluster.metadata.name,
        path,
        len(cluster.spec.hosts),
    )
    return cluster
