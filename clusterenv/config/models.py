"""Pydantic models for the cluster specification (Clusterfile).

Defines the data structures for:
- Hosts (IP addresses, roles, per-host ``KEY=VALUE`` env strings)
- The cluster ``spec`` section (image, cluster-wide env, hosts)
- The top-level ``Cluster`` document
- Render options used by the template renderer
"""

from __future__ import annotations

import os
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

#: Suffix marking a file as a render target.
TEMPLATE_SUFFIX: str = ".tmpl"

#: Set to ``"1"`` to make undefined template variables an error.
STRICT_UNDEFINED_ENV_VAR: str = "CLUSTERENV_STRICT_UNDEFINED"


def _string_list(value: Any) -> List[str]:
    """Normalize a YAML list field: ``null`` → ``[]``, scalars → ``str``."""
    if value is None:
        return []
    if isinstance(value, (str, bytes)):
        return [str(value)]
    return [str(v) if v is not None else "" for v in value]


class Host(BaseModel):
    """A single host entry.

    Structure::

        - ips: [192.168.0.2, 192.168.0.3]
          roles: [master]
          env:
            - DATADISK=/data
    """

    ips: List[str] = Field(default_factory=list)
    roles: List[str] = Field(default_factory=list)
    env: List[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _coerce_lists(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = dict(data)
            for key in ("ips", "roles", "env"):
                if key in data:
                    data[key] = _string_list(data[key])
        return data


class ClusterSpec(BaseModel):
    """The ``spec:`` section of a Clusterfile."""

    image: str = ""
    env: List[str] = Field(default_factory=list)
    cmd_args: List[str] = Field(default_factory=list)
    hosts: List[Host] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _coerce_lists(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = dict(data)
            for key in ("env", "cmd_args"):
                if key in data:
                    data[key] = _string_list(data[key])
            if data.get("hosts", []) is None:
                data["hosts"] = []
            if data.get("image") is None:
                data.pop("image", None)
        return data

    def host_ips(self) -> List[str]:
        """Every IP address listed under ``hosts``, in file order."""
        return [ip for host in self.hosts for ip in host.ips]


class ClusterMetadata(BaseModel):
    name: str = ""


class Cluster(BaseModel):
    """Root model of a Clusterfile document.

    Structure::

        apiVersion: sealer.cloud/v2
        kind: Cluster
        metadata:
          name: my-cluster
        spec:
          image: kubernetes:v1.19.8
          env:
            - key1=value1
          hosts:
            - ips: [192.168.0.2]
              env:
                - key1=override
    """

    model_config = ConfigDict(populate_by_name=True)

    api_version: str = Field(default="", alias="apiVersion")
    kind: str = "Cluster"
    metadata: ClusterMetadata = Field(default_factory=ClusterMetadata)
    spec: ClusterSpec = Field(default_factory=ClusterSpec)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class RenderOptions(BaseModel):
    """Knobs for :func:`clusterenv.render.renderer.render_all`.

    Attributes:
        suffix: File-name suffix that marks a template.
        strict_undefined: Raise on variables missing from the host env
            instead of rendering them as empty strings.
        encoding: Encoding used to read templates and write output files.
    """

    suffix: str = Field(default=TEMPLATE_SUFFIX, min_length=1)
    strict_undefined: bool = False
    encoding: str = "utf-8"

    @field_validator("suffix")
    @classmethod
    def _suffix_is_file_name_part(cls, value: str) -> str:
        if "/" in value or (os.sep != "/" and os.sep in value):
            raise ValueError(f"suffix must not contain a path separator: {value!r}")
        return value

    @classmethod
    def from_env(cls) -> "RenderOptions":
        """Build options honouring ``CLUSTERENV_STRICT_UNDEFINED``."""
        return cls(
            strict_undefined=os.environ.get(STRICT_UNDEFINED_ENV_VAR, "") == "1",
        )
