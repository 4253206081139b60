"""Resolved environment values.

A resolved variable is either a :class:`Scalar` (the key appeared once)
or a :class:`Multi` (the key appeared several times, values kept in order
of appearance).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Mapping, Tuple, Union


@dataclass(frozen=True)
class Scalar:
    """A variable defined exactly once."""

    value: str

    def __str__(self) -> str:
        return self.value

    def as_list(self) -> List[str]:
        return [self.value]

    def template_value(self) -> str:
        return self.value


@dataclass(frozen=True)
class Multi:
    """A variable defined several times, e.g. ``IP=a`` and ``IP=b``."""

    values: Tuple[str, ...]

    def __post_init__(self) -> None:
        # Accept any sequence but store an immutable tuple.
        object.__setattr__(self, "values", tuple(self.values))

    def __str__(self) -> str:
        """List form used on the shell prefix: ``[a b]``."""
        return "[" + " ".join(self.values) + "]"

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def as_list(self) -> List[str]:
        return list(self.values)

    def template_value(self) -> List[str]:
        return list(self.values)


EnvValue = Union[Scalar, Multi]

#: Variable name → resolved value, in first-appearance order.
ResolvedEnv = Dict[str, EnvValue]


def to_template_context(env: Mapping[str, EnvValue]) -> Dict[str, Any]:
    """Flatten *env* for template engines: scalars → ``str``, multis → ``list``."""
    return {key: value.template_value() for key, value in env.items()}
