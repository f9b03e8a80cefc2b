from __future__ import annotations

import copy
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping


@dataclass(frozen=True)
class Document:
    """Opaque document payload. The content is deep-copied into a read-only mapping."""

    content: Mapping[str, Any] = field(default_factory=dict)

    # content is a mapping, so documents compare by value but cannot be hashed
    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        object.__setattr__(self, "content", MappingProxyType(copy.deepcopy(dict(self.content))))

    @property
    def is_empty(self) -> bool:
        return not self.content

    def to_dict(self) -> dict[str, Any]:
        return copy.deepcopy(dict(self.content))


@dataclass(frozen=True)
class SubmissionResult:
    status_code: int
    body: bytes = b""
    elapsed_seconds: float = 0.0

    @property
    def ok(self) -> bool:
        return self.status_code == 200
