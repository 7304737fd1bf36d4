from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Literal, Mapping


TemplateKind = Literal["api-doc", "setup-instructions", "architecture-notes", "generic"]
TEMPLATE_KINDS: tuple[str, ...] = (
    "api-doc",
    "setup-instructions",
    "architecture-notes",
    "generic",
)


def utc_now_iso() -> str:
    stamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z")


@dataclass(frozen=True)
class TemplateVariable:
    name: str
    type: str = "string"
    required: bool = False
    description: str = ""
    default: Any = None


@dataclass(frozen=True)
class Template:
    name: str
    kind: TemplateKind
    body: str
    variables: tuple[TemplateVariable, ...] = ()

    def required_variables(self) -> tuple[str, ...]:
        return tuple(var.name for var in self.variables if var.required)


@dataclass(frozen=True)
class TemplateCustomization:
    """Overlay entry shadowing a built-in (or defining an ad-hoc) template."""

    name: str
    body: str
    variable_overrides: Mapping[str, Any] = field(default_factory=dict)
    metadata: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class TemplateMetadata:
    generated_at: str
    version: str = "1.0.0"
    source: str = "docsync"

    @classmethod
    def now(cls, *, version: str = "1.0.0", source: str = "docsync") -> TemplateMetadata:
        return cls(generated_at=utc_now_iso(), version=version, source=source)


@dataclass(frozen=True)
class TemplateContext:
    variables: Mapping[str, Any]
    metadata: TemplateMetadata

    def with_variables(self, extra: Mapping[str, Any]) -> TemplateContext:
        merged = dict(self.variables)
        merged.update(extra)
        return TemplateContext(variables=merged, metadata=self.metadata)
