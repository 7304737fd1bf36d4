from __future__ import annotations

from typing import TYPE_CHECKING

__all__ = [
    "__version__",
    "TemplateContext",
    "TemplateEngine",
    "TemplateMetadata",
]

__version__ = "0.1.0"

if TYPE_CHECKING:
    from .templates import TemplateContext, TemplateEngine, TemplateMetadata


def __getattr__(name: str):
    if name in {"TemplateContext", "TemplateEngine", "TemplateMetadata"}:
        from . import templates

        return getattr(templates, name)
    raise AttributeError(f"module 'docsync' has no attribute {name!r}")
