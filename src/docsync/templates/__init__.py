from __future__ import annotations

from .directives import DEFAULT_MAX_PASSES, resolve_directives, resolve_one_pass
from .engine import TemplateEngine
from .errors import (
    TemplateError,
    TemplateNotFoundError,
    TemplateRenderError,
    TemplateValidationError,
)
from .models import (
    Template,
    TemplateContext,
    TemplateCustomization,
    TemplateMetadata,
    TemplateVariable,
)
from .registry import TemplateRegistry
from .substitution import ValueSlots, stringify, substitute

__all__ = [
    "DEFAULT_MAX_PASSES",
    "Template",
    "TemplateContext",
    "TemplateCustomization",
    "TemplateEngine",
    "TemplateError",
    "TemplateMetadata",
    "TemplateNotFoundError",
    "TemplateRegistry",
    "TemplateRenderError",
    "TemplateValidationError",
    "TemplateVariable",
    "ValueSlots",
    "resolve_directives",
    "resolve_one_pass",
    "stringify",
    "substitute",
]
