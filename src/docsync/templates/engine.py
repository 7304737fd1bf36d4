"""Render facade over the template registry.

``TemplateEngine`` resolves a template by name, collapses its directives,
and fills the remaining placeholders. ``render`` raises typed errors;
``render_with_fallback`` always hands back a usable document.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from .definitions import builtin_templates
from .directives import DEFAULT_MAX_PASSES, resolve_directives
from .errors import (
    TemplateError,
    TemplateNotFoundError,
    TemplateRenderError,
    default_document,
)
from .models import Template, TemplateContext, TemplateCustomization, utc_now_iso
from .registry import TemplateRegistry
from .substitution import ValueSlots, substitute


logger = logging.getLogger(__name__)


class TemplateEngine:
    def __init__(
        self,
        registry: TemplateRegistry | None = None,
        *,
        max_passes: int = DEFAULT_MAX_PASSES,
    ) -> None:
        if max_passes < 1:
            raise ValueError(f"max_passes must be >= 1, got {max_passes}")
        self.registry = registry if registry is not None else TemplateRegistry(builtin_templates())
        self.max_passes = max_passes

    def register_template(self, template: Template) -> None:
        self.registry.register(template)

    def get_template(self, name: str) -> Template | None:
        return self.registry.get(name)

    def list_templates(self) -> list[Template]:
        return self.registry.list()

    def customize_template(self, customization: TemplateCustomization) -> None:
        self.registry.customize(customization)

    def get_custom_template(self, name: str) -> TemplateCustomization | None:
        return self.registry.get_custom(name)

    def remove_custom_template(self, name: str) -> bool:
        return self.registry.remove_custom(name)

    def render(self, name: str, context: TemplateContext) -> str:
        template = self.registry.get(name)
        if template is None:
            raise TemplateNotFoundError(name)

        variables = self._effective_variables(template, context.variables)
        missing = [
            var_name for var_name in template.required_variables() if var_name not in variables
        ]
        if missing:
            raise TemplateRenderError(
                name, f"missing required variables: {', '.join(missing)}"
            )

        try:
            slots = ValueSlots()
            content = resolve_directives(template.body, variables, self.max_passes, slots)
            return slots.restore(substitute(content, variables, context.metadata))
        except Exception as exc:
            raise TemplateRenderError(name, str(exc) or type(exc).__name__) from exc

    def render_with_fallback(
        self,
        name: str,
        context: TemplateContext,
        fallback_data: Mapping[str, Any] | None = None,
    ) -> str:
        try:
            return self.render(name, context)
        except TemplateError as exc:
            error = exc
            logger.warning("render of %s failed: %s", name, exc)

        if fallback_data:
            try:
                return self.render(name, context.with_variables(fallback_data))
            except TemplateError as exc:
                error = exc
                logger.warning("fallback render of %s failed: %s", name, exc)

        timestamp = context.metadata.generated_at or utc_now_iso()
        return default_document(name, error, timestamp)

    def _effective_variables(
        self,
        template: Template,
        provided: Mapping[str, Any],
    ) -> dict[str, Any]:
        variables: dict[str, Any] = {
            var.name: var.default for var in template.variables if var.default is not None
        }
        variables.update(provided)
        custom = self.registry.get_custom(template.name)
        if custom is not None:
            variables.update(custom.variable_overrides)
        return variables
