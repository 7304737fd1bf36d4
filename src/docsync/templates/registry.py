from __future__ import annotations

import logging
from collections.abc import Iterable

from .errors import TemplateValidationError
from .models import TEMPLATE_KINDS, Template, TemplateCustomization


logger = logging.getLogger(__name__)


def _blank(value: object) -> bool:
    return not isinstance(value, str) or not value.strip()


def validate_template(template: Template) -> list[str]:
    errors: list[str] = []
    if _blank(template.name):
        errors.append("template name is required")
    if _blank(template.body):
        errors.append("template body is required")
    if template.kind not in TEMPLATE_KINDS:
        expected = ", ".join(TEMPLATE_KINDS)
        errors.append(f"template kind must be one of: {expected}")
    for idx, var in enumerate(template.variables):
        if _blank(var.name):
            errors.append(f"variables[{idx}] name is required")
    return errors


def validate_customization(customization: TemplateCustomization) -> list[str]:
    errors: list[str] = []
    if _blank(customization.name):
        errors.append("customization name is required")
    if _blank(customization.body):
        errors.append("customization body is required")
    return errors


class TemplateRegistry:
    """Built-in template definitions plus a customization overlay.

    Lookups consult the overlay first. Instances share nothing, so separate
    engines never see each other's registrations.
    """

    def __init__(self, templates: Iterable[Template] = ()) -> None:
        self._builtins: dict[str, Template] = {}
        self._overlay: dict[str, TemplateCustomization] = {}
        for template in templates:
            self.register(template)

    def register(self, template: Template) -> None:
        errors = validate_template(template)
        if errors:
            raise TemplateValidationError(template.name, errors)
        self._builtins[template.name] = template
        logger.debug("registered template %s (%s)", template.name, template.kind)

    def customize(self, customization: TemplateCustomization) -> None:
        errors = validate_customization(customization)
        if errors:
            raise TemplateValidationError(customization.name, errors)
        self._overlay[customization.name] = customization
        logger.debug("customized template %s", customization.name)

    def remove_custom(self, name: str) -> bool:
        removed = self._overlay.pop(name, None)
        if removed is not None:
            logger.debug("removed customization %s", name)
        return removed is not None

    def get_custom(self, name: str) -> TemplateCustomization | None:
        return self._overlay.get(name)

    def get(self, name: str) -> Template | None:
        custom = self._overlay.get(name)
        if custom is not None:
            return self._as_template(custom)
        return self._builtins.get(name)

    def list(self) -> list[Template]:
        out = list(self._builtins.values())
        out.extend(self._as_template(custom) for custom in self._overlay.values())
        return out

    def list_custom(self) -> list[TemplateCustomization]:
        return list(self._overlay.values())

    def _as_template(self, custom: TemplateCustomization) -> Template:
        base = self._builtins.get(custom.name)
        return Template(
            name=custom.name,
            kind=base.kind if base is not None else "generic",
            body=custom.body,
        )
