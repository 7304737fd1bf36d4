"""Error taxonomy for the template engine and the default documents used to
recover from it."""

from __future__ import annotations


class TemplateError(Exception):
    def __init__(self, message: str, template_name: str | None = None) -> None:
        super().__init__(message)
        self.template_name = template_name


class TemplateNotFoundError(TemplateError, LookupError):
    def __init__(self, template_name: str) -> None:
        super().__init__(f"template not found: {template_name}", template_name)


class TemplateRenderError(TemplateError):
    def __init__(self, template_name: str, message: str) -> None:
        super().__init__(
            f"failed to render template {template_name!r}: {message}",
            template_name,
        )


class TemplateValidationError(TemplateError, ValueError):
    def __init__(self, template_name: str, errors: list[str]) -> None:
        label = template_name or "<unnamed>"
        super().__init__(
            f"template validation failed for {label!r}: {', '.join(errors)}",
            template_name,
        )
        self.errors = list(errors)


_NOT_FOUND_NOTE = (
    "This documentation was generated using a default template because the "
    "requested template was not found.\n\n"
    "## Content\n\n"
    "Please customize this template to match your project's needs."
)
_RENDER_FAILED_NOTE = (
    "An error occurred while rendering the template. This is fallback content."
)


def default_document(template_name: str, error: TemplateError, timestamp: str) -> str:
    name = template_name.strip() or "untitled"
    if isinstance(error, TemplateNotFoundError):
        note = _NOT_FOUND_NOTE
        suffix = "using default template fallback"
    else:
        note = _RENDER_FAILED_NOTE
        suffix = "using error recovery"
    return f"# {name}\n\n{note}\n\n---\n*Generated on {timestamp} {suffix}*\n"
