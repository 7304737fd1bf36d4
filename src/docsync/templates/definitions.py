from __future__ import annotations

from .models import Template, TemplateVariable


API_DOC_BODY = """\
# {{title}} Documentation

## Overview

{{#if description}}{{description}}{{else}}API Documentation{{/if}}

## Endpoints

{{#if apis}}{{#each apis}}### {{name}}

**Method:** {{method}}
**Path:** {{path}}

{{#if this.description}}{{this.description}}

{{/if}}{{#if this.parameters}}**Parameters:**
{{#each this.parameters}}- `{{#if this.name}}{{this.name}}{{else}}unnamed{{/if}}` \
({{#if this.type}}{{this.type}}{{else}}unknown{{/if}})\
{{#if this.optional}} - Optional{{/if}}\
{{#if this.description}} - {{this.description}}{{/if}}
{{/each}}
{{/if}}**Returns:** {{#if this.returnType}}{{this.returnType}}{{else}}unknown{{/if}}

{{/each}}{{else}}*No endpoints documented yet.*

{{/if}}---
*Generated on {{timestamp}}*
"""

SETUP_INSTRUCTIONS_BODY = """\
# Setup Instructions

## Installation

```bash
{{install_command}}
```

## Configuration

{{#if config_steps}}{{#each config_steps}}- {{this}}
{{/each}}{{else}}No additional configuration required.
{{/if}}
## Usage

{{#if usage_example}}```python
{{usage_example}}
```
{{else}}See the project README for usage.
{{/if}}{{#if notes}}
## Additional Notes

{{notes}}
{{/if}}
---
*Generated on {{timestamp}}*
"""

ARCHITECTURE_NOTES_BODY = """\
# Architecture Notes

## System Overview

{{#if overview}}{{overview}}{{else}}System overview not provided.{{/if}}

## Components

{{#if components}}{{#each components}}### {{name}}

{{description}}

{{/each}}{{else}}No components documented yet.

{{/if}}{{#if changes}}## Recent Changes

{{#each changes}}### {{component}} ({{type}})

{{description}}

**Impact:** {{impact}}

{{/each}}{{/if}}---
*Generated on {{timestamp}}*
"""


def builtin_templates() -> tuple[Template, ...]:
    return (
        Template(
            name="api-doc",
            kind="api-doc",
            body=API_DOC_BODY,
            variables=(
                TemplateVariable("title", "string", default="API", description="Document title prefix"),
                TemplateVariable("description", "string", description="Overview paragraph"),
                TemplateVariable(
                    "apis",
                    "array",
                    default=[],
                    description=(
                        "Records with name, method, path, description, returnType "
                        "and parameters (name, type, optional, description)"
                    ),
                ),
            ),
        ),
        Template(
            name="setup-instructions",
            kind="setup-instructions",
            body=SETUP_INSTRUCTIONS_BODY,
            variables=(
                TemplateVariable(
                    "install_command",
                    "string",
                    required=True,
                    description="Shell command that installs the project",
                ),
                TemplateVariable("config_steps", "array", default=[], description="Configuration steps"),
                TemplateVariable("usage_example", "string", description="Code sample"),
                TemplateVariable("notes", "string", description="Free-form closing notes"),
            ),
        ),
        Template(
            name="architecture-notes",
            kind="architecture-notes",
            body=ARCHITECTURE_NOTES_BODY,
            variables=(
                TemplateVariable("overview", "string", description="System overview"),
                TemplateVariable(
                    "components",
                    "array",
                    default=[],
                    description="Records with name and description",
                ),
                TemplateVariable(
                    "changes",
                    "array",
                    default=[],
                    description="Records with component, type, description and impact",
                ),
            ),
        ),
    )
