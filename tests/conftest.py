from __future__ import annotations

import pytest

from docsync.templates import TemplateContext, TemplateEngine, TemplateMetadata


GENERATED_AT = "2024-05-01T12:00:00.000Z"


@pytest.fixture
def metadata() -> TemplateMetadata:
    return TemplateMetadata(generated_at=GENERATED_AT, version="2.1.0", source="unit-test")


@pytest.fixture
def engine() -> TemplateEngine:
    return TemplateEngine()


@pytest.fixture
def make_context(metadata: TemplateMetadata):
    def _make(**variables: object) -> TemplateContext:
        return TemplateContext(variables=variables, metadata=metadata)

    return _make
