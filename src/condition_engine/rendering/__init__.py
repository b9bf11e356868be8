"""Template rendering — placeholder substitution and template validation."""

from condition_engine.rendering.placeholders import (
    PlaceholderValues,
    TemplateValidation,
    build_placeholder_values,
    extract_placeholders,
    render_template,
    validate_template,
)

__all__ = [
    "PlaceholderValues",
    "TemplateValidation",
    "build_placeholder_values",
    "extract_placeholders",
    "render_template",
    "validate_template",
]
