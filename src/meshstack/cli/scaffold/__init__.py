"""Scaffold generation for meshstack projects."""

from .scaffold import (
    TEMPLATE_VERSION,
    apply_template_update,
    create_overlays,
    create_project_dirs,
    generate_ci,
    generate_service,
    read_template_marker,
    regenerate_chart_templates,
    validate_service_name,
    write_template_marker,
)

__all__ = [
    "TEMPLATE_VERSION",
    "apply_template_update",
    "create_overlays",
    "create_project_dirs",
    "generate_ci",
    "generate_service",
    "read_template_marker",
    "regenerate_chart_templates",
    "validate_service_name",
    "write_template_marker",
]
