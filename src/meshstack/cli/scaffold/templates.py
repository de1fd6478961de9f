"""Jinja2 templates for project scaffolding."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


def get_template_env() -> Environment:
    """Get Jinja2 environment for template rendering."""
    return Environment(
        loader=FileSystemLoader(TEMPLATE_DIR),
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )


def template_exists(template_name: str) -> bool:
    return (TEMPLATE_DIR / template_name).is_file()


def render_template_to_file(
    template_name: str, output_path: Path, context: dict[str, Any]
) -> Path:
    """Render a Jinja2 template to a file, creating parent directories."""
    env = get_template_env()
    template = env.get_template(template_name)
    content = template.render(**context)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(content)
    return output_path
