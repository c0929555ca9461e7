"""Prompt templating helpers."""
from __future__ import annotations
from pathlib import Path

CONFIG_DIR = Path(__file__).resolve().parent.parent / "configs"

def load_template(name: str = "recipe_prompt.txt") -> str:
    """
    Load a prompt template file.

    Args:
        name: Template file name inside the packaged configs directory,
            or a path to a template file elsewhere.
    """
    path = Path(name)
    if not path.is_absolute() and not path.exists():
        path = CONFIG_DIR / name
    return path.read_text(encoding="utf-8").strip()

def render_prompt(template: str, user_input: str) -> str:
    """
    Render user input into the template.

    Args:
        template: Template content containing {{input}}.
        user_input: Input string.

    Returns:
        Rendered prompt.
    """
    return template.replace("{{input}}", user_input)
