"""Render the installer's console messages from the bundled Jinja2 templates."""

import importlib.resources

import jinja2


def _environment():
    return jinja2.Environment(
        undefined=jinja2.StrictUndefined,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_template(template_name: str, **context) -> str:
    """Render a bundled template such as "next_steps.j2".

    Missing context variables raise jinja2.UndefinedError instead of
    rendering as empty strings.

    Raises:
        FileNotFoundError: If the template file does not exist
    """
    templates = importlib.resources.files(__package__)
    source = templates.joinpath(template_name).read_text(encoding="utf-8")
    return _environment().from_string(source).render(**context)
