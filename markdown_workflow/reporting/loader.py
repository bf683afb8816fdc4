"""
Report template loader.

Renders the plain-text reports behind --list and --validate from the
.jinja2 files next to this module. Templates are strict: a context
variable the caller forgot is an error, never an empty string.
"""

from functools import lru_cache
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from .templates import Template

TEMPLATES_DIR = Path(__file__).parent / "templates"
TEMPLATE_SUFFIX = ".jinja2"


def _template_path(name: str) -> Path:
    return TEMPLATES_DIR / f"{name}{TEMPLATE_SUFFIX}"


def _check_report_templates():
    """Every Template constant must have a file on disk. Fails at import."""
    missing = [
        _template_path(value)
        for key, value in vars(Template).items()
        if not key.startswith("_") and not _template_path(value).exists()
    ]
    if missing:
        raise FileNotFoundError(f"Report template(s) missing: {', '.join(map(str, missing))}")


_check_report_templates()


@lru_cache(maxsize=1)
def _report_environment() -> Environment:
    # Reports are terminal text: no autoescaping, and the trailing newline is kept.
    return Environment(
        loader=FileSystemLoader(TEMPLATES_DIR),
        autoescape=False,
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def render(template_name: str, **context) -> str:
    """
    Render a report.

    Args:
        template_name: A Template constant (file name without the suffix)
        **context: The workflow, its source label and any derived counts

    Raises:
        jinja2.UndefinedError: if the template uses a variable not in context
    """
    template = _report_environment().get_template(f"{template_name}{TEMPLATE_SUFFIX}")
    return template.render(**context)
