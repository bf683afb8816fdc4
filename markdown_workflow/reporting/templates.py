"""
Report template names.

Each constant names a .jinja2 file in the templates directory.
"""


class Template:
    """Report names. Use these instead of raw strings."""

    STEP_LISTING = "step_listing"  # --list
    VALIDATION_SUMMARY = "validation_summary"  # --validate
