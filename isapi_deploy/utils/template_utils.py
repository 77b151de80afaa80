"""Template processing utilities"""

import string
from typing import Dict, Any


def render_template(template: str,
                    variables: Dict[str, Any],
                    safe: bool = True) -> str:
    """
    Render a ``${name}`` template

    Args:
        template: Template string
        variables: Variables to substitute
        safe: Leave unknown ``${...}`` references untouched instead of raising

    Returns:
        Rendered string
    """
    tmpl = string.Template(template)

    if safe:
        return tmpl.safe_substitute(variables)
    return tmpl.substitute(variables)


def replace_placeholder(content: str, placeholder: str, value: str) -> str:
    """
    Replace every literal occurrence of a placeholder

    This is plain string replacement, no template syntax is
    interpreted, so the placeholder must match exactly.

    Args:
        content: Text to process
        placeholder: Literal token to replace
        value: Replacement text

    Returns:
        Processed text
    """
    if not placeholder:
        raise ValueError("Placeholder cannot be empty")
    return content.replace(placeholder, value)
