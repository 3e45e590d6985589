"""Module to turn positioned text fragments into HTML markup"""

import html
from typing import Iterable

from ..models.domain import TextFragment

PAGE_CLASS = "pdf-page"
CONTAINER_CLASS = "html-container"


def css_number(value: float) -> str:
    """
    Format a coordinate for inline CSS.

    Integral values are written without a fractional part (12.0 -> "12").

    Args:
        value (float): The number to format.

    Returns:
        str: The shortest representation of the number.
    """
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def fragment_style(fragment: TextFragment) -> str:
    """Inline style placing a fragment: font-size from a, left/top from e/f."""
    x, y = fragment.position
    return (
        f"font-size:{css_number(fragment.font_size)}px; "
        f"left:{css_number(x)}px; "
        f"top:{css_number(y)}px;"
    )


def page_html(fragments: Iterable[TextFragment]) -> str:
    """
    Generate the markup block of one page.

    Args:
        fragments (Iterable[TextFragment]): The page's text fragments.

    Returns:
        str: A page container with one positioned span per fragment.
    """
    spans = "".join(
        f'<span style="{fragment_style(fragment)}">{html.escape(fragment.text)}</span>'
        for fragment in fragments
    )
    return f'<div class="{PAGE_CLASS}">{spans}</div>'


def container_html(content: str) -> str:
    """Place extracted page blocks inside the output container."""
    return f'<div class="{CONTAINER_CLASS}">{content}</div>'
