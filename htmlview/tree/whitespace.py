"""
Whitespace normalization for text nodes.

Mirrors HTML whitespace collapsing, with trimming decided by the position of
the text node among the rendering-significant children of its parent and by
what sits on either side of it.
"""

import re
from typing import Optional

from htmlview.tree.tags import LIST_CONTAINER_TAGS, is_text_tag

# HTML whitespace only; non-breaking spaces are content
WHITESPACE_RUN = re.compile(r'[ \t\n\r\f]+')


def is_blank(text: Optional[str]) -> bool:
    """True when `text` holds nothing but HTML whitespace."""
    return not text or WHITESPACE_RUN.fullmatch(text) is not None


def normalize(
    text: str,
    sibling_index: int,
    parent_tag_name: str,
    sibling_count: Optional[int] = None,
    prev_inline: bool = False,
    next_inline: bool = False
) -> str:
    """
    Collapse whitespace in `text` and trim it according to its position.

    A boundary space is only kept when inline content sits on that side, so a
    middle child between blocks (or with unknown neighbours) is trimmed on
    both sides.

    Args:
        text: Raw character data of the text node
        sibling_index: Position among the parent's rendering-significant children
        parent_tag_name: Tag name of the parent element
        sibling_count: Number of rendering-significant children, used to detect the last child
        prev_inline: The preceding significant sibling flows inline with this text
        next_inline: The following significant sibling flows inline with this text

    Returns:
        str: Normalized text, empty when the node contributes nothing to layout
    """
    if not text:
        return ''

    is_first = sibling_index == 0
    is_last = sibling_count is not None and sibling_index >= sibling_count - 1
    parent = (parent_tag_name or '').lower()

    collapsed = WHITESPACE_RUN.sub(' ', text)

    if collapsed == ' ':
        # Whitespace-only: only meaningful between inline content
        if is_first or is_last or parent in LIST_CONTAINER_TAGS or not is_text_tag(parent):
            return ''
        return collapsed

    if is_first or not prev_inline:
        collapsed = collapsed.lstrip(' ')
    if is_last or not next_inline:
        collapsed = collapsed.rstrip(' ')
    return collapsed
