"""
Tag classification tables.

Maps an HTML tag name to a TagCategory. Adding support for a tag is a matter of
adding it to one of the tables below.
"""

from htmlview.tree.models import NodeKind, TagCategory

BLOCK_TAGS = frozenset({
    'address', 'article', 'aside', 'footer', 'hgroup', 'nav', 'section', 'blockquote', 'dd', 'div',
    'dl', 'dt', 'figure', 'hr', 'li', 'main', 'ol', 'ul', 'a', 'br', 'cite', 'data', 'rp', 'rtc', 'ruby',
    'area', 'img', 'map', 'center',
})

TEXT_TAGS = frozenset({
    'h1', 'h2', 'h3', 'h4', 'h5', 'h6', 'figcaption', 'p', 'pre', 'abbr', 'b', 'bdi', 'bdo', 'code',
    'dfn', 'i', 'kbd', 'mark', 'q', 'rt', 's', 'samp', 'small', 'span', 'strong', 'sub', 'sup', 'time',
    'u', 'var', 'wbr', 'del', 'ins', 'blink', 'font',
})

IGNORED_TAGS = frozenset({
    'head', 'script', 'style', 'audio', 'video', 'track', 'embed', 'object', 'param', 'source', 'canvas',
    'noscript', 'caption', 'col', 'colgroup', 'table', 'tbody', 'td', 'tfoot', 'th', 'thead', 'tr',
    'button', 'datalist', 'fieldset', 'form', 'input', 'label', 'legend', 'meter', 'optgroup', 'option',
    'output', 'progress', 'select', 'textarea', 'details', 'dialog', 'menu', 'menuitem', 'summary',
})

# Default set of tags a caller drops entirely
DEFAULT_IGNORED_TAGS = IGNORED_TAGS

# Elements whose identity is their rendered content
REPLACED_TAGS = frozenset({'img', 'br', 'hr', 'area', 'wbr'})

LIST_CONTAINER_TAGS = frozenset({'ul', 'ol'})


def classify(tag_name: str) -> TagCategory:
    """Classify a tag name. Unknown tags are treated as blocks."""
    name = (tag_name or '').lower()
    if name in TEXT_TAGS:
        return TagCategory.INLINE_TEXT
    if name in IGNORED_TAGS:
        return TagCategory.IGNORED
    return TagCategory.BLOCK


def container_kind(tag_name: str) -> NodeKind:
    """
    Container kind used for an element's children.

    Tags from the ignored table only reach this point when the caller chose not
    to ignore them, in which case they are laid out as blocks.
    """
    if classify(tag_name) is TagCategory.INLINE_TEXT:
        return NodeKind.TEXT
    return NodeKind.BLOCK


def is_text_tag(tag_name: str) -> bool:
    return classify(tag_name) is TagCategory.INLINE_TEXT
