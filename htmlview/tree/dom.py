"""
Adapters producing input nodes for the tree rewriter.

Two sources are supported: HTML markup parsed with BeautifulSoup, and
htmlparser2-style dictionaries (`{type, data, name, attribs, children}`) as
delivered by JavaScript-side parsers.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag, NavigableString, Comment, Doctype, CData, ProcessingInstruction, Declaration

from htmlview.tree.models import ElementNode, InputNode, TextNode
from htmlview.utils.error_handler import MalformedInputWarning, create_error_response

logger = logging.getLogger(__name__)

# NavigableString subclasses that carry no renderable text
NON_TEXT_STRINGS = (Comment, Doctype, CData, ProcessingInstruction, Declaration)


def parse_html(html: str) -> List[InputNode]:
    """
    Parse HTML markup into a list of top-level input nodes.

    Args:
        html: HTML markup, a fragment or a full document

    Returns:
        List of TextNode / ElementNode in document order
    """
    if not html:
        return []
    soup = BeautifulSoup(html, 'html.parser')
    return _convert_contents(soup.contents)


def _convert_contents(contents: Iterable) -> List[InputNode]:
    nodes = []
    for item in contents:
        node = _convert(item)
        if node is not None:
            nodes.append(node)
    return nodes


def _convert(item) -> Optional[InputNode]:
    if isinstance(item, Tag):
        return ElementNode(
            tag_name=item.name.lower(),
            attributes=_flatten_attributes(item.attrs),
            children=_convert_contents(item.contents)
        )
    if isinstance(item, NavigableString) and not isinstance(item, NON_TEXT_STRINGS):
        return TextNode(data=str(item))
    return None


def _flatten_attributes(attrs: Mapping[str, Any]) -> Dict[str, str]:
    """BeautifulSoup returns multi-valued attributes such as `class` as lists."""
    flattened = {}
    for name, value in attrs.items():
        if isinstance(value, (list, tuple)):
            value = ' '.join(value)
        flattened[name.lower()] = '' if value is None else str(value)
    return flattened


def from_mappings(nodes: Optional[Iterable[Mapping[str, Any]]]) -> List[InputNode]:
    """Convert a list of htmlparser2-style node dictionaries, skipping unsupported types."""
    converted = []
    for node in nodes or []:
        input_node = from_mapping(node)
        if input_node is not None:
            converted.append(input_node)
    return converted


def from_mapping(node: Mapping[str, Any]) -> Optional[InputNode]:
    """
    Convert one htmlparser2-style node dictionary.

    Nodes whose `type` is neither "text" nor "tag" are ignored. A tag without a
    usable `children` list is treated as having no children.
    """
    if not isinstance(node, Mapping):
        _warn_malformed(f"Expected a node mapping, got {type(node).__name__}")
        return None

    node_type = node.get('type')
    if node_type == 'text':
        return TextNode(data=str(node.get('data') or ''))
    if node_type != 'tag':
        logger.debug(f"Ignoring node of type {node_type!r}")
        return None

    name = node.get('name')
    if not name:
        _warn_malformed("Tag node without a name")
        return None

    children = node.get('children')
    if not isinstance(children, list):
        _warn_malformed(f"Tag <{name}> has no children list", {"children": repr(children)})
        children = []

    attribs = node.get('attribs') or {}
    return ElementNode(
        tag_name=str(name).lower(),
        attributes={str(k).lower(): '' if v is None else str(v) for k, v in attribs.items()},
        children=from_mappings(children)
    )


def _warn_malformed(message: str, details: Optional[Dict[str, Any]] = None) -> None:
    warning = MalformedInputWarning(message, details=details)
    logger.warning(f"Malformed input node: {create_error_response(warning)['message']}")
