"""
Collapsing of redundant single-child containers.
"""

from dataclasses import replace

from htmlview.tree.models import Container, OutputNode
from htmlview.tree.tags import REPLACED_TAGS


def collapse(node: OutputNode) -> OutputNode:
    """
    Merge containers whose only child is a container of the same kind.

    Children are collapsed first. The merged node keeps the outer tag name and
    group info, takes the inner children, and combines attributes with the
    inner ones taking precedence. Applying it twice gives the same tree.
    """
    if not isinstance(node, Container):
        return node

    children = tuple(collapse(child) for child in node.children)

    if len(children) == 1 and _can_merge(node, children[0]):
        inner = children[0]
        return replace(
            node,
            attributes={**node.attributes, **inner.attributes},
            children=inner.children,
        )

    return replace(node, children=children)


def _can_merge(outer: Container, inner: OutputNode) -> bool:
    if not isinstance(inner, Container) or inner.kind is not outer.kind:
        return False
    # Narrower than a plain same-kind merge: folding an image, line break or
    # numbered list item into its wrapper would take its tag and group info
    # away and change what is rendered, so those stay as separate nodes.
    if inner.tag_name in REPLACED_TAGS or inner.group_info is not None:
        return False
    return True
