"""
Tree rewriter converting parsed HTML nodes into UI container nodes.

The rewriter walks one sibling list at a time. State that spans siblings (list
item numbering, images waiting to be moved out of text flow) lives in local
accumulators of that walk and is handed back to the caller, never stored on
the rewriter itself.
"""

import logging
from typing import Callable, Dict, Iterable, List, NamedTuple, Optional, Sequence, Tuple

from htmlview.tree.models import (
    Container, ElementNode, GroupInfo, InputNode, NodeKind, OutputNode, TextNode, TextRun
)
from htmlview.tree.tags import DEFAULT_IGNORED_TAGS, container_kind
from htmlview.tree.whitespace import is_blank, normalize

logger = logging.getLogger(__name__)

# Synthetic wrappers emitted around hoisted images
HOIST_GROUP_TAG = 'x-hoist-group'
HOIST_ITEM_TAG = 'x-hoist-item'

IgnoreNodesFunction = Callable[[InputNode, str, bool], bool]


def is_hoist_wrapper(node: OutputNode) -> bool:
    return isinstance(node, Container) and node.tag_name in (HOIST_GROUP_TAG, HOIST_ITEM_TAG)


class _Sibling(NamedTuple):
    """A visible sibling after its element (if any) has been rewritten."""
    node: InputNode
    element: Optional[Container]
    hoisted: List[Container]
    significant: bool  # renders in place
    inline: bool


class TreeRewriter:
    """
    Rewrites input nodes into TextRun and Container nodes.

    Images found inside text flow cannot be laid out there, so they are held
    back and emitted just before the next block container of an enclosing
    block context.
    """

    def __init__(
        self,
        ignored_tags: Optional[Iterable[str]] = None,
        ignore_nodes_function: Optional[IgnoreNodesFunction] = None
    ):
        """
        Initialize the rewriter.

        Args:
            ignored_tags: Tag names dropped with their whole subtree. Defaults to DEFAULT_IGNORED_TAGS
            ignore_nodes_function: Optional predicate (node, parent_tag_name, parent_is_text) -> bool
        """
        if ignored_tags is None:
            ignored_tags = DEFAULT_IGNORED_TAGS
        self.ignored_tags = frozenset(tag.lower() for tag in ignored_tags)
        self.ignore_nodes_function = ignore_nodes_function

    def rewrite(
        self,
        siblings: Optional[Sequence[InputNode]],
        parent_tag_name: str = 'body',
        parent_is_text: bool = False,
        parent_attributes: Optional[Dict[str, str]] = None
    ) -> List[OutputNode]:
        """
        Rewrite a sibling list.

        Images still waiting for a block container once the whole list has been
        walked are appended at the end, so nothing is lost.

        Args:
            siblings: Input nodes in document order
            parent_tag_name: Tag name of the element owning `siblings`
            parent_is_text: True when `siblings` are laid out inside text flow
            parent_attributes: Attributes of the owning element, carried by text runs

        Returns:
            List of output nodes in document order
        """
        outputs, pending = self._rewrite_siblings(
            siblings, (parent_tag_name or '').lower(), parent_is_text, parent_attributes or {}
        )
        if pending:
            outputs.append(self._wrap_hoisted(pending))
        return outputs

    def _rewrite_siblings(
        self,
        siblings: Optional[Sequence[InputNode]],
        parent_tag_name: str,
        parent_is_text: bool,
        parent_attributes: Dict[str, str]
    ) -> Tuple[List[OutputNode], List[Container]]:
        """
        Rewrite one sibling list, returning its outputs and the images it could not place.

        Elements are rewritten first so that text trimming can look at which
        siblings actually render and whether they flow inline.
        """
        siblings = list(siblings or [])
        li_ordinals = self._li_ordinals(siblings)
        entries: List[_Sibling] = []

        for index, node in enumerate(siblings):
            if self._is_ignored(node, parent_tag_name, parent_is_text):
                continue

            if isinstance(node, TextNode):
                entries.append(_Sibling(node, None, [], not is_blank(node.data), True))
            elif isinstance(node, ElementNode):
                group_info = None
                if index in li_ordinals:
                    group_info = GroupInfo(index=li_ordinals[index], count=len(li_ordinals))
                element, hoisted = self._rewrite_element(node, group_info)
                in_place = element is not None and not self._is_hoisted(element, parent_tag_name, parent_is_text)
                inline = in_place and element.kind is NodeKind.TEXT
                entries.append(_Sibling(node, element, hoisted, in_place, inline))
            else:
                logger.debug(f"Skipping unsupported node {type(node).__name__} under <{parent_tag_name}>")

        prev_inline, next_inline = self._inline_neighbours(entries)
        total = sum(1 for entry in entries if entry.significant)
        rank = 0
        outputs: List[OutputNode] = []
        pending: List[Container] = []

        for position, entry in enumerate(entries):
            if isinstance(entry.node, TextNode):
                text = normalize(
                    entry.node.data,
                    rank,
                    parent_tag_name,
                    total if entry.significant else total + 1,
                    prev_inline=prev_inline[position],
                    next_inline=next_inline[position]
                )
                if text:
                    outputs.append(TextRun(text=text, tag_name=parent_tag_name, attributes=dict(parent_attributes)))
            else:
                element = entry.element
                pending.extend(entry.hoisted)
                if element is None:
                    continue

                if not entry.significant:
                    pending.append(element)
                elif pending and not parent_is_text and element.kind is NodeKind.BLOCK:
                    logger.debug(f"Placing {len(pending)} hoisted image(s) before <{element.tag_name}>")
                    outputs.append(self._wrap_hoisted(pending, element))
                    pending = []
                else:
                    outputs.append(element)

            if entry.significant:
                rank += 1

        return outputs, pending

    def _rewrite_element(
        self,
        node: ElementNode,
        group_info: Optional[GroupInfo] = None
    ) -> Tuple[Optional[Container], List[Container]]:
        """
        Build the container for one element.

        Returns:
            Tuple of (container or None when it renders nothing, images hoisted out of its children)
        """
        tag_name = (node.tag_name or '').lower()
        attributes = dict(node.attributes or {})
        kind = container_kind(tag_name)

        children, hoisted = self._rewrite_siblings(
            node.children, tag_name, kind is NodeKind.TEXT, attributes
        )

        # Text containers with nothing left to show are not rendered
        if kind is NodeKind.TEXT and not children:
            return None, hoisted

        container = Container(
            kind=kind,
            tag_name=tag_name,
            attributes=attributes,
            children=tuple(children),
            group_info=group_info
        )
        return container, hoisted

    @staticmethod
    def _li_ordinals(siblings: Sequence[InputNode]) -> Dict[int, int]:
        """Map the index of every `li` sibling to its ordinal among them."""
        ordinals = {}
        for index, sibling in enumerate(siblings):
            if isinstance(sibling, ElementNode) and (sibling.tag_name or '').lower() == 'li':
                ordinals[index] = len(ordinals)
        return ordinals

    @staticmethod
    def _is_hoisted(element: Container, parent_tag_name: str, parent_is_text: bool) -> bool:
        return element.tag_name == 'img' and parent_is_text and parent_tag_name != 'a'

    @staticmethod
    def _inline_neighbours(entries: Sequence[_Sibling]) -> Tuple[List[bool], List[bool]]:
        """For each entry, whether the nearest significant sibling before / after it flows inline."""
        prev_inline = []
        last = False
        for entry in entries:
            prev_inline.append(last)
            if entry.significant:
                last = entry.inline

        next_inline = [False] * len(entries)
        last = False
        for position in range(len(entries) - 1, -1, -1):
            next_inline[position] = last
            if entries[position].significant:
                last = entries[position].inline

        return prev_inline, next_inline

    def _is_ignored(self, node: InputNode, parent_tag_name: str, parent_is_text: bool) -> bool:
        if self.ignore_nodes_function and self.ignore_nodes_function(node, parent_tag_name, parent_is_text) is True:
            return True
        return isinstance(node, ElementNode) and (node.tag_name or '').lower() in self.ignored_tags

    @staticmethod
    def _wrap_hoisted(images: List[Container], element: Optional[Container] = None) -> Container:
        """Group hoisted images, each in its own block, ahead of `element`."""
        children: List[OutputNode] = [
            Container(kind=NodeKind.BLOCK, tag_name=HOIST_ITEM_TAG, children=(image,))
            for image in images
        ]
        if element is not None:
            children.append(element)
        return Container(kind=NodeKind.BLOCK, tag_name=HOIST_GROUP_TAG, children=tuple(children))
