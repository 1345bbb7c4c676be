"""
Render pipeline turning an HTML document into a UI tree.

This module composes the document loader, the parsing adapter, the tree
rewriter and the collapser, and threads the caller's style options through to
the rendering collaborator.
"""

import logging
import sys
import time
import uuid
from typing import Iterable, List, Optional

from htmlview.core.config import settings
from htmlview.services.document_loader import DocumentLoader
from htmlview.tree.collapser import collapse
from htmlview.tree.dom import parse_html
from htmlview.tree.models import Container, InputNode, NodeKind, RenderRequest, RenderedDocument, count_nodes
from htmlview.tree.rewriter import IgnoreNodesFunction, TreeRewriter
from htmlview.utils.error_handler import ConfigurationError, MalformedInputWarning, create_error_response

logger = logging.getLogger(__name__)


class HTMLRenderPipeline:
    """
    Converts HTML documents into RenderedDocument trees.

    Acquisition and configuration problems never raise out of `render`; they
    are logged as warnings and the caller receives None.
    """

    def __init__(self, loader: Optional[DocumentLoader] = None):
        self.loader = loader or DocumentLoader()
        self.root_tag_name = settings.ROOT_TAG_NAME

    def transform(
        self,
        nodes: List[InputNode],
        ignored_tags: Optional[Iterable[str]] = None,
        ignore_nodes_function: Optional[IgnoreNodesFunction] = None
    ) -> Container:
        """
        Rewrite and collapse parsed nodes under an implicit root container.

        Args:
            nodes: Top-level input nodes in document order
            ignored_tags: Tags dropped with their subtree, defaults to DEFAULT_IGNORED_TAGS
            ignore_nodes_function: Optional caller-defined exclusion predicate

        Returns:
            Container: Root block container holding the collapsed tree
        """
        rewriter = TreeRewriter(ignored_tags=ignored_tags, ignore_nodes_function=ignore_nodes_function)
        children = rewriter.rewrite(nodes, parent_tag_name=self.root_tag_name, parent_is_text=False)
        return Container(
            kind=NodeKind.BLOCK,
            tag_name=self.root_tag_name,
            children=tuple(collapse(child) for child in children)
        )

    def render_html(
        self,
        html: str,
        ignored_tags: Optional[Iterable[str]] = None,
        ignore_nodes_function: Optional[IgnoreNodesFunction] = None
    ) -> Container:
        """Parse literal HTML and transform it."""
        return self.transform(parse_html(html), ignored_tags, ignore_nodes_function)

    async def render(
        self,
        request: RenderRequest,
        ignore_nodes_function: Optional[IgnoreNodesFunction] = None
    ) -> Optional[RenderedDocument]:
        """
        Acquire, parse and transform the requested document.

        Args:
            request: Document source and rendering options
            ignore_nodes_function: Optional caller-defined exclusion predicate

        Returns:
            RenderedDocument, or None if no document could be acquired or rendered
        """
        request_id = f"render_{uuid.uuid4().hex[:8]}"
        start_time = time.time()

        try:
            html = await self.loader.load(html=request.html, uri=request.uri)
        except ConfigurationError as e:
            error_response = create_error_response(e, request_id)
            logger.warning(f"[{request_id}] {error_response['message']}")
            return None

        if html is None:
            logger.warning(f"[{request_id}] No document acquired, nothing to render")
            return None

        try:
            root = self.render_html(html, request.ignored_tags, ignore_nodes_function)
        except RecursionError:
            warning = MalformedInputWarning(
                "Document is nested too deeply to render",
                details={"recursion_limit": sys.getrecursionlimit()}
            )
            logger.warning(f"[{request_id}] {create_error_response(warning, request_id)['message']}")
            return None

        duration = time.time() - start_time
        logger.info(f"[{request_id}] Rendered {count_nodes(root)} node(s) in {duration:.3f}s")

        return RenderedDocument(
            root=root,
            tags_styles=request.tags_styles,
            classes_styles=request.classes_styles,
            ignored_styles=request.ignored_styles,
            em_size=request.em_size or settings.DEFAULT_EM_SIZE,
            images_max_width=request.images_max_width
        )
