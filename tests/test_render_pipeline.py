"""
Tests for the render pipeline.

This module covers the end-to-end conversion of HTML markup into a rendered
document, including the failure paths that must yield no output.
"""

import httpx
import pytest

from htmlview.core.config import settings
from htmlview.services.document_loader import DocumentLoader
from htmlview.services.render_pipeline import HTMLRenderPipeline
from htmlview.tree.dom import parse_html
from htmlview.tree.models import Container, ElementNode, NodeKind, RenderRequest, TextRun
from htmlview.tree.rewriter import is_hoist_wrapper


def count_input(nodes):
    total = 0
    for node in nodes:
        total += 1
        if isinstance(node, ElementNode):
            total += count_input(node.children)
    return total


def count_output(nodes, skip_hoist_wrappers=False):
    total = 0
    for node in nodes:
        if not (skip_hoist_wrappers and is_hoist_wrapper(node)):
            total += 1
        if isinstance(node, Container):
            total += count_output(node.children, skip_hoist_wrappers)
    return total


class TestTransform:
    """Synchronous transformation of parsed markup."""

    def setup_method(self):
        self.pipeline = HTMLRenderPipeline()

    def test_root_wrapper(self):
        """Output is wrapped in a block root container."""
        root = self.pipeline.render_html("<p>Hello</p>")

        assert root.kind == NodeKind.BLOCK
        assert root.tag_name == settings.ROOT_TAG_NAME
        assert root.children == (
            Container(kind=NodeKind.TEXT, tag_name='p', children=(TextRun('Hello', 'p'),)),
        )

    def test_empty_document(self):
        root = self.pipeline.render_html("")

        assert root.children == ()

    def test_full_document_is_collapsed(self):
        """html > body > div wrappers collapse into one block, head is dropped."""
        html = "<html><head><title>T</title></head><body><div><p>Hello</p></div></body></html>"

        root = self.pipeline.render_html(html)

        assert len(root.children) == 1
        document = root.children[0]
        assert document.tag_name == 'html'
        assert document.kind == NodeKind.BLOCK
        assert [child.tag_name for child in document.children] == ['p']

    def test_collapse_keeps_inner_attributes(self):
        root = self.pipeline.render_html('<div class="outer" id="a"><div class="inner"><p>x</p></div></div>')

        wrapper = root.children[0]
        assert wrapper.attributes == {'class': 'inner', 'id': 'a'}

    def test_list_document(self):
        root = self.pipeline.render_html("<ol>\n  <li>one</li>\n  <li>two</li>\n</ol>")

        items = root.children[0].children
        assert [(item.group_info.index, item.group_info.count) for item in items] == [(0, 2), (1, 2)]
        assert items[0].children == (TextRun('one', 'li'),)

    def test_ignored_tags_option(self):
        """A caller ignore set replaces the defaults."""
        root = self.pipeline.render_html("<div><nav>menu</nav><p>body</p></div>", ignored_tags=['nav'])

        tags = [child.tag_name for child in root.children[0].children]
        assert tags == ['p']

    def test_ignore_nodes_function(self):
        root = self.pipeline.render_html(
            '<div><p class="ad">buy</p><p>read</p></div>',
            ignore_nodes_function=lambda node, parent, is_text: getattr(node, 'attributes', {}).get('class') == 'ad'
        )

        texts = [run.text for p in root.children[0].children for run in p.children]
        assert texts == ['read']

    def test_output_never_grows_without_hoisting(self):
        """Each input node yields at most one output node."""
        html = """
        <div class="page">
            <h1>Title</h1>
            <p>Some <b>bold</b> and <i>italic</i> text.</p>
            <ul><li>a</li><li>b <span>c</span></li></ul>
            <section><div><div><span>deep</span></div></div></section>
            <table><tr><td>gone</td></tr></table>
        </div>
        """
        nodes = parse_html(html)

        root = self.pipeline.transform(nodes)

        assert count_output(root.children) <= count_input(nodes)

    def test_output_never_grows_with_hoisting(self):
        """Apart from the hoisting wrappers, hoisting does not add nodes."""
        html = '<div><p>text <img src="a.png"> more</p><div>next</div><span><img src="b.png"></span></div>'
        nodes = parse_html(html)

        root = self.pipeline.transform(nodes)

        assert count_output(root.children, skip_hoist_wrappers=True) <= count_input(nodes)

    def test_text_after_ignored_element_is_trimmed(self):
        root = self.pipeline.render_html("<p><script>x()</script>   hello</p>")

        assert root.children[0].children == (TextRun('hello', 'p'),)

    def test_hoisted_images_precede_block(self):
        root = self.pipeline.render_html('<div><p><img src="a.png"><img src="b.png">x</p><div>y</div></div>')

        paragraph, group = root.children[0].children
        assert paragraph.children == (TextRun('x', 'p'),)
        images = [item.children[0].attributes['src'] for item in group.children[:-1]]
        assert images == ['a.png', 'b.png']
        assert group.children[-1].tag_name == 'div'


class TestRender:
    """Asynchronous rendering with document acquisition."""

    @pytest.mark.asyncio
    async def test_render_literal_html(self):
        """Style options are threaded through untouched."""
        pipeline = HTMLRenderPipeline()
        request = RenderRequest(
            html="<p>Hi</p>",
            tags_styles={'P': {'color': 'red'}},
            classes_styles={'lead': {'fontSize': 18}},
            ignored_styles=['fontFamily'],
            images_max_width=320
        )

        document = await pipeline.render(request)

        assert document is not None
        assert document.root.children[0].tag_name == 'p'
        assert document.tags_styles == {'p': {'color': 'red'}}
        assert document.classes_styles == {'lead': {'fontSize': 18}}
        assert document.ignored_styles == ['fontFamily']
        assert document.em_size == settings.DEFAULT_EM_SIZE
        assert document.images_max_width == 320

    @pytest.mark.asyncio
    async def test_render_from_uri(self):
        loader = DocumentLoader(transport=httpx.MockTransport(lambda request: httpx.Response(200, text="<h2>Remote</h2>")))
        pipeline = HTMLRenderPipeline(loader=loader)

        document = await pipeline.render(RenderRequest(uri="https://example.com/doc", em_size=16))

        assert document.root.children[0].tag_name == 'h2'
        assert document.em_size == 16

    @pytest.mark.asyncio
    async def test_fetch_failure_yields_nothing(self):
        """Acquisition failures are not raised to the caller."""
        def handler(request):
            raise httpx.ConnectError("down", request=request)

        pipeline = HTMLRenderPipeline(loader=DocumentLoader(transport=httpx.MockTransport(handler)))

        assert await pipeline.render(RenderRequest(uri="https://example.com/doc")) is None

    @pytest.mark.asyncio
    async def test_missing_source_yields_nothing(self, caplog):
        """Neither html nor uri: a warning, no exception."""
        pipeline = HTMLRenderPipeline()

        with caplog.at_level("WARNING", logger='htmlview.services.render_pipeline'):
            assert await pipeline.render(RenderRequest()) is None

        assert "Please provide the html or uri" in caplog.text

    @pytest.mark.asyncio
    async def test_deeply_nested_document_yields_nothing(self, caplog):
        """Markup nested beyond what can be walked is reported, not raised."""
        html = "<div>" * 1200 + "x" + "</div>" * 1200
        pipeline = HTMLRenderPipeline()

        with caplog.at_level("WARNING", logger='htmlview.services.render_pipeline'):
            assert await pipeline.render(RenderRequest(html=html)) is None

        assert "nested too deeply" in caplog.text
