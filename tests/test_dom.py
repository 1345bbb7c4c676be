"""
Tests for the input adapters (BeautifulSoup markup and htmlparser2-style dicts).
"""

import logging

from htmlview.tree.dom import parse_html, from_mapping, from_mappings
from htmlview.tree.models import ElementNode, TextNode


class TestParseHTML:
    """Markup parsed with BeautifulSoup."""

    def test_empty_html(self):
        assert parse_html("") == []
        assert parse_html(None) == []

    def test_elements_and_text(self):
        """Elements keep attributes and children in document order."""
        nodes = parse_html('<p class="lead intro" id="p1">Hi <b>there</b></p>')

        assert nodes == [
            ElementNode(
                tag_name='p',
                attributes={'class': 'lead intro', 'id': 'p1'},
                children=[TextNode('Hi '), ElementNode('b', {}, [TextNode('there')])]
            )
        ]

    def test_comments_and_doctype_are_dropped(self):
        nodes = parse_html('<!DOCTYPE html><div><!-- note -->text</div>')

        assert nodes == [ElementNode('div', {}, [TextNode('text')])]

    def test_upper_case_tags_are_lowered(self):
        nodes = parse_html('<DIV DATA-X="1"><SPAN>a</SPAN></DIV>')

        assert nodes[0].tag_name == 'div'
        assert nodes[0].attributes == {'data-x': '1'}
        assert nodes[0].children[0].tag_name == 'span'

    def test_void_elements_have_no_children(self):
        nodes = parse_html('<p>a<br>b<img src="x.png"></p>')

        tags = [child.tag_name for child in nodes[0].children if isinstance(child, ElementNode)]
        assert tags == ['br', 'img']
        assert all(child.children == [] for child in nodes[0].children if isinstance(child, ElementNode))


class TestFromMapping:
    """htmlparser2-shaped node dictionaries."""

    def test_text_node(self):
        assert from_mapping({'type': 'text', 'data': 'hello'}) == TextNode('hello')

    def test_tag_node(self):
        node = from_mapping({
            'type': 'tag',
            'name': 'UL',
            'attribs': {'class': 'list'},
            'children': [
                {'type': 'tag', 'name': 'li', 'attribs': {}, 'children': [{'type': 'text', 'data': 'one'}]},
                {'type': 'comment', 'data': 'skip me'},
            ],
        })

        assert node == ElementNode('ul', {'class': 'list'}, [ElementNode('li', {}, [TextNode('one')])])

    def test_unknown_types_are_ignored(self):
        assert from_mapping({'type': 'directive', 'data': '!doctype html'}) is None
        assert from_mappings([{'type': 'script'}, {'type': 'text', 'data': 'x'}]) == [TextNode('x')]

    def test_missing_children_is_empty(self, caplog):
        """A tag without children is kept with an empty child list and reported."""
        with caplog.at_level(logging.WARNING, logger='htmlview.tree.dom'):
            node = from_mapping({'type': 'tag', 'name': 'div'})

        assert node == ElementNode('div', {}, [])
        assert "Malformed input node" in caplog.text

    def test_non_mapping_is_skipped(self, caplog):
        with caplog.at_level(logging.WARNING, logger='htmlview.tree.dom'):
            assert from_mapping(['not', 'a', 'node']) is None
        assert "Malformed input node" in caplog.text

    def test_none_list(self):
        assert from_mappings(None) == []
