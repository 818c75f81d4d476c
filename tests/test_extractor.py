from __future__ import annotations

from siteinfo.pipeline.extractor import HeadTag, extract_site_info
from siteinfo.pipeline.parser import parse_document
from siteinfo.pipeline.tree import DocumentTree, NodeKind, find_head


def _head_tree():
    tree = DocumentTree()
    html = tree.add_element(tree.root, "html")
    head = tree.add_element(html, "head")
    return tree, head


def _extract(markup: str, **kwargs):
    tree = parse_document([markup.encode("utf-8")])
    return extract_site_info(tree, find_head(tree), **kwargs)


class TestHeadTag:
    def test_classifies_known_elements(self):
        tree, head = _head_tree()
        assert HeadTag.of(tree.add_element(head, "title")) is HeadTag.TITLE
        assert HeadTag.of(tree.add_element(head, "meta")) is HeadTag.META
        assert HeadTag.of(tree.add_element(head, "link")) is HeadTag.LINK

    def test_ignores_other_elements_and_text(self):
        tree, head = _head_tree()
        assert HeadTag.of(tree.add_element(head, "script")) is None
        assert HeadTag.of(tree.add_text(head, "title")) is None


class TestExtractSiteInfo:
    def test_minimal_document(self):
        info = _extract(
            '<html><head><title>T</title><meta name="description" content="D">'
            '<link rel="icon" href="/f.ico"></head></html>'
        )
        assert info.title == "T"
        assert info.description == "D"
        assert info.icon_url == "/f.ico"
        assert info.keywords == ""

    def test_last_title_wins(self):
        tree, head = _head_tree()
        tree.add_text(tree.add_element(head, "title"), "A")
        tree.add_text(tree.add_element(head, "title"), "B")
        assert extract_site_info(tree, head).title == "B"

    def test_last_description_and_icon_win(self):
        info = _extract(
            "<html><head>"
            '<meta name="description" content="first">'
            '<link rel="icon" href="/a.ico">'
            '<meta name="description" content="second">'
            '<link rel="icon" href="/b.png">'
            "</head></html>"
        )
        assert info.description == "second"
        assert info.icon_url == "/b.png"

    def test_no_meta_or_link_children(self):
        info = _extract("<html><head><title>Only</title></head><body></body></html>")
        assert info.description == ""
        assert info.icon_url == ""
        assert info.keywords == ""

    def test_title_without_children_is_empty(self):
        tree, head = _head_tree()
        tree.add_element(head, "title")
        assert extract_site_info(tree, head).title == ""

    def test_title_uses_first_child_text_only(self):
        tree, head = _head_tree()
        title = tree.add_element(head, "title")
        tree.add(title, NodeKind.OTHER, text=" comment ")
        tree.add_text(title, "ignored")
        assert extract_site_info(tree, head).title == ""

    def test_only_direct_children_are_examined(self):
        tree, head = _head_tree()
        wrapper = tree.add_element(head, "noscript")
        tree.add_element(wrapper, "meta", name="description", content="nested")
        tree.add_text(tree.add_element(wrapper, "title"), "nested")
        info = extract_site_info(tree, head)
        assert info.description == ""
        assert info.title == ""

    def test_missing_attributes_yield_empty_strings(self):
        tree, head = _head_tree()
        tree.add_element(head, "meta", name="description")
        tree.add_element(head, "link", rel="icon")
        info = extract_site_info(tree, head)
        assert info.description == ""
        assert info.icon_url == ""

    def test_rel_must_equal_icon(self):
        info = _extract(
            '<html><head><link rel="shortcut icon" href="/s.ico">'
            '<link rel="apple-touch-icon" href="/a.png"></head></html>'
        )
        assert info.icon_url == ""

    def test_unknown_element_in_head_keeps_later_metadata(self):
        # lxml leaves the head open; an HTML5 tree builder would not.
        info = _extract(
            "<html><head><custom-el></custom-el>"
            '<meta name="description" content="D"></head><body></body></html>'
        )
        assert info.description == "D"

    def test_repeated_attribute_mapping_is_last_wins(self):
        tree, head = _head_tree()
        tree.add(
            head,
            NodeKind.ELEMENT,
            tag="meta",
            attrs=(("name", "description"), ("content", "one"), ("content", "two")),
        )
        assert extract_site_info(tree, head).description == "two"


class TestKeywords:
    """Keywords are matched on ``name="keywords"``, like description."""

    def test_keywords_by_name(self):
        info = _extract(
            '<html><head><meta name="keywords" content="python, html"></head></html>'
        )
        assert info.keywords == "python, html"

    def test_keywords_attribute_value_is_not_a_match(self):
        info = _extract(
            '<html><head><meta keywords="keywords" content="nope"></head></html>'
        )
        assert info.keywords == ""


class TestOnlyBasicInfo:
    _MARKUP = (
        '<html><head><title>T</title><meta name="description" content="D">'
        '<meta name="keywords" content="K"><link rel="icon" href="/f.ico"></head></html>'
    )

    def test_skips_keywords_and_icon(self):
        info = _extract(self._MARKUP, only_basic_info=True)
        assert (info.title, info.description) == ("T", "D")
        assert (info.keywords, info.icon_url) == ("", "")

    def test_full_info_by_default(self):
        info = _extract(self._MARKUP)
        assert (info.keywords, info.icon_url) == ("K", "/f.ico")
