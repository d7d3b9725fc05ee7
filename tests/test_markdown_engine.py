import pytest

from doc_browser.control import MarkdownParseEngine, OpenApiParseEngine, ParseFailure, parse_markdown
from doc_browser.control.engine import node_text, slugify

from tests.samples import SAMPLE_MARKDOWN

LOCATION = "file:///docs/guide/a.md"


def _content(text: str, location: str = LOCATION):
    return MarkdownParseEngine(location, parse_markdown(text)).to_content_nodes()


def _text_of(node) -> str:
    if node.value is not None:
        return node.value
    return "".join(_text_of(child) for child in node.children or [])


def test_table_content_lists_headings_in_document_order():
    content = _content(SAMPLE_MARKDOWN)
    assert [entry.to_dict() for entry in content.table_content] == [
        {"id": "18-31-hola-12-a-b", "title": "Hola 12 a b"},
        {"id": "115-125-details", "title": "Details"},
    ]


def test_every_table_entry_points_at_a_heading_in_body():
    content = _content(SAMPLE_MARKDOWN)
    for entry in content.table_content:
        node = content.body.find(entry.id)
        assert node is not None
        assert node.type == "Header"
        assert _text_of(node) == entry.title


def test_heading_depth_is_kept():
    content = _content(SAMPLE_MARKDOWN)
    depths = [content.body.find(entry.id).depth for entry in content.table_content]
    assert depths == [1, 2]


def test_link_urls_resolve_against_document_location():
    content = _content(SAMPLE_MARKDOWN)
    link = content.body.find("37-48-b")
    assert link is not None
    assert link.type == "Link"
    assert link.url == "file:///docs/guide/b.yaml"

    urls = [node.url for node in content.body.walk() if node.type == "Link"]
    assert urls == ["file:///docs/guide/b.yaml", "https://example.com/x"]


def test_relative_parent_and_fragment_urls():
    content = _content("[up](../other.md) [here](#top)")
    urls = [node.url for node in content.body.walk() if node.type == "Link"]
    assert urls == ["file:///docs/other.md", "file:///docs/guide/a.md#top"]


def test_image_without_text_gets_degenerate_slug():
    content = _content(SAMPLE_MARKDOWN)
    image = next(node for node in content.body.walk() if node.type == "Image")
    assert image.id == "85-113-"
    assert image.url == "file:///docs/guide/img/logo.png"
    assert image.alt == "logo"
    assert image.title == "Logo"
    assert image.children is None


def test_ids_are_truncated():
    content = _content("# A rather long heading that keeps going\n")
    (entry,) = content.table_content
    assert entry.id == "0-40-a-rather-long-heading-that-keeps-going"[:30]
    assert len(entry.id) == 30
    assert entry.title == "A rather long heading that keeps going"


def test_document_without_headings_has_empty_table():
    content = _content("just text\n\nmore text\n")
    assert content.table_content == []
    assert content.body.type == "Document"
    assert [child.type for child in content.body.children] == ["Paragraph", "Paragraph"]


def test_leaves_have_no_children_key():
    content = _content("plain")
    serialized = content.body.to_dict()
    leaf = serialized["children"][0]["children"][0]
    assert leaf == {"id": "0-5-plain", "type": "Str", "value": "plain"}


def test_ids_are_stable_across_parses():
    first = _content(SAMPLE_MARKDOWN)
    second = _content(SAMPLE_MARKDOWN)
    assert [n.id for n in first.body.walk()] == [n.id for n in second.body.walk()]


def test_slugify_replaces_non_word_characters():
    assert slugify("Hola 12 a b") == "hola-12-a-b"
    assert slugify("C'est déjà") == "c-est-d-j-"
    assert slugify("") == ""


def test_node_text_prefers_own_value():
    root = parse_markdown("Some *emph* here")
    assert node_text(root) == "Some emph here"


def test_openapi_engine_is_not_implemented():
    engine = OpenApiParseEngine("file:///docs/api.yaml", {"openapi": "3.0.0"})
    with pytest.raises(ParseFailure, match="not implemented"):
        engine.to_content_nodes()


@pytest.mark.parametrize("text", ["> # Head\n", "- # Head\n"])
def test_nested_heading_id_is_unique(text):
    content = _content(text)
    (entry,) = content.table_content
    assert entry.id == "2-8-head"
    matches = [node for node in content.body.walk() if node.id == entry.id]
    assert [node.type for node in matches] == ["Header"]
    assert content.body.find(entry.id).type == "Header"


def test_list_item_and_paragraph_ids_differ():
    content = _content("- one\n")
    item = content.body.children[0].children[0]
    assert item.id == "0-5-one"
    assert item.children[0].id == "2-5-one"
