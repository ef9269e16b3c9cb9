"""Tests for the lxml-backed loader."""

from pathlib import Path

import pytest
from lxml import etree

from xml_leaf_xpaths.tree import (
    XmlParseError,
    from_lxml,
    parse_bytes,
    parse_file,
    parse_string,
)


class TestParseString:
    """Test parsing XML text into the element model."""

    def test_basic_structure(self):
        """Test tags, attributes and text are carried over."""
        document = parse_string('<root><item id="1">Hello</item></root>')

        assert document.root.tag == "root"
        item = document.root.children[0]
        assert item.attributes == {"id": "1"}
        assert item.text == "Hello"
        assert item.parent is document.root
        assert document.total_elements == 2

    def test_prefixed_tags_keep_prefix(self):
        """Test namespace prefixes survive as part of the tag."""
        document = parse_string(
            '<x:root xmlns:x="urn:x"><x:item>1</x:item></x:root>'
        )
        assert document.root.tag == "x:root"
        assert document.root.local_name == "root"
        assert document.root.namespace_uri == "urn:x"

    def test_default_namespace_has_no_prefix(self):
        """Test default namespace elements use bare tags."""
        document = parse_string('<root xmlns="urn:d"><item>1</item></root>')
        assert document.root.tag == "root"
        assert document.root.children[0].namespace_uri == "urn:d"

    def test_namespaced_attributes_use_prefix(self):
        """Test attribute names are rendered prefix:local."""
        document = parse_string(
            '<root xmlns:a="urn:a" xml:lang="en" a:kind="k" plain="p"/>'
        )
        assert document.root.attributes == {"xml:lang": "en", "a:kind": "k", "plain": "p"}

    def test_comments_are_dropped_and_text_merged(self):
        """Test comment bodies vanish while surrounding text is kept."""
        document = parse_string("<root><a>foo<!-- note -->bar</a></root>")
        leaf = document.root.children[0]

        assert leaf.children == []
        assert leaf.text_content == "foobar"

    def test_mixed_content_tails(self):
        """Test tails after child elements are preserved."""
        document = parse_string("<p>lead <b>bold</b> tail<!--c--> more</p>")
        assert document.root.text_content == "lead bold tail more"

    def test_encoding_declaration_in_string(self):
        """Test decoded strings with an encoding declaration still parse."""
        document = parse_string(
            '<?xml version="1.0" encoding="ISO-8859-1"?><root><a>café</a></root>'
        )
        assert document.root.children[0].text == "café"

    def test_malformed_raises_parse_error(self):
        """Test well-formedness errors carry a location."""
        with pytest.raises(XmlParseError) as exc:
            parse_string("<root><unclosed></root>")
        assert exc.value.line == 1
        assert "XML parsing error" in str(exc.value)

    def test_empty_document(self):
        """Test blank input is reported as an empty document."""
        with pytest.raises(XmlParseError, match="Document is empty"):
            parse_string("   ")


class TestParseBytesAndFiles:
    """Test byte and file inputs."""

    def test_parse_bytes_honours_declaration(self):
        """Test bytes are decoded using the declared encoding."""
        data = '<?xml version="1.0" encoding="ISO-8859-1"?><r><a>café</a></r>'.encode("iso-8859-1")
        document = parse_bytes(data)

        assert document.root.children[0].text == "café"
        assert document.encoding == "iso-8859-1"

    def test_parse_file(self, tmp_path: Path):
        """Test files are read and the source recorded."""
        xml_file = tmp_path / "doc.xml"
        xml_file.write_text("<root><a>1</a></root>", encoding="utf-8")

        document = parse_file(xml_file)

        assert document.source == str(xml_file)
        assert document.root.children[0].text == "1"

    def test_internal_entities_expanded(self):
        """Test entities declared in the internal subset are substituted."""
        document = parse_string(
            '<!DOCTYPE r [<!ENTITY co "Acme">]><r><a>&co; Ltd</a></r>'
        )
        assert document.root.text_content == "Acme Ltd"

    def test_external_entities_not_loaded(self, tmp_path: Path):
        """Test external entities never pull in local file contents."""
        secret = tmp_path / "secret.txt"
        secret.write_text("TOPSECRET", encoding="utf-8")
        xml = (
            f'<!DOCTYPE r [<!ENTITY x SYSTEM "{secret.as_uri()}">]>'
            "<r><a>&x;</a></r>"
        )

        try:
            document = parse_string(xml)
        except XmlParseError:
            return
        assert "TOPSECRET" not in document.root.text_content

    def test_parse_missing_file(self, tmp_path: Path):
        """Test missing files raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            parse_file(tmp_path / "missing.xml")

    def test_parse_file_error_mentions_source(self, tmp_path: Path):
        """Test parse errors name the file."""
        xml_file = tmp_path / "bad.xml"
        xml_file.write_text("<root>", encoding="utf-8")

        with pytest.raises(XmlParseError) as exc:
            parse_file(xml_file)
        assert exc.value.source == str(xml_file)
        assert str(xml_file) in str(exc.value)


class TestFromLxml:
    """Test conversion of existing lxml trees."""

    def test_deep_tree_does_not_recurse(self):
        """Test conversion handles trees deeper than the recursion limit."""
        lxml_root = etree.Element("n")
        current = lxml_root
        for _ in range(3000):
            current = etree.SubElement(current, "n")
        current.text = "bottom"

        root = from_lxml(lxml_root)

        depth = 0
        node = root
        while node.children:
            node = node.children[0]
            depth += 1
        assert depth == 3000
        assert node.text == "bottom"
