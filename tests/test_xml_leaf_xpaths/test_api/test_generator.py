"""Tests for the module-level generation API."""

import io
from pathlib import Path

import pytest

from xml_leaf_xpaths.api import (
    generate,
    generate_from_file,
    generate_from_string,
    load_options,
    load_tree,
)
from xml_leaf_xpaths.shared import ConfigError, ConfigValidationError, XPathConfig
from xml_leaf_xpaths.tree import XMLDocument, XMLElement, XmlParseError, parse_string

SAMPLE = '<root><item id="7"><name>Widget</name></item></root>'
EXPECTED = '/d:root[1]/d:item[@id="7"][1]/d:name[d:name="Widget"][1]'
OPTIONS = {"attributesToIncludeInPath": ["id"]}


class TestLoadOptions:
    """Test reading options from literals and files."""

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_blank_gives_empty_options(self, value):
        """Test missing options produce an empty record."""
        assert load_options(value) == {}

    def test_json_literal(self):
        """Test inline JSON objects are parsed."""
        assert load_options('{ "namespace": "x" }') == {"namespace": "x"}

    def test_json_file(self, tmp_path: Path):
        """Test a .json path is read from disk."""
        options_file = tmp_path / "options.json"
        options_file.write_text('{"ignoreLeafNodes": ["meta"]}', encoding="utf-8")

        assert load_options(str(options_file)) == {"ignoreLeafNodes": ["meta"]}

    def test_existing_file_without_json_extension(self, tmp_path: Path):
        """Test any existing file path is read."""
        options_file = tmp_path / "options.cfg"
        options_file.write_text('{"debug": true}', encoding="utf-8")

        assert load_options(str(options_file)) == {"debug": True}

    def test_missing_json_file(self, tmp_path: Path):
        """Test unreadable option files raise ConfigError."""
        with pytest.raises(ConfigError, match="Cannot read options file"):
            load_options(str(tmp_path / "missing.json"))

    def test_invalid_json(self):
        """Test malformed JSON raises ConfigError."""
        with pytest.raises(ConfigError, match="Invalid JSON options"):
            load_options("{ not json")

    def test_non_object_payload(self):
        """Test JSON arrays are rejected."""
        with pytest.raises(ConfigError, match="must be a JSON object"):
            load_options('["namespace"]')


class TestLoadTree:
    """Test input coercion."""

    def test_string_is_content(self):
        """Test strings are parsed as XML content."""
        assert load_tree("<r/>").root.tag == "r"

    def test_bytes(self):
        """Test bytes are parsed."""
        assert load_tree(b"<r/>").root.tag == "r"

    def test_path(self, tmp_path: Path):
        """Test Path objects are read from disk."""
        xml_file = tmp_path / "doc.xml"
        xml_file.write_text("<r/>", encoding="utf-8")
        assert load_tree(xml_file).source == str(xml_file)

    @pytest.mark.parametrize("stream", [io.StringIO("<r/>"), io.BytesIO(b"<r/>")])
    def test_file_like(self, stream):
        """Test text and binary streams are read."""
        assert load_tree(stream).root.tag == "r"

    def test_tree_passthrough(self):
        """Test loaded trees are returned unchanged."""
        document = parse_string("<r/>")
        element = XMLElement(tag="r")
        assert load_tree(document) is document
        assert load_tree(element) is element

    def test_unsupported_type(self):
        """Test other input types raise TypeError."""
        with pytest.raises(TypeError, match="Unsupported input type"):
            load_tree(42)


class TestGenerate:
    """Test the generate entry points."""

    def test_generate_from_content(self):
        """Test XML text and options produce the expected row."""
        result = generate(SAMPLE, OPTIONS)

        assert result.texts == ["Widget"]
        assert result.paths == [EXPECTED]

    def test_generate_accepts_config_object(self):
        """Test an XPathConfig is used as is."""
        config = XPathConfig(attributes_to_include_in_path=["id"])
        assert generate(SAMPLE, config).paths == [EXPECTED]

    def test_generate_from_document(self):
        """Test an already loaded document can be reused."""
        document = parse_string(SAMPLE)
        assert isinstance(document, XMLDocument)
        assert generate(document, OPTIONS).paths == [EXPECTED]

    def test_correlation_id_carried(self):
        """Test the correlation ID reaches the result."""
        assert generate(SAMPLE, correlation_id="run-1").correlation_id == "run-1"

    def test_config_errors_abort_before_parsing(self):
        """Test a bad configuration is reported even for malformed input."""
        with pytest.raises(ConfigValidationError, match="ignoreLeafNodes"):
            generate("<not-closed>", {"ignoreLeafNodes": "meta"})

    def test_malformed_input(self):
        """Test well-formedness errors propagate."""
        with pytest.raises(XmlParseError):
            generate("<root><a></root>")

    def test_generate_from_string(self):
        """Test the string entry point."""
        result = generate_from_string("<r><v>x</v></r>", {"forceIndexOneFor": ["r"]})
        assert result.paths == ['/d:r[1]/d:v[d:v="x"]']

    def test_generate_from_file(self, tmp_path: Path):
        """Test the file entry point accepts str paths."""
        xml_file = tmp_path / "doc.xml"
        xml_file.write_text(SAMPLE, encoding="utf-8")

        assert generate_from_file(str(xml_file), OPTIONS).paths == [EXPECTED]

    def test_generate_from_missing_file(self, tmp_path: Path):
        """Test missing files raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            generate_from_file(tmp_path / "missing.xml")
