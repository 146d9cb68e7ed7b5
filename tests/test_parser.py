"""
Tests for the parser module.

Tests the textual @import marker scan.
"""

import pytest
from importgraph.errors import MalformedImportError
from importgraph.parser import (
    ImportExtractor,
    extract_imports,
    extract_records,
)
from tests.fixtures import (
    SINGLE_IMPORT,
    MULTIPLE_IMPORTS,
    DUPLICATE_IMPORTS,
    NO_IMPORTS,
    IMPORT_IN_COMMENT,
    UNTERMINATED_IMPORT,
    EMPTY_IMPORT,
)


class TestImportExtraction:
    """Tests for import string extraction."""

    def test_single_import(self):
        """Test extracting one import."""
        assert extract_imports(SINGLE_IMPORT) == ["std"]

    def test_source_order(self):
        """Test that imports come back in the order they appear."""
        imports = extract_imports(MULTIPLE_IMPORTS)

        assert imports == ["std", "raylib", "graph/graph.zig"]

    def test_duplicates_preserved(self):
        """Test that repeated imports are reported separately."""
        assert extract_imports(DUPLICATE_IMPORTS) == ["std", "std"]

    def test_no_imports(self):
        """Test content without any marker."""
        assert extract_imports(NO_IMPORTS) == []

    def test_empty_content(self):
        """Test zero-length content."""
        assert extract_imports(b"") == []

    def test_markers_in_comments_and_strings_count(self):
        """Test that the scan does not understand comments or strings."""
        imports = extract_imports(IMPORT_IN_COMMENT)

        assert imports == ["legacy.zig", "doc_example", "std"]

    def test_empty_import_string(self):
        """Test that an empty quoted target is still extracted."""
        assert extract_imports(EMPTY_IMPORT) == ["", "std"]

    def test_marker_at_end_of_content(self):
        """Test a complete import ending exactly at the buffer end."""
        assert extract_imports(b'@import("tail")') == ["tail"]

    def test_marker_inside_target_is_reported(self):
        """Test that scanning resumes right after each marker."""
        imports = extract_imports(b'@import("a@import("b")')

        assert imports == ['a@import(', "b"]

    def test_non_utf8_bytes_are_replaced(self):
        """Test that undecodable bytes do not abort extraction."""
        imports = extract_imports(b'@import("bad\xffname")')

        assert len(imports) == 1
        assert imports[0].startswith("bad")
        assert imports[0].endswith("name")


class TestUnterminatedImports:
    """Tests for the bounded closing-quote search."""

    def test_strict_raises(self):
        """Test that strict mode reports the unterminated import."""
        with pytest.raises(MalformedImportError) as exc_info:
            extract_imports(UNTERMINATED_IMPORT)

        start = UNTERMINATED_IMPORT.rindex(b"broken")
        assert exc_info.value.offset == start

    def test_strict_error_names_path(self):
        """Test that the path is carried on the error."""
        with pytest.raises(MalformedImportError) as exc_info:
            extract_imports(UNTERMINATED_IMPORT, path="src/bad.zig")

        assert exc_info.value.path == "src/bad.zig"
        assert "src/bad.zig" in str(exc_info.value)

    def test_lenient_stops_at_occurrence(self):
        """Test that lenient mode keeps earlier imports and stops."""
        imports = extract_imports(UNTERMINATED_IMPORT, strict=False)

        assert imports == ["std"]

    def test_marker_only(self):
        """Test a buffer holding nothing but the marker."""
        with pytest.raises(MalformedImportError):
            extract_imports(b'@import("')

        assert extract_imports(b'@import("', strict=False) == []

    def test_partial_marker_is_ignored(self):
        """Test that a truncated marker is not a match."""
        assert extract_imports(b'@import(') == []


class TestImportExtractor:
    """Tests for the ImportExtractor class."""

    def test_each_call_is_independent(self):
        """Test that extraction passes share no cursor."""
        extractor = ImportExtractor()

        first = list(extractor.extract(MULTIPLE_IMPORTS))
        second = list(extractor.extract(MULTIPLE_IMPORTS))

        assert first == second

    def test_generator_restart(self):
        """Test interleaving two live passes over the same content."""
        extractor = ImportExtractor()
        a = extractor.extract(MULTIPLE_IMPORTS)
        b = extractor.extract(MULTIPLE_IMPORTS)

        assert next(a) == "std"
        assert next(b) == "std"
        assert next(a) == "raylib"

    def test_custom_marker(self):
        """Test scanning for a different marker."""
        extractor = ImportExtractor(marker=b'require("')
        content = b'const x = require("lib/x.js");'

        assert list(extractor.extract(content)) == ["lib/x.js"]

    def test_empty_marker_rejected(self):
        """Test that an empty marker is refused."""
        with pytest.raises(ValueError):
            ImportExtractor(marker=b"")


class TestImportRecords:
    """Tests for ImportRecord extraction."""

    def test_records_carry_offsets(self):
        """Test that offsets point at the raw import text."""
        records = extract_records(MULTIPLE_IMPORTS, importer="main")

        assert [r.raw for r in records] == ["std", "raylib", "graph/graph.zig"]
        for record in records:
            assert record.importer == "main"
            raw_bytes = record.raw.encode("utf-8")
            assert MULTIPLE_IMPORTS[record.offset:record.offset + len(raw_bytes)] == raw_bytes
