import pytest

from route_swagger.errors import DocBlockError
from route_swagger.parser.docblock import DocBlockParser, own_doc, safe_parse

PHPDOC = """/**
 * Show a user.
 *
 * Looks the user up by primary key.
 *
 * @response 404 Not found
 * @deprecated
 */"""


class TestDocBlockParser:
    def test_phpdoc_block(self):
        parsed = DocBlockParser().parse(PHPDOC)
        assert parsed.summary == "Show a user."
        assert parsed.description == "Looks the user up by primary key."
        assert [t.name for t in parsed.tags] == ["response", "deprecated"]
        assert parsed.tags[0].body == "404 Not found"
        assert parsed.tags[1].body == ""

    def test_python_docstring(self):
        text = """List users.

        First paragraph.

        Second paragraph.
        """
        parsed = DocBlockParser().parse(text)
        assert parsed.summary == "List users."
        assert parsed.description == "First paragraph.\n\nSecond paragraph."
        assert parsed.tags == []

    def test_multiline_summary_is_joined(self):
        parsed = DocBlockParser().parse("Line one\nline two\n\nDetails")
        assert parsed.summary == "Line one line two"
        assert parsed.description == "Details"

    def test_tag_continuation_lines(self):
        parsed = DocBlockParser().parse("Summary\n\n@response 200 A very\n  long description")
        assert parsed.tags_by_name("response")[0].body == "200 A very long description"

    def test_has_tag(self):
        parsed = DocBlockParser().parse("Summary\n@deprecated")
        assert parsed.has_tag("deprecated")
        assert not parsed.has_tag("response")

    def test_unterminated_block_is_malformed(self):
        with pytest.raises(DocBlockError):
            DocBlockParser().parse("/** Summary without end")

    @pytest.mark.parametrize("line", ["@ response 200", "@123 bad"])
    def test_invalid_tag_name_is_malformed(self, line):
        with pytest.raises(DocBlockError):
            DocBlockParser().parse(f"Summary\n\n{line}")


class TestSafeParse:
    def test_returns_parsed_comment(self):
        result = safe_parse(DocBlockParser(), "Summary")
        assert not isinstance(result, DocBlockError)
        assert result.summary == "Summary"

    def test_returns_error_instead_of_raising(self):
        result = safe_parse(DocBlockParser(), "/** broken")
        assert isinstance(result, DocBlockError)

    def test_wraps_foreign_exceptions(self):
        class ExplodingParser:
            def parse(self, text):
                raise ValueError("boom")

        result = safe_parse(ExplodingParser(), "Summary")
        assert isinstance(result, DocBlockError)
        assert "boom" in str(result)


class TestOwnDoc:
    def test_class_docstring(self):
        class Documented:
            """
            @property string $name
            """

        assert own_doc(Documented) == "@property string $name"

    def test_inherited_docstring_is_ignored(self):
        class Base:
            """Base docs."""

        class Child(Base):
            pass

        assert own_doc(Child) == ""
