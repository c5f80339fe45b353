"""Tests for the TSX source formatter."""

import pytest

from formgen.exceptions import FormattingError
from formgen.synthesis.formatter import format_source


class TestIndentation:
    """Tests for re-indentation."""

    def test_object_literal(self):
        source = "const x = {\na: 1,\nb: [\n1,\n2\n]\n}\n"
        assert format_source(source) == (
            "const x = {\n"
            "  a: 1,\n"
            "  b: [\n"
            "    1,\n"
            "    2,\n"
            "  ],\n"
            "}\n"
        )

    def test_jsx_elements(self):
        source = "<Foo\na=\"1\"\n>\n<Bar />\n</Foo>\n"
        assert format_source(source) == '<Foo\n  a="1"\n>\n  <Bar />\n</Foo>\n'

    def test_existing_indentation_replaced(self):
        source = "function f() {\n        return 1\n}\n"
        assert format_source(source) == "function f() {\n  return 1\n}\n"

    def test_indent_width(self):
        assert format_source("if (a) {\nb()\n}\n", indent=4) == "if (a) {\n    b()\n}\n"

    def test_closer_then_opener_on_one_line(self):
        source = "try {\na()\n} catch (error) {\nb()\n}\n"
        assert format_source(source) == "try {\n  a()\n} catch (error) {\n  b()\n}\n"

    def test_generics_are_not_tags(self):
        source = "const [a, setA] = useState<string | null>(null)\n"
        assert format_source(source) == source

    def test_comparison_is_not_a_tag(self):
        source = "const ok = (\na < b && c > d\n)\n"
        assert format_source(source) == "const ok = (\n  a < b && c > d\n)\n"

    def test_brackets_inside_strings_ignored(self):
        source = 'const s = "{ ( [ <div>"\n'
        assert format_source(source) == source


class TestWhitespace:
    """Tests for blank lines and trailing commas."""

    def test_blank_lines_between_statements(self):
        source = "function f() {\n\nconst a = 1\n\n\nreturn a\n}\n"
        assert format_source(source) == "function f() {\n  const a = 1\n\n  return a\n}\n"

    def test_blank_lines_dropped_inside_literals(self):
        source = "const x = {\na: 1,\n\nb: 2,\n}\n"
        assert format_source(source) == "const x = {\n  a: 1,\n  b: 2,\n}\n"

    def test_no_comma_after_block(self):
        source = "function f() {\nreturn 1\n}\n"
        assert format_source(source) == source.replace("return", "  return")

    def test_empty_input(self):
        assert format_source("") == ""
        assert format_source("\n\n") == ""


class TestFixedPoint:
    """Formatting formatted output changes nothing."""

    @pytest.mark.parametrize(
        "source",
        [
            "const x = {\na: 1,\nb: [\n1,\n2\n]\n}\n",
            "<Foo\na=\"1\"\n>\n<Bar />\n</Foo>\n",
            "function f() {\n\nconst a = 1\n\n\nreturn a\n}\n",
            "return (\n<Form {...form}>\n<form onSubmit={form.handleSubmit(onSubmit)}>\n</form>\n</Form>\n)\n",
        ],
    )
    def test_idempotent(self, source):
        once = format_source(source)
        assert format_source(once) == once


class TestErrors:
    """Tests for structural errors."""

    def test_mismatched_tag(self):
        with pytest.raises(FormattingError) as excinfo:
            format_source("<div>\n</span>\n")
        assert excinfo.value.line == 2

    def test_mismatched_bracket(self):
        with pytest.raises(FormattingError):
            format_source("const a = (\n1\n]\n")

    def test_unclosed(self):
        with pytest.raises(FormattingError) as excinfo:
            format_source("const a = {\nb: 1\n")
        assert excinfo.value.line == 1

    def test_unexpected_closer(self):
        with pytest.raises(FormattingError):
            format_source("}\n")

    def test_unterminated_string(self):
        with pytest.raises(FormattingError):
            format_source('const a = "abc\n')
