"""
Unit tests for the line classifier.

Tests line classification, indentation measurement, key/value splitting
and the quoting rules.
"""

import pytest

from confindent.config.lexer import (
    LineClassifier,
    LineKind,
    parse_value,
    read_quoted,
    split_key_value,
    strip_inline_comment,
)
from confindent.exceptions import IndentError, QuoteError
from confindent.models.options import ParseOptions


class TestClassify:
    """Test cases for LineClassifier.classify."""

    def setup_method(self):
        self.classifier = LineClassifier()

    @pytest.mark.parametrize('text', ['', '   ', '\t', ' \t \t'])
    def test_blank_lines(self, text):
        line = self.classifier.classify(text, 1)
        assert line.kind is LineKind.BLANK
        assert not line.is_content

    @pytest.mark.parametrize('text', ['# comment', '   # indented', '\t#', '#no space'])
    def test_comment_lines(self, text):
        assert self.classifier.classify(text, 1).kind is LineKind.COMMENT

    def test_no_indent(self):
        line = self.classifier.classify('Key Value', 3)

        assert line.kind is LineKind.CONTENT
        assert line.line_number == 3
        assert line.depth == 0
        assert line.key == 'Key'
        assert line.value == 'Value'

    def test_tab_indent(self):
        line = self.classifier.classify('\tKey Value', 1)

        assert line.depth == 1
        assert line.key == 'Key'
        assert line.value == 'Value'

    def test_key_without_value(self):
        line = self.classifier.classify('Host', 1)
        assert line.key == 'Host'
        assert line.value is None

    def test_key_with_trailing_whitespace_has_no_value(self):
        line = self.classifier.classify('Host   \t', 1)
        assert line.value is None

    def test_value_is_trimmed_rest_of_line(self):
        line = self.classifier.classify('Banner  hello   big world  ', 1)
        assert line.value == 'hello   big world'

    def test_key_split_on_tab(self):
        line = self.classifier.classify('Key\tValue', 1)
        assert line.key == 'Key'
        assert line.value == 'Value'

    def test_unit_learned_from_first_indented_line(self):
        assert self.classifier.classify('    a', 1).depth == 1
        assert self.classifier.indent_unit == 4
        assert self.classifier.indent_char == ' '
        assert self.classifier.classify('        b', 2).depth == 2
        assert self.classifier.classify('c', 3).depth == 0

    def test_unit_is_frozen(self):
        self.classifier.classify('  a', 1)

        assert self.classifier.classify('      b', 2).depth == 3
        assert self.classifier.indent_unit == 2

    def test_remainder_is_an_error(self):
        self.classifier.classify('    a', 1)

        with pytest.raises(IndentError, match="not a multiple"):
            self.classifier.classify('  b', 2)

    def test_comment_does_not_learn_unit(self):
        self.classifier.classify('   # three', 1)
        assert self.classifier.indent_unit is None
        assert self.classifier.indent_char is None

    def test_blank_does_not_learn_unit(self):
        self.classifier.classify('   ', 1)
        assert self.classifier.indent_unit is None

    def test_non_ascii_whitespace_indent(self):
        with pytest.raises(IndentError, match="only use spaces or tabs"):
            self.classifier.classify('\u00a0Key', 1)

    def test_fixed_unit(self):
        classifier = LineClassifier(ParseOptions(indent_unit=3))

        assert classifier.classify('   a', 1).depth == 1
        assert classifier.classify('      a', 2).depth == 2
        with pytest.raises(IndentError):
            classifier.classify('    a', 3)

    def test_comment_marker_option(self):
        classifier = LineClassifier(ParseOptions(comment_marker='//'))

        assert classifier.classify('// note', 1).kind is LineKind.COMMENT
        line = classifier.classify('# note', 2)
        assert line.kind is LineKind.CONTENT
        assert line.key == '#'

    def test_quoted_key(self):
        line = self.classifier.classify('"My Key" the value', 1)
        assert line.key == 'My Key'
        assert line.value == 'the value'

    def test_quoted_key_is_not_a_comment(self):
        line = self.classifier.classify('"#hash" 1', 1)
        assert line.kind is LineKind.CONTENT
        assert line.key == '#hash'


class TestQuoting:
    """Test cases for the quoting helpers."""

    def test_read_quoted_escapes(self):
        text, end = read_quoted(r'"a \"b\" \\ c" rest', 0)
        assert text == r'a "b" \ c'
        assert end == 14

    def test_read_quoted_keeps_other_backslashes(self):
        text, _ = read_quoted(r'"C:\temp\n"', 0)
        assert text == r'C:\temp\n'

    def test_read_quoted_unterminated(self):
        with pytest.raises(QuoteError, match="Unterminated") as exc_info:
            read_quoted('"abc', 0, line_number=7)
        assert exc_info.value.line_number == 7

    def test_read_quoted_escaped_closing_quote_is_unterminated(self):
        with pytest.raises(QuoteError):
            read_quoted(r'"abc\"', 0)

    def test_split_bare_key(self):
        assert split_key_value('Key  rest of line') == ('Key', '  rest of line')
        assert split_key_value('Key') == ('Key', '')

    def test_split_bare_key_with_inner_quote(self):
        assert split_key_value('a"b c') == ('a"b', ' c')

    def test_split_quoted_key(self):
        assert split_key_value('"a b" c') == ('a b', ' c')
        assert split_key_value('"a b"') == ('a b', '')

    def test_split_empty_quoted_key(self):
        with pytest.raises(QuoteError, match="cannot be empty"):
            split_key_value('"" value')

    def test_split_text_glued_to_quoted_key(self):
        with pytest.raises(QuoteError, match="Expected whitespace"):
            split_key_value('"a"b value')

    @pytest.mark.parametrize(('rest', 'expected'), [
        ('', None),
        ('   ', None),
        (' plain ', 'plain'),
        (' "quoted value" ', 'quoted value'),
        (' ""', ''),
        (' "a" b', '"a" b'),
        (' say "hi"', 'say "hi"'),
        (' "\\"x\\""', '"x"'),
    ])
    def test_parse_value(self, rest, expected):
        assert parse_value(rest) == expected

    def test_parse_value_unterminated_is_verbatim(self):
        assert parse_value(' "open') == '"open'
        assert parse_value(' "a \\"') == '"a \\"'

    @pytest.mark.parametrize(('rest', 'expected'), [
        (' 22 # ssh', ' 22 '),
        (' "a # b" # c', ' "a # b" '),
        (' url#frag', ' url#frag'),
        (' # only', ' '),
        (' "a \\" # b" # c', ' "a \\" # b" '),
        (' no comment', ' no comment'),
        (' 5" # screen', ' 5" '),
        (' say "hi # there" # c', ' say "hi '),
        (' "open # c', ' "open '),
    ])
    def test_strip_inline_comment(self, rest, expected):
        assert strip_inline_comment(rest, '#') == expected
