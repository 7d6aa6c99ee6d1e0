# =============================================================================
# test_lexer.py - Scanner Tests
# =============================================================================
# End-to-end tests for hashlex.lexer.scan().
#
# Test coverage includes:
#   - Keywords, identifiers, booleans, numbers, strings, characters
#   - Longest-match and priority disambiguation
#   - Line/column tracking across \n, \r and \r\n
#   - Single-line and nested multi-line comments
#   - Error recovery: every malformed input is reported and skipped
#   - Stream invariants (single trailing EOF, valid lexemes, ordering)
# =============================================================================

import pytest

from hashlex.config import ScannerOptions
from hashlex.errors import DiagnosticKind, ErrorHandler
from hashlex.lexer import Scanner, Token, TokenKind, scan
from hashlex.symbols import SymbolTable


# =============================================================================
# Helper Functions
# =============================================================================

def tokenize(source: str, options: ScannerOptions = None) -> list:
    """Scan source and return all tokens except the trailing EOF."""
    result = scan(source, "<test>", options)
    return [t for t in result.tokens if t.kind is not TokenKind.EOF]


def kinds(source: str) -> list:
    return [t.kind for t in tokenize(source)]


def lexemes(source: str) -> list:
    return [t.lexeme for t in tokenize(source)]


def diagnostics(source: str, options: ScannerOptions = None) -> list:
    return list(scan(source, "<test>", options).diagnostics)


# =============================================================================
# Basic Token Recognition Tests
# =============================================================================

class TestBasicTokens:
    """Test basic token recognition for simple inputs."""

    def test_empty_source(self):
        """Empty input produces only the EOF token."""
        result = scan("")
        assert result.tokens == [Token(TokenKind.EOF, "EOF", 1, 1)]
        assert not result.has_errors()

    def test_whitespace_only(self):
        """Whitespace is skipped; EOF sits after it."""
        result = scan("  \n\t")
        assert len(result.tokens) == 1
        assert result.tokens[0].kind is TokenKind.EOF
        assert (result.tokens[0].line, result.tokens[0].column) == (2, 2)

    def test_program_skeleton(self):
        """start / declare X / finish scans to keywords and one identifier."""
        result = scan("start\ndeclare X\nfinish")
        assert [(t.kind, t.lexeme) for t in result.tokens] == [
            (TokenKind.KEYWORD, "start"),
            (TokenKind.KEYWORD, "declare"),
            (TokenKind.IDENTIFIER, "X"),
            (TokenKind.KEYWORD, "finish"),
            (TokenKind.EOF, "EOF"),
        ]
        assert not result.has_errors()

    def test_positions(self):
        """Tokens carry the line and column of their first character."""
        tokens = tokenize("start\ndeclare X\nfinish")
        assert [(t.line, t.column) for t in tokens] == [(1, 1), (2, 1), (2, 9), (3, 1)]

    def test_eof_position(self):
        """EOF is positioned just past the last character."""
        result = scan("start\ndeclare X\nfinish")
        eof = result.tokens[-1]
        assert (eof.line, eof.column) == (3, 7)

    def test_all_keywords(self):
        """Every reserved word is a KEYWORD."""
        words = ("start finish loop condition declare output input "
                 "function return break continue else")
        assert kinds(words) == [TokenKind.KEYWORD] * 12

    def test_booleans(self):
        """true and false are BOOLEAN_LITERAL tokens."""
        assert kinds("true false") == [TokenKind.BOOLEAN_LITERAL] * 2

    def test_keyword_case_sensitive(self):
        """Capitalized keywords are identifiers."""
        assert kinds("Start Loop") == [TokenKind.IDENTIFIER] * 2


# =============================================================================
# Operator and Punctuator Tests
# =============================================================================

class TestOperators:
    """Test operators and punctuators, including longest match."""

    @pytest.mark.parametrize("op", [
        "**", "==", "!=", "<=", ">=", "&&", "||",
        "++", "--", "+=", "-=", "*=", "/=",
    ])
    def test_multi_char_operator(self, op):
        """Two-character operators are a single OPERATOR token."""
        tokens = tokenize(f"X {op} Y")
        assert tokens[1].kind is TokenKind.OPERATOR
        assert tokens[1].lexeme == op

    @pytest.mark.parametrize("op", list("+-*/%<>!="))
    def test_single_char_operator(self, op):
        tokens = tokenize(f"X {op} Y")
        assert tokens[1].kind is TokenKind.OPERATOR
        assert tokens[1].lexeme == op

    def test_punctuators(self):
        assert kinds("( ) { } [ ] , ; :") == [TokenKind.PUNCTUATOR] * 9

    def test_power_operator_is_one_token(self):
        """X**Y yields '**', never two '*' tokens."""
        result = scan("X = 10\nY = 3\noutput X**Y")
        found = [t.lexeme for t in result.tokens]
        assert found == ["X", "=", "10", "Y", "=", "3", "output", "X", "**", "Y", "EOF"]
        assert "*" not in found
        assert not result.has_errors()

    def test_lone_ampersand_is_invalid(self):
        """& and | only exist as && and ||."""
        errors = diagnostics("X & Y")
        assert len(errors) == 1
        assert errors[0].kind is DiagnosticKind.INVALID_CHARACTER
        assert errors[0].lexeme == "&"


# =============================================================================
# Identifier Tests
# =============================================================================

class TestIdentifiers:
    """Test identifier grammar and length limits."""

    def test_identifier_with_digits_and_underscore(self):
        tokens = tokenize("Count_2")
        assert len(tokens) == 1
        assert tokens[0].kind is TokenKind.IDENTIFIER
        assert tokens[0].lexeme == "Count_2"

    def test_identifier_stops_at_uppercase(self):
        """Only the first letter may be uppercase, so HelloWorld splits."""
        tokens = tokenize("HelloWorld")
        assert [(t.lexeme, t.column) for t in tokens] == [("Hello", 1), ("World", 6)]

    def test_maximum_length_identifier(self):
        """31 characters is the longest valid identifier."""
        name = "A" + "b" * 30
        tokens = tokenize(name)
        assert len(tokens) == 1
        assert tokens[0].lexeme == name

    def test_overlong_identifier_reported(self):
        """32 characters is an INVALID_IDENTIFIER, never truncated."""
        name = "A" + "b" * 31
        result = scan(f"{name} X")
        assert [t.lexeme for t in result.significant_tokens()] == ["X"]
        assert result.significant_tokens()[0].column == 34
        assert len(result.diagnostics) == 1
        error = result.diagnostics[0]
        assert error.kind is DiagnosticKind.INVALID_IDENTIFIER
        assert error.lexeme == name
        assert (error.line, error.column) == (1, 1)

    def test_lowercase_word_is_invalid_token(self):
        """Identifiers must begin with an uppercase letter."""
        result = scan("count = 5")
        assert [t.lexeme for t in result.significant_tokens()] == ["=", "5"]
        error = result.diagnostics[0]
        assert error.kind is DiagnosticKind.INVALID_TOKEN
        assert error.lexeme == "count"
        assert "uppercase" in error.reason

    def test_keyword_prefix_is_not_keyword(self):
        """loopX is not the keyword loop followed by X."""
        result = scan("loopX")
        assert result.significant_tokens() == []
        assert result.diagnostics[0].kind is DiagnosticKind.INVALID_TOKEN
        assert result.diagnostics[0].lexeme == "loopX"

    def test_keyword_before_punctuator(self):
        assert lexemes("loop(") == ["loop", "("]

    def test_boolean_prefix_is_not_boolean(self):
        errors = diagnostics("trueish")
        assert errors[0].lexeme == "trueish"

    def test_identifiers_recorded_in_symbol_table(self):
        result = scan("X = Y + X")
        assert len(result.symbols) == 2
        x = result.symbols.get("X")
        assert x.occurrences == 2
        assert (x.first_line, x.first_column) == (1, 1)
        assert result.symbols.get("Y").occurrences == 1


# =============================================================================
# Numeric Literal Tests
# =============================================================================

class TestNumbers:
    """Test integer and float literals."""

    @pytest.mark.parametrize("source,kind", [
        ("42", TokenKind.INT_LITERAL),
        ("-7", TokenKind.INT_LITERAL),
        ("+3", TokenKind.INT_LITERAL),
        ("3.14", TokenKind.FLOAT_LITERAL),
        ("-0.5", TokenKind.FLOAT_LITERAL),
        ("1.123456", TokenKind.FLOAT_LITERAL),
        ("2.5e10", TokenKind.FLOAT_LITERAL),
        ("1.5E-3", TokenKind.FLOAT_LITERAL),
    ])
    def test_single_literal(self, source, kind):
        tokens = tokenize(source)
        assert len(tokens) == 1
        assert tokens[0].kind is kind
        assert tokens[0].lexeme == source

    def test_too_many_fraction_digits(self):
        """Seven or more fractional digits is an error, not a rounded float."""
        result = scan("1.23456789")
        assert result.significant_tokens() == []
        assert len(result.diagnostics) == 1
        error = result.diagnostics[0]
        assert error.kind is DiagnosticKind.MALFORMED_LITERAL
        assert error.lexeme == "1.23456789"

    def test_multiple_decimal_points(self):
        result = scan("1.2.3")
        assert result.significant_tokens() == []
        error = result.diagnostics[0]
        assert error.kind is DiagnosticKind.MALFORMED_LITERAL
        assert error.lexeme == "1.2.3"
        assert "decimal points" in error.reason

    def test_missing_fraction_digits(self):
        result = scan("12.;")
        assert [t.lexeme for t in result.significant_tokens()] == [";"]
        assert result.diagnostics[0].lexeme == "12."

    def test_incomplete_exponent(self):
        """2.5e scans the float 2.5 and reports the dangling e."""
        result = scan("2.5e")
        assert [t.lexeme for t in result.significant_tokens()] == ["2.5"]
        assert result.diagnostics[0].lexeme == "e"

    def test_sign_binds_to_following_digit(self):
        """X-1 is an identifier followed by the literal -1."""
        tokens = tokenize("X-1")
        assert [(t.kind, t.lexeme) for t in tokens] == [
            (TokenKind.IDENTIFIER, "X"),
            (TokenKind.INT_LITERAL, "-1"),
        ]

    def test_spaced_minus_is_operator(self):
        tokens = tokenize("X - 1")
        assert [(t.kind, t.lexeme) for t in tokens] == [
            (TokenKind.IDENTIFIER, "X"),
            (TokenKind.OPERATOR, "-"),
            (TokenKind.INT_LITERAL, "1"),
        ]

    def test_decrement_beats_signed_integer(self):
        assert lexemes("X--1") == ["X", "--", "1"]


# =============================================================================
# String and Character Literal Tests
# =============================================================================

class TestLiterals:
    """Test string and character literals in context."""

    def test_string(self):
        tokens = tokenize('output "Hello, World"')
        assert tokens[1].kind is TokenKind.STRING_LITERAL
        assert tokens[1].lexeme == '"Hello, World"'

    def test_string_with_escapes(self):
        source = r'"tab\tquote\"slash\\"'
        tokens = tokenize(source)
        assert len(tokens) == 1
        assert tokens[0].lexeme == source

    def test_unterminated_string_at_eof(self):
        """An unclosed string produces no token and one diagnostic."""
        result = scan('"Hello')
        assert result.significant_tokens() == []
        assert len(result.diagnostics) == 1
        error = result.diagnostics[0]
        assert error.kind is DiagnosticKind.MALFORMED_LITERAL
        assert (error.line, error.column) == (1, 1)
        assert error.lexeme == '"Hello'
        assert "unterminated" in error.reason

    def test_unterminated_string_at_line_break(self):
        """Scanning resumes on the next line."""
        result = scan('"abc\nX')
        assert [(t.lexeme, t.line, t.column) for t in result.significant_tokens()] == [
            ("X", 2, 1),
        ]
        assert result.diagnostics[0].lexeme == '"abc'

    def test_invalid_string_escape(self):
        """The escape is reported at the backslash; the string is skipped."""
        result = scan('"a\\qb" X')
        assert [(t.lexeme, t.column) for t in result.significant_tokens()] == [("X", 8)]
        error = result.diagnostics[0]
        assert error.kind is DiagnosticKind.MALFORMED_LITERAL
        assert error.lexeme == "\\q"
        assert error.column == 3

    @pytest.mark.parametrize("source", ["'a'", "'\\n'", "'\\''", "’a’"])
    def test_char_literal(self, source):
        tokens = tokenize(source)
        assert len(tokens) == 1
        assert tokens[0].kind is TokenKind.CHAR_LITERAL
        assert tokens[0].lexeme == source

    def test_char_too_long(self):
        result = scan("'ab' X")
        assert [t.lexeme for t in result.significant_tokens()] == ["X"]
        assert result.diagnostics[0].lexeme == "'ab'"

    def test_empty_char(self):
        errors = diagnostics("''")
        assert len(errors) == 1
        assert errors[0].reason == "empty character literal"

    def test_typographic_quote_can_be_disabled(self):
        options = ScannerOptions(allow_typographic_quote=False)
        result = scan("’a’", options=options)
        assert all(t.kind is not TokenKind.CHAR_LITERAL for t in result.tokens)
        assert result.diagnostics[0].kind is DiagnosticKind.INVALID_CHARACTER


# =============================================================================
# Comment Tests
# =============================================================================

class TestComments:
    """Test single-line and multi-line comments."""

    def test_single_line_comment(self):
        result = scan("X ## comment here\nY")
        assert [(t.lexeme, t.line) for t in result.significant_tokens()] == [
            ("X", 1), ("Y", 2),
        ]
        assert result.statistics.comments_removed == 1

    def test_comment_at_end_of_input(self):
        result = scan("## only")
        assert len(result.tokens) == 1
        assert result.tokens[0].column == 8

    def test_nested_comment(self):
        """A nested comment is skipped as a whole without diagnostics."""
        result = scan("#* outer #* inner *# still *#")
        assert len(result.tokens) == 1
        assert result.tokens[0].column == 30
        assert not result.has_errors()
        assert result.statistics.comments_removed == 1

    def test_multi_line_comment_positions(self):
        tokens = tokenize("#* a\n #* b *#\n*# X")
        assert [(t.lexeme, t.line, t.column) for t in tokens] == [("X", 3, 4)]

    def test_unclosed_nested_comment(self):
        """A missing closer is reported at the opening marker."""
        result = scan("#* outer #* inner *#")
        assert len(result.diagnostics) == 1
        error = result.diagnostics[0]
        assert error.kind is DiagnosticKind.UNCLOSED_MULTILINE_COMMENT
        assert (error.line, error.column) == (1, 1)
        assert error.lexeme == "#* outer #* inner *#"

    def test_unclosed_comment_ends_scan(self):
        result = scan("start\n#* never closed\nfinish")
        assert result.diagnostics[-1].kind.is_terminal
        assert [t.lexeme for t in result.tokens] == ["start", "EOF"]
        eof = result.tokens[-1]
        assert (eof.line, eof.column) == (3, 7)

    def test_flat_comments_option(self):
        """Without nesting, the first *# closes the comment."""
        options = ScannerOptions(nested_comments=False)
        result = scan("#* a #* b *# c *#", options=options)
        assert [t.lexeme for t in result.significant_tokens()] == ["*"]
        assert [d.kind for d in result.diagnostics] == [
            DiagnosticKind.INVALID_TOKEN,
            DiagnosticKind.INVALID_CHARACTER,
        ]

    def test_lone_hash(self):
        errors = diagnostics("# X")
        assert errors[0].kind is DiagnosticKind.INVALID_CHARACTER
        assert errors[0].lexeme == "#"


# =============================================================================
# Line Break Tests
# =============================================================================

class TestLineBreaks:
    """Test that every line break style counts once."""

    def test_crlf(self):
        tokens = tokenize("start\r\nX\r\nfinish")
        assert [(t.line, t.column) for t in tokens] == [(1, 1), (2, 1), (3, 1)]

    def test_bare_cr(self):
        tokens = tokenize("start\rX")
        assert (tokens[1].line, tokens[1].column) == (2, 1)

    def test_lf_cr_is_two_breaks(self):
        tokens = tokenize("start\n\rX")
        assert tokens[1].line == 3

    def test_crlf_after_comment(self):
        tokens = tokenize("## c\r\nY")
        assert (tokens[0].line, tokens[0].column) == (2, 1)


# =============================================================================
# Error Recovery Tests
# =============================================================================

class TestRecovery:
    """Test that scanning always continues after an error."""

    def test_invalid_character(self):
        result = scan("X @ Y")
        assert [(t.lexeme, t.column) for t in result.significant_tokens()] == [
            ("X", 1), ("Y", 5),
        ]
        error = result.diagnostics[0]
        assert error.kind is DiagnosticKind.INVALID_CHARACTER
        assert (error.line, error.column) == (1, 3)

    def test_consecutive_invalid_characters(self):
        result = scan("@@@ start")
        assert len(result.diagnostics) == 3
        assert [(t.lexeme, t.column) for t in result.significant_tokens()] == [("start", 5)]

    def test_underscore_run(self):
        error = diagnostics("_tmp")[0]
        assert error.kind is DiagnosticKind.INVALID_TOKEN
        assert error.lexeme == "_tmp"

    def test_errors_in_encounter_order(self):
        result = scan('@\n"open\n1.2.3')
        assert [(d.kind, d.line) for d in result.diagnostics] == [
            (DiagnosticKind.INVALID_CHARACTER, 1),
            (DiagnosticKind.MALFORMED_LITERAL, 2),
            (DiagnosticKind.MALFORMED_LITERAL, 3),
        ]


# =============================================================================
# Statistics Tests
# =============================================================================

class TestStatistics:
    """Test counters gathered during a scan."""

    def test_counts(self):
        result = scan("start X = 1 ## c\n#* d *# finish")
        stats = result.statistics
        assert stats.count(TokenKind.KEYWORD) == 2
        assert stats.count(TokenKind.IDENTIFIER) == 1
        assert stats.count(TokenKind.OPERATOR) == 1
        assert stats.count(TokenKind.INT_LITERAL) == 1
        assert stats.count(TokenKind.EOF) == 1
        assert stats.total_tokens == 6
        assert stats.comments_removed == 2
        assert stats.lines_processed == 2


# =============================================================================
# Repeated Scan Tests
# =============================================================================

class TestRepeatedScans:
    """Test that scanning twice with one Scanner gives the same result."""

    def test_rescan_matches_first_scan(self):
        """A second scan() does not inherit diagnostics or symbols."""
        scanner = Scanner("X @ X")
        first = scanner.scan()
        second = scanner.scan()
        assert second.tokens == first.tokens
        assert second.diagnostics == first.diagnostics
        assert len(second.diagnostics) == 1
        assert second.symbols.get("X").occurrences == 2
        assert second.statistics.count(TokenKind.IDENTIFIER) == 2

    def test_first_result_left_intact(self):
        scanner = Scanner("@")
        first = scanner.scan()
        scanner.scan()
        assert len(first.diagnostics) == 1

    def test_caller_collaborators_accumulate(self):
        """Handlers passed in by the caller are never reset."""
        errors = ErrorHandler()
        symbols = SymbolTable()
        scanner = Scanner("X @", errors=errors, symbols=symbols)
        scanner.scan()
        result = scanner.scan()
        assert result.errors is errors
        assert errors.error_count() == 2
        assert symbols.get("X").occurrences == 2
        assert result.statistics.count(TokenKind.IDENTIFIER) == 1


# =============================================================================
# Stream Invariant Tests
# =============================================================================

NASTY_INPUTS = [
    "",
    '"',
    "'",
    "’",
    "#",
    "#*",
    "#*#",
    "\\",
    "1.",
    "1.2.3.4",
    "A" + "b" * 40,
    '"abc\\q',
    "'\\",
    '"\r"',
    "x\r\ny",
    "@#$%^",
    "1.1234567e5",
    "--1",
    "+",
    "#* #* *#",
    "start\n  declare Xyz_1 = -12.5e+3;\n  output 'a' \"s\\n\" true\nfinish",
    "X\n\n\n   Y\r\r\nZ",
]


class TestInvariants:
    """Properties that hold for every input."""

    @pytest.mark.parametrize("source", NASTY_INPUTS)
    def test_single_trailing_eof(self, source):
        tokens = scan(source).tokens
        assert tokens[-1].kind is TokenKind.EOF
        assert [t.kind for t in tokens].count(TokenKind.EOF) == 1

    @pytest.mark.parametrize("source", NASTY_INPUTS)
    def test_lexemes_are_source_substrings(self, source):
        for token in scan(source).significant_tokens():
            assert token.lexeme
            assert token.lexeme in source

    @pytest.mark.parametrize("source", NASTY_INPUTS)
    def test_positions_increase(self, source):
        positions = [(t.line, t.column) for t in scan(source).tokens]
        assert positions == sorted(positions)
        significant = positions[:-1]
        assert len(set(significant)) == len(significant)

    @pytest.mark.parametrize("source", NASTY_INPUTS)
    def test_identifier_and_float_shape(self, source):
        for token in scan(source).tokens:
            if token.kind is TokenKind.IDENTIFIER:
                assert 1 <= len(token.lexeme) <= 31
                assert token.lexeme[0].isupper()
            if token.kind is TokenKind.FLOAT_LITERAL:
                fraction = token.lexeme.split(".")[1].lower().split("e")[0]
                assert 1 <= len(fraction) <= 6

    def test_lexemes_reconstruct_source(self):
        """Without comments, tokens plus whitespace cover the whole input."""
        source = "declare X\nX = 10\nloop (X > 0) { X -= 1; }\noutput X**2.5"
        result = scan(source)
        assert not result.has_errors()
        joined = "".join(t.lexeme for t in result.significant_tokens())
        assert joined == "".join(source.split())
