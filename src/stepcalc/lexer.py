"""Lexer: converts normalized expression text into a flat token stream."""

from __future__ import annotations

from decimal import InvalidOperation

from stepcalc.errors import ParseError
from stepcalc.numeric import decimal_from
from stepcalc.tokens import (
    MULTI_CHAR_OPERATORS,
    SINGLE_CHAR_OPERATORS,
    Span,
    Token,
    TokenType,
    is_number_char,
    is_number_start,
    strip_separators,
)


class Lexer:
    """Tokenize an expression into a list of Token objects."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0
        self._tokens: list[Token] = []

    def tokenize(self) -> list[Token]:
        """Tokenize the full source and return the token list."""
        while self._pos < len(self._source):
            ch = self._peek()

            if ch.isspace():
                self._advance()
                continue

            if is_number_start(ch):
                self._lex_number()
                continue

            if self._lex_operator():
                continue

            if ch == "(":
                start = self._pos
                self._advance()
                self._emit(TokenType.LPAREN, "(", start)
                continue

            if ch == ")":
                start = self._pos
                self._advance()
                self._emit(TokenType.RPAREN, ")", start)
                continue

            raise self._error(f"unsupported character '{ch}'", Span(self._pos, self._pos + 1))

        self._emit(TokenType.EOF, "", self._pos)
        return self._tokens

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _peek(self) -> str:
        if self._pos < len(self._source):
            return self._source[self._pos]
        return ""

    def _advance(self) -> str:
        ch = self._source[self._pos]
        self._pos += 1
        return ch

    def _emit(self, tt: TokenType, value, start: int) -> Token:
        raw = self._source[start : self._pos]
        tok = Token(tt, value, raw, Span(start, self._pos))
        self._tokens.append(tok)
        return tok

    def _error(self, message: str, span: Span) -> ParseError:
        return ParseError(message, span, self._source)

    # ------------------------------------------------------------------
    # Numbers
    # ------------------------------------------------------------------

    def _lex_number(self) -> None:
        """Digits with ``_``/``,`` separators and at most one decimal point."""
        start = self._pos
        seen_point = False
        while self._pos < len(self._source):
            ch = self._peek()
            if ch == ".":
                # A second point ends the literal and is left for the next token
                if seen_point:
                    break
                seen_point = True
                self._advance()
            elif is_number_char(ch):
                self._advance()
            else:
                break

        span = Span(start, self._pos)
        cleaned = strip_separators(self._source[start : self._pos])
        if cleaned in ("", "."):
            raise self._error("invalid number", span)
        try:
            value = decimal_from(cleaned)
        except (InvalidOperation, ValueError):
            raise self._error("invalid number", span) from None
        self._emit(TokenType.NUMBER, value, start)

    # ------------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------------

    def _lex_operator(self) -> bool:
        start = self._pos
        for op in MULTI_CHAR_OPERATORS:
            if self._source.startswith(op, self._pos):
                self._pos += len(op)
                self._emit(TokenType.OPERATOR, op, start)
                return True

        ch = self._peek()
        if ch in SINGLE_CHAR_OPERATORS:
            self._advance()
            self._emit(TokenType.OPERATOR, ch, start)
            return True
        return False


def tokenize(source: str) -> list[Token]:
    """Convenience function: tokenize source text and return token list."""
    return Lexer(source).tokenize()
