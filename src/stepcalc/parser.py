"""Expression parser: converts a token stream into an AST.

Precedence climbing: ``parse_expression(min_prec)`` reads one operand and
then folds in every following binary operator whose precedence is at least
``min_prec``. Operator rules come from ``stepcalc.operators.OP_INFO``.
"""

from __future__ import annotations

from stepcalc.ast import Binary, Group, Node, Number, Unary
from stepcalc.errors import ParseError
from stepcalc.lexer import tokenize
from stepcalc.operators import OP_INFO, Assoc
from stepcalc.tokens import PREFIX_OPERATORS, Span, Token, TokenType


class Parser:
    """Recursive descent parser for expression token streams."""

    def __init__(self, tokens: list[Token], source: str = "") -> None:
        self._tokens = tokens
        self._source = source
        self._pos = 0

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def _peek(self) -> Token:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return self._tokens[-1]  # EOF

    def _at(self, *types: TokenType) -> bool:
        return self._peek().type in types

    def _at_eof(self) -> bool:
        return self._peek().type == TokenType.EOF

    def _advance(self) -> Token:
        tok = self._tokens[self._pos]
        if tok.type != TokenType.EOF:
            self._pos += 1
        return tok

    # ------------------------------------------------------------------
    # Grammar
    # ------------------------------------------------------------------

    def parse(self) -> Node:
        try:
            node = self.parse_expression(0)
        except RecursionError:
            end = self._tokens[-1].span.end
            raise self._error("expression is nested too deeply", Span(0, end)) from None

        if not self._at_eof():
            raise self._error("trailing tokens", self._peek().span)
        return node

    def parse_expression(self, min_prec: int) -> Node:
        left = self._parse_primary()
        while True:
            tok = self._peek()
            if tok.type != TokenType.OPERATOR:
                break
            info = OP_INFO.get(tok.value)
            if info is None or info.precedence < min_prec:
                break
            self._advance()
            next_min = info.precedence if info.assoc is Assoc.RIGHT else info.precedence + 1
            right = self.parse_expression(next_min)
            left = Binary(tok.value, left, right, left.span.cover(right.span))
        return left

    def _parse_primary(self) -> Node:
        tok = self._peek()

        if tok.type == TokenType.OPERATOR and tok.value in PREFIX_OPERATORS:
            self._advance()
            operand = self._parse_primary()
            return Unary(tok.value, operand, tok.span.cover(operand.span))

        if tok.type == TokenType.NUMBER:
            self._advance()
            return Number(tok.value, tok.span, tok.raw)

        if tok.type == TokenType.LPAREN:
            self._advance()
            inner = self.parse_expression(0)
            if not self._at(TokenType.RPAREN):
                raise self._error("missing closing parenthesis", tok.span)
            close = self._advance()
            return Group(inner, tok.span.cover(close.span))

        raise self._error("expected an operand", tok.span)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _error(self, message: str, span: Span) -> ParseError:
        return ParseError(message, span, self._source)


def parse(tokens: list[Token], source: str = "") -> Node:
    """Parse a token list into an AST. ``source`` is only used in error messages."""
    return Parser(tokens, source).parse()


def parse_source(source: str) -> Node:
    """Convenience function: tokenize and parse source text."""
    return parse(tokenize(source), source)
