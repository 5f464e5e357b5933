"""
Arithmetic evaluator for volume formulas.

Recursive descent over plain numbers and + - * / ( ) **.
No eval(), no names: by the time a formula gets here every variable has been
replaced by its value, so anything that isn't a number or operator is an error.

Grammar:
    expr    := term (('+' | '-') term)*
    term    := unary (('*' | '/') unary)*
    unary   := ('+' | '-') unary | power
    power   := primary ('**' unary)?        (right-associative, -2**2 == -4)
    primary := NUMBER | '(' expr ')'
"""

import math
import re
from typing import List, Optional

MAX_DEPTH = 64

_TOKEN_RE = re.compile(r"\s*(?:(\d+(?:\.\d*)?(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?)|(\*\*|[-+*/()]))")


class ExpressionError(ValueError):
    pass


def tokenize(text: str) -> List[str]:
    """Split an arithmetic expression into number and operator tokens."""
    tokens = []
    pos = 0
    text = text.rstrip()
    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if not match:
            raise ExpressionError(f"Unexpected character {text[pos:].lstrip()[:1]!r} in {text!r}")
        tokens.append(match.group(1) or match.group(2))
        pos = match.end()
    return tokens


class _Parser:
    def __init__(self, tokens: List[str]):
        self._tokens = tokens
        self._pos = 0
        self._depth = 0

    def _peek(self) -> Optional[str]:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def _consume(self) -> str:
        tok = self._peek()
        if tok is None:
            raise ExpressionError("Unexpected end of expression")
        self._pos += 1
        return tok

    def parse(self) -> float:
        if not self._tokens:
            raise ExpressionError("Empty expression")
        result = self._parse_expr()
        if self._peek() is not None:
            raise ExpressionError(f"Unexpected token: {self._peek()}")
        return result

    def _parse_expr(self) -> float:
        left = self._parse_term()
        while self._peek() in ("+", "-"):
            op = self._consume()
            right = self._parse_term()
            left = left + right if op == "+" else left - right
        return left

    def _parse_term(self) -> float:
        left = self._parse_unary()
        while self._peek() in ("*", "/"):
            op = self._consume()
            right = self._parse_unary()
            if op == "*":
                left = left * right
            else:
                if right == 0:
                    raise ExpressionError("Division by zero")
                left = left / right
        return left

    def _parse_unary(self) -> float:
        tok = self._peek()
        if tok in ("+", "-"):
            self._consume()
            self._enter()
            value = self._parse_unary()
            self._depth -= 1
            return value if tok == "+" else -value
        return self._parse_power()

    def _parse_power(self) -> float:
        base = self._parse_primary()
        if self._peek() != "**":
            return base
        self._consume()
        self._enter()
        exponent = self._parse_unary()
        self._depth -= 1
        try:
            result = base ** exponent
        except (OverflowError, ZeroDivisionError) as e:
            raise ExpressionError(f"Cannot raise {base} to {exponent}: {e}") from e
        if isinstance(result, complex):
            raise ExpressionError(f"Complex result for {base} ** {exponent}")
        return result

    def _parse_primary(self) -> float:
        tok = self._consume()
        if tok == "(":
            self._enter()
            value = self._parse_expr()
            self._depth -= 1
            if self._consume() != ")":
                raise ExpressionError("Expected ')'")
            return value
        if tok in ("+", "-", "*", "/", "**", ")"):
            raise ExpressionError(f"Unexpected operator: {tok}")
        return float(tok)

    def _enter(self):
        self._depth += 1
        if self._depth > MAX_DEPTH:
            raise ExpressionError("Expression nested too deeply")


def evaluate_expression(text: str) -> float:
    """
    Evaluate a pure arithmetic expression.
    Raises ExpressionError on malformed input, division by zero,
    or a non-finite result.
    """
    if not isinstance(text, str):
        raise ExpressionError(f"Expected a string, got {type(text).__name__}")
    result = _Parser(tokenize(text)).parse()
    if not math.isfinite(result):
        raise ExpressionError(f"Non-finite result: {result}")
    return result
