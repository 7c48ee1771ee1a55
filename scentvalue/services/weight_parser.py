"""
Weight Parser - Turn free-text scale readings into gram values.

Handles the notations seen on lab scales and typed by staff:
- "1kg136"   -> 1136  (whole kilograms + gram remainder)
- "1.2kg"    -> 1200
- "950", "950g"
- "500g+20g" -> 520   (simple arithmetic for several small bottles)

Arithmetic is evaluated by a small recursive-descent parser that only knows
numbers, + - * / and parentheses. Nothing is ever passed to eval().
"""

import logging
import math
import re
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)

# Compound "kilograms and grams" shorthand, e.g. 1kg136
KG_AND_GRAMS_PATTERN = re.compile(r"(\d+)kg(\d+)")
# Plain kilograms, decimal allowed, e.g. 1.5kg / 2 kg
KG_PATTERN = re.compile(r"(\d*\.?\d+)\s*kg")
# Gram unit label on any remaining number
GRAMS_PATTERN = re.compile(r"(\d*\.?\d+)\s*g")
# Everything that may reach the arithmetic parser
ALLOWED_PATTERN = re.compile(r"^[0-9.+\-*/\s()]+$")

TOKEN_PATTERN = re.compile(r"\s*(?:(\d+\.?\d*|\.\d+)|(.))")
# "++" / "--" are increment/decrement, not two signs
DOUBLE_SIGN_PATTERN = re.compile(r"\+\+|--")

# Parentheses and unary signs deeper than this are rejected
MAX_NESTING = 100


class WeightParseError(ValueError):
    """Raised when a weight expression cannot be resolved."""


def _render_number(value: float) -> str:
    """Render a rewritten number so the arithmetic parser reads it back unchanged."""
    if math.isfinite(value) and value == int(value):
        return str(int(value))
    return repr(value)


def _kg_and_grams(match: re.Match) -> str:
    kilograms, grams = match.groups()
    try:
        return str(int(kilograms) * 1000 + int(grams))
    except ValueError as e:
        # int() refuses digit strings past sys.get_int_max_str_digits()
        raise WeightParseError(f"Weight reading too long: {e}") from e


def _kg(match: re.Match) -> str:
    return _render_number(float(match.group(1)) * 1000)


def normalize_expression(expression: str) -> str:
    """
    Apply unit shorthands and strip separators.

    Order matters: the compound kg+g rule must run before the plain kg rule,
    otherwise "1kg136" would become "1000136".
    """
    cleaned = expression.strip().lower().replace(",", "")
    cleaned = KG_AND_GRAMS_PATTERN.sub(_kg_and_grams, cleaned)
    cleaned = KG_PATTERN.sub(_kg, cleaned)
    cleaned = GRAMS_PATTERN.sub(r"\1", cleaned)
    return cleaned


class ArithmeticParser:
    """
    Recursive-descent evaluator for + - * / and parentheses.

    Grammar:
        expr   := term (('+' | '-') term)*
        term   := factor (('*' | '/') factor)*
        factor := ('+' | '-') factor | NUMBER | '(' expr ')'
    """

    def __init__(self, text: str):
        self.tokens = self._tokenize(text)
        self.pos = 0
        self.depth = 0

    @staticmethod
    def _tokenize(text: str) -> List[Tuple[str, str]]:
        tokens = []
        for number, op in TOKEN_PATTERN.findall(text):
            if number:
                tokens.append(("num", number))
            elif op.strip():
                if op not in "+-*/()":
                    raise WeightParseError(f"Unexpected character: {op!r}")
                tokens.append(("op", op))
        return tokens

    def _peek(self) -> Optional[Tuple[str, str]]:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def _next(self) -> Tuple[str, str]:
        token = self._peek()
        if token is None:
            raise WeightParseError("Unexpected end of expression")
        self.pos += 1
        return token

    def parse(self) -> float:
        if not self.tokens:
            raise WeightParseError("Empty expression")
        value = self._expr()
        if self._peek() is not None:
            raise WeightParseError(f"Unexpected token: {self._peek()[1]!r}")
        return value

    def _expr(self) -> float:
        value = self._term()
        while self._peek() in (("op", "+"), ("op", "-")):
            _, op = self._next()
            right = self._term()
            value = value + right if op == "+" else value - right
        return value

    def _term(self) -> float:
        value = self._factor()
        while self._peek() in (("op", "*"), ("op", "/")):
            _, op = self._next()
            right = self._factor()
            if op == "*":
                value = value * right
            else:
                if right == 0:
                    raise WeightParseError("Division by zero")
                value = value / right
        return value

    def _factor(self) -> float:
        self.depth += 1
        try:
            if self.depth > MAX_NESTING:
                raise WeightParseError("Expression nested too deeply")
            kind, text = self._next()
            if kind == "num":
                return float(text)
            if text == "-":
                return -self._factor()
            if text == "+":
                return self._factor()
            if text == "(":
                value = self._expr()
                if self._next() != ("op", ")"):
                    raise WeightParseError("Missing closing parenthesis")
                return value
            raise WeightParseError(f"Unexpected token: {text!r}")
        finally:
            self.depth -= 1


def parse_weight_or_raise(expression: str) -> float:
    """
    Resolve a weight expression to grams, raising on invalid input.

    Empty input resolves to 0 ("nothing entered"), not an error.

    Raises:
        WeightParseError: if the expression is not a finite arithmetic value
    """
    if not expression or not expression.strip():
        return 0.0

    cleaned = normalize_expression(expression)
    if not ALLOWED_PATTERN.match(cleaned):
        raise WeightParseError(f"Invalid characters in weight: {expression!r}")
    if DOUBLE_SIGN_PATTERN.search(cleaned):
        raise WeightParseError(f"Doubled sign in weight: {expression!r}")

    value = ArithmeticParser(cleaned).parse()
    if not math.isfinite(value):
        raise WeightParseError(f"Weight is not finite: {expression!r}")
    return value


def resolve_weight(expression: str) -> Optional[float]:
    """
    Resolve a weight expression to grams.

    Returns:
        Gram value, 0.0 for empty input, or None when the expression is invalid.
        Negative results (e.g. "100-200") are passed through unchanged.
    """
    try:
        return parse_weight_or_raise(expression)
    except WeightParseError as e:
        logger.debug(f"Rejected weight expression {expression!r}: {e}")
        return None
