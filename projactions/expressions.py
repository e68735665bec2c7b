"""Closed expression language for configured commands.

A command setting is either a plain string, used verbatim, or a mapping with
an ``expr`` entry holding a small expression::

    configure-cmd:
      expr: '"./configure --prefix=" + expand("~/.local")'

The grammar only knows string literals, ``+`` concatenation, parentheses and
a fixed set of functions (``expand``, ``concat``, ``env``). There is no way to
reach Python from an expression.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from .errors import MalformedCommandExpression


class ExpressionError(ValueError):
    """Raised when an expression cannot be tokenized, parsed or evaluated."""


@dataclass(frozen=True)
class Literal:
    value: str


@dataclass(frozen=True)
class Concat:
    parts: Tuple["Expression", ...]


@dataclass(frozen=True)
class Call:
    name: str
    args: Tuple["Expression", ...]


Expression = Union[Literal, Concat, Call]


_TOKEN_RE = re.compile(
    r"""
    (?P<space>\s+)
  | (?P<string>"(?:[^"\\]|\\.)*"|'(?:[^'\\]|\\.)*')
  | (?P<name>[A-Za-z_][A-Za-z0-9_-]*)
  | (?P<op>[+(),])
    """,
    re.VERBOSE | re.DOTALL,
)

_ESCAPES = {"n": "\n", "t": "\t", "\\": "\\", '"': '"', "'": "'"}


@dataclass(frozen=True)
class _Token:
    kind: str
    text: str
    position: int


def tokenize(source: str) -> List[_Token]:
    tokens: List[_Token] = []
    position = 0
    while position < len(source):
        match = _TOKEN_RE.match(source, position)
        if match is None:
            raise ExpressionError(
                f"unexpected character {source[position]!r} at offset {position}"
            )
        kind = match.lastgroup or ""
        if kind != "space":
            tokens.append(_Token(kind, match.group(), position))
        position = match.end()
    return tokens


class _Parser:
    def __init__(self, tokens: Sequence[_Token]) -> None:
        self._tokens = tokens
        self._index = 0

    def parse(self) -> Expression:
        if not self._tokens:
            raise ExpressionError("empty expression")
        expr = self._expr()
        token = self._peek()
        if token is not None:
            raise ExpressionError(f"unexpected {token.text!r} at offset {token.position}")
        return expr

    def _expr(self) -> Expression:
        parts = [self._term()]
        while self._accept("+"):
            parts.append(self._term())
        if len(parts) == 1:
            return parts[0]
        return Concat(tuple(parts))

    def _term(self) -> Expression:
        token = self._next("a string, a function call or '('")
        if token.kind == "string":
            return Literal(_unquote(token.text))
        if token.kind == "name":
            self._expect("(")
            args: List[Expression] = []
            if not self._accept(")"):
                args.append(self._expr())
                while self._accept(","):
                    args.append(self._expr())
                self._expect(")")
            return Call(token.text, tuple(args))
        if token.text == "(":
            inner = self._expr()
            self._expect(")")
            return inner
        raise ExpressionError(f"unexpected {token.text!r} at offset {token.position}")

    def _peek(self) -> Optional[_Token]:
        if self._index < len(self._tokens):
            return self._tokens[self._index]
        return None

    def _next(self, expected: str) -> _Token:
        token = self._peek()
        if token is None:
            raise ExpressionError(f"expected {expected} but reached end of expression")
        self._index += 1
        return token

    def _accept(self, text: str) -> bool:
        token = self._peek()
        if token is not None and token.kind == "op" and token.text == text:
            self._index += 1
            return True
        return False

    def _expect(self, text: str) -> None:
        token = self._next(repr(text))
        if token.kind != "op" or token.text != text:
            raise ExpressionError(
                f"expected {text!r} but found {token.text!r} at offset {token.position}"
            )


def _unquote(text: str) -> str:
    body = text[1:-1]
    return re.sub(r"\\(.)", lambda m: _ESCAPES.get(m.group(1), m.group(1)), body, flags=re.DOTALL)


def parse_expression(source: str) -> Expression:
    """Parse expression source into a tree of ``Literal``/``Concat``/``Call``."""
    return _Parser(tokenize(source)).parse()


def _expand(path: str) -> str:
    return os.path.abspath(os.path.expanduser(path))


def _concat(*parts: str) -> str:
    return "".join(parts)


def _env(name: str, default: Optional[str] = None) -> str:
    value = os.environ.get(name)
    if value is not None:
        return value
    if default is None:
        raise ExpressionError(f"environment variable {name} is not set")
    return default


_FUNCTIONS: Dict[str, Tuple[Callable[..., str], int, Optional[int]]] = {
    "expand": (_expand, 1, 1),
    "concat": (_concat, 0, None),
    "env": (_env, 1, 2),
}


def _evaluate(expr: Expression) -> str:
    if isinstance(expr, Literal):
        return expr.value
    if isinstance(expr, Concat):
        return "".join(_evaluate(part) for part in expr.parts)
    if isinstance(expr, Call):
        entry = _FUNCTIONS.get(expr.name)
        if entry is None:
            raise ExpressionError(f"unknown function {expr.name}()")
        func, min_args, max_args = entry
        count = len(expr.args)
        if count < min_args or (max_args is not None and count > max_args):
            raise ExpressionError(f"{expr.name}() takes {_arity(min_args, max_args)}, got {count}")
        return func(*(_evaluate(arg) for arg in expr.args))
    raise ExpressionError(f"unsupported expression node {type(expr).__name__}")


def _arity(min_args: int, max_args: Optional[int]) -> str:
    if max_args is None:
        return f"at least {min_args} argument(s)"
    if min_args == max_args:
        return f"{min_args} argument(s)"
    return f"{min_args} to {max_args} arguments"


def evaluate_command(action: str, value: Any) -> str:
    """Evaluate a configured command value to the command string for ``action``."""
    try:
        return _evaluate(_coerce(value))
    except ExpressionError as exc:
        raise MalformedCommandExpression(action, str(exc)) from exc


def _coerce(value: Any) -> Expression:
    if value is None:
        raise ExpressionError("no command configured")
    if isinstance(value, str):
        return Literal(value)
    if isinstance(value, (Literal, Concat, Call)):
        return value
    if isinstance(value, Mapping):
        if set(value) != {"expr"}:
            keys = ", ".join(sorted(str(key) for key in value))
            raise ExpressionError(f"expected a mapping with a single 'expr' key, got {keys}")
        source = value["expr"]
        if not isinstance(source, str):
            raise ExpressionError("'expr' must hold expression source text")
        return parse_expression(source)
    raise ExpressionError(f"unsupported command value of type {type(value).__name__}")


__all__ = [
    "Call",
    "Concat",
    "Expression",
    "ExpressionError",
    "Literal",
    "evaluate_command",
    "parse_expression",
    "tokenize",
]
