# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0

r"""Syntax check for SPDX license expressions in curation files.

Curations are written by hand, so a typo such as ``"MIT OR"`` or
``"Apache-2.0)"`` should be reported when the curation file is loaded,
not silently carried into a report.  This module only answers the
question "is this a well-formed SPDX expression?".  It never rewrites
the expression: matching compares license strings exactly as written.

Grammar (SPDX Specification Annex B, simplified for recursive descent)::

    expression  = and_expr ("OR" and_expr)*
    and_expr    = with_expr ("AND" with_expr)*
    with_expr   = simple_expr ("WITH" idstring)?
    simple_expr = "(" expression ")" / idstring ["+"]
    idstring    = ["DocumentRef-" 1*idchar ":"] ["LicenseRef-"] 1*idchar
    idchar      = ALPHA / DIGIT / "-" / "."

Operators are case-sensitive and must be all-upper or all-lower.

Usage::

    from curationkit.spdx_expr import validate, is_valid

    validate('GPL-2.0-only WITH Classpath-exception-2.0')  # returned as-is
    is_valid('MIT OR')  # False
"""

from __future__ import annotations

import re
from dataclasses import dataclass

__all__ = [
    'NOASSERTION',
    'NONE',
    'ParseError',
    'is_valid',
    'validate',
]

# Special SPDX values. ``NONE`` in a concluded license removes a finding.
NONE = 'NONE'
NOASSERTION = 'NOASSERTION'


class ParseError(ValueError):
    """Raised when an SPDX expression is malformed.

    Attributes:
        expression: The original expression string.
        position: Character offset where the error was detected.
        detail: Human-readable description of the problem.
    """

    def __init__(self, expression: str, position: int, detail: str) -> None:
        """Initialize with expression text, error position, and detail message."""
        self.expression = expression
        self.position = position
        self.detail = detail
        marker = ' ' * position + '^'
        super().__init__(f'invalid SPDX expression at position {position}: {detail}\n  {expression}\n  {marker}')


_TOKEN_RE = re.compile(
    r"""
      (?P<op>AND|and|OR|or|WITH|with)(?![A-Za-z0-9.\-:+])
    | (?P<paren>[()])
    | (?P<id>
          (?:DocumentRef-[A-Za-z0-9.\-]+:)?
          [A-Za-z0-9.\-]+
      )
      (?P<plus>\+)?
    """,
    re.VERBOSE,
)


@dataclass(frozen=True)
class _Token:
    kind: str
    text: str
    pos: int


def _tokenize(expr: str) -> list[_Token]:
    tokens: list[_Token] = []
    pos = 0
    while pos < len(expr):
        if expr[pos].isspace():
            pos += 1
            continue
        m = _TOKEN_RE.match(expr, pos)
        if m is None:
            raise ParseError(expr, pos, f'unexpected character {expr[pos]!r}')
        if m.group('op'):
            tokens.append(_Token(m.group('op').upper(), m.group('op'), pos))
        elif m.group('paren'):
            tokens.append(_Token(m.group('paren'), m.group('paren'), pos))
        else:
            tokens.append(_Token('ID', m.group(0), pos))
        pos = m.end()
    tokens.append(_Token('EOF', '', len(expr)))
    return tokens


class _Checker:
    """Recursive descent recognizer; raises on the first error."""

    def __init__(self, expr: str) -> None:
        self._expr = expr
        self._tokens = _tokenize(expr)
        self._pos = 0

    def _peek(self) -> _Token:
        return self._tokens[self._pos]

    def _take(self, kind: str, what: str) -> _Token:
        tok = self._peek()
        if tok.kind != kind:
            found = 'end of expression' if tok.kind == 'EOF' else repr(tok.text)
            raise ParseError(self._expr, tok.pos, f'expected {what}, found {found}')
        self._pos += 1
        return tok

    def check(self) -> None:
        self._expression()
        self._take('EOF', 'end of expression')

    def _expression(self) -> None:
        self._and_expr()
        while self._peek().kind == 'OR':
            self._pos += 1
            self._and_expr()

    def _and_expr(self) -> None:
        self._with_expr()
        while self._peek().kind == 'AND':
            self._pos += 1
            self._with_expr()

    def _with_expr(self) -> None:
        compound = self._simple_expr()
        if self._peek().kind == 'WITH':
            with_tok = self._peek()
            if compound:
                raise ParseError(self._expr, with_tok.pos, 'WITH requires a single license on its left')
            self._pos += 1
            exception = self._take('ID', 'license exception identifier')
            if exception.text.endswith('+'):
                raise ParseError(self._expr, exception.pos, 'a license exception cannot take "+"')

    def _simple_expr(self) -> bool:
        """Consume a simple expression; return ``True`` if parenthesized."""
        if self._peek().kind == '(':
            self._pos += 1
            self._expression()
            self._take(')', '")"')
            return True
        self._take('ID', 'license identifier or "("')
        return False


def validate(expression: str) -> str:
    """Check that *expression* is a well-formed SPDX license expression.

    Args:
        expression: The expression text, e.g. ``"MIT OR Apache-2.0"``.

    Returns:
        The expression, unchanged.

    Raises:
        ParseError: If the expression is empty or malformed.
    """
    if not expression.strip():
        raise ParseError(expression, 0, 'empty expression')
    _Checker(expression).check()
    return expression


def is_valid(expression: str) -> bool:
    """Return ``True`` if *expression* passes :func:`validate`."""
    try:
        validate(expression)
    except ParseError:
        return False
    return True
