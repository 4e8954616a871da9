"""Query tokenizer.

Splits a query string into tokens:

- Quoted phrases: "exact phrase" or 'exact phrase'
- Operator tokens: nagasa>70, mei:kinzogan
- Negations: -term, !term
- Plain terms: Masamune, Soshu

Tokenizing is purely lexical; classification happens in the parser.
"""

from __future__ import annotations

from dataclasses import dataclass

QUOTE_CHARS = frozenset({'"', "'"})


@dataclass(frozen=True, slots=True)
class Token:
    """One lexical token.

    Attributes:
        value: Token text. Quoted tokens are normalized to double quotes.
        start: Offset of the first character in the source string.
        end: Offset just past the last consumed character.
        quoted: Whether the token was opened by a quote character.
    """

    value: str
    start: int
    end: int
    quoted: bool = False

    @property
    def content(self) -> str:
        """Return the phrase content without wrapping quotes."""
        if self.quoted:
            return self.value[1:-1]
        return self.value


def tokenize(query: str) -> list[Token]:
    """Tokenize a query string, keeping quoted spans as single tokens.

    A quote opens a phrase only at the start of a token. The phrase runs to
    the matching closing quote, or to the end of the string when unterminated.
    A backslash inside a phrase makes the next character literal. Quotes met
    inside an unquoted token are ordinary characters.

    Args:
        query: Raw query string.

    Returns:
        Tokens in source order.

    Example:
        >>> [t.value for t in tokenize('Soshu "ko-itame" nagasa>70')]
        ['Soshu', '"ko-itame"', 'nagasa>70']
    """
    tokens: list[Token] = []
    pos = 0
    length = len(query)

    while pos < length:
        char = query[pos]
        if char.isspace():
            pos += 1
            continue

        start = pos
        if char in QUOTE_CHARS:
            pos += 1
            chars: list[str] = []
            while pos < length and query[pos] != char:
                if query[pos] == "\\" and pos + 1 < length:
                    pos += 1
                chars.append(query[pos])
                pos += 1
            if pos < length:
                pos += 1  # closing quote
            tokens.append(Token(value=f'"{"".join(chars)}"', start=start, end=pos, quoted=True))
            continue

        while pos < length and not query[pos].isspace():
            pos += 1
        tokens.append(Token(value=query[start:pos], start=start, end=pos))

    return tokens


def tokenize_simple(query: str) -> list[str]:
    """Return token values only."""
    return [token.value for token in tokenize(query)]
