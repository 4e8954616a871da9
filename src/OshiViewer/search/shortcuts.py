"""Shortcut expansion for common research vocabulary.

Shortcuts are rewritten into canonical `field:value` or negation forms before
tokenizing, so the parser only ever sees the canonical syntax.

Observed mei.status values in the archive: signed, mumei, kinzogan-mei,
orikaeshi-mei, gaku-mei.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Final, Mapping

from OshiViewer.search.tokenizer import QUOTE_CHARS

SHORTCUTS: Final[Mapping[str, str]] = MappingProxyType(
    {
        # mei status; the archive uses "signed" rather than "zaimei"
        "zai": "mei:signed",
        "zaimei": "mei:signed",
        "signed": "mei:signed",
        "mu": "mei:mumei",
        "mumei": "mei:mumei",
        "unsigned": "mei:mumei",
        "kinzogan": "mei:kinzogan-mei",
        "orikaeshi": "mei:orikaeshi-mei",
        "gaku": "mei:gaku-mei",
        # original, unshortened tang
        "ubu": "nakago:ubu",
    }
)

# Tried in order before the word table.
PATTERN_RULES: Final[tuple[tuple[re.Pattern[str], str], ...]] = (
    (re.compile(r"^ubu=1$", re.IGNORECASE), "nakago:ubu"),
    (re.compile(r"^ubu=0$", re.IGNORECASE), "-ubu"),
    (re.compile(r"^(?:session|vol|volume)=(\d+)$", re.IGNORECASE), r"volume:\1"),
    (re.compile(r"^juyo$", re.IGNORECASE), "collection:Juyo"),
    (re.compile(r"^tokuju$", re.IGNORECASE), "collection:Tokuju"),
)


def expand_token(word: str) -> str:
    """Expand one whitespace-delimited word.

    Args:
        word: A word from the query string.

    Returns:
        The canonical replacement, or the word unchanged.
    """
    for pattern, replacement in PATTERN_RULES:
        if pattern.match(word):
            return pattern.sub(replacement, word)
    return SHORTCUTS.get(word.lower(), word)


def preprocess_query(query: str) -> str:
    """Expand shortcuts across a whole query string.

    Quoted spans are kept verbatim and never expanded. A quote opens a span
    only at the start of a word, matching the tokenizer.

    Args:
        query: Raw query string.

    Returns:
        Rewritten query with words joined by single spaces.
    """
    parts: list[str] = []
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
            while pos < length and query[pos] != char:
                if query[pos] == "\\" and pos + 1 < length:
                    pos += 1
                pos += 1
            pos = min(pos + 1, length)
            parts.append(query[start:pos])
            continue

        while pos < length and not query[pos].isspace():
            pos += 1
        parts.append(expand_token(query[start:pos]))

    return " ".join(parts)
