from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ComparisonOperator = Literal[">", "<", ">=", "<=", "="]
Severity = Literal["info", "warning", "error"]


@dataclass(frozen=True, slots=True)
class Comparison:
    """A numeric comparison such as `nagasa>70`.

    Attributes:
        field: Canonical field name (e.g. "nagasa", never the alias "cm").
        operator: One of >, <, >=, <=, =.
        value: Parsed numeric operand.
        raw: Original token, kept for messages.
    """

    field: str
    operator: ComparisonOperator
    value: float
    raw: str = ""


@dataclass(frozen=True, slots=True)
class FieldMatch:
    """A `field:value` match such as `mei:kinzogan`."""

    field: str
    value: str
    raw: str = ""


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Non-fatal parse problem.

    Attributes:
        severity: info (unknown field), warning (type mismatch) or error
            (malformed number).
        code: Stable identifier, e.g. "unknown_field".
        message: Human readable text.
        raw: Token that caused the diagnostic.
    """

    severity: Severity
    code: str
    message: str
    raw: str = ""


@dataclass(frozen=True, slots=True)
class ParsedQuery:
    """Structured form of one query string.

    Matching is conjunctive across all bags. An instance with every bag empty
    matches every item.

    Attributes:
        text_terms: Lower-cased free text terms.
        comparisons: Numeric comparisons.
        field_matches: Field matches with lower-cased values.
        negations: Lower-cased excluded terms.
        phrases: Quoted phrases, quotes stripped.
        original: The input string as given.
        diagnostics: Parse problems in token order.
    """

    text_terms: tuple[str, ...] = ()
    comparisons: tuple[Comparison, ...] = ()
    field_matches: tuple[FieldMatch, ...] = ()
    negations: tuple[str, ...] = ()
    phrases: tuple[str, ...] = ()
    original: str = ""
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def errors(self) -> tuple[str, ...]:
        return tuple(d.message for d in self.diagnostics)
