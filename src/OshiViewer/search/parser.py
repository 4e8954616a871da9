"""Query parser.

Turns a query string into a `ParsedQuery`.

Supported syntax
- Free text:     Masamune Soshu
- Comparisons:   nagasa>70, motohaba<3.0, sori>=1.5
- Field matches: mei:kinzogan, nakago:ubu
- Negations:     -wakizashi, !tanto
- Phrases:       "ko-itame hada"
- Shortcuts:     zai, mumei, ubu, ubu=0, session=6, juyo (see `shortcuts`)

Parsing never raises on user input. A fragment that cannot be understood
degrades to a plain substring term and leaves a diagnostic behind.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from OshiViewer.core.query import Comparison, Diagnostic, FieldMatch, ParsedQuery
from OshiViewer.search.fields import FieldRegistry, REGISTRY
from OshiViewer.search.shortcuts import preprocess_query
from OshiViewer.search.tokenizer import Token, tokenize
from OshiViewer.utils.log import log

_COMPARISON_RE = re.compile(r"^([a-zA-Z_]+)(>=|<=|>|<|=)(.+)$")
_FIELD_MATCH_RE = re.compile(r"^([a-zA-Z_]+):(.+)$")
_NEGATION_RE = re.compile(r"^[-!](.+)$")
# Whole-literal match: "70cm" is not a number, so nagasa>70cm stays free text.
_NUMBER_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)$")


@dataclass(slots=True)
class _QueryBuilder:
    original: str
    text_terms: list[str] = field(default_factory=list)
    comparisons: list[Comparison] = field(default_factory=list)
    field_matches: list[FieldMatch] = field(default_factory=list)
    negations: list[str] = field(default_factory=list)
    phrases: list[str] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def diagnose(self, severity: str, code: str, message: str, raw: str) -> None:
        log.debug("Query diagnostic: severity=%s code=%s raw=%s", severity, code, raw)
        self.diagnostics.append(Diagnostic(severity=severity, code=code, message=message, raw=raw))

    def build(self) -> ParsedQuery:
        return ParsedQuery(
            text_terms=tuple(self.text_terms),
            comparisons=tuple(self.comparisons),
            field_matches=tuple(self.field_matches),
            negations=tuple(self.negations),
            phrases=tuple(self.phrases),
            original=self.original,
            diagnostics=tuple(self.diagnostics),
        )


def parse_query(query: str, *, registry: FieldRegistry = REGISTRY) -> ParsedQuery:
    """Parse a query string into a structured query.

    Shortcuts are expanded first, then each token is classified, most
    specific rule first: phrase, negation, comparison, field match, text.

    Args:
        query: Raw query string.
        registry: Field registry used to resolve field names.

    Returns:
        Parsed query. Unknown fields, comparisons on non-numeric fields and
        malformed numbers are recorded in `diagnostics`.
    """
    builder = _QueryBuilder(original=query)
    if not query or not query.strip():
        return builder.build()

    for token in tokenize(preprocess_query(query)):
        _classify(token, builder, registry)

    return builder.build()


def _classify(token: Token, builder: _QueryBuilder, registry: FieldRegistry) -> None:
    value = token.value

    if token.quoted:
        builder.phrases.append(token.content)
        return

    negation = _NEGATION_RE.match(value)
    if negation:
        builder.negations.append(negation.group(1).lower())
        return

    comparison = _COMPARISON_RE.match(value)
    if comparison:
        _classify_comparison(value, *comparison.groups(), builder=builder, registry=registry)
        return

    field_match = _FIELD_MATCH_RE.match(value)
    if field_match:
        name, target = field_match.groups()
        canonical = registry.resolve(name)
        if canonical is None:
            builder.diagnose("info", "unknown_field", f"Unknown field: {name}", value)
            builder.text_terms.append(value.lower())
            return
        builder.field_matches.append(FieldMatch(field=canonical, value=target.lower(), raw=value))
        return

    builder.text_terms.append(value.lower())


def _classify_comparison(
    raw: str,
    name: str,
    operator: str,
    operand: str,
    *,
    builder: _QueryBuilder,
    registry: FieldRegistry,
) -> None:
    canonical = registry.resolve(name)
    if canonical is None:
        builder.diagnose("info", "unknown_field", f"Unknown field: {name}", raw)
        builder.text_terms.append(raw.lower())
        return

    definition = registry.definition(canonical)
    if definition is not None and definition.type != "numeric":
        # TODO: confirm with the catalog owners whether this should become a
        # plain field match on the operand instead of the operator literal.
        builder.diagnose(
            "warning",
            "type_mismatch",
            f'Field "{name}" is not numeric, use : for text matching',
            raw,
        )
        builder.field_matches.append(FieldMatch(field=canonical, value=f"{operator}{operand}", raw=raw))
        return

    number = parse_number(operand)
    if number is None:
        builder.diagnose("error", "invalid_number", f"Invalid number: {operand}", raw)
        builder.text_terms.append(raw.lower())
        return

    builder.comparisons.append(Comparison(field=canonical, operator=operator, value=number, raw=raw))


def parse_number(text: str) -> float | None:
    """Parse a plain decimal literal (optional sign, digits, one point)."""
    if not _NUMBER_RE.match(text.strip()):
        return None
    return float(text)


def is_empty_query(query: ParsedQuery) -> bool:
    """Return True when the query has no conditions (matches everything)."""
    return not (
        query.text_terms or query.comparisons or query.field_matches or query.negations or query.phrases
    )


def _fmt_number(value: float) -> str:
    return str(int(value)) if value.is_integer() else str(value)


def summarize_query(query: ParsedQuery) -> str:
    """Return a one-line human readable summary of a parsed query."""
    parts: list[str] = []
    if query.text_terms:
        parts.append("text: " + ", ".join(query.text_terms))
    if query.comparisons:
        parts.append(
            "comparisons: " + ", ".join(f"{c.field}{c.operator}{_fmt_number(c.value)}" for c in query.comparisons)
        )
    if query.field_matches:
        parts.append("fields: " + ", ".join(f"{m.field}:{m.value}" for m in query.field_matches))
    if query.negations:
        parts.append("exclude: " + ", ".join(query.negations))
    if query.phrases:
        parts.append('phrases: "' + '", "'.join(query.phrases) + '"')
    return " | ".join(parts) if parts else "(empty query)"


def validate_query(query: ParsedQuery, *, registry: FieldRegistry = REGISTRY) -> tuple[bool, list[str]]:
    """Collect problems with a parsed query.

    Args:
        query: Parsed query.
        registry: Field registry used to check comparison fields.

    Returns:
        Tuple of (valid, issues). `valid` is True when there are no issues.
    """
    issues = list(query.errors)
    for comparison in query.comparisons:
        definition = registry.definition(comparison.field)
        if definition is not None and definition.type != "numeric":
            issues.append(f'Cannot use comparison on text field "{comparison.field}"')
    return not issues, issues
