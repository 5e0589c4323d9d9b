"""
Reference grammar — lexical extraction of column references from formulas.

Three patterns are applied independently to the raw formula text and
their results pooled:

* whole-column ranges   ``A:A``, ``Sheet!$B:$B``
* bounded cell ranges   ``A2:A1000``, ``'My Sheet'!B2:B``
* single cells          ``C7``, ``$D$4``

Each pattern accepts an optional sheet qualifier, either a bare
identifier or a single-quoted name.  Only the qualifier and the leftmost
column letter are kept; row numbers are discarded.

Matching is purely textual.  A letter/digit run inside a string literal
or a function name (``LOG10``) is reported like any real reference.
"""

import re
from typing import NamedTuple

_SHEET_QUALIFIER = r"(?:(?:'(?P<quoted>[^']+)'|(?P<bare>[A-Za-z0-9_]+))!)?"

_COLUMN_RANGE_RE = re.compile(
    _SHEET_QUALIFIER
    + r"\$?(?P<letter>[A-Z]{1,3})\s*:\s*\$?(?P<end_letter>[A-Z]{1,3})",
    re.ASCII,
)
_CELL_RANGE_RE = re.compile(
    _SHEET_QUALIFIER
    + r"\$?(?P<letter>[A-Z]{1,3})\$?\d+\s*:\s*\$?(?P<end_letter>[A-Z]{1,3})\$?\d*",
    re.ASCII,
)
_SINGLE_CELL_RE = re.compile(
    _SHEET_QUALIFIER
    + r"\$?(?P<letter>[A-Z]{1,3})\$?\d+",
    re.ASCII,
)

REFERENCE_PATTERNS = (_COLUMN_RANGE_RE, _CELL_RANGE_RE, _SINGLE_CELL_RE)


class Reference(NamedTuple):
    """A sheet-qualified (or unqualified, ``sheet_name == ""``) column letter."""
    sheet_name: str
    letter: str


def collect_references(formula: str, pattern, out: set) -> set:
    """Add every ``Reference`` that *pattern* finds in *formula* to *out*."""
    for m in pattern.finditer(formula):
        sheet = m.group("quoted") or m.group("bare") or ""
        out.add(Reference(sheet, m.group("letter")))
    return out


def extract_references(formula: str) -> set:
    """Return the deduplicated set of references found in *formula*."""
    refs = set()
    if not formula:
        return refs
    for pattern in REFERENCE_PATTERNS:
        collect_references(formula, pattern, refs)
    return refs
