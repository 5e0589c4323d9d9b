"""
Column registry — inventories the header row of every included sheet.

Each non-empty header becomes a :class:`Column` with a stable global
index (its position in the registry).  Formulas reference columns by
position, not by header text, so lookups go through the
``"{sheet}|{letter}"`` key rather than the ``Sheet!Header`` label.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_SHEET = "Matrix"
DEFAULT_SKIP_PREFIXES = ("_", "v", "V")


class NoHeadersFoundError(ValueError):
    """Raised when no included sheet has a single non-empty header."""

    def __init__(self, message="no headers found among included sheets"):
        super().__init__(message)


# ---------------------------------------------------------------------------
# Letter / position encoding
# ---------------------------------------------------------------------------

def position_to_letters(position: int) -> str:
    """Convert a 1-based column position to letter(s). 1=A, 26=Z, 27=AA."""
    if position < 1:
        raise ValueError(f"column position must be >= 1, got {position}")
    result = ""
    while position > 0:
        position, remainder = divmod(position - 1, 26)
        result = chr(65 + remainder) + result
    return result


def letters_to_position(letters: str) -> int:
    """Convert column letter(s) to a 1-based position. A=1, Z=26, AA=27."""
    if not letters or not letters.isalpha():
        raise ValueError(f"invalid column letters: {letters!r}")
    result = 0
    for char in letters.upper():
        result = result * 26 + (ord(char) - ord("A") + 1)
    return result


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------

def column_key(sheet_name: str, letter: str) -> str:
    return f"{sheet_name}|{letter}"


@dataclass(frozen=True)
class Column:
    """A registered (sheet, header) pair."""
    sheet_name: str
    header: str
    position: int
    letter: str

    @property
    def id(self) -> str:
        return f"{self.sheet_name}!{self.header}"

    @property
    def key(self) -> str:
        return column_key(self.sheet_name, self.letter)


@dataclass
class ColumnRegistry:
    """Ordered columns plus the ``"{sheet}|{letter}"`` -> index lookup."""
    columns: list = field(default_factory=list)
    index_by_key: dict = field(default_factory=dict)

    def __len__(self):
        return len(self.columns)

    def add(self, column: Column) -> int:
        index = len(self.columns)
        self.columns.append(column)
        self.index_by_key[column.key] = index
        return index

    def lookup(self, sheet_name: str, letter: str) -> Optional[int]:
        return self.index_by_key.get(column_key(sheet_name, letter))

    @property
    def labels(self) -> list:
        return [c.id for c in self.columns]


# ---------------------------------------------------------------------------
# Registry builder
# ---------------------------------------------------------------------------

def is_included_sheet(name: str, output_sheet_name: str = DEFAULT_OUTPUT_SHEET,
                      skip_prefixes=DEFAULT_SKIP_PREFIXES) -> bool:
    """Return False for the output sheet and for names starting with a skip prefix.

    Prefixes are matched literally and case-sensitively.
    """
    if name == output_sheet_name:
        return False
    return not any(name.startswith(p) for p in skip_prefixes)


def _header_text(value) -> str:
    # None, 0, False and "" all count as no header
    if not value:
        return ""
    return str(value).strip()


def build_column_registry(workbook, output_sheet_name: str = DEFAULT_OUTPUT_SHEET,
                          skip_prefixes=DEFAULT_SKIP_PREFIXES, header_row: int = 1,
                          progress: Optional[Callable[[str], None]] = None) -> ColumnRegistry:
    """Scan the header row of every included sheet of an openpyxl *workbook*.

    Returns a :class:`ColumnRegistry`.  Raises :class:`NoHeadersFoundError`
    when nothing gets registered.
    """
    notify = progress or logger.info

    all_sheets = workbook.worksheets
    sheets = [ws for ws in all_sheets
              if is_included_sheet(ws.title, output_sheet_name, skip_prefixes)]
    notify(f"Included sheets: {len(sheets)} / {len(all_sheets)}")

    registry = ColumnRegistry()
    for si, ws in enumerate(sheets):
        if (si + 1) % 5 == 0:
            notify(f"Inventorying columns... ({si + 1}/{len(sheets)})")

        last_col = ws.max_column or 0
        for c in range(1, last_col + 1):
            header = _header_text(ws.cell(row=header_row, column=c).value)
            if not header:
                continue
            registry.add(Column(
                sheet_name=ws.title,
                header=header,
                position=c,
                letter=position_to_letters(c),
            ))

    if not registry.columns:
        raise NoHeadersFoundError()

    logger.debug(f"Registered {len(registry)} columns from {len(sheets)} sheets")
    return registry
