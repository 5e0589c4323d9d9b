"""
Formula sampler — one representative formula per registered column.

Scans each column downward from the first data row and keeps the first
formula it meets.  Columns that carry several different formulas are
represented by their topmost one only.
"""

import logging
from typing import Callable, Optional

from openpyxl.worksheet.formula import ArrayFormula

logger = logging.getLogger(__name__)

FORMULA_MARKER = "="


def formula_text(cell) -> str:
    """Return the formula text of an openpyxl *cell*, or ``""``."""
    value = cell.value
    if isinstance(value, ArrayFormula):
        return value.text or ""
    if cell.data_type == "f" and isinstance(value, str):
        return value
    return ""


def sample_column_formula(ws, position: int, data_start_row: int = 2) -> str:
    """Return the first formula found in column *position* of *ws*."""
    last_row = max(ws.max_row or 0, data_start_row)
    for r in range(data_start_row, last_row + 1):
        text = formula_text(ws.cell(row=r, column=position))
        if text and text.startswith(FORMULA_MARKER):
            return text
    return ""


def sample_formulas(workbook, columns, data_start_row: int = 2,
                    progress: Optional[Callable[[str], None]] = None) -> list:
    """Return a list parallel to *columns* holding each column's formula."""
    notify = progress or logger.info

    formulas = [""] * len(columns)
    for idx, col in enumerate(columns):
        if (idx + 1) % 50 == 0:
            notify(f"Extracting formulas... ({idx + 1}/{len(columns)})")
        formulas[idx] = sample_column_formula(
            workbook[col.sheet_name], col.position, data_start_row)

    found = sum(1 for f in formulas if f)
    logger.debug(f"Sampled formulas for {found} of {len(columns)} columns")
    return formulas
