"""
Reference resolver and matrix builder.

Turns the sampled formulas into an N×N boolean matrix where
``matrix[i][j]`` means *column i's formula reads column j*, and writes
the labelled grid to an output sheet.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np
import pandas as pd
from openpyxl.utils import get_column_letter

from .columns import ColumnRegistry, DEFAULT_OUTPUT_SHEET
from .references import extract_references

logger = logging.getLogger(__name__)

DEFAULT_EDGE_MARKER = "X"
DEFAULT_LABEL_COLUMN_WIDTH = 36
DEFAULT_AUTOSIZE_COLUMNS = 30
_MAX_AUTOSIZE_WIDTH = 50


@dataclass
class DependencyMatrix:
    """Registry-ordered columns and the boolean dependency matrix."""
    columns: list
    matrix: np.ndarray

    @property
    def labels(self) -> list:
        return [c.id for c in self.columns]

    def __len__(self):
        return len(self.columns)

    def dependencies_of(self, index: int) -> list:
        """Indexes of the columns that column *index* reads."""
        return [int(j) for j in np.flatnonzero(self.matrix[index])]

    def to_grid(self, marker: str = DEFAULT_EDGE_MARKER) -> list:
        """Return the (N+1)×(N+1) grid with labels in row 0 and column 0."""
        n = len(self.columns)
        labels = self.labels
        grid = [[""] * (n + 1) for _ in range(n + 1)]
        for j in range(n):
            grid[0][j + 1] = labels[j]
        for i in range(n):
            grid[i + 1][0] = labels[i]
            for j in range(n):
                grid[i + 1][j + 1] = marker if self.matrix[i, j] else ""
        return grid

    def to_frame(self) -> pd.DataFrame:
        """Return the matrix as a boolean DataFrame labelled on both axes."""
        labels = self.labels
        return pd.DataFrame(self.matrix.copy(), index=labels, columns=labels)


def build_dependency_matrix(registry: ColumnRegistry, formulas: list,
                            progress: Optional[Callable[[str], None]] = None) -> DependencyMatrix:
    """Resolve every sampled formula against *registry*.

    Unqualified references resolve to the formula's own sheet.  References
    that do not hit a registered column are dropped.  The diagonal is
    always cleared.
    """
    notify = progress or logger.info

    columns = registry.columns
    n = len(columns)
    matrix = np.zeros((n, n), dtype=bool)

    for i in range(n):
        if (i + 1) % 50 == 0:
            notify(f"Analyzing dependencies... ({i + 1}/{n})")

        formula = formulas[i]
        if not formula:
            continue

        for ref in extract_references(formula):
            target_sheet = ref.sheet_name or columns[i].sheet_name
            j = registry.lookup(target_sheet, ref.letter)
            if j is None:
                logger.debug(f"{columns[i].id}: unresolved reference "
                             f"{target_sheet}|{ref.letter}")
                continue
            matrix[i, j] = True

        # no self-dependency
        matrix[i, i] = False

    return DependencyMatrix(columns=list(columns), matrix=matrix)


# ---------------------------------------------------------------------------
# Output sheet
# ---------------------------------------------------------------------------

def _reset_sheet(workbook, sheet_name: str):
    """Return an empty sheet named *sheet_name*, keeping its position."""
    if sheet_name in workbook.sheetnames:
        index = workbook.sheetnames.index(sheet_name)
        workbook.remove(workbook[sheet_name])
        return workbook.create_sheet(sheet_name, index)
    return workbook.create_sheet(sheet_name)


def write_matrix_sheet(workbook, result: DependencyMatrix,
                       sheet_name: str = DEFAULT_OUTPUT_SHEET,
                       marker: str = DEFAULT_EDGE_MARKER,
                       label_column_width: float = DEFAULT_LABEL_COLUMN_WIDTH,
                       autosize_columns: int = DEFAULT_AUTOSIZE_COLUMNS):
    """Write *result* to *sheet_name*, replacing whatever was there.

    Row 1 and column A carry the labels and are frozen.
    """
    ws = _reset_sheet(workbook, sheet_name)

    for ri, row in enumerate(result.to_grid(marker), 1):
        for ci, value in enumerate(row, 1):
            if value != "":
                ws.cell(row=ri, column=ci, value=value)

    ws.freeze_panes = "B2"
    ws.column_dimensions["A"].width = label_column_width

    # only the first few matrix columns are sized
    labels = result.labels
    for j in range(min(len(labels), autosize_columns)):
        width = min(len(labels[j]) + 2, _MAX_AUTOSIZE_WIDTH)
        ws.column_dimensions[get_column_letter(j + 2)].width = width

    return ws
