"""Column Dependency Matrix.

Discovers which named columns of a workbook (``Sheet!Header``) are
computed from which other named columns, by sampling one formula per
column and lexically resolving its references.  The result is a square
boolean matrix written to an output sheet:

  * **Rows** – the column whose formula was sampled.
  * **Columns** – the columns that formula reads.

Headerless columns, the output sheet itself and sheets whose names start
with a skip prefix (``_``, ``v``, ``V`` by default) are left out.
"""

from .builder import analyze_workbook, generate_dependency_matrix
from .columns import (
    Column,
    ColumnRegistry,
    NoHeadersFoundError,
    build_column_registry,
    is_included_sheet,
    letters_to_position,
    position_to_letters,
)
from .config import load_config
from .matrix import DependencyMatrix, build_dependency_matrix, write_matrix_sheet
from .references import Reference, extract_references
from .sampler import formula_text, sample_formulas

__all__ = [
    "analyze_workbook",
    "generate_dependency_matrix",
    "Column",
    "ColumnRegistry",
    "NoHeadersFoundError",
    "build_column_registry",
    "is_included_sheet",
    "letters_to_position",
    "position_to_letters",
    "load_config",
    "DependencyMatrix",
    "build_dependency_matrix",
    "write_matrix_sheet",
    "Reference",
    "extract_references",
    "formula_text",
    "sample_formulas",
]
