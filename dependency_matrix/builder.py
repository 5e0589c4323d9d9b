"""
Dependency-matrix pipeline.

Runs the three read stages (column registry, formula sampling, reference
resolution) against a loaded workbook, then writes the matrix sheet and
saves once.  Nothing is written when the registry stage fails.
"""

import logging
import os
import time
from typing import Callable, Optional

from openpyxl import load_workbook

from .columns import build_column_registry
from .config import load_config
from .matrix import DependencyMatrix, build_dependency_matrix, write_matrix_sheet
from .sampler import sample_formulas

logger = logging.getLogger(__name__)


def _merged_config(config=None, config_path=None) -> dict:
    """Return the defaults (and *config_path*) updated with *config*."""
    merged = load_config(config_path)
    merged.update(config or {})
    return merged


def analyze_workbook(workbook, config: Optional[dict] = None,
                     progress: Optional[Callable[[str], None]] = None) -> DependencyMatrix:
    """Build the dependency matrix of an openpyxl *workbook* without writing."""
    config = _merged_config(config)
    notify = progress or logger.info

    notify("Starting: inventory of sheets and columns...")
    registry = build_column_registry(
        workbook,
        output_sheet_name=config["output_sheet_name"],
        skip_prefixes=config["skip_prefixes"],
        header_row=config["header_row"],
        progress=notify,
    )

    notify(f"Columns detected: {len(registry)}. Extracting formulas...")
    formulas = sample_formulas(workbook, registry.columns,
                               data_start_row=config["data_start_row"],
                               progress=notify)

    notify("Analyzing dependencies...")
    return build_dependency_matrix(registry, formulas, progress=notify)


def _default_output_path(excel_path: str) -> str:
    out_dir = os.path.join(os.path.dirname(excel_path) or ".", "output")
    stem, ext = os.path.splitext(os.path.basename(excel_path))
    return os.path.join(out_dir, f"{stem}_dependency_matrix{ext or '.xlsx'}")


def generate_dependency_matrix(excel_path, config_path=None, output_path=None,
                               in_place=False, config=None, progress=None):
    """Build the matrix for *excel_path* and save it as a sheet.

    Parameters
    ----------
    excel_path : str
        Source workbook.
    config_path : str or None
        Optional YAML config, merged over the defaults.
    output_path : str or None
        Where to save the workbook with the matrix sheet.  Defaults to
        ``<excel_dir>/output/<stem>_dependency_matrix.xlsx``.
    in_place : bool
        Save back to *excel_path* instead.
    config : dict or None
        Overrides applied on top of the defaults and *config_path*.
    progress : callable or None
        Receives progress messages; defaults to ``logger.info``.

    Returns
    -------
    (str, DependencyMatrix)
        The saved path and the matrix.
    """
    config = _merged_config(config, config_path)
    notify = progress or logger.info
    t0 = time.perf_counter()

    keep_vba = excel_path.lower().endswith(".xlsm")
    wb = load_workbook(excel_path, data_only=False, keep_vba=keep_vba)
    try:
        result = analyze_workbook(wb, config, progress=notify)

        if in_place:
            output_path = excel_path
        elif output_path is None:
            output_path = _default_output_path(excel_path)
        os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)

        notify("Writing matrix...")
        write_matrix_sheet(
            wb, result,
            sheet_name=config["output_sheet_name"],
            marker=config["edge_marker"],
            label_column_width=config["label_column_width"],
            autosize_columns=config["autosize_columns"],
        )
        wb.save(output_path)
    finally:
        wb.close()

    elapsed = time.perf_counter() - t0
    notify(f"Done. Columns: {len(result)}. Time: {elapsed:.1f}s")
    return output_path, result
