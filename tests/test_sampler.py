"""Tests for the formula sampler."""

from openpyxl import Workbook
from openpyxl.worksheet.formula import ArrayFormula

from dependency_matrix.columns import build_column_registry
from dependency_matrix.sampler import formula_text, sample_column_formula, sample_formulas
from tests.create_sample_workbook import build_sample_workbook


def _quiet(msg):
    pass


class TestFormulaText:
    def test_formula_cell(self):
        ws = Workbook().active
        ws["A1"] = "=B1+1"
        assert formula_text(ws["A1"]) == "=B1+1"

    def test_plain_values_have_no_formula(self):
        ws = Workbook().active
        ws["A1"] = 42
        ws["A2"] = "text"
        assert formula_text(ws["A1"]) == ""
        assert formula_text(ws["A2"]) == ""
        assert formula_text(ws["A3"]) == ""

    def test_array_formula(self):
        ws = Workbook().active
        ws["A1"] = ArrayFormula("A1:A3", "=B1:B3*2")
        assert formula_text(ws["A1"]) == "=B1:B3*2"


class TestSampleColumn:
    def test_first_formula_wins(self):
        ws = Workbook().active
        ws["B1"] = "Header"
        ws["B2"] = 7
        ws["B3"] = "=A2+1"
        ws["B4"] = "=A2+2"
        assert sample_column_formula(ws, 2) == "=A2+1"

    def test_header_row_never_sampled(self):
        ws = Workbook().active
        ws["A1"] = "=NOT_A_HEADER"
        ws["A2"] = 1
        assert sample_column_formula(ws, 1) == ""

    def test_header_only_sheet_probes_first_data_row(self):
        ws = Workbook().active
        ws["A1"] = "Only header"
        assert ws.max_row == 1
        assert sample_column_formula(ws, 1) == ""

    def test_custom_data_start_row(self):
        ws = Workbook().active
        ws["A2"] = "=C2"
        ws["A3"] = "=D3"
        assert sample_column_formula(ws, 1, data_start_row=3) == "=D3"


class TestSampleFormulas:
    def test_parallel_to_registry(self):
        wb = build_sample_workbook()
        registry = build_column_registry(wb, progress=_quiet)
        formulas = sample_formulas(wb, registry.columns, progress=_quiet)

        assert len(formulas) == len(registry.columns)
        by_label = dict(zip(registry.labels, formulas))
        assert by_label["Sales!ID"] == ""
        assert by_label["Sales!Total"] == "=A2*2"
        assert by_label["Costs!Net"] == "=B2-C2"
        assert by_label["Costs!Running"] == "=SUM($E$1:E1)+D2"
        assert by_label["Tax!Rate"] == ""

    def test_progress_every_fifty_columns(self):
        wb = Workbook()
        ws = wb.active
        ws.title = "Wide"
        for c in range(1, 121):
            ws.cell(row=1, column=c, value=f"H{c}")
        registry = build_column_registry(wb, progress=_quiet)
        messages = []
        sample_formulas(wb, registry.columns, progress=messages.append)
        assert messages == [
            "Extracting formulas... (50/120)",
            "Extracting formulas... (100/120)",
        ]
