"""Tests for the lexical reference grammar."""

from dependency_matrix.references import Reference, extract_references


class TestSingleCells:
    def test_unqualified_cell(self):
        assert extract_references("=C7") == {Reference("", "C")}

    def test_absolute_cell(self):
        assert extract_references("=$D$4*2") == {Reference("", "D")}

    def test_multiple_cells_deduplicated(self):
        refs = extract_references("=A2+A3+B2*A2")
        assert refs == {Reference("", "A"), Reference("", "B")}

    def test_bare_sheet_qualifier(self):
        assert extract_references("=Sales!B2") == {Reference("Sales", "B")}

    def test_quoted_sheet_qualifier(self):
        assert extract_references("='My Sheet'!AB12") == {Reference("My Sheet", "AB")}


class TestRanges:
    def test_whole_column(self):
        assert extract_references("=SUM(A:A)") == {Reference("", "A")}

    def test_whole_column_with_sheet_and_dollars(self):
        assert extract_references("=SUM(Sheet!$B:$B)") == {Reference("Sheet", "B")}

    def test_quoted_whole_column(self):
        assert extract_references("='Raw Data'!C:C") == {Reference("Raw Data", "C")}

    def test_cell_range_keeps_leftmost_letter(self):
        refs = extract_references("=SUM(A2:C1000)")
        # the range yields A; the trailing C1000 also matches as a lone cell
        assert refs == {Reference("", "A"), Reference("", "C")}

    def test_open_ended_cell_range(self):
        assert extract_references("='My Sheet'!B2:B") == {Reference("My Sheet", "B")}

    def test_whitespace_around_colon(self):
        assert extract_references("=COUNTA(D : D)") == {Reference("", "D")}


class TestLexicalLimits:
    def test_empty_formula(self):
        assert extract_references("") == set()

    def test_header_names_are_not_references(self):
        assert extract_references("=ID*2") == set()

    def test_only_ascii_digits_count_as_rows(self):
        assert extract_references("=A\u0663") == set()
        assert extract_references("=B\uff12+C2") == {Reference("", "C")}

    def test_lowercase_letters_ignored(self):
        assert extract_references("=a2+b3") == set()

    def test_string_literal_matched_like_a_reference(self):
        refs = extract_references('=IF(A2="AB12","yes","no")')
        assert refs == {Reference("", "A"), Reference("", "AB")}

    def test_function_name_with_digits_matched(self):
        assert Reference("", "LOG") in extract_references("=LOG10(B2)")

    def test_mixed_qualified_and_unqualified(self):
        refs = extract_references("=SUM(Sales!B:B)*A2+_helper!A2")
        assert refs == {
            Reference("Sales", "B"),
            Reference("", "A"),
            Reference("_helper", "A"),
        }
