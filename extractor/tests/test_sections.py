import unittest

from extractor.sections import classify_header, is_notes_boundary, split_statements


class ClassifyHeaderTests(unittest.TestCase):
    def test_recognizes_statement_headers(self) -> None:
        self.assertEqual(classify_header("CONSOLIDATED STATEMENTS OF INCOME"), "income_statement")
        self.assertEqual(classify_header("  Consolidated Income Statements  "), "income_statement")
        self.assertEqual(classify_header("Condensed Statements of Operations"), "income_statement")
        self.assertEqual(classify_header("CONSOLIDATED BALANCE SHEET"), "balance_sheet")
        self.assertEqual(classify_header("Consolidated Statements of Cash Flows"), "cash_flow")

    def test_operations_caption_mentioning_cash_is_not_income(self) -> None:
        self.assertIsNone(classify_header("Statements of operations and cash position"))

    def test_ordinary_lines(self) -> None:
        self.assertIsNone(classify_header("Total revenues 1,234"))

    def test_notes_boundary(self) -> None:
        self.assertTrue(is_notes_boundary("See accompanying notes."))
        self.assertTrue(is_notes_boundary("NOTES TO CONSOLIDATED FINANCIAL STATEMENTS"))
        self.assertFalse(is_notes_boundary("Total assets 100"))


class SplitStatementsTests(unittest.TestCase):
    def test_each_header_opens_its_own_buffer(self) -> None:
        text = "\n".join(
            [
                "Preamble line",
                "CONSOLIDATED STATEMENTS OF OPERATIONS",
                "Total revenues 100",
                "CONSOLIDATED BALANCE SHEETS",
                "Total assets 200",
                "CONSOLIDATED STATEMENTS OF CASH FLOWS",
                "Capital expenditures 300",
            ]
        )
        sections = split_statements(text)
        self.assertEqual(sections["income_statement"], "Total revenues 100\n")
        self.assertEqual(sections["balance_sheet"], "Total assets 200\n")
        self.assertEqual(sections["cash_flow"], "Capital expenditures 300\n")

    def test_notes_boundary_stops_capture(self) -> None:
        text = "\n".join(
            [
                "Consolidated Statements of Income",
                "Net income 10",
                "See accompanying notes to the financial statements",
                "Net income 99",
            ]
        )
        sections = split_statements(text)
        self.assertEqual(sections["income_statement"], "Net income 10\n")

    def test_repeated_header_appends_to_same_buffer(self) -> None:
        text = "Balance Sheets\nCash 1\nNotes to statements\nBalance Sheets\nCash 2\n"
        sections = split_statements(text)
        self.assertEqual(sections["balance_sheet"], "Cash 1\nCash 2\n\n")

    def test_no_headers_yields_empty_buffers(self) -> None:
        sections = split_statements("Total revenues 100\nTotal assets 200")
        self.assertEqual(sections, {"income_statement": "", "balance_sheet": "", "cash_flow": ""})


if __name__ == "__main__":
    unittest.main()
