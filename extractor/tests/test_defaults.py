import unittest

from extractor.defaults import DEFAULT_PRICE, DEFAULT_SHARES_OUTSTANDING, TEXT_SYMBOL, complete_financial_data
from valuation.models import PartialFinancialData


class CompleteFinancialDataTests(unittest.TestCase):
    def test_empty_extraction_uses_all_defaults(self) -> None:
        data, missing = complete_financial_data(PartialFinancialData(), "Acme Corp")
        self.assertEqual(missing, ["Revenue", "Shares Outstanding", "Total Equity", "Net Income"])
        self.assertEqual(data.symbol, TEXT_SYMBOL)
        self.assertEqual(data.company_name, "Acme Corp")
        self.assertEqual(data.shares_outstanding, DEFAULT_SHARES_OUTSTANDING)
        self.assertEqual(data.current_price, DEFAULT_PRICE)
        self.assertEqual(data.market_cap, DEFAULT_PRICE * DEFAULT_SHARES_OUTSTANDING)
        self.assertEqual(data.beta, 1.2)
        self.assertAlmostEqual(data.ebit, 50_000_000_000.0 * 0.15)
        self.assertAlmostEqual(data.depreciation, 50_000_000_000.0 * 0.03)
        self.assertAlmostEqual(data.capex, 50_000_000_000.0 * 0.04)
        self.assertAlmostEqual(data.working_capital, 50_000_000_000.0 * 0.02)
        self.assertAlmostEqual(data.book_value, 90_000_000_000.0 / DEFAULT_SHARES_OUTSTANDING)

    def test_extracted_values_are_kept_and_price_derived_from_market_cap(self) -> None:
        partial = PartialFinancialData(
            revenue=98_765_000_000.0,
            net_income=15_432_000_000.0,
            total_equity=60_000_000_000.0,
            shares_outstanding=1_250_000_000.0,
            market_cap=95_500_000_000.0,
            ebit=21_500_000_000.0,
        )
        data, missing = complete_financial_data(partial, "  Acme Corp ", symbol="ACME")
        self.assertEqual(missing, [])
        self.assertEqual(data.symbol, "ACME")
        self.assertEqual(data.company_name, "Acme Corp")
        self.assertEqual(data.revenue, 98_765_000_000.0)
        self.assertEqual(data.ebit, 21_500_000_000.0)
        self.assertEqual(data.market_cap, 95_500_000_000.0)
        self.assertAlmostEqual(data.current_price, 76.4)
        self.assertAlmostEqual(data.book_value, 48.0)
        self.assertAlmostEqual(data.depreciation, 98_765_000_000.0 * 0.03)

    def test_company_name_required(self) -> None:
        with self.assertRaises(ValueError):
            complete_financial_data(PartialFinancialData(), "   ")


if __name__ == "__main__":
    unittest.main()
