import unittest

from extractor.html_text import html_to_text, looks_like_html
from extractor.parser import extract_financial_data


SAMPLE_HTML = b"""
<html>
  <head><style>td { color: red; }</style><script>var x = 2023;</script></head>
  <body>
    <ix:header><ix:hidden>Hidden 999,999</ix:hidden></ix:header>
    <div>ACME CORP</div>
    <p>(In millions)</p>
    <p>CONSOLIDATED STATEMENTS OF OPERATIONS</p>
    <table>
      <tr><th></th><th>2023</th><th>2022</th></tr>
      <tr><td>Total revenues</td><td>$</td><td>12,345</td><td>$</td><td>11,000</td></tr>
      <tr><td>Net income</td><td>2,468</td><td>2,000</td></tr>
    </table>
    <p>See accompanying notes.<br>Page 42</p>
  </body>
</html>
"""


class HtmlToTextTests(unittest.TestCase):
    def test_table_rows_become_single_lines(self) -> None:
        lines = html_to_text(SAMPLE_HTML).splitlines()
        self.assertIn("Total revenues $ 12,345 $ 11,000", lines)
        self.assertIn("Net income 2,468 2,000", lines)
        self.assertIn("CONSOLIDATED STATEMENTS OF OPERATIONS", lines)

    def test_drops_scripts_styles_and_hidden_header(self) -> None:
        text = html_to_text(SAMPLE_HTML)
        self.assertNotIn("var x", text)
        self.assertNotIn("color", text)
        self.assertNotIn("Hidden", text)

    def test_br_splits_lines_and_blank_lines_are_dropped(self) -> None:
        lines = html_to_text(SAMPLE_HTML).splitlines()
        self.assertIn("See accompanying notes.", lines)
        self.assertIn("Page 42", lines)
        self.assertNotIn("", lines)

    def test_converted_html_feeds_extractor(self) -> None:
        data, units = extract_financial_data(html_to_text(SAMPLE_HTML))
        self.assertEqual(data.revenue, 12_345_000_000.0)
        self.assertEqual(data.net_income, 2_468_000_000.0)
        self.assertEqual(units["revenue"], "millions")

    def test_looks_like_html(self) -> None:
        self.assertTrue(looks_like_html("<HTML><body>x</body></HTML>"))
        self.assertFalse(looks_like_html("Total revenues 1,234 < 2,000"))


if __name__ == "__main__":
    unittest.main()
