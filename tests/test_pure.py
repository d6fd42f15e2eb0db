import unittest

from fakes import ALICE, make_draft, make_product

from ledger.models import Product
from utils.pure import PRODUCT_COLUMNS, generate_markdown_table, product_markdown, product_row


class MarkdownTableTestCase(unittest.TestCase):
    def test_table(self):
        table = generate_markdown_table(["A", "B"], [[1, "x"], [2, "y"]], ["l", "r"])
        self.assertEqual(
            table.splitlines(),
            ["| A | B |", "| :--- | ---: |", "| 1 | x |", "| 2 | y |"],
        )

    def test_first_row_as_headers(self):
        table = generate_markdown_table(None, [["k", "v"], ["a", "b"]])
        self.assertTrue(table.startswith("| k | v |\n| :---: | :---: |"))

    def test_pipes_are_escaped(self):
        table = generate_markdown_table(["A"], [["x|y"]])
        self.assertIn("x\\|y", table)

    def test_empty_and_mismatched(self):
        self.assertEqual(generate_markdown_table(["A"], []), "")
        with self.assertRaises(ValueError):
            generate_markdown_table(["A", "B"], [[1, 2]], ["l"])


class ProductPresentationTestCase(unittest.TestCase):
    def test_product_row_matches_columns(self):
        row = product_row(make_product(4, price=25 * 10**16))
        self.assertEqual(len(row), len(PRODUCT_COLUMNS))
        self.assertEqual(row[0], "4")
        self.assertEqual(row[5], "0.25")
        self.assertEqual(row[6], ALICE[:8] + "..." + ALICE[-6:])
        self.assertEqual(row[7], "Yes")

    def test_product_markdown(self):
        md = product_markdown(make_product(1))
        self.assertIn("### Tomatoes", md)
        self.assertIn("| Price per Unit | 1 ETH |", md)
        self.assertIn(ALICE, md)

    def test_from_record_field_order(self):
        record = (1, "n", "c", "d", "t", "f", "q", 10**18, "desc", ALICE, False, 5)
        product = Product.from_record(record)
        self.assertEqual(product.description, "desc")
        self.assertFalse(product.is_available)
        self.assertEqual(product.created_at_datetime.year, 1970)


class ProductDraftTestCase(unittest.TestCase):
    def test_missing_fields(self):
        self.assertEqual(make_draft().missing_fields(), [])
        draft = make_draft(name=" ", price_per_unit="", description="")
        self.assertEqual(draft.missing_fields(), ["name", "price_per_unit", "description"])
