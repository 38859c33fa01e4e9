"""Tests for request schemas: search query parsing and credit report items."""

import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from pydantic import ValidationError as PydanticValidationError

from rxreturns.errors import ValidationError
from rxreturns.models.inputs import (
    CreditReportCreate,
    CreditReportItemIn,
    OptimizationSearch,
    ProductListItemCreate,
)


class TestOptimizationSearch(unittest.TestCase):
    def test_no_terms_is_inactive(self):
        search = OptimizationSearch.from_query(None, None)
        self.assertFalse(search.active)
        self.assertEqual(search.ndcs, [])

    def test_terms_are_normalized_and_blanks_dropped(self):
        search = OptimizationSearch.from_query("42385-0978, ,69315", None)
        self.assertEqual(search.ndcs, ["423850978", "69315"])
        self.assertIsNone(search.quantities)

    def test_quantities_must_match_terms(self):
        search = OptimizationSearch.from_query("1,2", "3,4")
        self.assertEqual(search.quantities, [3, 4])
        with self.assertRaises(ValidationError):
            OptimizationSearch.from_query("1,2", "3")

    def test_quantity_must_be_integer(self):
        with self.assertRaises(ValidationError):
            OptimizationSearch.from_query("1", "two")

    def test_quantity_without_ndc_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            OptimizationSearch.from_query(None, "3")
        self.assertEqual(ctx.exception.status_code, 400)


class TestCreditReportItems(unittest.TestCase):
    def test_price_per_unit_wins(self):
        item = CreditReportItemIn(ndc="1", quantity=10, credit_amount=50, price_per_unit=4.0)
        self.assertEqual(item.resolved_unit_price(), 4.0)

    def test_falls_back_to_credit_over_quantity(self):
        item = CreditReportItemIn.model_validate({"ndc": "1", "quantity": 8, "creditAmount": 10.0})
        self.assertAlmostEqual(item.resolved_unit_price(), 1.25)

    def test_no_price_information_resolves_to_zero(self):
        self.assertEqual(CreditReportItemIn(ndc="1", quantity=1).resolved_unit_price(), 0.0)

    def test_report_requires_items(self):
        with self.assertRaises(PydanticValidationError):
            CreditReportCreate(distributor="RD-1", report_date="2026-01-01", items=[])

    def test_unknown_source_rejected(self):
        with self.assertRaises(PydanticValidationError):
            CreditReportCreate(
                distributor="RD-1",
                report_date="2026-01-01",
                source="fax",
                items=[{"ndc": "1", "quantity": 1, "pricePerUnit": 1.0}],
            )


class TestProductListItemCreate(unittest.TestCase):
    def test_camel_case_body(self):
        item = ProductListItemCreate.model_validate(
            {"ndc": " 42385-0978-01 ", "productName": "Atorvastatin", "quantity": 3, "lotNumber": "L1"}
        )
        self.assertEqual(item.ndc, "42385-0978-01")
        self.assertEqual(item.product_name, "Atorvastatin")
        self.assertEqual(item.lot_number, "L1")

    def test_dash_only_ndc_rejected(self):
        with self.assertRaises(PydanticValidationError):
            ProductListItemCreate(ndc="--", quantity=1)

    def test_negative_quantity_rejected(self):
        with self.assertRaises(PydanticValidationError):
            ProductListItemCreate(ndc="1", quantity=-1)


if __name__ == "__main__":
    unittest.main()
