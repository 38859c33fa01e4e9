"""Tests for search-mode line resolution and the per-distributor package builder."""

import sys
import unittest
from datetime import datetime, timedelta, timezone
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from rxreturns.models.data import PriceObservation, ProductLine
from rxreturns.optimization import build_packages, build_recommendations, resolve_search_lines
from rxreturns.utils.ndc import ndc_prefix_match, normalize_ndc

NOW = datetime(2026, 3, 15, tzinfo=timezone.utc)


def obs(ndc, distributor, price):
    return PriceObservation(ndc=ndc, distributor=distributor, unit_price=price, observed_at=NOW - timedelta(days=2))


OBSERVATIONS = [
    obs("42385097801", "Inmar", 1.25),
    obs("42385097801", "Qualanex", 0.90),
    obs("42385011102", "Inmar", 2.00),
    obs("69315028209", "Qualanex", 0.40),
]


class TestNdcHelpers(unittest.TestCase):
    def test_normalize_strips_dashes_and_spaces(self):
        self.assertEqual(normalize_ndc(" 42385-0978-01 "), "42385097801")
        self.assertEqual(normalize_ndc(None), "")

    def test_prefix_match_works_both_ways(self):
        self.assertTrue(ndc_prefix_match("42385", "42385097801"))
        self.assertTrue(ndc_prefix_match("4238509780199", "42385-0978-01"))
        self.assertFalse(ndc_prefix_match("69315", "42385097801"))
        self.assertFalse(ndc_prefix_match("", "42385097801"))


class TestResolveSearchLines(unittest.TestCase):
    def test_prefix_term_expands_to_every_matching_ndc(self):
        lines = resolve_search_lines(["42385"], OBSERVATIONS)
        self.assertEqual([ln.ndc for ln in lines], ["42385097801", "42385011102"])
        self.assertTrue(all(ln.quantity == 1 for ln in lines))

    def test_quantities_apply_per_term(self):
        lines = resolve_search_lines(["42385-0978", "69315"], OBSERVATIONS, quantities=[5, 8])
        self.assertEqual([(ln.ndc, ln.quantity) for ln in lines], [("42385097801", 5), ("69315028209", 8)])

    def test_product_list_supplies_name_and_quantity(self):
        product_list = [ProductLine(ndc="69315-0282-09", product_name="Metformin", quantity=50)]
        lines = resolve_search_lines(["69315028209"], OBSERVATIONS, product_list=product_list)
        self.assertEqual(len(lines), 1)
        self.assertEqual(lines[0].product_name, "Metformin")
        self.assertEqual(lines[0].quantity, 50)

    def test_explicit_quantity_overrides_product_list_quantity(self):
        product_list = [ProductLine(ndc="69315-0282-09", product_name="Metformin", quantity=50)]
        lines = resolve_search_lines(["69315028209"], OBSERVATIONS, product_list=product_list, quantities=[7])
        self.assertEqual(len(lines), 1)
        self.assertEqual(lines[0].ndc, "69315028209")
        self.assertEqual(lines[0].product_name, "Metformin")
        self.assertEqual(lines[0].quantity, 7)

    def test_unmatched_term_yields_nothing(self):
        self.assertEqual(resolve_search_lines(["00000"], OBSERVATIONS), [])

    def test_overlapping_terms_do_not_duplicate_lines(self):
        lines = resolve_search_lines(["42385", "42385097801"], OBSERVATIONS)
        self.assertEqual(len(lines), 2)


class TestBuildPackages(unittest.TestCase):
    def test_groups_by_recommended_distributor(self):
        lines = [
            ProductLine(ndc="42385097801", product_name="Atorvastatin", quantity=10),
            ProductLine(ndc="42385011102", product_name="Other", quantity=3),
            ProductLine(ndc="69315028209", product_name="Metformin", quantity=20),
            ProductLine(ndc="11111111111", product_name="Unpriced", quantity=4),
        ]
        result = build_recommendations(lines, OBSERVATIONS, now=NOW)
        packages = build_packages(result, total_products=len(lines))

        self.assertEqual(packages.total_packages, 2)
        by_name = {p.distributor: p for p in packages.packages}
        self.assertEqual(sorted(by_name), ["Inmar", "Qualanex"])
        self.assertEqual(by_name["Qualanex"].total_items, 30)
        self.assertAlmostEqual(by_name["Qualanex"].total_estimated_value, 17.0)
        self.assertAlmostEqual(by_name["Inmar"].total_estimated_value, 6.0)
        # Most valuable package first
        self.assertEqual(packages.packages[0].distributor, "Qualanex")
        self.assertAlmostEqual(packages.total_estimated_value, 23.0)
        self.assertEqual(packages.summary.products_with_pricing, 3)
        self.assertEqual(packages.summary.products_without_pricing, 1)
        self.assertEqual(packages.summary.distributors_used, 2)

    def test_empty_result_has_no_packages(self):
        result = build_recommendations([], OBSERVATIONS, now=NOW)
        packages = build_packages(result, total_products=0)
        self.assertEqual(packages.packages, [])
        self.assertEqual(packages.total_estimated_value, 0)
        data = packages.to_json_dict()
        self.assertIn("totalPackages", data)
        self.assertIn("productsWithoutPricing", data["summary"])


if __name__ == "__main__":
    unittest.main()
