"""Tests for DB repositories: credit report ingestion, observations, usage and product list."""

import sys
import unittest
from datetime import date, datetime, timedelta, timezone
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError

from rxreturns.db import get_session, init_db
from rxreturns.db.models.master import PHARMACY_STATUS_ACTIVE, ReverseDistributor
from rxreturns.db.repositories import distributor_repo, pharmacy_repo, price_repo, product_list_repo
from rxreturns.errors import NotFoundError
from rxreturns.models.inputs import CreditReportCreate, ProductListItemCreate, SuggestionItem
from rxreturns.optimization import service

PHARMACY = "ph-repo-001"
OTHER_PHARMACY = "ph-repo-002"
RETIRING_PHARMACY = "ph-repo-003"


def _today() -> date:
    return datetime.now(timezone.utc).date()


class TestRepositories(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        init_db()
        with get_session() as session:
            session.add_all(
                [
                    ReverseDistributor(code="RP-ALPHA", name="Repo Alpha Returns", is_active=True),
                    ReverseDistributor(code="RP-BETA", name="Repo Beta Returns", is_active=True),
                    ReverseDistributor(code="RP-GONE", name="Repo Gone Returns", is_active=False),
                ]
            )
        pharmacy_repo.create("Repo Pharmacy", PHARMACY_STATUS_ACTIVE, plan_id="free", pharmacy_id=PHARMACY)
        pharmacy_repo.create("Other Pharmacy", PHARMACY_STATUS_ACTIVE, pharmacy_id=OTHER_PHARMACY)
        pharmacy_repo.create("Retiring Pharmacy", PHARMACY_STATUS_ACTIVE, plan_id="premium", pharmacy_id=RETIRING_PHARMACY)

    def test_get_pharmacy(self):
        row = pharmacy_repo.get_by_id(PHARMACY)
        self.assertIsNotNone(row)
        self.assertEqual(row.plan_id, "free")
        self.assertEqual(row.status, PHARMACY_STATUS_ACTIVE)
        self.assertIsNone(pharmacy_repo.get_by_id("ph-repo-missing"))

    def test_record_credit_report_skips_unpriced_items(self):
        report = CreditReportCreate(
            distributor="rp-alpha",
            report_date=_today(),
            file_name="alpha.pdf",
            items=[
                {"ndc": "99000-0001-01", "quantity": 10, "creditAmount": 12.5},
                {"ndc": "99000-0002-01", "quantity": 4, "pricePerUnit": 2.0},
                {"ndc": "99000-0003-01", "quantity": 3},
            ],
        )
        out = price_repo.record_credit_report(PHARMACY, report)
        self.assertEqual(out.distributor, "Repo Alpha Returns")
        self.assertEqual(out.observations_recorded, 2)
        self.assertEqual(out.skipped_items, 1)
        self.assertAlmostEqual(out.total_credit_amount, 20.5)

        observations = price_repo.fetch_observations(["99000-0001-01", "99000000201"])
        by_ndc = {o.ndc: o for o in observations}
        self.assertAlmostEqual(by_ndc["99000000101"].unit_price, 1.25)
        self.assertAlmostEqual(by_ndc["99000000201"].unit_price, 2.0)
        self.assertEqual(by_ndc["99000000101"].distributor, "Repo Alpha Returns")
        self.assertIsNotNone(by_ndc["99000000101"].observed_at.tzinfo)

    def test_distributor_matched_by_name(self):
        report = CreditReportCreate(
            distributor="Repo Beta Returns",
            report_date=_today(),
            items=[{"ndc": "99000-0009-01", "quantity": 1, "pricePerUnit": 3.0}],
        )
        self.assertEqual(price_repo.record_credit_report(OTHER_PHARMACY, report).distributor, "Repo Beta Returns")

    def test_unknown_distributor_raises_not_found(self):
        report = CreditReportCreate(
            distributor="Nobody Returns",
            report_date=_today(),
            items=[{"ndc": "1", "quantity": 1, "pricePerUnit": 1.0}],
        )
        with self.assertRaises(NotFoundError):
            price_repo.record_credit_report(PHARMACY, report)

    def test_fetch_observations_empty_filter(self):
        self.assertEqual(price_repo.fetch_observations([]), [])
        self.assertEqual(price_repo.fetch_observations(["99999999999"]), [])

    def test_usage_counts_distinct_distributors_this_month(self):
        today = _today()
        last_month = distributor_repo.month_bounds(today)[0] - timedelta(days=1)
        for code, day in (("RP-BETA", today), ("RP-BETA", today), ("RP-ALPHA", last_month)):
            price_repo.record_credit_report(
                OTHER_PHARMACY,
                CreditReportCreate(
                    distributor=code,
                    report_date=day,
                    items=[{"ndc": "99000-0010-01", "quantity": 2, "pricePerUnit": 1.0}],
                ),
            )
        usage = distributor_repo.usage_snapshot(OTHER_PHARMACY, max_distributors=3, today=today)
        self.assertEqual(usage.used_distributors, ["Repo Beta Returns"])
        self.assertEqual(usage.used_this_month, 1)
        self.assertEqual(usage.total_distributors, len(distributor_repo.list_active()))
        self.assertEqual(usage.still_available, min(usage.total_distributors, 3) - 1)

    def test_list_active_excludes_inactive_and_filters(self):
        names = [d.name for d in distributor_repo.list_active()]
        self.assertIn("Repo Alpha Returns", names)
        self.assertNotIn("Repo Gone Returns", names)
        self.assertEqual([d.code for d in distributor_repo.list_active("rp-bet")], ["RP-BETA"])

    def test_deactivated_distributor_drops_out_of_pricing_and_usage(self):
        today = _today()
        with get_session() as session:
            session.add(ReverseDistributor(code="RP-RETIRED", name="Repo Retired Returns", is_active=True))
        for code, price in (("RP-ALPHA", 2.0), ("RP-RETIRED", 0.5)):
            price_repo.record_credit_report(
                RETIRING_PHARMACY,
                CreditReportCreate(
                    distributor=code,
                    report_date=today,
                    items=[{"ndc": "99000-0020-01", "quantity": 1, "pricePerUnit": price}],
                ),
            )
        with get_session() as session:
            session.execute(
                update(ReverseDistributor).where(ReverseDistributor.code == "RP-RETIRED").values(is_active=False)
            )

        observations = price_repo.fetch_observations(["99000-0020-01"])
        self.assertEqual([o.distributor for o in observations], ["Repo Alpha Returns"])
        self.assertNotIn("Repo Retired Returns", [o.distributor for o in price_repo.fetch_observations(None)])

        usage = distributor_repo.usage_snapshot(RETIRING_PHARMACY, max_distributors=None, today=today)
        self.assertEqual(usage.used_distributors, ["Repo Alpha Returns"])
        self.assertEqual(usage.total_distributors, len(distributor_repo.list_active()))
        self.assertEqual(usage.still_available, usage.total_distributors - 1)

        result = service.get_suggestions(
            RETIRING_PHARMACY, [SuggestionItem(ndc="99000-0020-01", quantity=1)], plan_id="premium"
        )
        self.assertEqual(len(result.recommendations), 1)
        self.assertEqual(result.recommendations[0].recommended_distributor, "Repo Alpha Returns")
        self.assertEqual(result.recommendations[0].alternative_distributors, [])

    def test_distributor_names_are_unique(self):
        with self.assertRaises(IntegrityError):
            with get_session() as session:
                session.add(ReverseDistributor(code="RP-ALPHA-2", name="Repo Alpha Returns", is_active=True))
        self.assertEqual([d.code for d in distributor_repo.list_active("repo alpha")], ["RP-ALPHA"])

    def test_list_active_treats_wildcards_literally(self):
        self.assertEqual(distributor_repo.list_active("%"), [])
        self.assertEqual(distributor_repo.list_active("_"), [])
        self.assertEqual(distributor_repo.list_active("rp%alpha"), [])
        self.assertEqual([d.code for d in distributor_repo.list_active("rp-alpha")], ["RP-ALPHA"])

    def test_month_bounds_wraps_december(self):
        self.assertEqual(
            distributor_repo.month_bounds(date(2025, 12, 17)), (date(2025, 12, 1), date(2026, 1, 1))
        )
        self.assertEqual(distributor_repo.month_bounds(date(2026, 2, 1)), (date(2026, 2, 1), date(2026, 3, 1)))

    def test_product_list_add_list_remove(self):
        item = product_list_repo.add_item(
            PHARMACY, ProductListItemCreate(ndc="99000-0001-01", product_name="Repo Item", quantity=6)
        )
        self.assertEqual(item.quantity, 6)
        self.assertIn(item.id, [i.id for i in product_list_repo.list_items(PHARMACY)])
        self.assertNotIn(item.id, [i.id for i in product_list_repo.list_items(OTHER_PHARMACY)])

        lines = product_list_repo.fetch_lines(PHARMACY)
        self.assertIn(("99000-0001-01", 6), [(ln.ndc, ln.quantity) for ln in lines])

        self.assertFalse(product_list_repo.remove_item(OTHER_PHARMACY, item.id))
        self.assertTrue(product_list_repo.remove_item(PHARMACY, item.id))
        self.assertFalse(product_list_repo.remove_item(PHARMACY, item.id))


if __name__ == "__main__":
    unittest.main()
