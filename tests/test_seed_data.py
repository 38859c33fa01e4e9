"""Tests for demo seeding from data/*.csv into a fresh database."""

import sys
import unittest
from datetime import datetime, timezone
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy import create_engine, func, select
from sqlalchemy.orm import Session

from rxreturns.db.base import Base, as_utc
from rxreturns.db.models import CreditReport, Pharmacy, PriceObservation, ProductListItem, ReverseDistributor
from rxreturns.db.seed_data import seed_demo_data


class TestSeedDemoData(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.engine = create_engine("sqlite://")
        Base.metadata.create_all(bind=cls.engine)
        with Session(bind=cls.engine) as session:
            seed_demo_data(session)
            session.commit()

    @classmethod
    def tearDownClass(cls):
        cls.engine.dispose()

    def test_reference_data_loaded(self):
        with Session(bind=self.engine) as session:
            self.assertGreaterEqual(session.scalar(select(func.count(ReverseDistributor.id))), 4)
            inactive = session.scalars(select(ReverseDistributor).where(ReverseDistributor.is_active == False)).all()  # noqa: E712
            self.assertTrue(inactive)
            self.assertEqual(session.get(Pharmacy, "ph-demo-001").status, "active")

    def test_observations_use_normalized_ndc_and_report_date(self):
        with Session(bind=self.engine) as session:
            rows = session.scalars(select(PriceObservation)).all()
            self.assertTrue(rows)
            for row in rows:
                self.assertNotIn("-", row.ndc)
                self.assertGreater(row.unit_price, 0)
                report = session.get(CreditReport, row.credit_report_id)
                self.assertEqual(as_utc(row.observed_at).date(), report.report_date)

    def test_unit_price_falls_back_to_credit_over_quantity(self):
        with Session(bind=self.engine) as session:
            row = session.scalars(
                select(PriceObservation).where(PriceObservation.ndc == "42385097801").order_by(PriceObservation.id)
            ).first()
            self.assertAlmostEqual(row.unit_price, 1.25)

    def test_report_dates_are_relative_to_today(self):
        today = datetime.now(timezone.utc).date()
        with Session(bind=self.engine) as session:
            dates = session.scalars(select(CreditReport.report_date)).all()
        self.assertTrue(all(d <= today for d in dates))
        self.assertTrue(any((today - d).days > 30 for d in dates))

    def test_report_totals_sum_items(self):
        with Session(bind=self.engine) as session:
            for report in session.scalars(select(CreditReport)).all():
                total = sum(o.credit_amount for o in report.observations)
                self.assertAlmostEqual(report.total_credit_amount, round(total, 2))

    def test_product_list_loaded(self):
        with Session(bind=self.engine) as session:
            count = session.scalar(
                select(func.count(ProductListItem.id)).where(ProductListItem.pharmacy_id == "ph-demo-001")
            )
        self.assertGreaterEqual(count, 3)


if __name__ == "__main__":
    unittest.main()
