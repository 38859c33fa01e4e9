"""Price history repository: read observations for the allocator, record parsed credit reports."""

from datetime import datetime, time, timezone
from typing import Optional, Sequence

from sqlalchemy import select

from rxreturns.db import get_session
from rxreturns.db.base import as_utc
from rxreturns.db.models.master import ReverseDistributor
from rxreturns.db.models.pricing import CreditReport, PriceObservation as PriceObservationRow
from rxreturns.db.repositories.distributor_repo import find_by_code_or_name
from rxreturns.errors import NotFoundError
from rxreturns.models.data import PriceObservation
from rxreturns.models.inputs import CreditReportCreate
from rxreturns.models.outputs import CreditReportOut
from rxreturns.utils.logger import get_logger
from rxreturns.utils.ndc import normalize_ndc

logger = get_logger("rxreturns.db.price_repo")


def fetch_observations(ndcs: Optional[Sequence[str]] = None) -> list[PriceObservation]:
    """Observations for the given NDCs (normalized), or every observation when ndcs is None.

    Only active distributors are returned; a deactivated distributor is never a candidate.

    Ordered by observation id so grouping downstream is deterministic.
    """
    with get_session() as session:
        q = (
            select(PriceObservationRow, ReverseDistributor.name)
            .join(ReverseDistributor, PriceObservationRow.distributor_id == ReverseDistributor.id)
            .where(ReverseDistributor.is_active == True)  # noqa: E712
            .order_by(PriceObservationRow.id)
        )
        if ndcs is not None:
            wanted = sorted({normalize_ndc(n) for n in ndcs if normalize_ndc(n)})
            if not wanted:
                return []
            q = q.where(PriceObservationRow.ndc.in_(wanted))
        return [
            PriceObservation(
                ndc=row.ndc,
                distributor=name,
                unit_price=row.unit_price,
                observed_at=as_utc(row.observed_at),
            )
            for row, name in session.execute(q).all()
        ]


def record_credit_report(pharmacy_id: str, report: CreditReportCreate) -> CreditReportOut:
    """Persist a credit report and one observation per priced item.

    Items whose resolved unit price is not positive are skipped. Raises NotFoundError when the
    distributor is unknown.
    """
    observed_at = datetime.combine(report.report_date, time.min, tzinfo=timezone.utc)
    with get_session() as session:
        distributor = find_by_code_or_name(session, report.distributor)
        if distributor is None:
            raise NotFoundError(f"Unknown reverse distributor: {report.distributor!r}")
        header = CreditReport(
            pharmacy_id=pharmacy_id,
            distributor_id=distributor.id,
            report_date=report.report_date,
            file_name=report.file_name,
            source=report.source,
        )
        session.add(header)
        session.flush()

        recorded = skipped = 0
        total_credit = 0.0
        for item in report.items:
            unit_price = item.resolved_unit_price()
            ndc = normalize_ndc(item.ndc)
            if unit_price <= 0 or not ndc:
                skipped += 1
                logger.debug("credit_report.item_skipped", ndc=item.ndc, unit_price=unit_price)
                continue
            credit = item.credit_amount if item.credit_amount is not None else unit_price * item.quantity
            session.add(
                PriceObservationRow(
                    ndc=ndc,
                    distributor_id=distributor.id,
                    credit_report_id=header.id,
                    product_name=item.product_name,
                    unit_price=unit_price,
                    quantity=item.quantity,
                    credit_amount=credit,
                    observed_at=observed_at,
                )
            )
            total_credit += credit
            recorded += 1
        header.total_credit_amount = round(total_credit, 2)
        session.flush()
        logger.info(
            "credit_report.recorded",
            report_id=header.id,
            distributor=distributor.name,
            recorded=recorded,
            skipped=skipped,
        )
        return CreditReportOut(
            id=header.id,
            distributor=distributor.name,
            report_date=report.report_date,
            observations_recorded=recorded,
            skipped_items=skipped,
            total_credit_amount=header.total_credit_amount,
        )
