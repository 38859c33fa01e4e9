"""Product list repository: add, list and remove a pharmacy's candidate-for-return lines."""

from sqlalchemy import select

from rxreturns.db import get_session
from rxreturns.db.models.product_list import ProductListItem
from rxreturns.models.data import ProductLine
from rxreturns.models.inputs import ProductListItemCreate
from rxreturns.models.outputs import ProductListItemOut


def add_item(pharmacy_id: str, item: ProductListItemCreate) -> ProductListItemOut:
    """Insert a line owned by pharmacy_id and return it."""
    with get_session() as session:
        row = ProductListItem(
            pharmacy_id=pharmacy_id,
            ndc=item.ndc,
            product_name=item.product_name,
            quantity=item.quantity,
            lot_number=item.lot_number,
            expiration_date=item.expiration_date,
            notes=item.notes,
        )
        session.add(row)
        session.flush()
        session.refresh(row)
        return ProductListItemOut.model_validate(row)


def list_items(pharmacy_id: str) -> list[ProductListItemOut]:
    """All lines of the pharmacy, newest first."""
    with get_session() as session:
        q = (
            select(ProductListItem)
            .where(ProductListItem.pharmacy_id == pharmacy_id)
            .order_by(ProductListItem.added_at.desc(), ProductListItem.id.desc())
        )
        return [ProductListItemOut.model_validate(r) for r in session.scalars(q).all()]


def remove_item(pharmacy_id: str, item_id: int) -> bool:
    """Delete the line if it exists and belongs to the pharmacy. Returns True if a row was deleted."""
    with get_session() as session:
        row = session.scalars(
            select(ProductListItem)
            .where(ProductListItem.id == item_id)
            .where(ProductListItem.pharmacy_id == pharmacy_id)
        ).first()
        if row is None:
            return False
        session.delete(row)
        return True


def fetch_lines(pharmacy_id: str) -> list[ProductLine]:
    """Snapshot of the pharmacy's list as allocator input, in insertion order."""
    with get_session() as session:
        q = (
            select(ProductListItem)
            .where(ProductListItem.pharmacy_id == pharmacy_id)
            .order_by(ProductListItem.id)
        )
        return [
            ProductLine(
                ndc=r.ndc,
                product_name=r.product_name,
                quantity=r.quantity,
                lot_number=r.lot_number,
                expiration_date=r.expiration_date,
            )
            for r in session.scalars(q).all()
        ]
