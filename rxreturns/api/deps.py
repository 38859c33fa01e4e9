"""Request dependencies: resolve the calling pharmacy from the auth header."""

from typing import Optional

from fastapi import Header

from rxreturns.config import PHARMACY_ID_HEADER
from rxreturns.db.models.master import PHARMACY_STATUS_ACTIVE, Pharmacy
from rxreturns.db.repositories import pharmacy_repo
from rxreturns.errors import AccessDeniedError, AuthenticationError, NotFoundError
from rxreturns.utils.logger import get_logger

logger = get_logger("rxreturns.api.deps")


def current_pharmacy(
    pharmacy_id: Optional[str] = Header(None, alias=PHARMACY_ID_HEADER),
) -> Pharmacy:
    """Return the active pharmacy behind the request.

    Missing header -> 401, unknown pharmacy -> 404, any status other than active -> 403.
    """
    pharmacy_id = (pharmacy_id or "").strip()
    if not pharmacy_id:
        raise AuthenticationError(f"Missing {PHARMACY_ID_HEADER} header")
    pharmacy = pharmacy_repo.get_by_id(pharmacy_id)
    if pharmacy is None:
        raise NotFoundError("Pharmacy not found")
    if pharmacy.status != PHARMACY_STATUS_ACTIVE:
        logger.warning("api.pharmacy_not_active", pharmacy_id=pharmacy_id, status=pharmacy.status)
        raise AccessDeniedError(f"Pharmacy account is {pharmacy.status}; only active pharmacies may use this endpoint")
    return pharmacy
