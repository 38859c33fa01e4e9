"""Request schemas validated at the API boundary (camelCase or snake_case keys accepted)."""

from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from rxreturns.errors import ValidationError
from rxreturns.utils.ndc import normalize_ndc

_INPUT_CONFIG = {"alias_generator": to_camel, "populate_by_name": True, "extra": "ignore"}


class ProductListItemCreate(BaseModel):
    """Body of POST /product-list/items."""

    model_config = _INPUT_CONFIG

    ndc: str = Field(..., min_length=1)
    product_name: Optional[str] = None
    quantity: int = Field(..., ge=0)
    lot_number: Optional[str] = None
    expiration_date: Optional[date] = None
    notes: Optional[str] = None

    @field_validator("ndc")
    @classmethod
    def _ndc_has_digits(cls, v: str) -> str:
        if not normalize_ndc(v):
            raise ValueError("ndc must not be blank")
        return v.strip()


class SuggestionItem(BaseModel):
    model_config = _INPUT_CONFIG

    ndc: str = Field(..., min_length=1)
    quantity: int = Field(..., gt=0)
    product_name: Optional[str] = None


class SuggestionRequest(BaseModel):
    """Body of POST /optimization/suggestions: an ad-hoc product list."""

    model_config = _INPUT_CONFIG

    items: list[SuggestionItem] = Field(..., min_length=1)


class CreditReportItemIn(BaseModel):
    """One parsed credit-report line. pricePerUnit falls back to creditAmount / quantity."""

    model_config = _INPUT_CONFIG

    ndc: str = Field(..., min_length=1)
    product_name: Optional[str] = None
    quantity: int = Field(..., gt=0)
    credit_amount: Optional[float] = Field(None, ge=0)
    price_per_unit: Optional[float] = None

    def resolved_unit_price(self) -> float:
        if self.price_per_unit is not None and self.price_per_unit > 0:
            return self.price_per_unit
        if self.credit_amount:
            return self.credit_amount / self.quantity
        return 0.0


class CreditReportCreate(BaseModel):
    """Body of POST /credit-reports."""

    model_config = _INPUT_CONFIG

    distributor: str = Field(..., min_length=1, description="Distributor code or name")
    report_date: date
    file_name: Optional[str] = None
    source: Literal["manual_upload", "email_forward", "portal_fetch", "api"] = "manual_upload"
    items: list[CreditReportItemIn] = Field(..., min_length=1)


class OptimizationSearch(BaseModel):
    """Search-mode terms from ?ndc=a,b&quantity=3,4. Empty ndcs means use the product list."""

    ndcs: list[str] = Field(default_factory=list)
    quantities: Optional[list[int]] = None

    @property
    def active(self) -> bool:
        return bool(self.ndcs)

    @classmethod
    def from_query(cls, ndc: Optional[str], quantity: Optional[str]) -> "OptimizationSearch":
        """Parse comma-separated query values; raises ValidationError on bad input."""
        terms: list[str] = []
        for raw in (ndc or "").split(","):
            term = normalize_ndc(raw)
            if term:
                terms.append(term)
        if quantity is None or not quantity.strip():
            return cls(ndcs=terms)
        if not terms:
            raise ValidationError("quantity requires the ndc parameter")
        values: list[int] = []
        for raw in quantity.split(","):
            raw = raw.strip()
            if not raw:
                continue
            try:
                values.append(int(raw))
            except ValueError as e:
                raise ValidationError(f"quantity values must be integers, got {raw!r}") from e
        if len(values) != len(terms):
            raise ValidationError(
                f"quantity list length ({len(values)}) must match ndc list length ({len(terms)})"
            )
        return cls(ndcs=terms, quantities=values)
