"""Utility modules."""

from rxreturns.utils.csv_loader import (
    load_credit_report_items,
    load_credit_reports,
    load_distributors,
    load_pharmacies,
    load_product_list,
    read_csv_file,
)
from rxreturns.utils.logger import bind_context, clear_context, get_logger, request_context
from rxreturns.utils.ndc import ndc_prefix_match, normalize_ndc

__all__ = [
    "load_credit_report_items",
    "load_credit_reports",
    "load_distributors",
    "load_pharmacies",
    "load_product_list",
    "read_csv_file",
    "bind_context",
    "clear_context",
    "get_logger",
    "request_context",
    "ndc_prefix_match",
    "normalize_ndc",
]
