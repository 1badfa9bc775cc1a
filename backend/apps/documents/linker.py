"""
Links between documents: invoice from sales order, bill from purchase order.

Derivation copies the source's counterparty snapshot and lines (swapping the
price column), resolves a location and due date, then hands off to the target
service's ``create``. The reverse check keeps a source from being cancelled or
deleted while a live document still points at it.
"""
from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any, Dict, Mapping, Optional

from django.conf import settings
from django.utils import timezone

from . import masterdata
from .engine import DocumentService, DocumentType, derived_types
from .exceptions import BusinessRuleViolation, UnknownReference
from .models import PaymentTerms

logger = logging.getLogger(__name__)

TERM_DAYS = {
    PaymentTerms.IMMEDIATE: 0,
    PaymentTerms.ADVANCE: 0,
    PaymentTerms.COD: 0,
    PaymentTerms.NET_15: 15,
    PaymentTerms.NET_30: 30,
    PaymentTerms.NET_60: 60,
    PaymentTerms.NET_90: 90,
}
DEFAULT_TERM_DAYS = 30

OVERRIDABLE_HEADER_FIELDS = ("issue_date", "reference_number", "notes")


def due_date_for(issue_date: date, payment_terms: Optional[str]) -> date:
    days = TERM_DAYS.get(payment_terms, DEFAULT_TERM_DAYS)
    return issue_date + timedelta(days=days)


def _map_line(source_type: DocumentType, target_type: DocumentType, line) -> Dict[str, Any]:
    return {
        "product": line.product_id,
        "item_code": line.item_code,
        "description": line.description,
        "quantity": line.quantity,
        "unit_of_measure": line.unit_of_measure,
        target_type.price_field: getattr(line, source_type.price_field),
        "discount_percent": line.discount_percent,
        "tax_rate": line.tax_rate,
        "notes": line.notes,
    }


def _resolve_location(company, source, overrides: Mapping[str, Any]):
    if overrides.get("location"):
        return overrides["location"]
    if source.location_id:
        return source.location_id
    headquarters = masterdata.get_default_headquarters(company)
    if headquarters is None:
        raise UnknownReference(
            "location",
            "No default headquarters location found. Please specify a location.",
        )
    return headquarters.pk


def derive_document(service: DocumentService, company, source_number: str, overrides: Mapping[str, Any], *, user=None):
    """
    Create a ``service`` document from the source document ``source_number``.

    Without an explicit ``due_date`` the due date is counted from the new
    document's issue date (today unless overridden), not from the source's
    issue date: an invoice raised weeks after its order still gets the full
    payment window.
    """
    target_type = service.doc_type
    source_type = target_type.source_type
    if source_type is None:
        raise BusinessRuleViolation(f"A {target_type.label} cannot be created from another document.")

    source = DocumentService(source_type).get(company, source_number)
    if source.status in (source_type.initial_status, source_type.cancelled_status):
        raise BusinessRuleViolation(
            f"Cannot create {target_type.label} from a draft or cancelled {source_type.label}."
        )

    lines = [_map_line(source_type, target_type, line) for line in source.lines.order_by("line_number")]

    issue_date = overrides.get("issue_date") or timezone.localdate()
    payment_terms = overrides.get("payment_terms") or source.payment_terms or PaymentTerms.NET_30
    due_date = overrides.get("due_date") or due_date_for(issue_date, payment_terms)
    shipping = overrides.get("shipping_charges")

    data: Dict[str, Any] = {
        target_type.counterparty_field: getattr(source, f"{source_type.counterparty_field}_id"),
        target_type.counterparty_name_field: getattr(source, source_type.counterparty_name_field),
        target_type.counterparty_code_field: getattr(source, source_type.counterparty_code_field),
        "location": _resolve_location(company, source, overrides),
        "issue_date": issue_date,
        "due_date": due_date,
        "payment_terms": payment_terms,
        "currency": overrides.get("currency") or source.currency,
        "shipping_charges": shipping if shipping is not None else source.shipping_charges,
        "lines": lines,
    }
    for name in OVERRIDABLE_HEADER_FIELDS + target_type.header_fields:
        if name in overrides and name not in ("due_date", "payment_terms", "shipping_charges", "currency"):
            data[name] = overrides[name]

    document = service.create(company, data, user=user, source=source)
    logger.info(
        "Derived %s %s from %s %s",
        target_type.label,
        document.number,
        source_type.label,
        source.number,
    )
    return document


def live_derivatives(source_type: DocumentType, source):
    """Active, non-cancelled documents created from ``source``, across every derived type."""
    found = []
    for derived in derived_types(source_type):
        qs = (
            derived.model.objects.active()
            .filter(company_id=source.company_id, **{derived.source_field: source})
            .exclude(status=derived.cancelled_status)
        )
        found.extend((derived, number) for number in qs.values_list("number", flat=True))
    return found


def ensure_source_released(source_type: DocumentType, source, *, action: str) -> None:
    if not getattr(settings, "DOCUMENTS_PROTECT_LINKED_SOURCES", True):
        return
    linked = live_derivatives(source_type, source)
    if linked:
        derived, number = linked[0]
        raise BusinessRuleViolation(
            f"Cannot {action} {source_type.label} {source.number}: {derived.label} {number} "
            f"is linked to it. Cancel the {derived.label} first."
        )
