"""
Generic lifecycle service for commercial documents.

Orders, purchase orders, invoices and bills share one engine. Each concrete
document app describes itself with a ``DocumentType`` (prefix, models,
counterparty role, price column, status graph, writable fields) and gets a
``DocumentService`` bound to that description.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type

from django.db import models, transaction
from rest_framework.exceptions import ValidationError

from core.doc_numbers import save_with_doc_no

from . import ledger, masterdata
from .exceptions import BusinessRuleViolation, DocumentNotFound
from .transitions import StatusGraph

logger = logging.getLogger(__name__)

COMMON_HEADER_FIELDS = (
    "issue_date",
    "currency",
    "payment_terms",
    "reference_number",
    "shipping_charges",
    "notes",
)
LINE_FIELDS = ("item_code", "description", "quantity", "unit_of_measure", "discount_percent", "tax_rate", "notes")
PAYMENT_FIELDS = ("amount_paid", "payment_method", "payment_date", "transaction_ref")


@dataclass(frozen=True)
class DocumentType:
    key: str
    label: str
    prefix: str
    model: Type[models.Model]
    line_model: Type[models.Model]
    graph: StatusGraph
    counterparty_field: str
    counterparty_model: Type[models.Model]
    price_field: str = "unit_price"
    header_fields: Tuple[str, ...] = ()
    line_fields: Tuple[str, ...] = ()
    status_fields: Tuple[str, ...] = ()
    source_type: Optional["DocumentType"] = None
    source_field: Optional[str] = None
    cancelled_status: str = "CANCELLED"
    paid_status: Optional[str] = None
    partially_paid_status: Optional[str] = None
    payment_locked_statuses: Tuple[str, ...] = ()
    location_required: bool = False
    delete_messages: Mapping[str, str] = field(default_factory=dict)

    @property
    def initial_status(self) -> str:
        return self.graph.initial

    @property
    def is_payable(self) -> bool:
        return self.paid_status is not None

    @property
    def counterparty_name_field(self) -> str:
        return f"{self.counterparty_field}_name"

    @property
    def counterparty_code_field(self) -> str:
        return f"{self.counterparty_field}_code"

    @property
    def title(self) -> str:
        return self.label[:1].upper() + self.label[1:]

    def delete_message(self, status: str) -> str:
        return self.delete_messages.get(
            status,
            f"Cannot delete {self.label} with status {status}. Only {self.initial_status} "
            f"{self.label}s can be deleted to maintain audit trail and financial records.",
        )


_registry: Dict[str, DocumentType] = {}


def register(doc_type: DocumentType) -> DocumentType:
    _registry[doc_type.key] = doc_type
    return doc_type


def registered_types() -> List[DocumentType]:
    return list(_registry.values())


def derived_types(source: DocumentType) -> List[DocumentType]:
    """Document types that can be created from ``source``."""
    return [doc_type for doc_type in _registry.values() if doc_type.source_type is source]


class DocumentService:
    def __init__(self, doc_type: DocumentType):
        self.doc_type = doc_type

    # ------------------------------------------------------------------ reads
    def queryset(self, company):
        doc_type = self.doc_type
        related = [doc_type.counterparty_field, "location"]
        if doc_type.source_field:
            related.append(doc_type.source_field)
        return doc_type.model.objects.for_company(company).active().select_related(*related)

    def get(self, company, number: str, *, for_update: bool = False):
        qs = self.queryset(company)
        if for_update:
            # Lock only the header row; nullable joins cannot be locked on every backend.
            qs = self.doc_type.model.objects.for_company(company).active().select_for_update()
        try:
            return qs.get(number=number)
        except self.doc_type.model.DoesNotExist:
            raise DocumentNotFound(f"{self.doc_type.title} {number} not found.")

    def list(self, company, filters: Optional[Mapping[str, Any]] = None):
        doc_type = self.doc_type
        filters = filters or {}
        qs = self.queryset(company)

        status_value = filters.get("status")
        if status_value:
            qs = qs.filter(status=status_value)
        counterparty_id = filters.get(doc_type.counterparty_field)
        if counterparty_id:
            qs = qs.filter(**{f"{doc_type.counterparty_field}_id": counterparty_id})
        counterparty_name = filters.get(doc_type.counterparty_name_field)
        if counterparty_name:
            qs = qs.filter(**{f"{doc_type.counterparty_name_field}__icontains": counterparty_name})
        location = filters.get("location")
        if location:
            qs = qs.filter(location_id=location)
        priority = filters.get("priority")
        if priority and "priority" in doc_type.header_fields:
            qs = qs.filter(priority=priority)
        if doc_type.source_field:
            source_number = filters.get(doc_type.source_field)
            if source_number:
                qs = qs.filter(**{f"{doc_type.source_field}__number": source_number})
        date_from = filters.get("date_from")
        if date_from:
            qs = qs.filter(issue_date__gte=date_from)
        date_to = filters.get("date_to")
        if date_to:
            qs = qs.filter(issue_date__lte=date_to)
        return qs.order_by("-issue_date", "-created_at")

    # ------------------------------------------------------------- validation
    def _resolve_counterparty(self, company, data: Mapping[str, Any]):
        return masterdata.get_owned(
            self.doc_type.counterparty_model,
            company,
            data.get(self.doc_type.counterparty_field),
            field=self.doc_type.counterparty_field,
        )

    def _build_lines(self, company, lines_data, *, has_source: bool) -> list:
        """Validate line input and return unsaved line instances numbered from 1."""
        doc_type = self.doc_type
        if not lines_data:
            raise ValidationError({"lines": ["At least one line is required."]})

        if not has_source:
            missing = [idx for idx, line in enumerate(lines_data, start=1) if not line.get("product")]
            if missing:
                raise BusinessRuleViolation(
                    f"Product is required for line {missing[0]} when the {doc_type.label} "
                    f"is not linked to a source document."
                )

        products = masterdata.get_owned_many(
            doc_type.line_model._meta.get_field("product").related_model,
            company,
            [line.get("product") for line in lines_data],
            field="lines",
        )

        lines = []
        for idx, line_data in enumerate(lines_data, start=1):
            line = doc_type.line_model(line_number=idx)
            product_id = line_data.get("product")
            line.product = products[int(product_id)] if product_id not in (None, "") else None
            for name in LINE_FIELDS + doc_type.line_fields:
                if name in line_data and line_data[name] is not None:
                    setattr(line, name, line_data[name])
            setattr(line, doc_type.price_field, line_data.get(doc_type.price_field))
            if not line.unit_of_measure and line.product is not None:
                line.unit_of_measure = getattr(line.product, "unit_of_measure", "") or ""
            line.apply_amounts()
            lines.append(line)
        return lines

    def _replace_lines(self, document, lines: list) -> None:
        document.lines.all().delete()
        for line in lines:
            line.document = document
            line.save()

    def _ensure_source_released(self, document, action: str) -> None:
        from .linker import ensure_source_released

        ensure_source_released(self.doc_type, document, action=action)

    # ----------------------------------------------------------------- create
    def create(self, company, data: Mapping[str, Any], *, user=None, source=None):
        doc_type = self.doc_type
        data = dict(data)

        counterparty = self._resolve_counterparty(company, data)
        location = masterdata.get_location(company, data.get("location"))
        if doc_type.location_required and location is None:
            raise ValidationError({"location": ["This field is required."]})
        if doc_type.is_payable and not data.get("due_date"):
            raise ValidationError({"due_date": ["This field is required."]})

        name = data.get(doc_type.counterparty_name_field) or getattr(counterparty, "name", "")
        if not name:
            raise ValidationError({doc_type.counterparty_name_field: ["This field is required."]})
        code = data.get(doc_type.counterparty_code_field)
        if code is None:
            code = getattr(counterparty, "code", "") or ""

        lines = self._build_lines(company, data.get("lines"), has_source=source is not None)

        document = doc_type.model(company=company, created_by=user, status=doc_type.initial_status)
        setattr(document, doc_type.counterparty_field, counterparty)
        setattr(document, doc_type.counterparty_name_field, name)
        setattr(document, doc_type.counterparty_code_field, code)
        document.location = location
        if source is not None:
            setattr(document, doc_type.source_field, source)
        for field_name in COMMON_HEADER_FIELDS + doc_type.header_fields:
            if data.get(field_name) is not None:
                setattr(document, field_name, data[field_name])

        amounts = [line.apply_amounts() for line in lines]
        document._apply_totals(ledger.summarise(amounts, document.shipping_charges))

        with transaction.atomic():
            save_with_doc_no(
                document,
                prefix=doc_type.prefix,
                existing=lambda: doc_type.model.objects.filter(company=company).values_list("number", flat=True),
            )
            self._replace_lines(document, lines)

        logger.info(
            "Created %s %s for company %s (total %s)",
            doc_type.label,
            document.number,
            company.pk,
            document.total_amount,
        )
        return document

    def create_from_source(self, company, source_number: str, overrides: Optional[Mapping[str, Any]] = None, *, user=None):
        from .linker import derive_document

        return derive_document(self, company, source_number, overrides or {}, user=user)

    # ----------------------------------------------------------------- update
    def _ensure_not_terminal(self, document) -> None:
        # Payable documents keep header and payment fields open in every status;
        # their identity is guarded by ``payment_locked_statuses`` instead.
        if self.doc_type.is_payable:
            return
        if self.doc_type.graph.is_terminal(document.status):
            raise BusinessRuleViolation(
                f"Cannot update {self.doc_type.label} {document.number} because it is {document.status}."
            )

    def update(self, company, number: str, data: Mapping[str, Any], *, user=None):
        doc_type = self.doc_type
        data = dict(data)
        lines_data = data.pop("lines", None)
        payment = {name: data.pop(name) for name in PAYMENT_FIELDS if name in data}

        with transaction.atomic():
            document = self.get(company, number, for_update=True)
            self._ensure_not_terminal(document)

            if lines_data is not None and document.status != doc_type.initial_status:
                raise BusinessRuleViolation(
                    f"Cannot modify line items of a non-draft {doc_type.label} ({document.status})."
                )

            identity_fields = (
                doc_type.counterparty_field,
                doc_type.counterparty_name_field,
                doc_type.counterparty_code_field,
                "location",
            )
            if document.status in doc_type.payment_locked_statuses and any(f in data for f in identity_fields):
                raise BusinessRuleViolation(
                    f"Cannot change the {doc_type.counterparty_field} or location of {doc_type.label} "
                    f"{document.number} because it is {document.status}. "
                    f"Only payment information can be updated."
                )

            if doc_type.counterparty_field in data:
                counterparty = self._resolve_counterparty(company, data)
                setattr(document, doc_type.counterparty_field, counterparty)
                if counterparty is not None and doc_type.counterparty_name_field not in data:
                    setattr(document, doc_type.counterparty_name_field, counterparty.name)
                    setattr(document, doc_type.counterparty_code_field, counterparty.code)
            if "location" in data:
                location = masterdata.get_location(company, data.get("location"))
                if doc_type.location_required and location is None:
                    raise ValidationError({"location": ["This field is required."]})
                document.location = location

            lines = None
            if lines_data is not None:
                has_source = bool(doc_type.source_field and getattr(document, f"{doc_type.source_field}_id"))
                lines = self._build_lines(company, lines_data, has_source=has_source)

            if doc_type.counterparty_name_field in data and not data[doc_type.counterparty_name_field]:
                raise ValidationError({doc_type.counterparty_name_field: ["This field may not be blank."]})
            for name in (doc_type.counterparty_name_field, doc_type.counterparty_code_field):
                if name in data:
                    setattr(document, name, data[name] or "")
            for name in COMMON_HEADER_FIELDS + doc_type.header_fields:
                if name in data:
                    value = data[name]
                    if value is None and name in ("issue_date", "currency", "shipping_charges"):
                        continue
                    setattr(document, name, value)

            if lines is not None:
                self._replace_lines(document, lines)
                document.refresh_totals(commit=False)
            elif "shipping_charges" in data:
                document.recalculate_total(commit=False)
            elif doc_type.is_payable:
                document.balance_due = ledger.balance_due(document.total_amount, document.amount_paid)
            document.save()

            if payment:
                self._apply_payment(document, **payment)

        logger.info("Updated %s %s for company %s", doc_type.label, document.number, company.pk)
        return document

    # ---------------------------------------------------------------- payment
    def _apply_payment(self, document, *, amount_paid=None, payment_method=None, payment_date=None, transaction_ref=None):
        doc_type = self.doc_type
        update_fields = ["updated_at"]

        if amount_paid is not None:
            amount = ledger.round2(amount_paid)
            if amount < 0:
                raise ValidationError({"amount_paid": ["Amount paid cannot be negative."]})
            document.amount_paid = amount
            document.balance_due = ledger.balance_due(document.total_amount, amount)
            update_fields += ["amount_paid", "balance_due"]

            target = None
            if document.balance_due <= 0:
                target = doc_type.paid_status
            elif amount > 0:
                target = doc_type.partially_paid_status
            if target and document.status != target:
                previous = document.status
                document.status = doc_type.graph.validate(previous, target)
                update_fields.append("status")
                logger.info(
                    "Payment moved %s %s from %s to %s", doc_type.label, document.number, previous, target
                )

        if payment_method is not None:
            document.payment_method = payment_method
            update_fields.append("payment_method")
        if payment_date is not None:
            document.payment_date = payment_date
            update_fields.append("payment_date")
        if transaction_ref is not None:
            document.transaction_ref = transaction_ref
            update_fields.append("transaction_ref")

        document.save(update_fields=update_fields)
        return document

    def update_payment_info(
        self,
        company,
        number: str,
        amount_paid=None,
        payment_method: Optional[str] = None,
        payment_date: Optional[date] = None,
        transaction_ref: Optional[str] = None,
    ):
        if not self.doc_type.is_payable:
            raise BusinessRuleViolation(f"A {self.doc_type.label} does not track payments.")
        with transaction.atomic():
            document = self.get(company, number, for_update=True)
            self._apply_payment(
                document,
                amount_paid=amount_paid,
                payment_method=payment_method,
                payment_date=payment_date,
                transaction_ref=transaction_ref,
            )
        return document

    # ----------------------------------------------------------------- status
    def update_status(self, company, number: str, new_status: str, side_effects: Optional[Mapping[str, Any]] = None):
        doc_type = self.doc_type
        side_effects = side_effects or {}
        with transaction.atomic():
            document = self.get(company, number, for_update=True)
            previous = document.status
            target = doc_type.graph.validate(previous, new_status)
            if target == doc_type.cancelled_status:
                self._ensure_source_released(document, action="cancel")

            document.status = target
            update_fields = ["status", "updated_at"]
            for name in doc_type.status_fields:
                if name in side_effects:
                    setattr(document, name, side_effects[name])
                    update_fields.append(name)
            document.save(update_fields=update_fields)

        logger.info("Moved %s %s from %s to %s", doc_type.label, document.number, previous, target)
        return document

    # ----------------------------------------------------------------- delete
    def delete(self, company, number: str) -> None:
        doc_type = self.doc_type
        with transaction.atomic():
            document = self.get(company, number, for_update=True)
            if document.status != doc_type.initial_status:
                raise BusinessRuleViolation(doc_type.delete_message(document.status))
            self._ensure_source_released(document, action="delete")
            document.is_active = False
            document.save(update_fields=["is_active", "updated_at"])
        logger.info("Soft-deleted %s %s for company %s", doc_type.label, number, company.pk)


