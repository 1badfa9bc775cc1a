from __future__ import annotations

import logging
import re
import time
from typing import Callable, Iterable, Optional

from django.conf import settings
from django.db import IntegrityError, transaction

logger = logging.getLogger(__name__)


def _width(width: Optional[int]) -> int:
    return width or getattr(settings, "DOCUMENT_NUMBER_WIDTH", 3)


def _time_suffix() -> int:
    return int(time.time() * 1000) % 1_000_000_000


def format_doc_no(prefix: str, value: int, width: Optional[int] = None) -> str:
    return f"{prefix}{value:0{_width(width)}d}"


def time_derived_doc_no(prefix: str, width: Optional[int] = None) -> str:
    return format_doc_no(prefix, _time_suffix(), width)


def seed_from_existing(prefix: str, numbers: Iterable[str]) -> int:
    """
    Highest numeric suffix among ``numbers`` that look like ``{prefix}{digits}``.

    Returns 0 for a tenant with no documents yet. When documents exist but none
    of their numbers parse, a time-derived value is returned so allocation keeps
    moving forward instead of colliding with whatever is already stored.
    """
    pattern = re.compile(rf"^{re.escape(prefix)}(\d+)$")
    seen_any = False
    highest = None
    for number in numbers:
        seen_any = True
        match = pattern.match(number or "")
        if match:
            value = int(match.group(1))
            highest = value if highest is None else max(highest, value)
    if highest is not None:
        return highest
    if seen_any:
        logger.warning("No parseable %s numbers found; seeding sequence from the clock", prefix)
        return _time_suffix()
    return 0


@transaction.atomic
def get_next_doc_no(
    *,
    company,
    doc_type: str,
    prefix: str | None = None,
    width: int | None = None,
    existing: Callable[[], Iterable[str]] | None = None,
) -> str:
    """
    Get the next sequential document number for a company and doc type.

    The format is: {prefix or doc_type}{SEQUENCE}
    Example: SO001

    The per-company sequence row is locked for the rest of the enclosing
    transaction. ``existing`` is only called the first time a sequence row is
    created, to continue from numbers issued before the row existed.
    """
    # Lazy import to avoid app loading cycles
    from apps.documents.models import DocumentSequence

    pre = prefix or doc_type

    def _seed() -> int:
        return seed_from_existing(pre, existing() if existing else [])

    seq, created = DocumentSequence.objects.select_for_update().get_or_create(
        company=company,
        doc_type=doc_type,
        defaults={"current_value": _seed},
    )
    if created:
        logger.info("Started %s sequence for company %s at %s", doc_type, company.pk, seq.current_value)
    seq.current_value += 1
    seq.save(update_fields=["current_value", "updated_at"])
    return format_doc_no(pre, seq.current_value, width)


def save_with_doc_no(instance, *, field: str = "number", prefix: str, existing=None, max_attempts: int | None = None):
    """
    Assign a fresh number to ``instance`` and insert it.

    Each insert runs in its own savepoint, so a unique-constraint clash only
    discards that attempt. The final attempt uses a time-derived number.
    """
    attempts = max(1, max_attempts or getattr(settings, "DOCUMENT_NUMBER_MAX_ATTEMPTS", 3))
    for attempt in range(1, attempts + 1):
        if attempt == attempts and attempts > 1:
            number = time_derived_doc_no(prefix)
        else:
            number = get_next_doc_no(company=instance.company, doc_type=prefix, prefix=prefix, existing=existing)
        setattr(instance, field, number)
        try:
            with transaction.atomic():
                instance.save()
            return instance
        except IntegrityError:
            if attempt == attempts:
                raise
            logger.warning(
                "Document number %s already taken for company %s (attempt %s/%s)",
                number,
                instance.company_id,
                attempt,
                attempts,
            )
    return instance
