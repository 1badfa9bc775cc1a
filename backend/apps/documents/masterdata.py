"""Tenant-ownership checks for records referenced by commercial documents."""
from __future__ import annotations

from typing import Dict, Iterable, Optional

from apps.companies.models import CompanyLocation

from .exceptions import UnknownReference


def _label(model) -> str:
    return str(model._meta.verbose_name).capitalize()


def get_owned(model, company, pk, *, field: str, active_only: bool = False):
    """Return ``model`` row ``pk`` if it belongs to ``company``; ``None`` when no id was given."""
    if pk in (None, ""):
        return None
    if isinstance(pk, model):
        pk = pk.pk
    qs = model.objects.filter(company=company)
    if active_only:
        qs = qs.filter(is_active=True)
    try:
        return qs.get(pk=pk)
    except (model.DoesNotExist, ValueError, TypeError):
        raise UnknownReference(field, f"{_label(model)} {pk} does not exist for this company.")


def get_owned_many(model, company, pks: Iterable, *, field: str) -> Dict[int, object]:
    """Resolve several ids in one query; every id must belong to ``company``."""
    wanted = {int(pk) for pk in pks if pk not in (None, "")}
    if not wanted:
        return {}
    found = {obj.pk: obj for obj in model.objects.filter(company=company, pk__in=wanted)}
    missing = sorted(wanted - set(found))
    if missing:
        ids = ", ".join(str(pk) for pk in missing)
        raise UnknownReference(field, f"{_label(model)} {ids} does not exist for this company.")
    return found


def get_location(company, pk, *, field: str = "location") -> Optional[CompanyLocation]:
    return get_owned(CompanyLocation, company, pk, field=field, active_only=True)


def get_default_headquarters(company) -> Optional[CompanyLocation]:
    return company.get_default_headquarters()
