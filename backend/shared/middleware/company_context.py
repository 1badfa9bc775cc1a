import logging

from django.utils.deprecation import MiddlewareMixin

from apps.companies.models import Company

logger = logging.getLogger(__name__)


def get_current_company(request):
    """
    Helper function to get the current company from the request.

    Args:
        request: Django request object

    Returns:
        Company instance or None
    """
    return getattr(request, 'company', None)


def _extract_company_id(request):
    # Priority: Headers > Session
    company_id = request.META.get('HTTP_X_COMPANY_ID')
    if not company_id and hasattr(request, 'session'):
        company_id = request.session.get('active_company_id')
    return company_id


def resolve_company(request):
    """
    Resolve the active company for an authenticated user.

    The company must exist, be active, and list the user among its members.
    Returns None when any of those checks fail.
    """
    user = getattr(request, 'user', None)
    if user is None or not user.is_authenticated:
        return None

    company_id = _extract_company_id(request)
    if not company_id:
        return None

    try:
        company = Company.objects.get(id=company_id, is_active=True)
    except (Company.DoesNotExist, ValueError, TypeError):
        logger.debug("Company %s not found or inactive", company_id)
        return None

    if not user.companies.filter(id=company.id).exists():
        logger.warning("User %s is not a member of company %s", user.pk, company.pk)
        return None
    return company


class CompanyContextMiddleware(MiddlewareMixin):
    """
    Injects the active company into the request.

    Based on the X-Company-ID header or the company last selected in the session.
    """
    def process_request(self, request):
        request.company = None
        if not request.user.is_authenticated:
            return

        company = resolve_company(request)
        if company:
            request.company = company
            request.session['active_company_id'] = str(company.id)
