from __future__ import annotations

import logging

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from shared.middleware.company_context import get_current_company, resolve_company

from .engine import DocumentService
from .serializers import DocumentListFilterSerializer, DocumentStatusSerializer, PaymentInputSerializer

logger = logging.getLogger(__name__)


class CompanyScopedQuerysetMixin:
    permission_classes = [IsAuthenticated]

    def get_company(self):
        company = get_current_company(self.request)
        if company is None:
            # Token-authenticated requests reach the view before the middleware sees a user.
            company = resolve_company(self.request)
            self.request.company = company
        if company is None:
            logger.warning("Rejected %s %s: no active company", self.request.method, self.request.path)
            raise PermissionDenied("An active company is required. Send the X-Company-ID header.")
        return company

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context.update({"request": self.request})
        return context


class DocumentViewSet(CompanyScopedQuerysetMixin, viewsets.GenericViewSet):
    """
    CRUD plus status transitions for one document type, looked up by number.

    Subclasses set ``service`` and the serializer classes. Writes go through the
    service so every mutation runs the same validation and transaction.
    """

    service: DocumentService = None
    lookup_field = "number"
    lookup_value_regex = r"[^/]+"
    serializer_class = None
    list_serializer_class = None
    input_serializer_class = None
    status_serializer_class = DocumentStatusSerializer

    def get_queryset(self):
        company = self.get_company()
        filters = DocumentListFilterSerializer(data=self.request.query_params, doc_type=self.service.doc_type)
        filters.is_valid(raise_exception=True)
        return self.service.list(company, filters.validated_data)

    def get_object(self):
        return self.service.get(self.get_company(), self.kwargs[self.lookup_field])

    def get_serializer_class(self):
        if self.action == "list" and self.list_serializer_class:
            return self.list_serializer_class
        if self.action in {"create", "update", "partial_update"}:
            return self.input_serializer_class
        if self.action == "change_status":
            return self.status_serializer_class
        return self.serializer_class

    def _render(self, document, http_status=status.HTTP_200_OK):
        document = self.service.get(self.get_company(), document.number)
        data = self.serializer_class(document, context=self.get_serializer_context()).data
        return Response(data, status=http_status)

    def list(self, request):
        queryset = self.get_queryset()
        page = self.paginate_queryset(queryset)
        serializer_class = self.list_serializer_class or self.serializer_class
        context = self.get_serializer_context()
        if page is not None:
            return self.get_paginated_response(serializer_class(page, many=True, context=context).data)
        return Response(serializer_class(queryset, many=True, context=context).data)

    def retrieve(self, request, number=None):
        return Response(self.serializer_class(self.get_object(), context=self.get_serializer_context()).data)

    def create(self, request):
        serializer = self.input_serializer_class(data=request.data, context=self.get_serializer_context())
        serializer.is_valid(raise_exception=True)
        document = self.service.create(self.get_company(), serializer.validated_data, user=request.user)
        return self._render(document, status.HTTP_201_CREATED)

    def update(self, request, number=None, **kwargs):
        # PUT and PATCH both patch: omitted fields keep their stored values.
        serializer = self.input_serializer_class(
            data=request.data, partial=True, context=self.get_serializer_context()
        )
        serializer.is_valid(raise_exception=True)
        document = self.service.update(self.get_company(), number, serializer.validated_data, user=request.user)
        return self._render(document)

    def partial_update(self, request, number=None):
        return self.update(request, number=number)

    def destroy(self, request, number=None):
        self.service.delete(self.get_company(), number)
        return Response({"detail": f"{self.service.doc_type.title} {number} deleted."}, status=status.HTTP_200_OK)

    @action(detail=True, methods=["patch"], url_path="status")
    def change_status(self, request, number=None):
        serializer = self.status_serializer_class(data=request.data)
        serializer.is_valid(raise_exception=True)
        side_effects = dict(serializer.validated_data)
        new_status = side_effects.pop("status")
        document = self.service.update_status(self.get_company(), number, new_status, side_effects)
        return self._render(document)


class PayableDocumentViewSet(DocumentViewSet):
    """Adds payment recording and derivation from a source document."""

    derive_serializer_class = None

    @action(detail=True, methods=["patch"], url_path="payment")
    def payment(self, request, number=None):
        serializer = PaymentInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        document = self.service.update_payment_info(self.get_company(), number, **serializer.validated_data)
        return self._render(document)

    def derive(self, request):
        serializer = self.derive_serializer_class(data=request.data)
        serializer.is_valid(raise_exception=True)
        overrides = dict(serializer.validated_data)
        source_number = overrides.pop(self.service.doc_type.source_field)
        document = self.service.create_from_source(self.get_company(), source_number, overrides, user=request.user)
        return self._render(document, status.HTTP_201_CREATED)
