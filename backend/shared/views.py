from __future__ import annotations

import datetime
import logging
import platform
from typing import Dict

from django.conf import settings
from django.db import connections
from django.db.utils import DatabaseError
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

logger = logging.getLogger(__name__)

START_TIME = datetime.datetime.now(datetime.timezone.utc)


class HealthCheckView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request):
        db_payload = self._database_status()
        now = datetime.datetime.now(datetime.timezone.utc)
        payload = {
            "status": "ok" if db_payload["ok"] else "degraded",
            "uptime_seconds": int((now - START_TIME).total_seconds()),
            "timestamp": now.isoformat(),
            "application": {
                "name": settings.SPECTACULAR_SETTINGS.get("TITLE"),
                "version": settings.SPECTACULAR_SETTINGS.get("VERSION"),
                "python": platform.python_version(),
                "platform": platform.platform(),
            },
            "database": db_payload,
        }
        http_status = status.HTTP_200_OK if db_payload["ok"] else status.HTTP_503_SERVICE_UNAVAILABLE
        return Response(payload, status=http_status)

    def _database_status(self) -> Dict:
        payload = {"ok": True, "details": {}}
        for alias in connections:
            try:
                with connections[alias].cursor() as cursor:
                    cursor.execute("SELECT 1")
                    cursor.fetchone()
                payload["details"][alias] = "connected"
            except DatabaseError as exc:
                logger.error("Health check failed for database %s: %s", alias, exc)
                payload["ok"] = False
                payload["details"][alias] = f"error: {exc}"
        return payload
