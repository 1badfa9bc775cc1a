from __future__ import annotations

from decimal import Decimal

from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.test import APITestCase

from apps.companies.models import Company
from apps.procurement.models import PurchaseOrder, Supplier
from apps.sales.models import Product

BASE = "/api/procurement/purchase-orders/"


class PurchaseOrderAPITests(APITestCase):
    def setUp(self):
        self.company = Company.objects.create(code="ACME", name="Acme Traders")
        self.supplier = Supplier.objects.create(company=self.company, code="S001", name="Steel Works")
        self.product = Product.objects.create(company=self.company, code="RM-1", name="Steel Rod", unit_of_measure="KG")

        User = get_user_model()
        self.user = User.objects.create_user(username="buyer", password="pass123")
        self.company.users.add(self.user)
        self.client.force_authenticate(user=self.user)
        self.headers = {"HTTP_X_COMPANY_ID": str(self.company.id)}

    def _payload(self, **overrides):
        payload = {
            "supplier": self.supplier.id,
            "priority": "HIGH",
            "incoterms": "FOB",
            "lines": [
                {
                    "product": self.product.id,
                    "item_code": "RM-1",
                    "quantity": "100",
                    "unit_cost": "12.50",
                    "tax_rate": "18",
                    "expected_delivery": "2025-07-01",
                }
            ],
        }
        payload.update(overrides)
        return payload

    def _create(self, **overrides):
        response = self.client.post(BASE, self._payload(**overrides), format="json", **self.headers)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.json())
        return response.json()

    def _status(self, number, payload):
        return self.client.patch(f"{BASE}{number}/status/", payload, format="json", **self.headers)

    def test_create_purchase_order(self):
        data = self._create()
        self.assertEqual(data["number"], "PO001")
        self.assertEqual(data["supplier_name"], "Steel Works")
        self.assertEqual(data["incoterms"], "FOB")
        self.assertEqual(data["priority"], "HIGH")
        self.assertIsNone(data["location"])
        self.assertEqual(Decimal(data["subtotal"]), Decimal("1250.00"))
        self.assertEqual(Decimal(data["tax_amount"]), Decimal("225.00"))
        self.assertEqual(Decimal(data["total_amount"]), Decimal("1475.00"))

        line = data["lines"][0]
        self.assertEqual(Decimal(line["unit_cost"]), Decimal("12.50"))
        self.assertEqual(line["expected_delivery"], "2025-07-01")
        self.assertEqual(line["unit_of_measure"], "KG")

    def test_supplier_must_belong_to_company(self):
        other = Company.objects.create(code="OTHR", name="Other")
        foreign = Supplier.objects.create(company=other, code="S001", name="Foreign Supplier")
        response = self.client.post(BASE, self._payload(supplier=foreign.id), format="json", **self.headers)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("supplier", response.json())
        self.assertFalse(PurchaseOrder.objects.exists())

    def test_receiving_flow_records_delivery_details(self):
        number = self._create()["number"]
        self.assertEqual(self._status(number, {"status": "SENT"}).status_code, status.HTTP_200_OK)
        response = self._status(
            number,
            {"status": "CONFIRMED", "expected_delivery_date": "2025-07-05", "shipping_method": "Sea"},
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.json())
        self.assertEqual(response.json()["expected_delivery_date"], "2025-07-05")
        self.assertEqual(response.json()["shipping_method"], "Sea")

        self.assertEqual(self._status(number, {"status": "PARTIALLY_RECEIVED"}).status_code, status.HTTP_200_OK)
        self.assertEqual(self._status(number, {"status": "RECEIVED"}).json()["status"], "RECEIVED")

        response = self.client.patch(f"{BASE}{number}/", {"notes": "late"}, format="json", **self.headers)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("because it is RECEIVED", response.json()["detail"])

    def test_sent_cannot_skip_confirmation(self):
        number = self._create()["number"]
        self._status(number, {"status": "SENT"})
        response = self._status(number, {"status": "RECEIVED"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json()["allowed"], ["CONFIRMED", "CANCELLED"])

    def test_delete_sent_purchase_order_rejected(self):
        number = self._create()["number"]
        self._status(number, {"status": "SENT"})
        response = self.client.delete(f"{BASE}{number}/", **self.headers)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("Only DRAFT purchase orders can be deleted", response.json()["detail"])

    def test_list_filters_by_supplier_and_priority(self):
        first = self._create()["number"]
        second = self._create(supplier=None, supplier_name="Spot Vendor", priority="LOW")["number"]

        response = self.client.get(BASE, {"supplier_name": "spot"}, **self.headers)
        self.assertEqual([row["number"] for row in response.json()], [second])

        response = self.client.get(BASE, {"priority": "HIGH"}, **self.headers)
        self.assertEqual([row["number"] for row in response.json()], [first])
