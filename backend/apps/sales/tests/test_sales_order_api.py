from __future__ import annotations

from decimal import Decimal

from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.test import APITestCase

from apps.companies.models import Company, CompanyLocation
from apps.sales.models import Customer, Product, SalesOrder

BASE = "/api/sales/orders/"


class SalesOrderAPITests(APITestCase):
    maxDiff = None

    def setUp(self):
        self.company = Company.objects.create(code="ACME", name="Acme Traders")
        self.location = CompanyLocation.objects.create(
            company=self.company, code="HQ", name="Head Office", is_headquarters=True, is_default=True
        )
        self.customer = Customer.objects.create(company=self.company, code="C001", name="Globex")
        self.widget = Product.objects.create(company=self.company, code="W-1", name="Widget", unit_of_measure="PCS")
        self.gadget = Product.objects.create(company=self.company, code="G-1", name="Gadget", unit_of_measure="BOX")

        User = get_user_model()
        self.user = User.objects.create_user(username="sales-rep", password="pass123")
        self.company.users.add(self.user)
        self.client.force_authenticate(user=self.user)
        self.headers = {"HTTP_X_COMPANY_ID": str(self.company.id)}

    def _lines(self):
        return [
            {
                "product": self.widget.id,
                "item_code": "W-1",
                "description": "Widget",
                "quantity": "10",
                "unit_price": "100.00",
                "discount_percent": "10",
                "tax_rate": "5",
            },
            {
                "product": self.gadget.id,
                "item_code": "G-1",
                "quantity": "5",
                "unit_price": "50.00",
            },
        ]

    def _payload(self, **overrides):
        payload = {
            "customer": self.customer.id,
            "location": self.location.id,
            "payment_terms": "NET_15",
            "lines": self._lines(),
        }
        payload.update(overrides)
        return payload

    def _post(self, path, payload):
        return self.client.post(path, payload, format="json", **self.headers)

    def _get(self, path, params=None):
        return self.client.get(path, params or {}, **self.headers)

    def _patch(self, path, payload):
        return self.client.patch(path, payload, format="json", **self.headers)

    def _put(self, path, payload):
        return self.client.put(path, payload, format="json", **self.headers)

    def _create(self, **overrides):
        response = self._post(BASE, self._payload(**overrides))
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.json())
        return response.json()

    def _move(self, number, *statuses):
        for target in statuses:
            response = self._patch(f"{BASE}{number}/status/", {"status": target})
            self.assertEqual(response.status_code, status.HTTP_200_OK, response.json())
        return response.json()

    def test_create_computes_totals_and_allocates_number(self):
        data = self._create()

        self.assertEqual(data["number"], "SO001")
        self.assertEqual(data["status"], "DRAFT")
        self.assertEqual(data["customer_name"], "Globex")
        self.assertEqual(data["customer_code"], "C001")
        self.assertEqual(Decimal(data["subtotal"]), Decimal("1250.00"))
        self.assertEqual(Decimal(data["discount_amount"]), Decimal("100.00"))
        self.assertEqual(Decimal(data["tax_amount"]), Decimal("45.00"))
        self.assertEqual(Decimal(data["total_amount"]), Decimal("1195.00"))

        lines = data["lines"]
        self.assertEqual([line["line_number"] for line in lines], [1, 2])
        self.assertEqual(Decimal(lines[0]["line_amount"]), Decimal("945.00"))
        self.assertEqual(lines[1]["unit_of_measure"], "BOX")

        second = self._create()
        self.assertEqual(second["number"], "SO002")

    def test_computed_totals_cannot_be_supplied(self):
        data = self._create(total_amount="1.00", subtotal="1.00")
        self.assertEqual(Decimal(data["total_amount"]), Decimal("1195.00"))

    def test_customer_name_required_without_customer(self):
        response = self._post(BASE, self._payload(customer=None))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("customer_name", response.json())

        data = self._create(customer=None, customer_name="Walk-in")
        self.assertIsNone(data["customer"])
        self.assertEqual(data["customer_name"], "Walk-in")

    def test_product_required_on_every_line(self):
        lines = self._lines()
        lines[1]["product"] = None
        response = self._post(BASE, self._payload(lines=lines))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("Product is required for line 2", response.json()["detail"])
        self.assertFalse(SalesOrder.objects.exists())

    def test_lines_are_required(self):
        response = self._post(BASE, self._payload(lines=[]))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("lines", response.json())

    def test_invalid_line_values_rejected(self):
        lines = self._lines()
        lines[0]["quantity"] = "0"
        lines[1]["discount_percent"] = "120"
        response = self._post(BASE, self._payload(lines=lines))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("lines", response.json())

    def test_references_must_belong_to_company(self):
        other = Company.objects.create(code="OTHR", name="Other Co")
        foreign_customer = Customer.objects.create(company=other, code="C001", name="Initech")
        foreign_product = Product.objects.create(company=other, code="X-1", name="Foreign")
        foreign_location = CompanyLocation.objects.create(company=other, code="HQ", name="Elsewhere")

        response = self._post(BASE, self._payload(customer=foreign_customer.id))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("customer", response.json())

        response = self._post(BASE, self._payload(location=foreign_location.id))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("location", response.json())

        lines = self._lines()
        lines[0]["product"] = foreign_product.id
        response = self._post(BASE, self._payload(lines=lines))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("lines", response.json())
        self.assertFalse(SalesOrder.objects.exists())

    def test_replacing_lines_recomputes_and_is_idempotent(self):
        number = self._create()["number"]
        lines = [{"product": self.widget.id, "item_code": "W-1", "quantity": "2", "unit_price": "10.00"}]

        first = self._patch(f"{BASE}{number}/", {"lines": lines}).json()
        second = self._patch(f"{BASE}{number}/", {"lines": lines}).json()

        self.assertEqual(Decimal(first["total_amount"]), Decimal("20.00"))
        for field in ("subtotal", "discount_amount", "tax_amount", "total_amount"):
            self.assertEqual(first[field], second[field])
        self.assertEqual(len(second["lines"]), 1)

    def test_update_requires_products_on_replacement_lines(self):
        number = self._create()["number"]
        response = self._patch(
            f"{BASE}{number}/",
            {"lines": [{"item_code": "MISC", "quantity": "1", "unit_price": "5.00"}]},
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("Product is required for line 1", response.json()["detail"])

    def test_shipping_only_update_adjusts_total(self):
        number = self._create()["number"]
        response = self._patch(f"{BASE}{number}/", {"shipping_charges": "50.00"})
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.json())
        data = response.json()
        self.assertEqual(Decimal(data["shipping_charges"]), Decimal("50.00"))
        self.assertEqual(Decimal(data["total_amount"]), Decimal("1245.00"))
        self.assertEqual(Decimal(data["subtotal"]), Decimal("1250.00"))

    def test_lines_locked_after_confirmation(self):
        number = self._create()["number"]
        self._move(number, "CONFIRMED")
        response = self._patch(f"{BASE}{number}/", {"lines": self._lines()})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("Cannot modify line items of a non-draft sales order", response.json()["detail"])

        response = self._patch(f"{BASE}{number}/", {"notes": "Call before delivery"})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["notes"], "Call before delivery")

    def test_put_updates_header_of_confirmed_order(self):
        number = self._create()["number"]
        self._move(number, "CONFIRMED")

        response = self._put(f"{BASE}{number}/", {"notes": "po ref 42", "shipping_charges": "5.00"})
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.json())
        data = response.json()
        self.assertEqual(data["notes"], "po ref 42")
        self.assertEqual(data["status"], "CONFIRMED")
        self.assertEqual(data["customer"], self.customer.id)
        self.assertEqual(len(data["lines"]), 2)
        self.assertEqual(Decimal(data["total_amount"]), Decimal("1200.00"))

        response = self._put(f"{BASE}{number}/", self._payload())
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("Cannot modify line items of a non-draft sales order", response.json()["detail"])

    def test_status_flow_records_shipping_details(self):
        number = self._create()["number"]
        self._move(number, "CONFIRMED", "IN_PRODUCTION", "READY_TO_SHIP")
        response = self._patch(
            f"{BASE}{number}/status/",
            {"status": "SHIPPED", "shipping_carrier": "BlueDart", "tracking_number": "BD123", "priority": "LOW"},
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.json())
        data = response.json()
        self.assertEqual(data["status"], "SHIPPED")
        self.assertEqual(data["shipping_carrier"], "BlueDart")
        self.assertEqual(data["tracking_number"], "BD123")
        self.assertEqual(data["priority"], "NORMAL")

        data = self._move(number, "DELIVERED")
        self.assertEqual(data["status"], "DELIVERED")

    def test_invalid_transition_reports_allowed_statuses(self):
        number = self._create()["number"]
        response = self._patch(f"{BASE}{number}/status/", {"status": "SHIPPED"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        body = response.json()
        self.assertEqual(body["allowed"], ["CONFIRMED", "CANCELLED"])
        self.assertIn("from DRAFT to SHIPPED", body["detail"])

    def test_terminal_order_rejects_updates(self):
        number = self._create()["number"]
        self._move(number, "CANCELLED")
        response = self._patch(f"{BASE}{number}/", {"notes": "too late"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            response.json()["detail"], f"Cannot update sales order {number} because it is CANCELLED."
        )

    def test_delete_draft_hides_order(self):
        number = self._create()["number"]
        response = self.client.delete(f"{BASE}{number}/", **self.headers)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["detail"], f"Sales order {number} deleted.")

        self.assertEqual(self._get(f"{BASE}{number}/").status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(self._get(BASE).json(), [])
        self.assertFalse(SalesOrder.objects.get(number=number).is_active)

    def test_delete_non_draft_rejected(self):
        number = self._create()["number"]
        self._move(number, "CONFIRMED")
        response = self.client.delete(f"{BASE}{number}/", **self.headers)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            response.json()["detail"],
            "Cannot delete sales order with status CONFIRMED. Only DRAFT sales orders can be deleted "
            "to maintain audit trail and financial records.",
        )
        self.assertTrue(SalesOrder.objects.get(number=number).is_active)

    def test_list_filters(self):
        first = self._create()["number"]
        second = self._create(customer=None, customer_name="Walk-in Buyer", priority="URGENT")["number"]
        self._move(first, "CONFIRMED")

        numbers = [row["number"] for row in self._get(BASE).json()]
        self.assertCountEqual(numbers, [first, second])

        confirmed = self._get(BASE, {"status": "CONFIRMED"}).json()
        self.assertEqual([row["number"] for row in confirmed], [first])

        by_name = self._get(BASE, {"customer_name": "walk-in"}).json()
        self.assertEqual([row["number"] for row in by_name], [second])

        urgent = self._get(BASE, {"priority": "URGENT"}).json()
        self.assertEqual([row["number"] for row in urgent], [second])

        by_customer = self._get(BASE, {"customer": self.customer.id}).json()
        self.assertEqual([row["number"] for row in by_customer], [first])

        none_yet = self._get(BASE, {"date_from": "2999-01-01"}).json()
        self.assertEqual(none_yet, [])

        response = self._get(BASE, {"priority": "URGENT", "customer": "globex"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("customer", response.json())

    def test_unknown_number_returns_404(self):
        response = self._get(f"{BASE}SO999/")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.json()["detail"], "Sales order SO999 not found.")

    def test_orders_are_isolated_per_company(self):
        number = self._create()["number"]
        other = Company.objects.create(code="OTHR", name="Other Co")
        other.users.add(self.user)

        response = self.client.get(f"{BASE}{number}/", HTTP_X_COMPANY_ID=str(other.id))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        response = self.client.get(BASE, HTTP_X_COMPANY_ID=str(other.id))
        self.assertEqual(response.json(), [])

    def test_company_context_is_required(self):
        response = self.client.get(BASE)
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        outsider = Company.objects.create(code="NOPE", name="Not a member")
        response = self.client.get(BASE, HTTP_X_COMPANY_ID=str(outsider.id))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_authentication_is_required(self):
        self.client.force_authenticate(user=None)
        response = self.client.get(BASE, **self.headers)
        self.assertIn(response.status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))
