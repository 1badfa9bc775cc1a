from __future__ import annotations

import random

from django.test import SimpleTestCase

from apps.documents.exceptions import InvalidTransition
from apps.documents.transitions import StatusGraph
from apps.finance.models import Bill, Invoice
from apps.procurement.models import PurchaseOrder
from apps.sales.models import SalesOrder


class StatusGraphTests(SimpleTestCase):
    def test_sales_order_happy_path(self):
        graph = SalesOrder.TRANSITIONS
        path = ["DRAFT", "CONFIRMED", "IN_PRODUCTION", "READY_TO_SHIP", "SHIPPED", "DELIVERED"]
        for current, target in zip(path, path[1:]):
            self.assertEqual(graph.validate(current, target), target)

    def test_invalid_transition_lists_allowed_targets(self):
        with self.assertRaises(InvalidTransition) as ctx:
            Invoice.TRANSITIONS.validate("DRAFT", "PAID")
        self.assertEqual(ctx.exception.allowed, ["SENT", "CANCELLED"])
        self.assertIn("Invalid status transition from DRAFT to PAID", str(ctx.exception))
        self.assertEqual(ctx.exception.status_code, 400)

    def test_terminal_statuses(self):
        self.assertTrue(SalesOrder.TRANSITIONS.is_terminal("DELIVERED"))
        self.assertTrue(SalesOrder.TRANSITIONS.is_terminal("CANCELLED"))
        self.assertTrue(PurchaseOrder.TRANSITIONS.is_terminal("RECEIVED"))
        self.assertTrue(Invoice.TRANSITIONS.is_terminal("PAID"))
        self.assertTrue(Bill.TRANSITIONS.is_terminal("CANCELLED"))
        self.assertFalse(Invoice.TRANSITIONS.is_terminal("OVERDUE"))

    def test_bill_is_received_before_payment(self):
        self.assertTrue(Bill.TRANSITIONS.can_transition("DRAFT", "RECEIVED"))
        self.assertFalse(Bill.TRANSITIONS.can_transition("DRAFT", "SENT"))
        self.assertTrue(Bill.TRANSITIONS.can_transition("RECEIVED", "PAID"))

    def test_no_graph_returns_to_draft(self):
        for graph in (SalesOrder.TRANSITIONS, PurchaseOrder.TRANSITIONS, Invoice.TRANSITIONS, Bill.TRANSITIONS):
            for status in graph.statuses:
                self.assertFalse(graph.can_transition(status, graph.initial))

    def test_graph_rejects_edges_back_to_initial(self):
        with self.assertRaises(ValueError):
            StatusGraph({"DRAFT": ["OPEN"], "OPEN": ["DRAFT"]}, initial="DRAFT")

    def test_validation_depends_only_on_current_and_target(self):
        graph = Invoice.TRANSITIONS
        statuses = sorted(graph.statuses)
        rng = random.Random(11)
        for _ in range(100):
            current, target = rng.choice(statuses), rng.choice(statuses)
            first = graph.can_transition(current, target)
            for _ in range(3):
                self.assertEqual(graph.can_transition(current, target), first)
            if first:
                self.assertEqual(graph.validate(current, target), target)
            else:
                with self.assertRaises(InvalidTransition):
                    graph.validate(current, target)
