from __future__ import annotations

from unittest import mock

from django.db import IntegrityError
from django.test import TestCase, override_settings

from apps.companies.models import Company
from apps.documents.models import DocumentSequence
from apps.sales.models import SalesOrder
from core import doc_numbers


class SeedFromExistingTests(TestCase):
    def test_no_documents_starts_at_zero(self):
        self.assertEqual(doc_numbers.seed_from_existing("SO", []), 0)

    def test_continues_from_highest_parseable_number(self):
        self.assertEqual(doc_numbers.seed_from_existing("SO", ["SO001", "SO010", "SO007", "LEGACY-9"]), 10)

    def test_ignores_other_prefixes(self):
        self.assertEqual(doc_numbers.seed_from_existing("PO", ["POX1", "PO004", "SO099"]), 4)

    def test_unparseable_numbers_fall_back_to_clock(self):
        with mock.patch.object(doc_numbers.time, "time", return_value=1_700_000_123.0):
            value = doc_numbers.seed_from_existing("SO", ["LEGACY-1", ""])
        self.assertEqual(value, 123_000)


@override_settings(DOCUMENT_NUMBER_WIDTH=3)
class GetNextDocNoTests(TestCase):
    def setUp(self):
        self.company = Company.objects.create(code="ACME", name="Acme")
        self.other = Company.objects.create(code="OTHR", name="Other")

    def test_sequential_numbers_per_company(self):
        first = doc_numbers.get_next_doc_no(company=self.company, doc_type="SO")
        second = doc_numbers.get_next_doc_no(company=self.company, doc_type="SO")
        other = doc_numbers.get_next_doc_no(company=self.other, doc_type="SO")
        self.assertEqual((first, second, other), ("SO001", "SO002", "SO001"))

    def test_prefixes_have_independent_sequences(self):
        self.assertEqual(doc_numbers.get_next_doc_no(company=self.company, doc_type="SO"), "SO001")
        self.assertEqual(doc_numbers.get_next_doc_no(company=self.company, doc_type="INV"), "INV001")

    def test_new_sequence_seeds_from_existing_numbers(self):
        number = doc_numbers.get_next_doc_no(
            company=self.company,
            doc_type="PO",
            existing=lambda: ["PO041", "PO007"],
        )
        self.assertEqual(number, "PO042")
        seq = DocumentSequence.objects.get(company=self.company, doc_type="PO")
        self.assertEqual(seq.current_value, 42)

    def test_width_grows_past_padding(self):
        DocumentSequence.objects.create(company=self.company, doc_type="SO", current_value=999)
        self.assertEqual(doc_numbers.get_next_doc_no(company=self.company, doc_type="SO"), "SO1000")

    def test_format_doc_no(self):
        self.assertEqual(doc_numbers.format_doc_no("BILL", 7, 3), "BILL007")
        self.assertEqual(doc_numbers.format_doc_no("INV", 12, 5), "INV00012")


@override_settings(DOCUMENT_NUMBER_WIDTH=3, DOCUMENT_NUMBER_MAX_ATTEMPTS=3)
class SaveWithDocNoTests(TestCase):
    def setUp(self):
        self.company = Company.objects.create(code="ACME", name="Acme")
        # A sequence row that lags behind a number already stored, as after a manual import.
        DocumentSequence.objects.create(company=self.company, doc_type="SO", current_value=0)
        SalesOrder.objects.create(company=self.company, number="SO001", customer_name="Imported")

    def _order(self):
        return SalesOrder(company=self.company, customer_name="Globex")

    def test_clash_retries_with_the_next_number(self):
        order = doc_numbers.save_with_doc_no(self._order(), prefix="SO")

        self.assertEqual(order.number, "SO002")
        self.assertIsNotNone(order.pk)
        self.assertEqual(SalesOrder.objects.filter(company=self.company).count(), 2)
        self.assertEqual(DocumentSequence.objects.get(company=self.company, doc_type="SO").current_value, 2)

    def test_last_attempt_uses_time_derived_number(self):
        with mock.patch.object(doc_numbers.time, "time", return_value=1_700_000_123.0):
            order = doc_numbers.save_with_doc_no(self._order(), prefix="SO", max_attempts=2)

        self.assertEqual(order.number, "SO123000")
        self.assertTrue(SalesOrder.objects.filter(company=self.company, number="SO123000").exists())

    def test_raises_when_every_attempt_collides(self):
        SalesOrder.objects.create(company=self.company, number="SO123000", customer_name="Imported")

        with mock.patch.object(doc_numbers.time, "time", return_value=1_700_000_123.0):
            with self.assertRaises(IntegrityError):
                doc_numbers.save_with_doc_no(self._order(), prefix="SO", max_attempts=2)

        # Each failed insert rolled back to its own savepoint.
        self.assertEqual(SalesOrder.objects.filter(company=self.company).count(), 2)
