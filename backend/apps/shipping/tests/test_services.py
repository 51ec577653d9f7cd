import unittest
from datetime import date

from apps.shipping.commands import DetectCommand, LocationCommand
from apps.shipping.delivery import DeliveryEstimator
from apps.shipping.dtos import SelectedLocation
from apps.shipping.holidays import StaticHolidayCalendar
from apps.shipping.regions import default_region_table
from apps.shipping.services import ShippingService

TODAY = date(2024, 11, 8)


def make_service(threshold=200000):
    estimator = DeliveryEstimator(
        StaticHolidayCalendar(["2024-11-11"], years=(2024,)), clock=lambda: TODAY
    )
    return ShippingService(
        regions=default_region_table,
        estimator=estimator,
        free_shipping_threshold=threshold,
    )


class ShippingQuoteTests(unittest.TestCase):
    def setUp(self):
        self.service = make_service()

    def test_no_location_means_no_shipping(self):
        quote = self.service.quote(50000, None)
        self.assertEqual(quote.total, 50000)
        self.assertIsNone(quote.department)
        self.assertIsNone(quote.shipping_cost)

    def test_unknown_department_means_no_shipping(self):
        quote = self.service.quote(50000, SelectedLocation("amazonas", "Leticia"))
        self.assertEqual(quote.total, 50000)

    def test_below_threshold_adds_department_cost(self):
        for department in default_region_table.all():
            quote = self.service.quote(199999, SelectedLocation(department.key))
            self.assertEqual(quote.total, 199999 + department.shipping_cost)
            self.assertFalse(quote.free_shipping)

    def test_threshold_is_inclusive_for_every_department(self):
        for department in default_region_table.all():
            quote = self.service.quote(200000, SelectedLocation(department.key))
            self.assertEqual(quote.total, 200000)
            self.assertEqual(quote.shipping_cost, 0)
            self.assertTrue(quote.free_shipping)

    def test_city_is_not_required_for_total(self):
        quote = self.service.quote(10000, SelectedLocation("bogota", None))
        self.assertEqual(quote.total, 22000)
        self.assertIsNone(quote.city)

    def test_quote_carries_delivery_estimate(self):
        quote = self.service.quote(10000, SelectedLocation("bogota", "Bogotá"), today=TODAY)
        # Nine business days from Friday 8 Nov, skipping the holiday on the 11th
        self.assertEqual(quote.estimated_delivery, date(2024, 11, 22))
        self.assertEqual(quote.estimated_delivery_text, "viernes, 22 de noviembre de 2024")

    def test_threshold_is_configurable(self):
        service = make_service(threshold=100000)
        self.assertEqual(service.quote(150000, SelectedLocation("valle")).total, 150000)


class ShippingCommandTests(unittest.TestCase):
    def test_location_command_cleans_values(self):
        cmd = LocationCommand.from_raw({"department": " antioquia ", "city": ""})
        self.assertEqual(cmd.to_location(), SelectedLocation("antioquia", None))

    def test_detect_command_requires_both_coordinates(self):
        self.assertIsNone(DetectCommand.from_raw({"lat": "4.6"}).latitude)
        self.assertIsNone(DetectCommand.from_raw({"lat": "x", "lng": "1"}).longitude)
        cmd = DetectCommand.from_raw({"lat": "4.6", "lng": "-74.08"})
        self.assertEqual((cmd.latitude, cmd.longitude), (4.6, -74.08))
