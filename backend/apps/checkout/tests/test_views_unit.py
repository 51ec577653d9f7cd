import unittest
from unittest.mock import patch

from rest_framework.test import APIRequestFactory

from apps.carts.tests.test_services import CATALOG, make_shipping
from apps.checkout.services import CheckoutService
from apps.checkout.views import CheckoutView, ProductInquiryView


class FakeSession(dict):
    modified = False


class CheckoutViewsUnitTests(unittest.TestCase):
    def setUp(self):
        self.factory = APIRequestFactory()
        service = CheckoutService(
            catalog=CATALOG, shipping=make_shipping(), whatsapp_number="573000000000"
        )
        for view_cls in (CheckoutView, ProductInquiryView):
            patcher = patch.object(view_cls, "service", service)
            patcher.start()
            self.addCleanup(patcher.stop)

    def test_checkout_empty_cart_returns_bad_request(self):
        request = self.factory.post("/api/checkout/", {}, format="json")
        request.session = FakeSession()
        response = CheckoutView.as_view()(request)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"]["code"], "EMPTY_CART")

    def test_checkout_returns_link_and_empties_session_cart(self):
        session = FakeSession(
            cart=[{"key": "2", "id": 2, "name": "Botella", "price": 50000, "quantity": 1}]
        )
        request = self.factory.post(
            "/api/checkout/", {"department": "atlantico", "city": "Soledad"}, format="json"
        )
        request.session = session
        response = CheckoutView.as_view()(request)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["total"], 68000)
        self.assertTrue(response.data["whatsappUrl"].startswith("https://wa.me/573000000000?text="))
        self.assertIn("Soledad, Atlántico", response.data["message"])
        self.assertEqual(session["cart"], [])

    def test_inquiry_not_found(self):
        response = ProductInquiryView.as_view()(
            self.factory.get("/api/products/999/inquiry/"), product_id=999
        )
        self.assertEqual(response.status_code, 404)

    def test_inquiry_with_location(self):
        request = self.factory.get(
            "/api/products/1/inquiry/", {"department": "bogota", "city": "Bogotá"}
        )
        response = ProductInquiryView.as_view()(request, product_id=1)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["productId"], 1)
        self.assertIn("Entrega estimada", response.data["message"])
