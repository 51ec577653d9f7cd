import unittest
from unittest.mock import patch

from rest_framework.test import APIRequestFactory

from apps.carts.views import CartItemDetailView, CartItemListView, CartView, CartViewMixin
from apps.carts.tests.test_services import CATALOG, make_shipping


class FakeSession(dict):
    modified = False


class CartViewsUnitTests(unittest.TestCase):
    def setUp(self):
        self.factory = APIRequestFactory()
        self.session = FakeSession()
        for name, value in (("catalog", CATALOG), ("shipping", make_shipping())):
            patcher = patch.object(CartViewMixin, name, value)
            patcher.start()
            self.addCleanup(patcher.stop)

    def dispatch(self, request, view_cls, **kwargs):
        request.session = self.session
        return view_cls.as_view()(request, **kwargs)

    def add(self, payload, query=""):
        request = self.factory.post(f"/api/cart/items/{query}", payload, format="json")
        return self.dispatch(request, CartItemListView)

    def test_empty_cart(self):
        response = self.dispatch(self.factory.get("/api/cart/"), CartView)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["items"], [])
        self.assertEqual(response.data["total"], 0)

    def test_add_item_persists_in_session(self):
        response = self.add({"productId": 1, "variantId": "negro"})
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data["items"][0]["key"], "1::negro")
        self.assertEqual(self.session["cart"][0]["quantity"], 1)
        self.assertTrue(self.session.modified)

        response = self.dispatch(self.factory.get("/api/cart/"), CartView)
        self.assertEqual(response.data["itemCount"], 1)
        self.assertEqual(response.data["subtotal"], 110000)

    def test_add_unknown_product_returns_not_found(self):
        response = self.add({"productId": 999})
        self.assertEqual(response.status_code, 404)
        self.assertNotIn("cart", self.session)

    def test_add_rejects_non_positive_quantity(self):
        response = self.add({"productId": 1, "quantity": 0})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"]["code"], "VALIDATION_ERROR")

    def test_summary_with_location_query(self):
        self.add({"productId": 2})
        request = self.factory.get("/api/cart/", {"department": "valle", "city": "Cali"})
        response = self.dispatch(request, CartView)
        self.assertEqual(response.data["total"], 66000)
        self.assertEqual(response.data["shipping"]["shippingCost"], 16000)
        self.assertEqual(response.data["shipping"]["department"]["key"], "valle")
        self.assertFalse(response.data["shipping"]["freeShipping"])

    def test_patch_decrease_removes_last_unit(self):
        self.add({"productId": 2})
        request = self.factory.patch("/api/cart/items/2/", {"action": "decrease"}, format="json")
        response = self.dispatch(request, CartItemDetailView, key="2")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["items"], [])

    def test_patch_rejects_unknown_action(self):
        self.add({"productId": 2})
        request = self.factory.patch("/api/cart/items/2/", {"action": "double"}, format="json")
        response = self.dispatch(request, CartItemDetailView, key="2")
        self.assertEqual(response.status_code, 400)

    def test_patch_unknown_key(self):
        request = self.factory.patch("/api/cart/items/5/", {"action": "increase"}, format="json")
        response = self.dispatch(request, CartItemDetailView, key="5")
        self.assertEqual(response.status_code, 404)

    def test_delete_item_and_clear(self):
        self.add({"productId": 1, "variantId": "negro"})
        self.add({"productId": 2})
        response = self.dispatch(
            self.factory.delete("/api/cart/items/1::negro/"), CartItemDetailView, key="1::negro"
        )
        self.assertEqual([i["key"] for i in response.data["items"]], ["2"])
        response = self.dispatch(self.factory.delete("/api/cart/"), CartView)
        self.assertEqual(response.data["items"], [])
        self.assertEqual(self.session["cart"], [])
