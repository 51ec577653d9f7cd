import unittest
from urllib.parse import unquote

from apps.carts.services import CartService
from apps.carts.tests.test_services import CATALOG, make_shipping
from apps.checkout.services import CheckoutService, EmptyCartError
from apps.common.storage import MemoryStorage
from apps.shipping.dtos import SelectedLocation


class CheckoutServiceTests(unittest.TestCase):
    def setUp(self):
        self.storage = MemoryStorage()
        self.shipping = make_shipping()
        self.cart = CartService(self.storage, catalog=CATALOG, shipping=self.shipping)
        self.service = CheckoutService(
            catalog=CATALOG, shipping=self.shipping, whatsapp_number="573115477984"
        )

    def test_empty_cart_raises(self):
        with self.assertRaises(EmptyCartError) as ctx:
            self.service.checkout(self.cart)
        response = ctx.exception.to_response()
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"]["code"], "EMPTY_CART")

    def test_checkout_builds_link_and_clears_cart(self):
        self.cart.add_item(2, quantity=2)
        result = self.service.checkout(self.cart, SelectedLocation("bogota", "Bogotá"))
        self.assertEqual(result.item_count, 2)
        self.assertEqual(result.subtotal, 100000)
        self.assertEqual(result.total, 112000)
        self.assertTrue(result.whatsapp_url.startswith("https://wa.me/573115477984?text="))
        self.assertEqual(unquote(result.whatsapp_url.split("?text=", 1)[1]), result.message)
        self.assertIn("• Destino: Bogotá, Bogotá D.C.\n", result.message)
        self.assertEqual(self.cart.items(), [])
        self.assertEqual(self.storage.get("cart"), [])

    def test_product_inquiry(self):
        inquiry = self.service.product_inquiry(1, SelectedLocation("valle", "Cali"))
        self.assertEqual(inquiry.product_id, 1)
        self.assertIn("📦 Audífonos\n", inquiry.message)
        self.assertIn("• Ubicación: Cali, Valle del Cauca\n", inquiry.message)

    def test_product_inquiry_does_not_touch_cart(self):
        self.cart.add_item(2)
        self.service.product_inquiry(1)
        self.assertEqual(len(self.storage.get("cart")), 1)

    def test_unknown_product_inquiry(self):
        self.assertIsNone(self.service.product_inquiry(999))
