import unittest

from apps.carts.commands import CartItemCommand


class CartItemCommandTests(unittest.TestCase):
    def test_defaults_quantity_to_one(self):
        cmd = CartItemCommand.from_raw({"productId": "4"})
        self.assertEqual((cmd.product_id, cmd.variant_id, cmd.quantity), (4, None, 1))

    def test_variant_is_trimmed(self):
        cmd = CartItemCommand.from_raw({"productId": 4, "variantId": " negro ", "quantity": 2})
        self.assertEqual(cmd.variant_id, "negro")

    def test_invalid_payloads(self):
        self.assertIsNone(CartItemCommand.from_raw({"productId": "x"}))
        self.assertIsNone(CartItemCommand.from_raw({"productId": 1, "quantity": 0}))
        self.assertIsNone(CartItemCommand.from_raw(None))
