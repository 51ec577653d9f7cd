import unittest
from datetime import date
from urllib.parse import unquote

from apps.carts.dtos import CartItemDTO
from apps.catalog.mappers import ProductMapper
from apps.checkout.formatter import (
    build_inquiry_message,
    build_order_message,
    format_price,
    whatsapp_link,
)
from apps.shipping.dtos import ShippingQuoteDTO
from apps.shipping.regions import default_region_table


def make_items():
    return [
        CartItemDTO(key="1::negro", product_id=1, name="Audífonos", unit_price=110000,
                    original_price=150000, quantity=2, variant_id="negro", variant_name="Negro"),
        CartItemDTO(key="2", product_id=2, name="Botella", unit_price=50000,
                    original_price=50000, quantity=1),
    ]


def make_quote(subtotal, department=None, city=None, cost=None):
    region = default_region_table.get(department)
    return ShippingQuoteDTO(
        subtotal=subtotal,
        total=subtotal + (cost or 0),
        free_shipping_threshold=200000,
        department=region,
        city=city,
        shipping_cost=cost,
        free_shipping=cost == 0,
        estimated_delivery=date(2024, 11, 22) if region else None,
        estimated_delivery_text="viernes, 22 de noviembre de 2024" if region else None,
    )


class FormatPriceTests(unittest.TestCase):
    def test_thousands_separator(self):
        self.assertEqual(format_price(1234567), "$1.234.567 COP")
        self.assertEqual(format_price(0), "$0 COP")
        self.assertEqual(format_price(999), "$999 COP")

    def test_rounds_and_accepts_strings(self):
        self.assertEqual(format_price("15000.6"), "$15.001 COP")
        self.assertEqual(format_price(None), "$0 COP")


class WhatsappLinkTests(unittest.TestCase):
    def test_message_is_component_encoded(self):
        link = whatsapp_link("Hola & adiós\n¿ok?", "573115477984")
        self.assertTrue(link.startswith("https://wa.me/573115477984?text="))
        encoded = link.split("?text=", 1)[1]
        self.assertNotIn("&", encoded)
        self.assertNotIn("\n", encoded)
        self.assertIn("%0A", encoded)
        self.assertEqual(unquote(encoded), "Hola & adiós\n¿ok?")


class OrderMessageTests(unittest.TestCase):
    def test_message_without_location(self):
        message = build_order_message(make_items(), make_quote(270000))
        self.assertTrue(message.startswith("🛍️ *Nuevo Pedido - PremiumDrop*\n\n*Productos solicitados:*\n"))
        self.assertIn(
            "1. Audífonos\n   Cantidad: 2\n   Precio: $110.000 COP\n   Subtotal: $220.000 COP\n\n",
            message,
        )
        self.assertIn("2. Botella\n", message)
        self.assertIn("*Total de artículos:* 3\n*Subtotal:* $270.000 COP\n*Total final:* $270.000 COP\n\n", message)
        self.assertIn("• Envío gratuito en pedidos superiores a $200.000 COP\n", message)
        self.assertIn("¿Podrías confirmar tu ciudad en Colombia para el envío?\n\n", message)
        self.assertNotIn("Información de envío", message)
        self.assertTrue(message.endswith("Nuestro equipo comercial te contactará con todos los detalles."))

    def test_message_with_paid_shipping(self):
        quote = make_quote(50000, "antioquia", "Medellín", cost=15000)
        items = make_items()[1:]
        message = build_order_message(items, quote)
        self.assertIn(
            "*Subtotal:* $50.000 COP\n\n*Información de envío:*\n"
            "• Destino: Medellín, Antioquia\n• Costo de envío: $15.000 COP\n"
            "*Total final:* $65.000 COP\n\n",
            message,
        )
        self.assertIn(
            "\n\n📍 *Información de entrega automática:*\n"
            "• Ubicación: Medellín, Antioquia\n"
            "• Tiempo estimado: 7-10 días hábiles\n"
            "• Costo de envío: $15.000 COP\n"
            "• Entrega estimada: viernes, 22 de noviembre de 2024\n"
            "¡Gracias por elegir PremiumDrop! 🚚\n",
            message,
        )
        self.assertNotIn("confirmar tu ciudad", message)

    def test_free_shipping_reads_gratis(self):
        quote = make_quote(270000, "bogota", "Bogotá", cost=0)
        message = build_order_message(make_items(), quote)
        self.assertIn("• Costo de envío: GRATIS\n", message)
        self.assertIn("*Total final:* $270.000 COP", message)

    def test_department_without_city_asks_for_city(self):
        quote = make_quote(50000, "valle", None, cost=16000)
        message = build_order_message(make_items()[1:], quote)
        self.assertNotIn("Información de envío", message)
        self.assertIn("*Total final:* $66.000 COP", message)
        self.assertIn("¿Podrías confirmar tu ciudad", message)


class InquiryMessageTests(unittest.TestCase):
    def setUp(self):
        self.product = ProductMapper.from_raw(
            {"id": 4, "name": "Teclado RGB", "price": 239900, "rating": 4.7, "reviews": 154}
        )

    def test_inquiry_without_location(self):
        message = build_inquiry_message(self.product)
        self.assertIn("📦 Teclado RGB\n💰 Precio: $239.900 COP\n⭐ Calificación: 4.7/5 (154 reseñas)\n\n", message)
        self.assertTrue(message.endswith("¡Gracias! 😊"))

    def test_inquiry_with_location_appends_delivery_block(self):
        quote = make_quote(239900, "santander", "Girón", cost=17000)
        message = build_inquiry_message(self.product, quote)
        self.assertTrue(message.startswith("🛍️ *Consulta de Producto - PremiumDrop*"))
        self.assertIn("¡Gracias! 😊\n\n📍 *Información de entrega automática:*\n", message)
        self.assertIn("• Ubicación: Girón, Santander\n", message)

    def test_whole_rating_has_no_decimals(self):
        product = ProductMapper.from_raw({"id": 5, "name": "X", "rating": 5, "reviews": 1})
        self.assertIn("⭐ Calificación: 5/5 (1 reseñas)", build_inquiry_message(product))
