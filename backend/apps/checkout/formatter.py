"""WhatsApp message text for orders and single-product inquiries."""
from __future__ import annotations

from typing import Any, Iterable, Optional

from apps.carts.dtos import CartItemDTO
from apps.catalog.dtos import ProductDTO
from apps.catalog.images import encode_uri_component
from apps.catalog.mappers import to_int
from apps.shipping.dtos import ShippingQuoteDTO

WHATSAPP_BASE_URL = "https://wa.me"


def format_price(value: Any) -> str:
    """Whole pesos with '.' thousands separators, e.g. ``$1.234.567 COP``."""
    amount = to_int(value)
    return f"${amount:,} COP".replace(",", ".")


def whatsapp_link(message: str, number: str) -> str:
    return f"{WHATSAPP_BASE_URL}/{number}?text={encode_uri_component(message)}"


def _has_destination(quote: Optional[ShippingQuoteDTO]) -> bool:
    return bool(quote and quote.department and quote.city)


def delivery_block(quote: Optional[ShippingQuoteDTO]) -> str:
    if not _has_destination(quote):
        return ""
    department = quote.department
    window = department.delivery_days
    lines = [
        "\n\n📍 *Información de entrega automática:*\n",
        f"• Ubicación: {quote.city}, {department.name}\n",
        f"• Tiempo estimado: {window.min}-{window.max} días hábiles\n",
        f"• Costo de envío: {format_price(department.shipping_cost)}\n",
        f"• Entrega estimada: {quote.estimated_delivery_text}\n",
    ]
    return "".join(lines)


def build_order_message(
    items: Iterable[CartItemDTO],
    quote: ShippingQuoteDTO,
) -> str:
    items = list(items)
    item_count = sum(item.quantity for item in items)
    parts = ["🛍️ *Nuevo Pedido - PremiumDrop*\n\n", "*Productos solicitados:*\n"]
    for index, item in enumerate(items, start=1):
        parts.append(f"{index}. {item.name}\n")
        parts.append(f"   Cantidad: {item.quantity}\n")
        parts.append(f"   Precio: {format_price(item.unit_price)}\n")
        parts.append(f"   Subtotal: {format_price(item.line_total)}\n\n")

    parts.append(f"*Total de artículos:* {item_count}\n")
    parts.append(f"*Subtotal:* {format_price(quote.subtotal)}\n")
    if _has_destination(quote):
        cost = quote.shipping_cost or 0
        parts.append("\n*Información de envío:*\n")
        parts.append(f"• Destino: {quote.city}, {quote.department.name}\n")
        parts.append(
            f"• Costo de envío: {format_price(cost) if cost > 0 else 'GRATIS'}\n"
        )
    parts.append(f"*Total final:* {format_price(quote.total)}\n\n")

    parts.append("📍 *Información importante:*\n")
    parts.append(
        "• Los productos son importados directamente de fabricantes internacionales\n"
    )
    parts.append("• Tiempo de entrega: 7-15 días hábiles en Colombia\n")
    parts.append(
        "• Envío gratuito en pedidos superiores a "
        f"{format_price(quote.free_shipping_threshold)}\n"
    )
    parts.append("• Proceso de importación personalizada\n\n")

    if _has_destination(quote):
        parts.append(delivery_block(quote))
    else:
        parts.append("¿Podrías confirmar tu ciudad en Colombia para el envío?\n\n")

    parts.append("¡Gracias por elegir PremiumDrop! 🚚\n")
    parts.append("Nuestro equipo comercial te contactará con todos los detalles.")
    return "".join(parts)


def build_inquiry_message(
    product: ProductDTO, quote: Optional[ShippingQuoteDTO] = None
) -> str:
    rating = f"{product.rating:g}"
    message = (
        "🛍️ *Consulta de Producto - PremiumDrop*\n\n"
        "*Producto de interés:*\n"
        f"📦 {product.name}\n"
        f"💰 Precio: {format_price(product.price)}\n"
        f"⭐ Calificación: {rating}/5 ({product.reviews} reseñas)\n\n"
        "¡Hola! Me interesa este producto. ¿Podrías darme más información sobre:\n"
        "• Disponibilidad y origen del producto\n"
        "• Métodos de pago disponibles\n"
        "• Tiempo de entrega a Colombia (7-15 días)\n"
        "• Proceso de importación\n"
        "• Garantía y soporte\n\n"
        "📍 *Ubicación en Colombia:*\n"
        "Por favor, indica tu ciudad para calcular tiempo exacto de entrega.\n\n"
        "¡Gracias! 😊"
    )
    return message + delivery_block(quote)
