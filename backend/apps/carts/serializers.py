from rest_framework import serializers

from apps.shipping.serializers import ShippingQuoteSerializer

from .services import DECREASE, INCREASE


class CartItemSerializer(serializers.Serializer):
    key = serializers.CharField()
    id = serializers.IntegerField()
    variantId = serializers.CharField(allow_null=True)
    variantName = serializers.CharField(allow_null=True)
    name = serializers.CharField()
    price = serializers.IntegerField()
    originalPrice = serializers.IntegerField()
    images = serializers.ListField(child=serializers.CharField())
    quantity = serializers.IntegerField()
    lineTotal = serializers.IntegerField()

    def to_representation(self, instance):
        return {
            "key": instance.key,
            "id": instance.product_id,
            "variantId": instance.variant_id,
            "variantName": instance.variant_name,
            "name": instance.name,
            "price": instance.unit_price,
            "originalPrice": instance.original_price,
            "images": list(instance.images),
            "quantity": instance.quantity,
            "lineTotal": instance.line_total,
        }


class CartSummarySerializer(serializers.Serializer):
    items = CartItemSerializer(many=True)
    itemCount = serializers.IntegerField()
    subtotal = serializers.IntegerField()
    total = serializers.IntegerField()
    shipping = ShippingQuoteSerializer(allow_null=True)

    def to_representation(self, instance):
        return {
            "items": CartItemSerializer(instance.items, many=True).data,
            "itemCount": instance.item_count,
            "subtotal": instance.subtotal,
            "total": instance.total,
            "shipping": (
                ShippingQuoteSerializer(instance.quote).data if instance.quote else None
            ),
        }


class CartItemWriteSerializer(serializers.Serializer):
    productId = serializers.IntegerField(min_value=1)
    variantId = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    quantity = serializers.IntegerField(min_value=1, required=False, default=1)


class CartItemPatchSerializer(serializers.Serializer):
    action = serializers.ChoiceField(choices=[INCREASE, DECREASE])
