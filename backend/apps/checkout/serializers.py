from rest_framework import serializers


class CheckoutRequestSerializer(serializers.Serializer):
    department = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    city = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class CheckoutResultSerializer(serializers.Serializer):
    whatsappUrl = serializers.CharField(source="whatsapp_url")
    message = serializers.CharField()
    itemCount = serializers.IntegerField(source="item_count")
    subtotal = serializers.IntegerField()
    total = serializers.IntegerField()


class InquirySerializer(serializers.Serializer):
    productId = serializers.IntegerField(source="product_id")
    whatsappUrl = serializers.CharField(source="whatsapp_url")
    message = serializers.CharField()
