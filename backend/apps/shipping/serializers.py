from rest_framework import serializers


class DeliveryWindowSerializer(serializers.Serializer):
    min = serializers.IntegerField()
    max = serializers.IntegerField()


class DepartmentSerializer(serializers.Serializer):
    key = serializers.CharField()
    name = serializers.CharField()
    capital = serializers.CharField()
    cities = serializers.ListField(child=serializers.CharField())
    deliveryDays = DeliveryWindowSerializer()
    shippingCost = serializers.IntegerField()

    def to_representation(self, instance):
        if hasattr(instance, "__dataclass_fields__"):
            return {
                "key": instance.key,
                "name": instance.name,
                "capital": instance.capital,
                "cities": list(instance.cities),
                "deliveryDays": {
                    "min": instance.delivery_days.min,
                    "max": instance.delivery_days.max,
                },
                "shippingCost": instance.shipping_cost,
            }
        return super().to_representation(instance)


class DepartmentDetailSerializer(DepartmentSerializer):
    estimatedDelivery = serializers.DateField()
    estimatedDeliveryText = serializers.CharField()

    def to_representation(self, instance):
        data = super().to_representation(instance["department"])
        data["estimatedDelivery"] = instance["estimated_delivery"].isoformat()
        data["estimatedDeliveryText"] = instance["estimated_delivery_text"]
        return data


class ShippingQuoteSerializer(serializers.Serializer):
    subtotal = serializers.IntegerField()
    total = serializers.IntegerField()
    freeShippingThreshold = serializers.IntegerField()
    department = DepartmentSerializer(allow_null=True)
    city = serializers.CharField(allow_null=True)
    shippingCost = serializers.IntegerField(allow_null=True)
    freeShipping = serializers.BooleanField()
    estimatedDelivery = serializers.DateField(allow_null=True)
    estimatedDeliveryText = serializers.CharField(allow_null=True)

    def to_representation(self, instance):
        eta = instance.estimated_delivery
        return {
            "subtotal": instance.subtotal,
            "total": instance.total,
            "freeShippingThreshold": instance.free_shipping_threshold,
            "department": (
                DepartmentSerializer(instance.department).data
                if instance.department
                else None
            ),
            "city": instance.city,
            "shippingCost": instance.shipping_cost,
            "freeShipping": instance.free_shipping,
            "estimatedDelivery": eta.isoformat() if eta else None,
            "estimatedDeliveryText": instance.estimated_delivery_text,
        }


class DetectedLocationSerializer(serializers.Serializer):
    detected = serializers.BooleanField()
    source = serializers.CharField(allow_null=True)
    city = serializers.CharField(allow_null=True)
    region = serializers.CharField(allow_null=True)
    department = DepartmentSerializer(allow_null=True)

    def to_representation(self, instance):
        if instance is None:
            return {
                "detected": False,
                "source": None,
                "city": None,
                "region": None,
                "department": None,
            }
        return {
            "detected": True,
            "source": instance.source,
            "city": instance.city,
            "region": instance.region,
            "department": (
                DepartmentSerializer(instance.department).data
                if instance.department
                else None
            ),
        }
