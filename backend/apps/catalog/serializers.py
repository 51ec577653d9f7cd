from django.conf import settings
from rest_framework import serializers

from .images import PLACEHOLDER_IMAGE, image_candidates


class VariantSerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField()
    price = serializers.IntegerField(allow_null=True)
    images = serializers.ListField(child=serializers.CharField())
    description = serializers.CharField(allow_blank=True)

    def to_representation(self, instance):
        if hasattr(instance, "__dataclass_fields__"):
            return {
                "id": instance.id,
                "name": instance.name,
                "price": instance.price,
                "images": list(instance.images),
                "description": instance.description,
            }
        return super().to_representation(instance)


class ProductReadSerializer(serializers.Serializer):
    # Matches ProductDTO shapes used for responses
    id = serializers.IntegerField()
    name = serializers.CharField()
    price = serializers.IntegerField()
    originalPrice = serializers.IntegerField()
    image = serializers.CharField(allow_null=True)
    images = serializers.ListField(child=serializers.CharField())
    variants = VariantSerializer(many=True)
    category = serializers.CharField()
    tags = serializers.ListField(child=serializers.CharField())
    rating = serializers.FloatField()
    reviews = serializers.IntegerField()
    featured = serializers.BooleanField()
    description = serializers.CharField(allow_blank=True)
    sku = serializers.CharField(allow_blank=True)

    def to_representation(self, instance):
        if instance is None:
            return None
        # If it's already a dataclass DTO, extract attributes directly for speed
        if hasattr(instance, "__dataclass_fields__"):
            return {
                "id": instance.id,
                "name": instance.name,
                "price": instance.price,
                "originalPrice": instance.original_price,
                "image": instance.image,
                "images": list(instance.images),
                "variants": VariantSerializer(instance.variants, many=True).data,
                "category": instance.category,
                "tags": list(instance.tags),
                "rating": instance.rating,
                "reviews": instance.reviews,
                "featured": instance.featured,
                "description": instance.description,
                "sku": instance.sku,
            }
        return super().to_representation(instance)


class ProductDetailSerializer(ProductReadSerializer):
    features = serializers.ListField(child=serializers.CharField())
    specs = serializers.ListField(child=serializers.CharField())
    imageCandidates = serializers.DictField()
    placeholderImage = serializers.CharField()
    related = ProductReadSerializer(many=True)

    def to_representation(self, instance):
        if instance is None:
            return None
        product = instance["product"]
        data = super().to_representation(product)
        image_dir = getattr(settings, "CATALOG_IMAGE_DIR", "imagenes")
        data.update(
            {
                "features": list(product.features),
                "specs": list(product.specs),
                "imageCandidates": {
                    src: image_candidates(src, image_dir) for src in product.images
                },
                "placeholderImage": PLACEHOLDER_IMAGE,
                "related": ProductReadSerializer(
                    instance.get("related") or [], many=True
                ).data,
            }
        )
        return data


class CategorySerializer(serializers.Serializer):
    key = serializers.CharField()
    label = serializers.CharField()
    count = serializers.IntegerField()


class CommentSerializer(serializers.Serializer):
    name = serializers.CharField()
    text = serializers.CharField()
    date = serializers.IntegerField()


class CommentWriteSerializer(serializers.Serializer):
    name = serializers.CharField(required=False, allow_blank=True, max_length=80)
    text = serializers.CharField(max_length=2000)
