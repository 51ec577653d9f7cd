"""Normalization of raw catalog entries into DTOs.

Catalog files come from several generations of the store and do not agree on
field names; everything downstream relies on the DTO shape produced here.
"""
import math
from typing import Any, Dict, Iterable, List, Optional, Tuple

from django.utils.html import strip_tags

from .dtos import ProductDTO, VariantDTO
from .images import resolve_image_path


def to_int(value: Any, default: int = 0) -> int:
    """Round numeric values (or numeric strings) to whole pesos."""
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(round(float(value)))
    except (TypeError, ValueError, OverflowError):
        return default


def _to_float(value: Any, default: float = 0.0) -> float:
    try:
        number = float(value) if value is not None else default
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


def _string_tuple(values: Any) -> Tuple[str, ...]:
    if not isinstance(values, (list, tuple, set)):
        return ()
    cleaned = (str(v).strip() for v in values if v is not None)
    return tuple(dict.fromkeys(v for v in cleaned if v))


def _image_tuple(values: Iterable[Any], image_dir: str) -> Tuple[str, ...]:
    return tuple(
        resolve_image_path(str(src), image_dir) for src in values if src
    )


class VariantMapper:
    @staticmethod
    def from_raw(raw: Dict[str, Any], *, image_dir: str = "imagenes") -> Optional[VariantDTO]:
        if not isinstance(raw, dict):
            return None
        variant_id = raw.get("id")
        if variant_id is None or str(variant_id).strip() == "":
            return None
        images = raw.get("images") or []
        price = raw.get("price")
        return VariantDTO(
            id=str(variant_id),
            name=str(raw.get("name") or variant_id),
            price=to_int(price) if price is not None else None,
            images=_image_tuple(images, image_dir),
            description=str(raw.get("description") or ""),
        )

    @staticmethod
    def to_dict(variant: VariantDTO) -> Dict[str, Any]:
        return {
            "id": variant.id,
            "name": variant.name,
            "price": variant.price,
            "images": list(variant.images),
            "description": variant.description,
        }


class ProductMapper:
    @staticmethod
    def _description(raw: Dict[str, Any]) -> str:
        if raw.get("description"):
            return str(raw["description"])
        if raw.get("descriptionHtml"):
            return strip_tags(str(raw["descriptionHtml"]))
        return str(raw.get("shortDescription") or "")

    @staticmethod
    def from_raw(raw: Dict[str, Any], *, image_dir: str = "imagenes") -> Optional[ProductDTO]:
        """Build a ProductDTO, or return None for entries without a usable id."""
        if not isinstance(raw, dict):
            return None
        product_id = to_int(raw.get("id"), default=-1)
        if product_id < 0:
            return None
        images = raw.get("images") or []
        if not images and raw.get("image"):
            images = [raw["image"]]
        variants = [
            VariantMapper.from_raw(v, image_dir=image_dir)
            for v in (raw.get("variants") or [])
        ]
        price = to_int(raw.get("price"))
        original_price = (
            to_int(raw["originalPrice"], default=price)
            if raw.get("originalPrice") is not None
            else price
        )
        return ProductDTO(
            id=product_id,
            name=str(raw.get("name") or raw.get("title") or ""),
            price=price,
            original_price=original_price,
            images=_image_tuple(images, image_dir),
            variants=tuple(v for v in variants if v is not None),
            category=str(raw.get("category") or ""),
            tags=_string_tuple(raw.get("tags")),
            rating=_to_float(raw.get("rating")),
            reviews=to_int(raw.get("reviews")),
            featured=raw.get("featured") is True,
            description=ProductMapper._description(raw),
            sku=str(raw.get("sku") or ""),
            features=_string_tuple(raw.get("features")),
            specs=_string_tuple(raw.get("specs")),
        )

    @staticmethod
    def many_from_raw(
        entries: Iterable[Dict[str, Any]], *, image_dir: str = "imagenes"
    ) -> List[ProductDTO]:
        products = (ProductMapper.from_raw(e, image_dir=image_dir) for e in entries)
        return [p for p in products if p is not None]

    @staticmethod
    def to_dict(product: ProductDTO) -> Dict[str, Any]:
        return {
            "id": product.id,
            "name": product.name,
            "price": product.price,
            "originalPrice": product.original_price,
            "image": product.image,
            "images": list(product.images),
            "variants": [VariantMapper.to_dict(v) for v in product.variants],
            "category": product.category,
            "tags": list(product.tags),
            "rating": product.rating,
            "reviews": product.reviews,
            "featured": product.featured,
            "description": product.description,
            "sku": product.sku,
            "features": list(product.features),
            "specs": list(product.specs),
        }
