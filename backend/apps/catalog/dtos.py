from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class VariantDTO:
    id: str
    name: str
    price: Optional[int] = None
    images: Tuple[str, ...] = ()
    description: str = ""


@dataclass(frozen=True)
class ProductDTO:
    id: int
    name: str
    price: int
    original_price: int
    images: Tuple[str, ...]
    variants: Tuple[VariantDTO, ...]
    category: str
    tags: Tuple[str, ...]
    rating: float = 0.0
    reviews: int = 0
    featured: bool = False
    description: str = ""
    sku: str = ""
    features: Tuple[str, ...] = ()
    specs: Tuple[str, ...] = ()

    @property
    def image(self) -> Optional[str]:
        return self.images[0] if self.images else None


@dataclass
class CategoryDTO:
    key: str
    label: str
    count: int


@dataclass
class CommentDTO:
    name: str
    text: str
    date: int

