import json
from pathlib import Path
from typing import List, Optional, Union

from apps.api.exceptions import ApplicationError
from apps.common import get_logger

from .dtos import ProductDTO
from .mappers import ProductMapper

logger = get_logger(__name__).bind(component="catalog", layer="repository")


class CatalogUnavailableError(ApplicationError):
    """Raised when the catalog file cannot be read or is not a JSON array.

    Fatal for every catalog-backed endpoint; surfaced to clients as a 503.
    """

    def __init__(self, detail: str):
        super().__init__(
            "SERVICE_UNAVAILABLE",
            "No se pudieron cargar los productos. Intenta nuevamente más tarde.",
            details={"reason": detail},
        )
        self.detail = detail


class JsonProductRepository:
    """Reads the product catalog from a static JSON file."""

    def __init__(self, path: Union[str, Path], *, image_dir: str = "imagenes"):
        self.path = Path(path)
        self.image_dir = image_dir

    def load(self) -> List[ProductDTO]:
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            logger.error("Catalog file missing", path=str(self.path))
            raise CatalogUnavailableError(f"Catalog file not found: {self.path}") from exc
        except (OSError, ValueError) as exc:
            logger.error("Catalog file unreadable", path=str(self.path), error=str(exc))
            raise CatalogUnavailableError(f"Catalog file unreadable: {exc}") from exc
        if not isinstance(raw, list):
            logger.error("Catalog root is not an array", path=str(self.path))
            raise CatalogUnavailableError("Catalog file must contain a JSON array")
        products = ProductMapper.many_from_raw(raw, image_dir=self.image_dir)
        skipped = len(raw) - len(products)
        if skipped:
            logger.warning("Skipped catalog entries without id", skipped=skipped)
        logger.info("Catalog loaded", path=str(self.path), products=len(products))
        return products

    def get(self, product_id: int) -> Optional[ProductDTO]:
        return next((p for p in self.load() if p.id == product_id), None)
