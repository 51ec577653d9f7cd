import unittest

from apps.catalog.mappers import ProductMapper
from apps.catalog.services import CatalogService, ProductCommentService
from apps.common.storage import MemoryStorage


class FakeCache:
    def __init__(self):
        self.store = {}

    def get(self, key):
        return self.store.get(key)

    def set(self, key, value, timeout=None):
        self.store[key] = value


class FakeProductRepository:
    def __init__(self, entries):
        self.entries = entries
        self.load_calls = 0

    def load(self):
        self.load_calls += 1
        return ProductMapper.many_from_raw(self.entries)


CATALOG = [
    {
        "id": 1,
        "name": "Audífonos Pro",
        "price": 189900,
        "category": "Electronics",
        "tags": ["bluetooth"],
        "rating": 4.8,
        "reviews": 300,
        "sku": "PD-AUD-001",
        "variants": [{"id": "negro", "name": "Negro", "price": 189900}],
    },
    {
        "id": 2,
        "name": "Teclado RGB",
        "price": 239900,
        "category": "Gaming",
        "rating": 4.7,
        "reviews": 150,
        "features": ["Hot-swap"],
    },
    {
        "id": 3,
        "name": "Parlante",
        "price": 99900,
        "category": "Electronics",
        "rating": 4.8,
        "reviews": 120,
        "description": "Sonido envolvente",
    },
    {
        "id": 4,
        "name": "Mouse",
        "price": 129900,
        "category": "Gaming",
        "rating": 4.1,
        "reviews": 10,
    },
]


def make_service(entries=None, **kwargs):
    repo = FakeProductRepository(CATALOG if entries is None else entries)
    return CatalogService(products=repo, cache_backend=FakeCache(), **kwargs), repo


class CatalogServiceCacheTests(unittest.TestCase):
    def test_catalog_is_loaded_once_and_cached(self):
        service, repo = make_service()
        service.all_products()
        service.get_product(2)
        self.assertEqual(repo.load_calls, 1)

    def test_reload_bumps_version_and_refetches(self):
        service, repo = make_service()
        service.all_products()
        self.assertEqual(service.reload(), 2)
        service.all_products()
        self.assertEqual(repo.load_calls, 2)

    def test_disable_cache_always_reads_repository(self):
        service, repo = make_service(disable_cache=True)
        service.all_products()
        service.all_products()
        self.assertEqual(repo.load_calls, 2)


class CatalogServiceLookupTests(unittest.TestCase):
    def setUp(self):
        self.service, _ = make_service()

    def test_get_product_unknown_returns_none(self):
        self.assertIsNone(self.service.get_product(999))

    def test_get_variant(self):
        product = self.service.get_product(1)
        self.assertEqual(self.service.get_variant(product, "negro").name, "Negro")
        self.assertIsNone(self.service.get_variant(product, "azul"))
        self.assertIsNone(self.service.get_variant(product, None))

    def test_list_categories_starts_with_all(self):
        categories = self.service.list_categories()
        self.assertEqual([c.key for c in categories], ["all", "Electronics", "Gaming"])
        self.assertEqual(categories[0].label, "Todos los productos")
        self.assertEqual(categories[0].count, 4)
        self.assertEqual(categories[1].label, "Electrónica")
        self.assertEqual(categories[1].count, 2)

    def test_filter_by_category(self):
        ids = [p.id for p in self.service.filter_products(category="Gaming")]
        self.assertEqual(ids, [2, 4])

    def test_all_and_blank_do_not_filter(self):
        self.assertEqual(len(self.service.filter_products(category="all")), 4)
        self.assertEqual(len(self.service.filter_products(query="   ")), 4)

    def test_search_is_case_insensitive_over_several_fields(self):
        self.assertEqual([p.id for p in self.service.filter_products(query="BLUETOOTH")], [1])
        self.assertEqual([p.id for p in self.service.filter_products(query="hot-SWAP")], [2])
        self.assertEqual([p.id for p in self.service.filter_products(query="pd-aud")], [1])
        self.assertEqual([p.id for p in self.service.filter_products(query="envolvente")], [3])

    def test_category_then_search(self):
        result = self.service.filter_products(category="Gaming", query="mouse")
        self.assertEqual([p.id for p in result], [4])
        self.assertEqual(self.service.filter_products(category="Gaming", query="parlante"), [])

    def test_featured_falls_back_to_rating_then_reviews(self):
        featured = self.service.featured_products(limit=3)
        self.assertEqual([p.id for p in featured], [1, 3, 2])

    def test_featured_prefers_flagged_products(self):
        entries = [dict(CATALOG[0]), dict(CATALOG[3], featured=True)]
        service, _ = make_service(entries)
        self.assertEqual([p.id for p in service.featured_products()], [4])

    def test_related_products_same_category_excluding_self(self):
        product = self.service.get_product(2)
        self.assertEqual([p.id for p in self.service.related_products(product)], [4])


class ProductCommentServiceTests(unittest.TestCase):
    def setUp(self):
        self.catalog, _ = make_service()
        self.storage = MemoryStorage()
        self.service = ProductCommentService(catalog=self.catalog, storage=self.storage)

    def test_unknown_product(self):
        self.assertIsNone(self.service.list_comments(999))
        self.assertIsNone(self.service.add_comment(999, {"text": "hola"}))

    def test_comments_are_prepended_and_persisted(self):
        self.service.add_comment(1, {"name": "Ana", "text": "Primero"})
        comments = self.service.add_comment(1, {"text": "Segundo"})
        self.assertEqual([c.text for c in comments], ["Segundo", "Primero"])
        self.assertEqual(comments[0].name, "Cliente")
        stored = self.storage.get("comentarios_prod_1")
        self.assertEqual([c["text"] for c in stored], ["Segundo", "Primero"])
        self.assertEqual(self.service.list_comments(2), [])

    def test_blank_text_raises(self):
        with self.assertRaises(ValueError):
            self.service.add_comment(1, {"name": "Ana", "text": "  "})
