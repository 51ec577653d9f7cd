from django.conf import settings
from django.core.cache import cache
from django.core.management.base import BaseCommand, CommandError

from apps.catalog.container import build_catalog_service
from apps.catalog.repositories import CatalogUnavailableError, JsonProductRepository
from apps.catalog.services import CatalogService


class Command(BaseCommand):
    help = "Load the product catalog, report entries that will render badly and refresh the cache."

    def add_arguments(self, parser):
        parser.add_argument(
            "--path",
            default=None,
            help="Catalog file to check instead of CATALOG_PATH",
        )
        parser.add_argument(
            "--no-reload",
            action="store_true",
            help="Do not invalidate the cached catalog afterwards",
        )

    def handle(self, *args, **options):
        repository = JsonProductRepository(
            options.get("path") or settings.CATALOG_PATH,
            image_dir=settings.CATALOG_IMAGE_DIR,
        )
        service = CatalogService(products=repository, cache_backend=cache, disable_cache=True)
        try:
            products = service.all_products()
        except CatalogUnavailableError as exc:
            raise CommandError(exc.detail) from exc

        problems = 0
        seen_ids = set()
        for product in products:
            issues = []
            if product.id in seen_ids:
                issues.append("duplicate id")
            seen_ids.add(product.id)
            if not product.name:
                issues.append("missing name")
            if not product.images:
                issues.append("no images")
            if product.price <= 0:
                issues.append("no price")
            if issues:
                problems += 1
                self.stdout.write(
                    self.style.WARNING(f"#{product.id} {product.name}: {', '.join(issues)}")
                )

        categories = service.list_categories()
        self.stdout.write(
            f"{len(products)} products, {len(categories) - 1} categories, "
            f"{problems} with problems"
        )
        if not options.get("no_reload"):
            version = build_catalog_service().reload()
            self.stdout.write(self.style.SUCCESS(f"Catalog cache version is now {version}"))
