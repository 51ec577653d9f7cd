from django.conf import settings
from django.http import JsonResponse
import time
import os

import redis as redis_lib

from apps.catalog.repositories import CatalogUnavailableError, JsonProductRepository
from .logger import get_logger

logger = get_logger(__name__).bind(component='common', layer='health')


def _redis_ping(url: str, timeout: float = 0.3):
    try:
        client = redis_lib.from_url(url, socket_connect_timeout=timeout, socket_timeout=timeout)
        pong = client.ping()
        result = {'status': 'ok' if pong else 'fail'}
        if result['status'] == 'ok':
            logger.debug('Redis health check succeeded')
        else:
            logger.warning('Redis health check returned unexpected response')
        return result
    except redis_lib.RedisError as e:
        logger.warning('Redis health check failed', error=str(e))
        return {'status': 'fail', 'error': str(e)}


def _catalog_check():
    started = time.time()
    try:
        products = JsonProductRepository(
            settings.CATALOG_PATH, image_dir=settings.CATALOG_IMAGE_DIR
        ).load()
    except CatalogUnavailableError as e:
        logger.warning('Catalog health check failed', error=e.detail)
        return {'status': 'fail', 'error': e.detail}
    latency = round((time.time() - started) * 1000, 2)
    logger.debug('Catalog health check succeeded', products=len(products), latency_ms=latency)
    return {'status': 'ok', 'products': len(products), 'latency_ms': latency}


def live_health(request):
    """Liveness probe: process is up and can service requests."""
    logger.debug('Liveness probe served')
    return JsonResponse({'status': 'alive'})


def ready_health(request):
    """Readiness probe: the catalog file loads and Redis (sessions, cache) answers."""
    checks = {'catalog': _catalog_check()}

    redis_url = os.getenv('REDIS_URL')
    if redis_url:
        checks['redis'] = _redis_ping(redis_url)
    else:
        checks['redis'] = {'status': 'skipped', 'detail': 'REDIS_URL not set'}

    failing = [name for name, r in checks.items() if r.get('status') == 'fail']
    overall_status = 'ok' if not failing else 'degraded'
    http_status = 200 if not failing else 503
    payload = {
        'status': overall_status,
        'checks': checks,
    }
    logger.info('Readiness probe evaluated', status=overall_status, failing_components=failing)
    return JsonResponse(payload, status=http_status)
