"""
Prometheus metrics
Collects catalog and discount business metrics.
"""
import logging
from prometheus_client import Counter, Info
from prometheus_client import make_asgi_app

logger = logging.getLogger(__name__)

# Application info
app_info = Info('discount_service_info', 'Discount Service Information')
app_info.info({
    'version': '1.0.0',
    'name': 'Product Discount Service'
})

# Discount metrics
discount_applications_total = Counter(
    'discount_applications_total',
    'Discount application attempts by outcome',
    ['outcome']
)

# Catalog read metrics
product_quotes_served_total = Counter(
    'product_quotes_served_total',
    'Price quotes returned by the catalog read path',
    ['country']
)

# Error metrics
catalog_errors_total = Counter(
    'catalog_errors_total',
    'Errors surfaced to API callers',
    ['error_code']
)


def record_discount_outcome(outcome: str):
    """Record a discount application result (applied, already_applied, not_found)"""
    discount_applications_total.labels(outcome=outcome).inc()


def record_quotes_served(country: str, count: int):
    """Record price quotes served"""
    product_quotes_served_total.labels(country=country).inc(count)


def record_catalog_error(error_code: str):
    """Record an error returned to a caller"""
    catalog_errors_total.labels(error_code=error_code).inc()


# ASGI app (mounted on FastAPI)
metrics_app = make_asgi_app()
