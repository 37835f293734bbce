from prometheus_client import Counter, Histogram, Gauge, generate_latest, CONTENT_TYPE_LATEST
from flask import Response, request
import logging
import time
from functools import wraps

logger = logging.getLogger("main")

# Store Metrics
store_operation_duration_seconds = Histogram(
    "ondocket_store_operation_duration_seconds", "Record store operation duration", ["operation"]
)

store_operations_total = Counter("ondocket_store_operations_total", "Total record store operations", ["operation", "status"])

content_records_total = Gauge("ondocket_content_records_total", "Number of records in the collection")

# API Metrics
api_request_duration_seconds = Histogram(
    "ondocket_api_request_duration_seconds", "API request duration", ["endpoint", "method"]
)

api_requests_total = Counter("ondocket_api_requests_total", "Total API requests", ["endpoint", "method", "status_code"])


def init_metrics(app):
    @app.route("/api/metrics")
    def metrics():
        return Response(generate_latest(), mimetype=CONTENT_TYPE_LATEST)

    @app.before_request
    def before_request():
        request.start_time = time.time()

    @app.after_request
    def after_request(response):
        duration = time.time() - getattr(request, "start_time", time.time())
        api_request_duration_seconds.labels(endpoint=request.endpoint or "unknown", method=request.method).observe(
            duration
        )
        api_requests_total.labels(
            endpoint=request.endpoint or "unknown", method=request.method, status_code=response.status_code
        ).inc()
        return response

    logger.info("Prometheus metrics initialized at /api/metrics")


def track_store_operation(operation):
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            start_time = time.time()
            try:
                result = func(*args, **kwargs)
                store_operations_total.labels(operation=operation, status="success").inc()
                return result
            except Exception:
                store_operations_total.labels(operation=operation, status="error").inc()
                raise
            finally:
                duration = time.time() - start_time
                store_operation_duration_seconds.labels(operation=operation).observe(duration)

        return wrapper

    return decorator
