"""
Prometheus metrics for Movie Library.

Counts HTTP traffic, catalog appends (accepted and rejected), detail-route
lookups, filter changes and live sessions.
"""

from prometheus_client import Counter, Histogram, Gauge, generate_latest, CONTENT_TYPE_LATEST


# HTTP Request Metrics
http_requests_total = Counter(
    'movielibrary_http_requests_total',
    'Total number of HTTP requests',
    ['method', 'endpoint', 'status']
)

http_request_duration_seconds = Histogram(
    'movielibrary_http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint']
)

# Catalog Metrics
movies_added_total = Counter(
    'movielibrary_movies_added_total',
    'Total number of movies appended to a catalog'
)

movie_append_rejected_total = Counter(
    'movielibrary_movie_append_rejected_total',
    'Total number of drafts rejected for a missing required field',
    ['field']  # title, posterURL
)

catalog_lookups_total = Counter(
    'movielibrary_catalog_lookups_total',
    'Total number of detail lookups by title',
    ['result']  # hit, miss
)

filter_updates_total = Counter(
    'movielibrary_filter_updates_total',
    'Total number of filter criteria changes'
)

# Session Metrics
active_sessions = Gauge(
    'movielibrary_active_sessions',
    'Number of active user sessions'
)


def track_http_request(method, endpoint, status, duration):
    """Record one handled HTTP request."""
    http_requests_total.labels(method=method, endpoint=endpoint, status=status).inc()
    http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(duration)


def track_movie_added():
    movies_added_total.inc()


def track_append_rejected(fields):
    """
    Record a rejected draft.

    Args:
        fields: Wire names of the empty required fields
    """
    for field in fields:
        movie_append_rejected_total.labels(field=field).inc()


def track_lookup(hit):
    catalog_lookups_total.labels(result='hit' if hit else 'miss').inc()


def track_filter_update():
    filter_updates_total.inc()


def update_active_sessions(count):
    active_sessions.set(count)


def get_metrics():
    """
    Generate Prometheus metrics in text format.

    Returns:
        Tuple of (metrics_text, content_type)
    """
    return generate_latest(), CONTENT_TYPE_LATEST
