"""Prometheus metrics for the on-demand catalog service."""
from prometheus_client import Counter, Histogram

ondemand_list_requests_total = Counter(
    'ondemand_list_requests_total',
    'Total number of on-demand list requests served',
    ['backend']  # 'search', 'database'
)

ondemand_list_results_total = Counter(
    'ondemand_list_results_total',
    'Total number of on-demand rows returned',
    ['backend']
)

ondemand_list_duration_seconds = Histogram(
    'ondemand_list_duration_seconds',
    'Time spent building on-demand list pages',
    ['backend'],
    buckets=(0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0)
)

ondemand_downloads_total = Counter(
    'ondemand_downloads_total',
    'Total number of on-demand download attempts',
    ['status']  # 'served', 'forbidden', 'not_found'
)
