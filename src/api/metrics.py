from prometheus_client import Counter, Gauge, Histogram, REGISTRY


def get_or_create_metric(name, documentation, metric_type, **kwargs):
    # the api modules are re-imported by test runs and reloads; reuse what is registered
    try:
        return metric_type(name, documentation, **kwargs)
    except ValueError:
        return REGISTRY._names_to_collectors[name]


REQUESTS_TOTAL = get_or_create_metric(
    "greedy_requests_total",
    "HTTP requests by endpoint and outcome",
    Counter,
    labelnames=["endpoint", "status"],
)

REQUEST_LATENCY_SECONDS = get_or_create_metric(
    "greedy_request_latency_seconds",
    "HTTP request latency by endpoint",
    Histogram,
    labelnames=["endpoint"],
)

COMMANDS_TOTAL = get_or_create_metric(
    "greedy_commands_total",
    "Intents dispatched from chat and forms",
    Counter,
    labelnames=["intent", "status"],
)

LLM_FAILURES_TOTAL = get_or_create_metric(
    "greedy_llm_failures_total",
    "Chat turns where the language model failed or returned unusable data",
    Counter,
)

CLASSES_STORED = get_or_create_metric(
    "greedy_classes_stored", "Class cards currently in the store", Gauge
)
