"""Custom metrics for the menu browser."""

from opentelemetry import metrics

meter = metrics.get_meter("menu-browser")

fetch_success_counter = meter.create_counter(
    name="menu_fetch_success_total",
    description="Total number of successful menu API fetches by resource",
    unit="1",
)

fetch_failure_counter = meter.create_counter(
    name="menu_fetch_failure_total",
    description="Total number of failed menu API fetches by resource and error type",
    unit="1",
)

fetch_duration_histogram = meter.create_histogram(
    name="menu_fetch_duration_seconds",
    description="Duration of menu API fetches including decode",
    unit="s",
)

item_count_histogram = meter.create_histogram(
    name="menu_fetch_item_count",
    description="Number of items returned per successful fetch",
    unit="1",
)

stale_response_counter = meter.create_counter(
    name="menu_stale_response_discarded_total",
    description="Dish responses dropped because a newer request was issued",
    unit="1",
)


def record_fetch_success(resource: str, item_count: int) -> None:
    """Record a successful fetch.

    Args:
        resource: The fetched resource ("categories" or "dishes")
        item_count: Number of items decoded from the response
    """
    fetch_success_counter.add(1, {"resource": resource})
    item_count_histogram.record(item_count, {"resource": resource})


def record_fetch_failure(resource: str, error_type: str) -> None:
    """Record a failed fetch.

    Args:
        resource: The fetched resource
        error_type: Failure category (transport, empty_response, decode, status_false)
    """
    fetch_failure_counter.add(1, {"resource": resource, "error_type": error_type})


def record_fetch_duration(resource: str, duration_seconds: float) -> None:
    """Record the duration of a fetch.

    Args:
        resource: The fetched resource
        duration_seconds: Duration in seconds
    """
    fetch_duration_histogram.record(duration_seconds, {"resource": resource})


def record_stale_response() -> None:
    """Record a dish response that was discarded as stale."""
    stale_response_counter.add(1, {"resource": "dishes"})
