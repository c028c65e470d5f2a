from .base import JobSource
from .remotive import REMOTIVE_CATEGORIES, RemotiveSource
from .arbeitnow import ArbeitnowSource

__all__ = [
    "JobSource", "RemotiveSource", "ArbeitnowSource",
    "REMOTIVE_CATEGORIES", "JOB_CATEGORIES", "get_sources",
]

# Category filter options offered to the UI layer.
JOB_CATEGORIES: list[dict[str, str]] = [
    {"value": "all", "label": "All Categories"},
    {"value": "software-dev", "label": "Software Development"},
    {"value": "data", "label": "Data"},
    {"value": "devops", "label": "DevOps / SysAdmin"},
    {"value": "design", "label": "Design"},
    {"value": "product", "label": "Product"},
    {"value": "marketing", "label": "Marketing"},
    {"value": "customer-support", "label": "Customer Support"},
    {"value": "finance", "label": "Finance / Legal"},
    {"value": "qa", "label": "QA"},
    {"value": "writing", "label": "Writing"},
]


def get_sources(timeout: float = 15.0) -> list[JobSource]:
    """Sources in fetch order; dedup keeps the earliest source's posting."""
    return [RemotiveSource(timeout=timeout), ArbeitnowSource(timeout=timeout)]
