"""
Derived views of a metric for code generation.

All three functions are pure. The two field views return ordered mappings
whose values are already literal source text for the target language.
"""

from typing import Any, Dict, Optional

from metricgen.core.errors import SerializationFault
from metricgen.core.literals import SWIFT, BooleanValue, LiteralPolicy, serialize
from metricgen.core.metrics import Metric


# Pings every metric is sent in; not read from the metric definition yet
SEND_IN_PINGS = ("metrics",)

COMMON_FIELD_KEYS = ("category", "name", "lifetime", "description", "send_in_pings", "disabled")


def type_name(metric: Metric) -> str:
    """Return the document ``type`` tag of a metric (``rate`` for both rate kinds)."""
    return type(metric).TYPE_NAME


def _render(
    value: Any,
    policy: LiteralPolicy,
    *,
    metric: str,
    field: str,
) -> str:
    try:
        return serialize(value, policy)
    except SerializationFault as fault:
        raise fault.annotate(metric=metric, field=field) from fault


def common_fields(
    metric: Metric,
    category: str,
    name: str,
    policy: Optional[LiteralPolicy] = None,
) -> Dict[str, str]:
    """Literal view of the fields every metric type is constructed with.

    Args:
        metric: The metric definition
        category: Category the metric sits under in the catalog
        name: Metric name within the category
        policy: Target language rules (default: SWIFT)

    Returns:
        Ordered mapping with keys category, name, lifetime, description,
        send_in_pings and disabled
    """
    policy = policy or SWIFT
    qualified = f"{category}.{name}"
    values = {
        "category": category,
        "name": name,
        "lifetime": metric.common.lifetime,
        "description": metric.common.description,
        "send_in_pings": list(SEND_IN_PINGS),
        "disabled": BooleanValue(False),
    }
    return {
        key: _render(values[key], policy, metric=qualified, field=key)
        for key in COMMON_FIELD_KEYS
    }


def extra_fields(
    metric: Metric,
    policy: Optional[LiteralPolicy] = None,
    qualified_name: Optional[str] = None,
) -> Dict[str, str]:
    """Literal view of the kind-specific constructor arguments.

    Timespan, Datetime and TimingDistribution give ``time_unit``;
    MemoryDistribution gives ``memory_unit``; CustomDistribution gives
    ``range_min``, ``range_max``, ``bucket_count`` and ``histogram_type``.
    Every other kind gives an empty mapping. qualified_name (``category.name``)
    only labels serialization faults.
    """
    policy = policy or SWIFT
    label = qualified_name or type_name(metric)
    return {
        key: _render(value, policy, metric=label, field=key)
        for key, value in metric.extra().items()
    }
