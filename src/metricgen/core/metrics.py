"""
Typed model of metric definitions.

A metric is one of a closed set of kinds (METRIC_KINDS). Every kind embeds
the same CommonMetricData and adds zero or more kind-specific fields.
Instances are frozen; a decoded catalog is never mutated.

Decoding takes the plain mapping found in a metrics document
(``{"type": "counter", "description": ..., ...}``) and raises DecodeError
for anything that does not fit the model. Encoding (``to_document``) writes
the same shape back.
"""

import copy
from dataclasses import MISSING, dataclass, fields
from enum import Enum
from typing import Any, Callable, ClassVar, Dict, FrozenSet, Mapping, Optional, Tuple, Type

from metricgen.core.errors import DecodeError


# Enumerations


class MetricEnum(str, Enum):
    """Base for enumerations whose values are canonical lowercase names."""

    def __str__(self) -> str:
        return self.value


class Lifetime(MetricEnum):
    PING = "ping"
    APPLICATION = "application"
    USER = "user"


class TimeUnit(MetricEnum):
    MILLISECOND = "millisecond"
    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"


class MemoryUnit(MetricEnum):
    BYTE = "byte"
    KILOBYTE = "kilobyte"
    MEGABYTE = "megabyte"
    GIGABYTE = "gigabyte"


class HistogramType(MetricEnum):
    LINEAR = "linear"
    EXPONENTIAL = "exponential"


METRIC_ENUMS: Tuple[Type[MetricEnum], ...] = (Lifetime, TimeUnit, MemoryUnit, HistogramType)


# Field decoders


def json_pointer(path: str, key: str) -> str:
    key = str(key).replace("~", "~0").replace("/", "~1")
    return f"{path.rstrip('/')}/{key}"


def _decode_string(value: Any, path: str) -> str:
    if not isinstance(value, str):
        raise DecodeError(f"expected a string, got {type(value).__name__}", path=path)
    return value


def _decode_string_list(value: Any, path: str) -> Tuple[str, ...]:
    if not isinstance(value, (list, tuple)):
        raise DecodeError(f"expected a list of strings, got {type(value).__name__}", path=path)
    return tuple(_decode_string(item, f"{path}/{index}") for index, item in enumerate(value))


def _decode_unsigned(value: Any, path: str) -> int:
    # bool is an int subclass; a YAML `true` is not a bucket count
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"expected an unsigned integer, got {type(value).__name__}", path=path)
    if value < 0:
        raise DecodeError(f"expected an unsigned integer, got {value}", path=path)
    return value


def _enum_decoder(enum_cls: Type[MetricEnum]) -> Callable[[Any, str], MetricEnum]:
    def decode(value: Any, path: str) -> MetricEnum:
        if isinstance(value, enum_cls):
            return value
        try:
            return enum_cls(value)
        except ValueError:
            allowed = ", ".join(member.value for member in enum_cls)
            raise DecodeError(
                f"invalid {enum_cls.__name__} {value!r}, expected one of: {allowed}",
                path=path,
            ) from None

    return decode


def _decode_extra_keys(value: Any, path: str) -> Dict[str, Any]:
    if not isinstance(value, Mapping):
        raise DecodeError(f"expected a mapping, got {type(value).__name__}", path=path)
    for key in value:
        if not isinstance(key, str):
            raise DecodeError(f"extra key names must be strings, got {key!r}", path=path)
    return copy.deepcopy(dict(value))


def _optional(decoder: Callable[[Any, str], Any]) -> Callable[[Any, str], Any]:
    def decode(value: Any, path: str) -> Any:
        if value is None:
            return None
        return decoder(value, path)

    return decode


# Decoder for every kind-specific field, by field name
_FIELD_DECODERS: Dict[str, Callable[[Any, str], Any]] = {
    "labels": _optional(_decode_string_list),
    "time_unit": _enum_decoder(TimeUnit),
    "memory_unit": _enum_decoder(MemoryUnit),
    "range_min": _decode_unsigned,
    "range_max": _decode_unsigned,
    "bucket_count": _decode_unsigned,
    "histogram_type": _enum_decoder(HistogramType),
    "extra_keys": _decode_extra_keys,
    "denominator_metric": _decode_string,
    "unit": _optional(_decode_string),
}


# Common data


@dataclass(frozen=True)
class CommonMetricData:
    """Attributes shared by every metric kind."""

    description: str
    bugs: Tuple[str, ...]
    data_reviews: Tuple[str, ...]
    notification_emails: Tuple[str, ...]
    expires: str
    lifetime: Lifetime = Lifetime.PING

    FIELDS: ClassVar[Tuple[str, ...]] = (
        "lifetime",
        "description",
        "bugs",
        "data_reviews",
        "notification_emails",
        "expires",
    )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], path: str = "/") -> "CommonMetricData":
        """Decode the common fields out of a metric mapping."""
        for name in ("description", "bugs", "data_reviews", "notification_emails", "expires"):
            if name not in data:
                raise DecodeError(f"missing required field '{name}'", path=path)

        lifetime = Lifetime.PING
        if "lifetime" in data:
            lifetime = _enum_decoder(Lifetime)(data["lifetime"], json_pointer(path, "lifetime"))

        return cls(
            lifetime=lifetime,
            description=_decode_string(data["description"], json_pointer(path, "description")),
            bugs=_decode_string_list(data["bugs"], json_pointer(path, "bugs")),
            data_reviews=_decode_string_list(data["data_reviews"], json_pointer(path, "data_reviews")),
            notification_emails=_decode_string_list(
                data["notification_emails"], json_pointer(path, "notification_emails")
            ),
            expires=_decode_string(data["expires"], json_pointer(path, "expires")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "lifetime": self.lifetime.value,
            "description": self.description,
            "bugs": list(self.bugs),
            "data_reviews": list(self.data_reviews),
            "notification_emails": list(self.notification_emails),
            "expires": self.expires,
        }


# Metric kinds


@dataclass(frozen=True)
class Metric:
    """A single metric definition.

    Subclasses set TYPE_NAME to the ``type`` tag used in metrics documents
    and declare their kind-specific fields as dataclass fields.
    """

    TYPE_NAME: ClassVar[str] = ""

    common: CommonMetricData

    @classmethod
    def extra_field_names(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls) if f.name != "common")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], path: str = "/") -> "Metric":
        allowed = {"type", *CommonMetricData.FIELDS, *cls.extra_field_names()}
        unexpected = sorted(str(key) for key in data if key not in allowed)
        if unexpected:
            raise DecodeError(
                f"unexpected field(s) for {cls.TYPE_NAME}: {', '.join(unexpected)}",
                path=path,
            )

        kwargs: Dict[str, Any] = {}
        for f in fields(cls):
            if f.name == "common":
                continue
            if f.name in data:
                kwargs[f.name] = _FIELD_DECODERS[f.name](data[f.name], json_pointer(path, f.name))
            elif f.default is MISSING and f.default_factory is MISSING:
                raise DecodeError(f"missing required field '{f.name}'", path=path)

        return cls(common=CommonMetricData.from_dict(data, path), **kwargs)

    def extra(self) -> Dict[str, Any]:
        """Kind-specific values that code generation passes to the metric type."""
        return {}

    def to_document(self) -> Dict[str, Any]:
        """Encode back to the mapping shape used in metrics documents."""
        document: Dict[str, Any] = {"type": self.TYPE_NAME}
        document.update(self.common.to_dict())
        for name in self.extra_field_names():
            value = getattr(self, name)
            if value is None:
                continue
            if isinstance(value, MetricEnum):
                value = value.value
            elif isinstance(value, tuple):
                value = list(value)
            elif isinstance(value, dict):
                value = copy.deepcopy(value)
            document[name] = value
        return document


@dataclass(frozen=True)
class LabeledMetric(Metric):
    labels: Optional[Tuple[str, ...]] = None


@dataclass(frozen=True)
class TimeUnitMetric(Metric):
    time_unit: TimeUnit

    def extra(self) -> Dict[str, Any]:
        return {"time_unit": self.time_unit}


@dataclass(frozen=True)
class Boolean(Metric):
    TYPE_NAME: ClassVar[str] = "boolean"


@dataclass(frozen=True)
class LabeledBoolean(LabeledMetric):
    TYPE_NAME: ClassVar[str] = "labeled_boolean"


@dataclass(frozen=True)
class Counter(Metric):
    TYPE_NAME: ClassVar[str] = "counter"


@dataclass(frozen=True)
class LabeledCounter(LabeledMetric):
    TYPE_NAME: ClassVar[str] = "labeled_counter"


@dataclass(frozen=True)
class String(Metric):
    TYPE_NAME: ClassVar[str] = "string"


@dataclass(frozen=True)
class LabeledString(LabeledMetric):
    TYPE_NAME: ClassVar[str] = "labeled_string"


@dataclass(frozen=True)
class StringList(Metric):
    TYPE_NAME: ClassVar[str] = "string_list"


@dataclass(frozen=True)
class Timespan(TimeUnitMetric):
    TYPE_NAME: ClassVar[str] = "timespan"


@dataclass(frozen=True)
class TimingDistribution(TimeUnitMetric):
    TYPE_NAME: ClassVar[str] = "timing_distribution"


@dataclass(frozen=True)
class MemoryDistribution(Metric):
    TYPE_NAME: ClassVar[str] = "memory_distribution"

    memory_unit: MemoryUnit

    def extra(self) -> Dict[str, Any]:
        return {"memory_unit": self.memory_unit}


@dataclass(frozen=True)
class CustomDistribution(Metric):
    TYPE_NAME: ClassVar[str] = "custom_distribution"

    range_min: int
    range_max: int
    bucket_count: int
    histogram_type: HistogramType

    def extra(self) -> Dict[str, Any]:
        return {
            "range_min": self.range_min,
            "range_max": self.range_max,
            "bucket_count": self.bucket_count,
            "histogram_type": self.histogram_type,
        }


@dataclass(frozen=True)
class Uuid(Metric):
    TYPE_NAME: ClassVar[str] = "uuid"


@dataclass(frozen=True)
class Url(Metric):
    TYPE_NAME: ClassVar[str] = "url"


@dataclass(frozen=True)
class Datetime(TimeUnitMetric):
    TYPE_NAME: ClassVar[str] = "datetime"


@dataclass(frozen=True)
class Event(Metric):
    TYPE_NAME: ClassVar[str] = "event"

    extra_keys: Dict[str, Any]


@dataclass(frozen=True)
class Rate(Metric):
    TYPE_NAME: ClassVar[str] = "rate"


@dataclass(frozen=True)
class RateExternal(Metric):
    """A rate whose denominator is another metric, referenced by name.

    The reference is not checked against the catalog.
    """

    TYPE_NAME: ClassVar[str] = "rate"

    denominator_metric: str


@dataclass(frozen=True)
class Text(Metric):
    TYPE_NAME: ClassVar[str] = "text"


@dataclass(frozen=True)
class Quantity(Metric):
    TYPE_NAME: ClassVar[str] = "quantity"

    unit: Optional[str] = None


METRIC_KINDS: Tuple[Type[Metric], ...] = (
    Boolean,
    LabeledBoolean,
    Counter,
    LabeledCounter,
    String,
    LabeledString,
    StringList,
    Timespan,
    TimingDistribution,
    MemoryDistribution,
    CustomDistribution,
    Uuid,
    Url,
    Datetime,
    Event,
    Rate,
    RateExternal,
    Text,
    Quantity,
)

TYPE_NAMES: FrozenSet[str] = frozenset(kind.TYPE_NAME for kind in METRIC_KINDS)

# Rate and RateExternal share "rate"; resolve_kind picks between them
_KINDS_BY_TYPE: Dict[str, Type[Metric]] = {
    kind.TYPE_NAME: kind for kind in METRIC_KINDS if kind is not RateExternal
}


def resolve_kind(type_name: Any, data: Mapping[str, Any], path: str = "/") -> Type[Metric]:
    """Map a document ``type`` tag to its metric class.

    A ``rate`` that names a ``denominator_metric`` is an external rate.
    """
    if not isinstance(type_name, str) or type_name not in _KINDS_BY_TYPE:
        raise DecodeError(f"unknown metric type {type_name!r}", path=json_pointer(path, "type"))
    if type_name == Rate.TYPE_NAME and "denominator_metric" in data:
        return RateExternal
    return _KINDS_BY_TYPE[type_name]


def decode_metric(data: Any, path: str = "/") -> Metric:
    """Decode one metric definition mapping into its typed variant.

    Args:
        data: Mapping with a ``type`` tag plus common and kind-specific fields
        path: JSON pointer of the mapping, used in error messages

    Raises:
        DecodeError: unknown tag, missing field, wrong shape or unexpected field
    """
    if not isinstance(data, Mapping):
        raise DecodeError(f"expected a metric mapping, got {type(data).__name__}", path=path)
    if "type" not in data:
        raise DecodeError("missing required field 'type'", path=path)
    kind = resolve_kind(data["type"], data, path)
    return kind.from_dict(data, path)
