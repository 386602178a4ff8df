"""
Resolved values returned to callers.

Every ``Entity`` carries one ``DimensionValue``. Values are plain frozen
dataclasses; ``to_dict()`` produces the JSON-friendly form printed by the
command line tool.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Tuple, Union

from .types import DimensionKind, Grain


# =============================================================================
# Scalar values
# =============================================================================

@dataclass(frozen=True)
class NumeralValue:
    value: float

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "value", "value": self.value}


@dataclass(frozen=True)
class OrdinalValue:
    value: int

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "value", "value": self.value}


@dataclass(frozen=True)
class MeasurementValue:
    """A quantity with a unit: temperature, distance, volume or money."""
    value: float
    unit: Optional[str]

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "value", "value": self.value, "unit": self.unit}


@dataclass(frozen=True)
class MeasurementInterval:
    """A bounded or half-open range of quantities; one side may be None."""
    start: Optional[MeasurementValue]
    end: Optional[MeasurementValue]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "interval",
            "from": self.start.to_dict() if self.start else None,
            "to": self.end.to_dict() if self.end else None,
        }


@dataclass(frozen=True)
class DurationValue:
    value: int
    grain: Grain
    normalized_seconds: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "value",
            "value": self.value,
            "unit": self.grain.label,
            "normalized": {"value": self.normalized_seconds, "unit": "second"},
        }


@dataclass(frozen=True)
class GrainValue:
    grain: Grain

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "value", "value": self.grain.label}


@dataclass(frozen=True)
class EmailValue:
    value: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "value", "value": self.value}


@dataclass(frozen=True)
class PhoneNumberValue:
    value: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "value", "value": self.value}


@dataclass(frozen=True)
class UrlValue:
    value: str
    domain: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "value", "value": self.value, "domain": self.domain}


@dataclass(frozen=True)
class CreditCardNumberValue:
    value: str
    issuer: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "value", "value": self.value, "issuer": self.issuer}


# =============================================================================
# Time values
# =============================================================================

@dataclass(frozen=True)
class NaiveTimePoint:
    """Wall-clock reading in the context timezone, no offset attached."""
    value: datetime
    grain: Grain

    def to_dict(self) -> Dict[str, Any]:
        return {"value": self.value.isoformat(), "grain": self.grain.label}


@dataclass(frozen=True)
class InstantTimePoint:
    """An absolute instant, always expressed in UTC."""
    value: datetime
    grain: Grain

    def to_dict(self) -> Dict[str, Any]:
        return {"value": self.value.isoformat(), "grain": self.grain.label}


TimePoint = Union[NaiveTimePoint, InstantTimePoint]


@dataclass(frozen=True)
class SingleTime:
    point: TimePoint
    alternatives: Tuple[TimePoint, ...] = ()

    @property
    def grain(self) -> Grain:
        return self.point.grain

    def to_dict(self) -> Dict[str, Any]:
        result = {"type": "value"}
        result.update(self.point.to_dict())
        result["values"] = [alt.to_dict() for alt in self.alternatives]
        return result


@dataclass(frozen=True)
class IntervalTime:
    start: Optional[TimePoint]
    end: Optional[TimePoint]
    grain: Grain
    alternatives: Tuple[Tuple[Optional[TimePoint], Optional[TimePoint]], ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "interval",
            "from": self.start.to_dict() if self.start else None,
            "to": self.end.to_dict() if self.end else None,
            "grain": self.grain.label,
            "values": [
                {
                    "from": start.to_dict() if start else None,
                    "to": end.to_dict() if end else None,
                }
                for start, end in self.alternatives
            ],
        }


DimensionValue = Union[
    NumeralValue, OrdinalValue, MeasurementValue, MeasurementInterval,
    DurationValue, GrainValue, EmailValue, PhoneNumberValue, UrlValue,
    CreditCardNumberValue, SingleTime, IntervalTime,
]


# =============================================================================
# Entity
# =============================================================================

@dataclass(frozen=True)
class Entity:
    """A selected, resolved extraction."""
    body: str
    start: int
    end: int
    dim: DimensionKind
    latent: bool
    value: DimensionValue

    def to_dict(self) -> Dict[str, Any]:
        return {
            "body": self.body,
            "start": self.start,
            "end": self.end,
            "dim": self.dim.value,
            "latent": self.latent,
            "value": self.value.to_dict(),
        }
