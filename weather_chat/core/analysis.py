"""
Weather Analysis — Input Contract

Defines the immutable record handed over by the analytics layer when a
conversation starts, the canonical condition keys, and the static threshold
reference that explains what each condition means.
"""
from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from numbers import Real
from types import MappingProxyType
from typing import Any, Dict, List

from weather_chat.utils import InvalidInputError


# Canonical order: drives tie-breaking and rendering everywhere
CONDITION_KEYS = (
    "veryHot",
    "veryCold",
    "veryWindy",
    "veryWet",
    "veryUncomfortable",
)

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def condition_label(key: str) -> str:
    """
    Display label for a condition key.

    ``veryHot`` -> "Very Hot", ``very-hot`` -> "Very Hot". Applying it to a
    label returns the label unchanged. Display only, never parsed back.
    """
    spaced = _CAMEL_BOUNDARY.sub(" ", key).replace("-", " ").replace("_", " ")
    return " ".join(word[:1].upper() + word[1:] for word in spaced.split())


def canonical_order(keys) -> List[str]:
    """Known condition keys in canonical order, unknown keys after them alphabetically."""
    known = [k for k in CONDITION_KEYS if k in keys]
    extra = sorted(k for k in keys if k not in CONDITION_KEYS)
    return known + extra


@dataclass(frozen=True)
class ConditionThreshold:
    """One row of the threshold reference table."""
    key: str
    title: str
    condition: str       # e.g. "Maximum Temperature ≥ 30°C (86°F)"
    description: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "key": self.key,
            "title": self.title,
            "condition": self.condition,
            "description": self.description,
        }


THRESHOLDS: Dict[str, ConditionThreshold] = {
    "veryHot": ConditionThreshold(
        key="veryHot",
        title="Very Hot",
        condition="Maximum Temperature ≥ 30°C (86°F)",
        description="High heat conditions that may cause discomfort and health risks.",
    ),
    "veryCold": ConditionThreshold(
        key="veryCold",
        title="Very Cold",
        condition="Minimum Temperature ≤ 10°C (50°F)",
        description="Cold conditions that require warm clothing and precautions.",
    ),
    "veryWindy": ConditionThreshold(
        key="veryWindy",
        title="Very Windy",
        condition="Wind Speed ≥ 8 m/s (18 mph)",
        description="Strong winds that may affect outdoor activities and structures.",
    ),
    "veryWet": ConditionThreshold(
        key="veryWet",
        title="Very Wet",
        condition="Precipitation ≥ 10 mm (0.4 inches)",
        description="Significant rainfall that may cause wet conditions.",
    ),
    "veryUncomfortable": ConditionThreshold(
        key="veryUncomfortable",
        title="Very Uncomfortable",
        condition="Temperature ≥ 28°C (82°F) AND Humidity ≥ 65%",
        description=(
            "High temperature combined with high humidity increases heat "
            "discomfort significantly."
        ),
    ),
}


@dataclass(frozen=True)
class WeatherAnalysis:
    """
    Historical weather-risk analysis for one location/date pair.

    Supplied once at conversation start and never mutated. Construction
    validates the contract and raises InvalidInputError on violation.
    """
    location: str
    coordinates: str
    date: str
    years_sampled: int
    probabilities: Mapping[str, float]
    counts: Mapping[str, int]

    def __post_init__(self):
        if not isinstance(self.location, str) or not self.location.strip():
            raise InvalidInputError("Location must be a non-empty string", field="location")

        if (
            isinstance(self.years_sampled, bool)
            or not isinstance(self.years_sampled, int)
            or self.years_sampled < 1
        ):
            raise InvalidInputError(
                f"years_sampled must be a positive integer, got {self.years_sampled!r}",
                field="years_sampled",
            )

        if not isinstance(self.date, str) or not self.date.strip():
            raise InvalidInputError("Date must be a non-empty string", field="date")

        if not isinstance(self.coordinates, str):
            raise InvalidInputError(
                f"Coordinates must be a string, got {type(self.coordinates).__name__}",
                field="coordinates",
            )

        for name in ("probabilities", "counts"):
            value = getattr(self, name)
            if not isinstance(value, Mapping):
                raise InvalidInputError(
                    f"{name} must be a mapping, got {type(value).__name__}",
                    field=name,
                )

        probabilities = dict(self.probabilities)
        counts = dict(self.counts)

        if not probabilities:
            raise InvalidInputError("Probability map is empty", field="probabilities")

        if set(probabilities) != set(CONDITION_KEYS):
            raise InvalidInputError(
                "Probability keys must be exactly the five condition keys",
                field="probabilities",
                details={
                    "missing": [k for k in CONDITION_KEYS if k not in probabilities],
                    "unexpected": sorted(str(k) for k in probabilities if k not in CONDITION_KEYS),
                },
            )

        if set(counts) != set(probabilities):
            raise InvalidInputError(
                "Count keys must match probability keys",
                field="counts",
                details={
                    "counts": sorted(map(str, counts)),
                    "probabilities": sorted(map(str, probabilities)),
                },
            )

        for key, value in probabilities.items():
            if isinstance(value, bool) or not isinstance(value, Real) or not 0.0 <= value <= 1.0:
                raise InvalidInputError(
                    f"Probability for {key} must be within [0, 1], got {value!r}",
                    field="probabilities",
                    details={"condition": key},
                )

        for key, value in counts.items():
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise InvalidInputError(
                    f"Count for {key} must be a non-negative integer, got {value!r}",
                    field="counts",
                    details={"condition": key},
                )

        # Freeze the maps so the record is immutable all the way down
        object.__setattr__(self, "probabilities", MappingProxyType(probabilities))
        object.__setattr__(self, "counts", MappingProxyType(counts))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WeatherAnalysis":
        """Build from the wire shape; accepts ``yearsSampled`` or ``years_sampled``."""
        if not isinstance(data, Mapping):
            raise InvalidInputError(
                f"Analysis must be a mapping, got {type(data).__name__}",
                field="analysis",
            )
        try:
            years = data["yearsSampled"] if "yearsSampled" in data else data["years_sampled"]
            return cls(
                location=data["location"],
                coordinates=data.get("coordinates", ""),
                date=data["date"],
                years_sampled=years,
                probabilities=data["probabilities"],
                counts=data.get("counts", {}),
            )
        except KeyError as e:
            raise InvalidInputError(f"Missing field: {e.args[0]}", field=str(e.args[0])) from e

    def to_dict(self) -> Dict[str, Any]:
        return {
            "location": self.location,
            "coordinates": self.coordinates,
            "date": self.date,
            "yearsSampled": self.years_sampled,
            "probabilities": dict(self.probabilities),
            "counts": dict(self.counts),
        }
