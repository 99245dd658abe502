"""Property description model used as valuation input."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from prospect_engine.exceptions import ValidationError

# Form payloads from the marketplace UI use camelCase keys
_FIELD_ALIASES = {
    "propertySize": "size_sqm",
    "size": "size_sqm",
    "averageRoomSize": "average_room_size",
    "currentUsage": "current_usage",
    "usage": "current_usage",
    "useCoordinates": "use_coordinates",
}


@dataclass(frozen=True)
class PropertyAttributes:
    """Input description of a property.

    Construction validates every numeric field and raises
    ``ValidationError`` instead of silently defaulting. Amenities are
    deduplicated, keeping first-seen order.
    """

    size_sqm: float
    current_usage: str = "Other"
    location: str = ""
    stories: int | None = None
    rooms: int = 0
    average_room_size: float | None = None
    amenities: tuple[str, ...] = ()
    use_coordinates: bool = False

    def __post_init__(self) -> None:
        _check_number("size_sqm", self.size_sqm, minimum=0)
        if self.stories is not None:
            _check_integer("stories", self.stories, minimum=1)
        _check_integer("rooms", self.rooms, minimum=0)
        if self.average_room_size is not None:
            _check_number("average_room_size", self.average_room_size, minimum=0)
            if self.average_room_size == 0:
                raise ValidationError("average_room_size must be positive when given")
        if not isinstance(self.current_usage, str):
            raise ValidationError("current_usage must be a string")
        if not isinstance(self.location, str):
            raise ValidationError("location must be a string")
        if isinstance(self.amenities, str):
            raise ValidationError("amenities must be a sequence of names, not a string")

        seen: dict[str, None] = {}
        for amenity in self.amenities:
            if not isinstance(amenity, str):
                raise ValidationError(f"amenity names must be strings, got {amenity!r}")
            seen.setdefault(amenity.strip(), None)
        object.__setattr__(self, "amenities", tuple(a for a in seen if a))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PropertyAttributes:
        """Build attributes from a loosely typed form payload.

        Numeric strings such as ``"150"`` are accepted; empty strings and
        ``None`` mean "not given" for optional fields.

        Parameters
        ----------
        data : dict[str, Any]
            Payload with snake_case or camelCase keys.

        Returns
        -------
        PropertyAttributes
            Validated attributes.

        Raises
        ------
        ValidationError
            If a required field is missing or any numeric field is malformed.
        """
        normalized = {_FIELD_ALIASES.get(key, key): value for key, value in data.items()}

        size = _parse_number("size_sqm", normalized.get("size_sqm"))
        if size is None:
            raise ValidationError("size_sqm is required")

        stories = _parse_number("stories", normalized.get("stories"), integer=True)
        rooms = _parse_number("rooms", normalized.get("rooms"), integer=True)
        average_room_size = _parse_number("average_room_size", normalized.get("average_room_size"))

        return cls(
            size_sqm=size,
            current_usage=normalized.get("current_usage") or "Other",
            location=normalized.get("location") or "",
            stories=stories,
            rooms=rooms or 0,
            average_room_size=average_room_size,
            amenities=tuple(normalized.get("amenities") or ()),
            use_coordinates=bool(normalized.get("use_coordinates", False)),
        )


def _check_number(name: str, value: Any, minimum: float) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise ValidationError(f"{name} must be finite, got {value!r}")
    if value < minimum:
        raise ValidationError(f"{name} must be >= {minimum}, got {value!r}")


def _check_integer(name: str, value: Any, minimum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise ValidationError(f"{name} must be >= {minimum}, got {value!r}")


def _parse_number(name: str, raw: Any, integer: bool = False) -> float | int | None:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return None
    if isinstance(raw, bool):
        raise ValidationError(f"{name} must be a number, got {raw!r}")
    try:
        value = float(raw)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{name} must be a number, got {raw!r}") from exc
    if not math.isfinite(value):
        raise ValidationError(f"{name} must be finite, got {raw!r}")
    if integer:
        if not value.is_integer():
            raise ValidationError(f"{name} must be a whole number, got {raw!r}")
        return int(value)
    return value
