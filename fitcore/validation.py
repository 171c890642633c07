# fitcore/validation.py
"""
Request payload parsing.

Every parser returns a plain dict of model field values and raises
ValidationError listing every bad field at once. Nothing here touches
the database.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from .errors import ValidationError

_MISSING = object()


class _Collector:
    def __init__(self, data: Optional[Dict[str, Any]]):
        if data is not None and not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        self.data = data or {}
        self.errors: List[str] = []
        self.out: Dict[str, Any] = {}

    def _raw(self, key):
        return self.data.get(key, _MISSING)

    def int_field(self, key, minimum=None, maximum=None, required=False):
        v = self._raw(key)
        if v is _MISSING or v is None:
            if required:
                self.errors.append(f"{key} is required")
            elif v is None:
                self.out[key] = None
            return
        # bools are ints in Python; reject them explicitly
        if isinstance(v, bool):
            self.errors.append(f"{key} must be an integer")
            return
        try:
            value = int(v)
        except (TypeError, ValueError, OverflowError):
            self.errors.append(f"{key} must be an integer")
            return
        if isinstance(v, float) and v != value:
            self.errors.append(f"{key} must be an integer")
            return
        if minimum is not None and value < minimum:
            self.errors.append(f"{key} must be at least {minimum}")
            return
        if maximum is not None and value > maximum:
            self.errors.append(f"{key} must be at most {maximum}")
            return
        self.out[key] = value

    def float_field(self, key, minimum=None):
        v = self._raw(key)
        if v is _MISSING:
            return
        if v is None:
            self.out[key] = None
            return
        if isinstance(v, bool):
            self.errors.append(f"{key} must be a number")
            return
        try:
            value = float(v)
        except (TypeError, ValueError):
            self.errors.append(f"{key} must be a number")
            return
        if minimum is not None and value < minimum:
            self.errors.append(f"{key} must be at least {minimum}")
            return
        self.out[key] = value

    def str_field(self, key, max_length=None, required=False):
        v = self._raw(key)
        if v is _MISSING or v is None:
            if required:
                self.errors.append(f"{key} is required")
            elif v is None:
                self.out[key] = None
            return
        if not isinstance(v, str):
            self.errors.append(f"{key} must be a string")
            return
        v = v.strip()
        if required and not v:
            self.errors.append(f"{key} is required")
            return
        if max_length is not None and len(v) > max_length:
            self.errors.append(f"{key} must be at most {max_length} characters")
            return
        self.out[key] = v

    def datetime_field(self, key):
        v = self._raw(key)
        if v is _MISSING:
            return
        if v is None:
            self.out[key] = None
            return
        try:
            self.out[key] = datetime.fromisoformat(v)
        except (TypeError, ValueError):
            self.errors.append(f"{key} must be an ISO-8601 datetime")

    def result(self, what: str) -> Dict[str, Any]:
        if self.errors:
            raise ValidationError(f"Invalid {what}", self.errors)
        return self.out


def parse_id(value: Any, what: str = "id") -> int:
    """Identifiers are positive integers."""
    if isinstance(value, bool):
        raise ValidationError(f"Malformed {what}")
    try:
        parsed = int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f"Malformed {what}")
    if isinstance(value, float) and value != parsed:
        raise ValidationError(f"Malformed {what}")
    if parsed < 1:
        raise ValidationError(f"Malformed {what}")
    return parsed


def _session_fields(c: _Collector, partial: bool) -> None:
    c.str_field("name", max_length=100, required=not partial)
    c.str_field("description")
    c.str_field("notes")
    c.datetime_field("scheduled_at")
    c.int_field("calories_burned", minimum=0)
    c.int_field("trainer_id", minimum=1)


def parse_workout(data) -> Dict[str, Any]:
    c = _Collector(data)
    _session_fields(c, partial=False)
    return c.result("workout")


def parse_workout_patch(data) -> Dict[str, Any]:
    c = _Collector(data)
    _session_fields(c, partial=True)
    if "name" in c.out and c.out["name"] is None:
        c.errors.append("name cannot be null")
    return c.result("workout")


def parse_plan(data, partial: bool = False) -> Dict[str, Any]:
    """
    Planned targets for a workout exercise.

    order_index is required on create; every field is optional on patch.
    """
    c = _Collector(data)
    c.int_field("order_index", minimum=0, required=not partial)
    c.int_field("planned_sets", minimum=1)
    c.int_field("planned_reps", minimum=1)
    c.float_field("planned_weight", minimum=0)
    c.int_field("planned_duration_seconds", minimum=0)
    c.float_field("planned_distance_meters", minimum=0)
    c.int_field("rest_time_seconds", minimum=0)
    c.str_field("notes")
    out = c.result("exercise plan")
    if partial and "order_index" in out and out["order_index"] is None:
        raise ValidationError("Invalid exercise plan", ["order_index cannot be null"])
    return out


def parse_set_data(data) -> Dict[str, Any]:
    c = _Collector(data)
    c.int_field("set_number", minimum=1, required=True)
    c.int_field("actual_reps", minimum=0)
    c.float_field("actual_weight", minimum=0)
    c.int_field("actual_duration_seconds", minimum=0)
    c.float_field("actual_distance_meters", minimum=0)
    c.int_field("rpe_score", minimum=1, maximum=10)
    c.int_field("rest_time_seconds", minimum=0)
    c.str_field("notes")
    c.datetime_field("started_at")
    return c.result("set")


def parse_page(args, default_size: int, max_size: int) -> Tuple[int, int]:
    c = _Collector(
        {
            "page": args.get("page", 1),
            "size": args.get("size", default_size),
        }
    )
    c.int_field("page", minimum=1)
    c.int_field("size", minimum=1, maximum=max_size)
    out = c.result("paging parameters")
    return out["page"], out["size"]
