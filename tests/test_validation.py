import pytest

from fitcore.errors import ValidationError
from fitcore.validation import (
    parse_id,
    parse_page,
    parse_plan,
    parse_workout_patch,
    parse_workout,
    parse_set_data,
)


def test_workout_requires_name():
    with pytest.raises(ValidationError) as exc:
        parse_workout({"description": "no name"})
    assert "name is required" in exc.value.details


def test_workout_parses_datetime_and_strips_name():
    fields = parse_workout({"name": "  Pull day ", "scheduled_at": "2026-10-20T07:30:00"})
    assert fields["name"] == "Pull day"
    assert fields["scheduled_at"].hour == 7


def test_workout_patch_is_partial():
    assert parse_workout_patch({"notes": "x"}) == {"notes": "x"}
    with pytest.raises(ValidationError):
        parse_workout_patch({"name": None})


def test_plan_requires_order_index_on_create_only():
    with pytest.raises(ValidationError):
        parse_plan({"planned_sets": 3})
    assert parse_plan({"planned_sets": 3}, partial=True) == {"planned_sets": 3}


def test_plan_collects_every_error():
    with pytest.raises(ValidationError) as exc:
        parse_plan({"order_index": -1, "planned_sets": 0, "planned_weight": "heavy"})
    assert len(exc.value.details) == 3


def test_plan_rejects_bool_and_fractional_ints():
    with pytest.raises(ValidationError):
        parse_plan({"order_index": True})
    with pytest.raises(ValidationError):
        parse_plan({"order_index": 1.5})


def test_set_rpe_range():
    assert parse_set_data({"set_number": 1, "rpe_score": 10})["rpe_score"] == 10
    for bad in (0, 11):
        with pytest.raises(ValidationError):
            parse_set_data({"set_number": 1, "rpe_score": bad})


def test_set_requires_positive_set_number():
    with pytest.raises(ValidationError):
        parse_set_data({"actual_reps": 5})
    with pytest.raises(ValidationError):
        parse_set_data({"set_number": 0})


def test_body_must_be_object():
    with pytest.raises(ValidationError):
        parse_set_data(["set_number", 1])


@pytest.mark.parametrize("value", ["abc", "0", "-3", "5.9", 5.9, float("inf"), None, True])
def test_malformed_ids(value):
    with pytest.raises(ValidationError):
        parse_id(value)


def test_parse_page_bounds():
    assert parse_page({}, 20, 100) == (1, 20)
    assert parse_page({"page": "2", "size": "5"}, 20, 100) == (2, 5)
    with pytest.raises(ValidationError):
        parse_page({"size": "500"}, 20, 100)


def test_whole_float_id_is_accepted():
    assert parse_id(5.0) == 5
    assert parse_id("12") == 12
