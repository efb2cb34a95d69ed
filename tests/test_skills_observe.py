import math

import pytest

from lineupcoach.models import KnownBoth, KnownCurrent, KnownMax, Unknown, observe, observe_pair


def test_plain_numbers_are_current_levels():
    reading = observe("6")

    assert isinstance(reading, KnownCurrent)
    assert reading.current == 6
    assert reading.max is None


def test_provider_reading_respects_availability():
    available = observe({"#text": "5", "@_IsAvailable": "True", "@_IsMaxReached": "False"})
    hidden = observe({"#text": "5", "@_IsAvailable": "False"})

    assert isinstance(available, KnownCurrent)
    assert available.current == 5
    assert isinstance(hidden, Unknown)


def test_equal_current_and_max_is_exhausted():
    reading = observe_pair(3, 3)

    assert isinstance(reading, KnownBoth)
    assert reading.exhausted


def test_max_reached_flag_pins_ceiling_to_current():
    reading = observe_pair({"#text": 4, "@_IsAvailable": "True", "@_IsMaxReached": "True"}, None)

    assert isinstance(reading, KnownBoth)
    assert (reading.current, reading.max) == (4, 4)
    assert reading.exhausted


def test_ceiling_only_reading():
    reading = observe_pair(None, 7)

    assert isinstance(reading, KnownMax)
    assert reading.max == 7
    assert reading.current is None
    assert not reading.exhausted


def test_mapping_reading():
    reading = observe({"current": 2, "max": 5})

    assert isinstance(reading, KnownBoth)
    assert (reading.current, reading.max) == (2, 5)
    assert not reading.exhausted


@pytest.mark.parametrize("raw", [None, "", "abc", -1, math.nan, math.inf, True, (1, 2, 3), {"#text": None}])
def test_malformed_readings_become_unknown(raw):
    reading = observe(raw)

    assert isinstance(reading, Unknown)
    assert not reading.exhausted


def test_existing_observation_passes_through():
    reading = KnownMax(value=6)

    assert observe(reading) is reading
