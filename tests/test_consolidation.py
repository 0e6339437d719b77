import pytest

from wq_forecast.consolidation import consolidate
from wq_forecast.utils.models import Measurement


def test_single_time_group_is_averaged():
    entries = [
        Measurement(time=5.0, dissolved_oxygen=4.0, turbidity=1.0, ph=6.0),
        Measurement(time=5.0, dissolved_oxygen=6.0, turbidity=2.0, ph=7.0),
        Measurement(time=5.0, dissolved_oxygen=8.0, turbidity=6.0, ph=8.0),
    ]
    result = consolidate(entries)

    assert len(result) == 1
    assert result[0].time == 5.0
    assert result[0].dissolved_oxygen == pytest.approx(6.0)
    assert result[0].turbidity == pytest.approx(3.0)
    assert result[0].ph == pytest.approx(7.0)


def test_output_sorted_strictly_ascending():
    entries = [
        Measurement(time=t, dissolved_oxygen=float(i))
        for i, t in enumerate([30.0, 10.0, 20.0, 10.0, 0.0, 30.0])
    ]
    times = [m.time for m in consolidate(entries)]

    assert times == [0.0, 10.0, 20.0, 30.0]
    assert all(a < b for a, b in zip(times, times[1:]))


def test_singleton_partition_unchanged():
    entry = Measurement(time=1.5, dissolved_oxygen=7.123456789, turbidity=0.3, ph=7.77)
    assert consolidate([entry]) == [entry]


def test_partial_fields_averaged_over_members_that_have_them():
    entries = [
        Measurement(time=1.0, dissolved_oxygen=6.0, turbidity=2.0),
        Measurement(time=1.0, dissolved_oxygen=8.0, turbidity=None),
    ]
    result = consolidate(entries)

    assert result[0].dissolved_oxygen == pytest.approx(7.0)
    assert result[0].turbidity == pytest.approx(2.0)
    assert result[0].ph is None


def test_no_tolerance_between_close_times():
    entries = [
        Measurement(time=1.0, dissolved_oxygen=6.0),
        Measurement(time=1.0000001, dissolved_oxygen=8.0),
    ]
    assert len(consolidate(entries)) == 2


def test_consolidation_is_idempotent():
    entries = [
        Measurement(time=2.0, dissolved_oxygen=7.1, turbidity=1.1, ph=7.0),
        Measurement(time=0.0, dissolved_oxygen=8.3, turbidity=0.9, ph=7.2),
        Measurement(time=2.0, dissolved_oxygen=6.7, turbidity=1.7, ph=6.8),
    ]
    once = consolidate(entries)
    assert consolidate(once) == once


def test_empty_input():
    assert consolidate([]) == []
