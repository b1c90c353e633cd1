import math

import pytest

from vrp.data import copy_loads, make_load
from vrp.solver import UnroutableLoadError, build_schedules, can_pickup, nearest_candidates


def make_detour_loads():
    # Load 1 leaves the driver at (20,0) where load 2 is nearest but no longer fits a 100 shift.
    return [
        make_load(1, (0.0, 5.0), (20.0, 0.0)),
        make_load(2, (20.0, 0.0), (50.0, 0.0)),
        make_load(3, (10.0, 0.0), (0.0, 0.0)),
    ]


def test_two_chained_loads_share_one_driver():
    loads = [make_load(1, (0.0, 0.0), (10.0, 0.0)), make_load(2, (10.0, 0.0), (20.0, 0.0))]
    assert build_schedules(loads, max_drive_time=100.0) == [[1, 2]]
    assert all(ld.delivered for ld in loads)


def test_empty_input_yields_no_schedules():
    assert build_schedules([]) == []


def test_load_longer_than_shift_is_rejected():
    loads = [make_load(1, (0.0, 0.0), (10.0, 0.0))]
    with pytest.raises(UnroutableLoadError) as excinfo:
        build_schedules(loads, max_drive_time=5.0)
    assert excinfo.value.load_numbers == [1]
    assert not loads[0].delivered


def test_non_finite_load_is_rejected_not_looped():
    loads = [make_load(1, (float("nan"), 0.0), (1.0, 0.0)), make_load(2, (1.0, 0.0), (2.0, 0.0))]
    with pytest.raises(UnroutableLoadError) as excinfo:
        build_schedules(loads)
    assert excinfo.value.load_numbers == [1]


def test_can_pickup_reserves_return_to_origin():
    load = make_load(1, (10.0, 0.0), (20.0, 0.0))
    # 10 to the pickup, 10 to deliver, 20 back.
    assert can_pickup((0.0, 0.0), 0.0, load, 40.0)
    assert not can_pickup((0.0, 0.0), 0.0, load, 39.999)
    assert can_pickup((10.0, 0.0), 30.0, load, 60.0)
    assert not can_pickup((10.0, 0.0), 30.1, load, 60.0)


def test_first_feasible_skips_nearer_load_that_no_longer_fits():
    assert build_schedules(make_detour_loads(), max_drive_time=100.0) == [[1, 3], [2]]


def test_nearest_only_ends_schedule_at_first_misfit():
    schedules = build_schedules(make_detour_loads(), max_drive_time=100.0, policy="nearest_only")
    assert schedules == [[1], [3], [2]]


def test_unknown_policy_is_rejected():
    with pytest.raises(ValueError):
        build_schedules(make_detour_loads(), policy="random")


def test_equal_distance_ties_go_to_lowest_load_number():
    loads = [make_load(7, (0.0, 10.0), (0.0, 10.0)), make_load(4, (-10.0, 0.0), (-10.0, 0.0))]
    assert [ld.load_number for ld in nearest_candidates((0.0, 0.0), loads)] == [4, 7]
    assert build_schedules(loads) == [[4, 7]]


def test_far_apart_loads_need_separate_drivers():
    loads = [make_load(2, (0.0, 40.0), (0.0, 40.0)), make_load(1, (40.0, 0.0), (40.0, 0.0))]
    assert build_schedules(loads, max_drive_time=100.0) == [[1], [2]]


def test_already_delivered_loads_are_not_scheduled_again():
    loads = [make_load(1, (0.0, 0.0), (10.0, 0.0)), make_load(2, (10.0, 0.0), (20.0, 0.0))]
    loads[0].delivered = True
    assert build_schedules(loads, max_drive_time=100.0) == [[2]]


def test_custom_origin_moves_every_driver_start():
    origin = (100.0, 100.0)
    loads = [
        make_load(1, (0.0, 0.0), (1.0, 0.0), origin=origin),
        make_load(2, (99.0, 100.0), (100.0, 100.0), origin=origin),
    ]
    assert build_schedules(loads, origin=origin)[0][0] == 2
    assert math.isclose(loads[1].distance_to_origin, 0.0)


def test_loads_built_for_another_origin_are_rejected():
    # Built for (0,0): the reserved return would be 0 although the real return to (100,0) is 100.
    loads = [make_load(1, (100.0, 0.0), (0.0, 0.0))]
    with pytest.raises(ValueError, match="different origin"):
        build_schedules(loads, origin=(100.0, 0.0), max_drive_time=150.0)
    assert not loads[0].delivered


def test_rebased_loads_reserve_return_to_new_origin():
    loads = copy_loads([make_load(1, (100.0, 0.0), (0.0, 0.0))], origin=(100, 0))
    assert loads[0].distance_to_origin == 100.0
    with pytest.raises(UnroutableLoadError):
        build_schedules(loads, origin=(100, 0), max_drive_time=150.0)
    assert build_schedules(loads, origin=(100, 0), max_drive_time=200.0) == [[1]]
