from datetime import datetime

from movie_pathways.domain.models import ScheduledShow
from movie_pathways.planner.transition import can_transition


def test_back_to_back_same_theater(make_show):
    a = make_show("a", "10:00", 120)
    b = make_show("b", "12:00", 90)

    result = can_transition(a, b, trailer_leeway_mins=0, travel_mins=30)

    assert result.ok
    assert result.travel_applied_mins == 0


def test_switching_theaters_costs_travel(make_show):
    a = make_show("a", "10:00", 120, theater="T1")
    b = make_show("b", "12:30", 90, theater="T2")

    result = can_transition(a, b, trailer_leeway_mins=0, travel_mins=30)

    assert result.ok
    assert result.travel_applied_mins == 30


def test_gap_shorter_than_travel_is_infeasible(make_show):
    a = make_show("a", "10:00", 120, theater="T1")
    b = make_show("b", "12:05", 90, theater="T2")

    result = can_transition(a, b, trailer_leeway_mins=0, travel_mins=15)

    assert not result.ok
    assert result.travel_applied_mins == 15


def test_leeway_lets_you_arrive_late(make_show):
    a = make_show("a", "10:00", 120, theater="T1")
    b = make_show("b", "12:05", 90, theater="T2")

    assert can_transition(a, b, trailer_leeway_mins=10, travel_mins=15).ok
    assert not can_transition(a, b, trailer_leeway_mins=9, travel_mins=15).ok


def test_backwards_is_infeasible(make_show):
    a = make_show("a", "12:00", 60)
    b = make_show("b", "10:00", 30)

    result = can_transition(a, b, trailer_leeway_mins=600, travel_mins=0)

    assert not result.ok
    assert result.travel_applied_mins == 0


def test_overlapping_shows_pass_when_deadline_holds(make_show):
    # A still runs when B is posted to start, in another theater.
    a = make_show("a", "10:00", 120, theater="T1")
    b = make_show("b", "11:50", 90, theater="T2")

    assert can_transition(a, b, trailer_leeway_mins=30, travel_mins=15).ok


def test_strict_mode_requires_previous_show_to_end(make_show):
    a = make_show("a", "10:00", 130)
    b = make_show("b", "12:00", 90)

    assert can_transition(a, b, trailer_leeway_mins=20, travel_mins=0).ok
    assert not can_transition(a, b, trailer_leeway_mins=20, travel_mins=0, strict=True).ok


def test_strict_mode_keeps_regular_transitions(make_show):
    a = make_show("a", "10:00", 120)
    b = make_show("b", "12:00", 90)

    assert can_transition(a, b, trailer_leeway_mins=0, travel_mins=0, strict=True).ok


def test_deadline_near_datetime_max():
    a = ScheduledShow("a", "m1", "T1", datetime(9999, 12, 31, 20, 0), datetime(9999, 12, 31, 21, 0))
    b = ScheduledShow("b", "m2", "T2", datetime(9999, 12, 31, 23, 30), datetime(9999, 12, 31, 23, 59))

    assert can_transition(a, b, trailer_leeway_mins=600, travel_mins=600).ok
    assert not can_transition(a, b, trailer_leeway_mins=0, travel_mins=151).ok
