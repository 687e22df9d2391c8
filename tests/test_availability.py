"""Tests for developer availability checks."""

from datetime import date

from devtimeline.models import Leave, OnCall
from devtimeline.scheduler import AvailabilityOracle

MONDAY = date(2025, 1, 6)
TUESDAY = date(2025, 1, 7)
WEDNESDAY = date(2025, 1, 8)


def test_skill_mismatch_is_unavailable(make_task, make_dev):
    dev = make_dev("carol", task_types=["QA"])
    oracle = AvailabilityOracle([dev])

    assert not oracle.is_available(dev, make_task("T", task_type="Backend"), MONDAY)
    assert oracle.is_available(dev, make_task("T", task_type="QA"), MONDAY)


def test_reserved_until_next_free_time(make_task, make_dev):
    dev = make_dev("alice")
    dev.next_free_time = WEDNESDAY
    oracle = AvailabilityOracle([dev])
    task = make_task("T")

    assert not oracle.is_available(dev, task, TUESDAY)
    # Free again on the reservation's last day
    assert oracle.is_available(dev, task, WEDNESDAY)


def test_on_call_bounds_are_inclusive(make_task, make_dev):
    dev = make_dev("bob")
    oracle = AvailabilityOracle([dev], oncalls=[OnCall("bob", MONDAY, TUESDAY)])
    task = make_task("T")

    assert oracle.is_on_call(dev, MONDAY)
    assert oracle.is_on_call(dev, TUESDAY)
    assert not oracle.is_available(dev, task, TUESDAY)
    assert oracle.is_available(dev, task, WEDNESDAY)
    assert oracle.is_available(dev, task, date(2025, 1, 3))


def test_leave_blocks_only_its_developer(make_task, make_dev):
    alice = make_dev("alice")
    bob = make_dev("bob")
    oracle = AvailabilityOracle([alice, bob], leaves=[Leave("alice", MONDAY, MONDAY)])

    assert oracle.is_on_leave(alice, MONDAY)
    assert not oracle.is_on_leave(bob, MONDAY)
    assert oracle.is_blocked(alice, MONDAY)
    assert not oracle.is_blocked(alice, TUESDAY)


def test_zero_date_period_never_blocks(make_dev):
    dev = make_dev("alice")
    oracle = AvailabilityOracle([dev], leaves=[Leave("alice", date.min, date.min)])

    assert not oracle.is_blocked(dev, MONDAY)


def test_find_available_keeps_input_order(make_task, make_dev):
    devs = [make_dev("zoe"), make_dev("adam"), make_dev("mia", task_types=["QA"])]
    oracle = AvailabilityOracle(devs)

    available = oracle.find_available(make_task("T"), MONDAY)

    assert [dev.name for dev in available] == ["zoe", "adam"]


def test_find_available_excludes_given_developers(make_task, make_dev):
    zoe = make_dev("zoe")
    adam = make_dev("adam")
    oracle = AvailabilityOracle([zoe, adam])

    available = oracle.find_available(make_task("T"), MONDAY, exclude=[zoe])

    assert available == [adam]


def test_has_matching_developer(make_task, make_dev):
    oracle = AvailabilityOracle([make_dev("alice", task_types=["Backend", "Frontend"])])

    assert oracle.has_matching_developer(make_task("T", task_type="Frontend"))
    assert not oracle.has_matching_developer(make_task("T", task_type="QA"))
