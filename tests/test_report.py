"""Tests for schedule records, CSV output and timeline items."""

import csv
import json
from datetime import date
from io import StringIO

from devtimeline.models import Leave, OnCall
from devtimeline.report import (
    CSV_HEADER,
    ScheduleRecord,
    TimelineItem,
    build_records,
    build_timeline,
    timeline_to_json,
    write_records_csv,
)
from devtimeline.scheduler import SchedulingConfig

MONDAY = date(2025, 1, 6)
TUESDAY = date(2025, 1, 7)


def test_records_list_calendars_before_tasks(make_task, make_dev, run_schedule):
    oncall = OnCall("bob", date(2025, 1, 13), date(2025, 1, 17))
    leave = Leave("carol", MONDAY, date(2025, 1, 8))

    result = run_schedule(
        [make_task("T", effort=2)], [make_dev("alice")], oncalls=[oncall], leaves=[leave]
    )
    records = build_records(result)

    assert records == [
        ScheduleRecord("On-Call Duty", date(2025, 1, 13), date(2025, 1, 17), "bob", 4.0),
        ScheduleRecord("Leave", MONDAY, date(2025, 1, 8), "carol", 2.0),
        ScheduleRecord("T", MONDAY, TUESDAY, "alice", 1.0),
    ]


def test_one_record_per_developer_in_join_order(make_task, make_dev, run_schedule):
    result = run_schedule(
        [make_task("T", parallel_factor=2, effort=4)], [make_dev("alice"), make_dev("bob")]
    )

    records = build_records(result)

    assert [(r.label, r.developer) for r in records] == [("T", "alice"), ("T", "bob")]


def test_single_day_task_has_zero_duration(make_task, make_dev, run_schedule):
    result = run_schedule([make_task("T", effort=1)], [make_dev("alice")])

    (record,) = build_records(result)

    assert record.start_date == record.end_date == MONDAY
    assert record.to_row() == ["T", "2025-01-06", "2025-01-06", "alice", "0.00"]


def test_incomplete_tasks_are_left_out_of_records(make_task, make_dev, run_schedule):
    config = SchedulingConfig(max_run_iterations=1)

    result = run_schedule([make_task("T", effort=5)], [make_dev("alice")], config=config)

    assert not result.completed
    assert build_records(result) == []
    # The timeline still shows the projected span
    (item,) = build_timeline(result)
    assert item.end == "2025-01-10"


def test_write_records_csv_to_stream():
    records = [ScheduleRecord("Billing", date(2025, 1, 13), date(2025, 1, 21), "alice", 8.0)]
    output = StringIO()

    write_records_csv(records, output)

    rows = list(csv.reader(StringIO(output.getvalue())))
    assert rows == [
        CSV_HEADER,
        ["Billing", "2025-01-13", "2025-01-21", "alice", "8.00"],
    ]


def test_write_records_csv_to_file(tmp_path):
    path = tmp_path / "schedule.csv"

    write_records_csv([ScheduleRecord("Leave", MONDAY, TUESDAY, "carol", 1.0)], path)

    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines == [
        "Task,Start Date,End Date,Assigned Developers,Effort Per Developer",
        "Leave,2025-01-06,2025-01-07,carol,1.00",
    ]


def test_timeline_items(make_task, make_dev, run_schedule):
    oncalls = [OnCall("bob", date(2025, 1, 13), date(2025, 1, 17))]
    leaves = [Leave("bob", date(2025, 2, 3), date(2025, 2, 4))]

    result = run_schedule(
        [make_task("Auth", effort=2)],
        [make_dev("alice"), make_dev("bob")],
        oncalls=oncalls,
        leaves=leaves,
    )
    items = build_timeline(result)

    assert [item.id for item in items] == ["task_Auth_alice", "oncall_0", "leave_0"]
    assert items[0].content == "Task: Auth (Assigned to: alice)"
    assert (items[0].start, items[0].end) == ("2025-01-06", "2025-01-07")
    assert items[1].content == "On-call: bob"
    assert items[2].content == "Leave: bob"


def test_timeline_json():
    items = [TimelineItem("oncall_0", "2025-01-13", "2025-01-17", "On-call: bob")]

    assert json.loads(timeline_to_json(items)) == [
        {"id": "oncall_0", "start": "2025-01-13", "end": "2025-01-17", "content": "On-call: bob"}
    ]
