"""Tests for the services that rebuild derived tables from runs."""
from sqlalchemy.exc import OperationalError

from db.app_details_repo import AppDetailsRepo
from db.gpu_repo import GpuRepo
from db.libraries_repo import LibrariesRepo
from db.performance_results_repo import PerformanceResultsRepo
from db.run_more_details_repo import RunMoreDetailsRepo
from db.runs_repo import RawRun
from db.system_info_repo import SystemInfoRepo
from services import (
    REDERIVATION_SERVICES,
    ProcessAppDetailsService,
    ProcessGpuService,
    ProcessLibrariesService,
    ProcessPerformanceService,
    ProcessRunDetailsService,
    ProcessSystemInfoService,
)

FULL_SYSTEM = "arch:x86_64 cpu:Intel Core i7 system:Linux release:5.15.0 python:3.9.0"


def _rows(db, repo, *columns):
    with db.session_scope() as session:
        return [tuple(getattr(obj, c) for c in columns) for obj in repo.list_all(session)]


class FailingRunsRepo:
    def fetch_all_raw_runs(self, session):
        raise OperationalError("SELECT", {}, Exception("db down"))


def test_app_details_end_to_end(db, add_runs):
    ids = add_runs(
        {"info": "app:foo updated:2024-01-01 hash:abc url:http://x"},
        {"info": "app:bar"},
        {"info": None},
    )

    report = ProcessAppDetailsService(db).run()

    assert report.success
    assert report.total_runs == 3
    assert report.inserted_rows == 2
    assert report.error_rows == 1
    assert report.error_messages == ["Run 3: Missing info data"]
    assert _rows(db, AppDetailsRepo(), "run_id", "app_name", "updated", "hash", "url") == [
        (ids[0], "foo", "2024-01-01", "abc", "http://x"),
        (ids[1], "bar", None, None, None),
    ]


def test_system_info_requires_all_fields(db, add_runs):
    ids = add_runs({"system_info": FULL_SYSTEM}, {"system_info": "arch:x86_64 cpu:Intel"}, {"system_info": None})

    report = ProcessSystemInfoService(db).run()

    assert report.success
    assert report.inserted_rows == 1
    assert report.error_rows == 0
    assert report.skipped_rows == 2
    assert report.error_messages == []
    assert _rows(db, SystemInfoRepo(), "run_id", "cpu") == [(ids[0], "Intel Core i7")]


def test_rebuild_is_idempotent(db, add_runs):
    add_runs({"system_info": FULL_SYSTEM}, {"system_info": FULL_SYSTEM.replace("Linux", "Windows")})
    columns = ("id", "run_id", "arch", "cpu", "system", "release", "python")

    ProcessSystemInfoService(db).run()
    first = _rows(db, SystemInfoRepo(), *columns)
    ProcessSystemInfoService(db).run()
    second = _rows(db, SystemInfoRepo(), *columns)

    # ids are reassigned on each rebuild; the content must not change
    assert [row[1:] for row in first] == [row[1:] for row in second]
    assert len(second) == 2


def test_rebuild_replaces_previous_contents(db, add_runs):
    add_runs({"info": "app:one"})
    ProcessAppDetailsService(db).run()
    ProcessAppDetailsService(db).run()

    assert _rows(db, AppDetailsRepo(), "app_name") == [("one",)]


def test_performance_rows_for_every_run(db, add_runs):
    ids = add_runs({"vram_usage": "1.5/invalid/2.1"}, {"vram_usage": None})

    report = ProcessPerformanceService(db).run()

    assert report.inserted_rows == 2
    rows = _rows(db, PerformanceResultsRepo(), "run_id", "its", "avg_its")
    assert rows[0][:2] == (ids[0], "1.5/invalid/2.1")
    assert abs(rows[0][2] - 1.8) < 1e-9
    assert rows[1] == (ids[1], None, None)


def test_libraries_copies_raw_xformers(db, add_runs):
    ids = add_runs(
        {"model_info": "torch:2.0.1 autocast half xformers:0.0.20", "xformers": "0.0.22"},
        {"model_info": "torch:2.0.1", "xformers": None},
        {"model_info": None, "xformers": "0.0.22"},
    )

    report = ProcessLibrariesService(db).run()

    assert report.inserted_rows == 1
    assert report.error_messages == ["Run 2: Missing xformers data", "Run 3: Missing model_info data"]
    assert _rows(db, LibrariesRepo(), "run_id", "torch", "xformers", "xformers1") == [
        (ids[0], "2.0.1 autocast half", "0.0.20", "0.0.22")
    ]


def test_gpu_rows_start_unclassified(db, add_runs):
    add_runs({"device_info": "device:NVIDIA 8GB driver:470.82.01 NVIDIA GeForce RTX 3080"}, {"device_info": None})

    report = ProcessGpuService(db).run()

    assert (report.inserted_rows, report.error_rows) == (1, 1)
    assert _rows(db, GpuRepo(), "device", "driver", "gpu_chip", "brand", "is_laptop") == [
        ("NVIDIA 8GB", "470.82.01", "NVIDIA GeForce RTX 3080", None, None)
    ]


def test_run_details_projects_fields(db, add_runs):
    ids = add_runs({"timestamp": "2024-01-01", "model_name": "sd15", "user": "u", "notes": "n"})

    report = ProcessRunDetailsService(db).run()

    assert report.inserted_rows == 1
    assert _rows(db, RunMoreDetailsRepo(), "run_id", "timestamp", "model_name", "user", "notes", "model_map_id") == [
        (ids[0], "2024-01-01", "sd15", "u", "n", None)
    ]


def test_run_without_id_is_skipped(db):
    service = ProcessAppDetailsService(db)

    result = service.transform([RawRun(id=None, info="app:x"), RawRun(id=7, info="app:y")])

    assert result.errors == ["Run 1: Invalid run data: missing id"]
    assert [row["app_name"] for row in result.rows] == ["y"]


def test_failed_insert_rolls_back_clear(db, add_runs):
    add_runs({"info": "app:keep"}, {"info": "app:other"})
    ProcessAppDetailsService(db).run()

    class BrokenService(ProcessAppDetailsService):
        def build_row(self, run):
            row = super().build_row(run)
            if row["app_name"] == "other":
                row["run_id"] = 9999  # no such run
            return row

    report = BrokenService(db).run()

    assert not report.success
    assert report.inserted_rows == 0
    assert report.error_messages[-1].startswith("Transaction failed:")
    assert _rows(db, AppDetailsRepo(), "app_name") == [("keep",), ("other",)]


def test_failed_insert_on_empty_table_leaves_no_rows(db, add_runs):
    add_runs({"info": "app:a"}, {"info": "app:b"})

    class BrokenService(ProcessAppDetailsService):
        def build_row(self, run):
            row = super().build_row(run)
            if row["app_name"] == "b":
                row["run_id"] = 9999
            return row

    report = BrokenService(db).run()

    assert not report.success
    assert _rows(db, AppDetailsRepo(), "id") == []


def test_fetch_failure_is_reported(db):
    report = ProcessAppDetailsService(db, runs_repo=FailingRunsRepo()).run()

    assert not report.success
    assert report.total_rows == 0
    assert "db down" in report.error_messages[0]


def test_registry_covers_every_table():
    assert list(REDERIVATION_SERVICES) == [
        "performanceResult",
        "AppDetails",
        "SystemInfo",
        "Libraries",
        "GPU",
        "RunMoreDetails",
    ]
