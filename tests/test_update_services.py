"""Tests for the per-row GPU and ModelMap update passes."""
from sqlalchemy.exc import OperationalError

from db.gpu_repo import GpuRepo
from db.model_map_repo import ModelMapRepo
from db.run_more_details_repo import RunMoreDetailsRepo
from services.update_gpu_brands import UpdateGpuBrandsService
from services.update_gpu_laptop_info import UpdateGpuLaptopInfoService
from services.update_run_model_map import UpdateRunModelMapService


class FlakyGpuRepo(GpuRepo):
    """Fails the update of one row id."""

    def __init__(self, failing_id):
        self.failing_id = failing_id

    def update(self, session, row_id, **values):
        if row_id == self.failing_id:
            raise OperationalError("UPDATE", {}, Exception("locked"))
        return super().update(session, row_id, **values)


def _add_gpus(db, *devices):
    with db.session_scope() as session:
        return [gpu.id for gpu in GpuRepo().bulk_insert(session, [{"device": d} for d in devices])]


def _add_details(db, *model_names):
    with db.session_scope() as session:
        rows = RunMoreDetailsRepo().bulk_insert(session, [{"model_name": n} for n in model_names])
        return [row.id for row in rows]


def _gpu_column(db, column):
    with db.session_scope() as session:
        return [getattr(gpu, column) for gpu in GpuRepo().list_all(session)]


def test_update_gpu_brands_classifies_and_counts(db):
    _add_gpus(db, "NVIDIA GeForce RTX 3080", "AMD Radeon RX 6800", "Intel Arc A770", "Apple M2", "Tesla T4")

    report = UpdateGpuBrandsService(db).run()

    assert report.success
    assert report.total_updates == 5
    assert [(c.brand_name, c.count) for c in report.update_counts_by_brand] == [
        ("Nvidia", 2),
        ("Amd", 1),
        ("Intel", 1),
        ("Unknown", 1),
    ]
    assert _gpu_column(db, "brand") == ["nvidia", "amd", "intel", "unknown", "nvidia"]


def test_update_gpu_brands_without_rows(db):
    report = UpdateGpuBrandsService(db).run()

    assert report.success
    assert report.message == "No GPU data found to update"
    assert all(c.count == 0 for c in report.update_counts_by_brand)


def test_update_gpu_brands_skips_null_device(db):
    _add_gpus(db, None, "Quadro P4000")

    report = UpdateGpuBrandsService(db).run()

    assert (report.total_updates, report.error_count) == (1, 1)
    assert _gpu_column(db, "brand") == [None, "nvidia"]


def test_row_failure_does_not_abort_scan(db):
    ids = _add_gpus(db, "NVIDIA A100", "AMD Radeon VII", "Intel UHD 630")

    report = UpdateGpuBrandsService(db, gpu_repo=FlakyGpuRepo(ids[1])).run()

    assert report.success
    assert (report.total_updates, report.error_count) == (2, 1)
    assert _gpu_column(db, "brand") == ["nvidia", None, "intel"]


def test_update_gpu_laptop_info(db):
    _add_gpus(db, "NVIDIA GeForce RTX 3070 Laptop GPU", "AMD Radeon RX 6800M", "NVIDIA GeForce RTX 4090")

    report = UpdateGpuLaptopInfoService(db).run()

    assert report.success
    assert (report.total_updates, report.laptop_only_updates) == (3, 2)
    assert _gpu_column(db, "is_laptop") == [True, True, False]


def test_update_gpu_laptop_info_is_rerunnable(db):
    _add_gpus(db, "Radeon Mobile Graphics")

    UpdateGpuLaptopInfoService(db).run()
    report = UpdateGpuLaptopInfoService(db).run()

    assert report.laptop_only_updates == 1
    assert _gpu_column(db, "is_laptop") == [True]


def test_update_run_model_map(db):
    with db.session_scope() as session:
        repo = ModelMapRepo()
        first = repo.create(session, "sd15", "SD 1.5").id
        repo.create(session, "sd15", "duplicate")
        sdxl = repo.create(session, "sdxl", "SDXL").id
    ids = _add_details(db, "sd15", "unknown-model", None, "sdxl")

    report = UpdateRunModelMapService(db).run()

    assert report.success
    assert (report.updated, report.not_found) == (2, 2)
    assert report.message.endswith("Updated: 2, Not found: 2")
    with db.session_scope() as session:
        mapped = {row.id: row.model_map_id for row in RunMoreDetailsRepo().list_all(session)}
    assert mapped == {ids[0]: first, ids[1]: None, ids[2]: None, ids[3]: sdxl}


def test_update_run_model_map_retries_only_pending(db):
    with db.session_scope() as session:
        ModelMapRepo().create(session, "sd15")
    _add_details(db, "sd15", "later")

    UpdateRunModelMapService(db).run()
    with db.session_scope() as session:
        ModelMapRepo().create(session, "later")
    report = UpdateRunModelMapService(db).run()

    assert (report.updated, report.not_found) == (1, 0)

    report = UpdateRunModelMapService(db).run()
    assert report.message == "All RunMoreDetails entries already have ModelMapId."
