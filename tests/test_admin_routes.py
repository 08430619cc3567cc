"""Tests for the /admin HTTP routes."""
import json

import pytest
from fastapi.testclient import TestClient

from app import create_app
from db.gpu_repo import GpuRepo
from db.model_map_repo import ModelMapRepo
from db.runs_repo import RUN_FIELDS
from web.deps import get_db_conn

RUNS = [
    {
        "timestamp": "2024-01-01T10:00:00",
        "vram_usage": "1.5/2.5",
        "info": "app:foo url:https://github.com/AUTOMATIC1111/stable-diffusion-webui",
        "system_info": "arch:x86_64 cpu:AMD Ryzen 9 5900X system:Linux release:6.1 python:3.10.12",
        "model_info": "torch:2.0.1 autocast half xformers:0.0.20 diffusers:0.21.0 transformers:4.30.0",
        "device_info": "device:NVIDIA GeForce RTX 3070 Laptop GPU 8GB driver:535.54 GA104",
        "xformers": "0.0.20",
        "model_name": "sd15",
        "user": "a",
        "notes": "",
    },
    {
        "timestamp": "2024-01-02T10:00:00",
        "vram_usage": "4.0",
        "info": None,
        "system_info": "arch:arm64",
        "model_info": None,
        "device_info": "device:AMD Radeon RX 6800M driver:23.1",
        "xformers": None,
        "model_name": "missing",
        "user": "b",
        "notes": None,
    },
]


@pytest.fixture
def client(db):
    app = create_app()
    app.dependency_overrides[get_db_conn] = lambda: db
    return TestClient(app)


def _upload(client, content, name="runs.json"):
    return client.post("/admin/save-data", files={"file": (name, content, "application/json")})


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_run_fields(client):
    assert client.get("/admin/run-fields").json() == list(RUN_FIELDS)


def test_save_data_then_process_everything(client, db):
    response = _upload(client, json.dumps(RUNS).encode())
    assert response.status_code == 200
    assert response.json()["inserted_rows"] == 2

    expected = {
        "/admin/process-its": (2, 0, 0),
        "/admin/process-app-details": (1, 1, 0),
        "/admin/process-system-info": (1, 0, 1),
        "/admin/process-libraries": (1, 1, 0),
        "/admin/process-gpu": (2, 0, 0),
        "/admin/process-run-details": (2, 0, 0),
    }
    for path, (inserted, errors, skipped) in expected.items():
        body = client.post(path).json()
        assert body["success"], path
        assert body["total_rows"] == 2, path
        assert (body["inserted_rows"], body["error_rows"], body["skipped_rows"]) == (inserted, errors, skipped), path
        assert len(body["error_data"]) == errors, path


def test_update_endpoints(client, db):
    _upload(client, json.dumps(RUNS).encode())
    client.post("/admin/process-gpu")
    client.post("/admin/process-run-details")
    with db.session_scope() as session:
        ModelMapRepo().create(session, "sd15", "SD 1.5")

    brands = client.post("/admin/update-gpu-brands").json()
    laptops = client.post("/admin/update-gpu-laptop-info").json()
    model_map = client.post("/admin/update-run-more-details-with-modelmapid").json()

    assert brands["total_updates"] == 2
    assert {c["brand_name"]: c["count"] for c in brands["update_counts_by_brand"]} == {
        "Nvidia": 1,
        "Amd": 1,
        "Intel": 0,
        "Unknown": 0,
    }
    assert (laptops["total_updates"], laptops["laptop_only_updates"]) == (2, 2)
    assert (model_map["updated"], model_map["not_found"]) == (1, 1)
    with db.session_scope() as session:
        assert [(g.brand, g.is_laptop) for g in GpuRepo().list_all(session)] == [("nvidia", True), ("amd", True)]


def test_save_data_rejects_non_json_extension(client):
    response = _upload(client, b"[]", name="runs.csv")

    assert response.status_code == 400


def test_save_data_rejects_invalid_records(client):
    response = _upload(client, json.dumps([{"timestamp": "", "vram_usage": "1"}]).encode())

    assert response.status_code == 422
    assert "index 0" in response.json()["detail"]


def test_app_details_analysis_and_fix(client):
    _upload(client, json.dumps(RUNS).encode())
    client.post("/admin/process-app-details")

    assert client.get("/admin/app-details-analysis").json() == {
        "total_rows": 1,
        "null_app_name_null_url": 0,
        "null_app_name_non_null_url": 0,
    }

    response = client.post(
        "/admin/fix-app-names",
        json={
            "automatic1111": "AUTOMATIC1111",
            "vladmandic": "SD.Next",
            "stable_diffusion": "SD WebUI",
            "null_app_name_null_url": "Unknown",
        },
    )
    assert response.status_code == 200
    assert response.json()["updated_counts"]["automatic1111"] == 1


def test_fix_app_names_rejects_empty_names(client):
    response = client.post(
        "/admin/fix-app-names",
        json={"automatic1111": "", "vladmandic": "b", "stable_diffusion": "c", "null_app_name_null_url": "d"},
    )

    assert response.status_code == 422
