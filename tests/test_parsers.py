"""Tests for the app, system, libraries and GPU field parsers."""
import pytest

from parsers import AppDetailsParser, GpuInfoParser, LibrariesParser, SystemInfoParser


def test_app_details_parses_all_keys():
    details = AppDetailsParser.parse("app:foo updated:2024-01-01 hash:abc url:http://x")

    assert details.app_name == "foo"
    assert details.updated == "2024-01-01"
    assert details.hash == "abc"
    assert details.url == "http://x"
    assert AppDetailsParser.is_valid(details)


def test_app_details_drops_bare_tokens():
    details = AppDetailsParser.parse("app:stable diffusion webui url:http://x")

    assert details.app_name == "stable"
    assert AppDetailsParser.get_summary(details) == "app:stable url:http://x"


def test_app_details_empty_is_invalid():
    assert not AppDetailsParser.is_valid(AppDetailsParser.parse(""))


def test_system_info_multi_word_cpu():
    info = SystemInfoParser.parse("arch:x86_64 cpu:Intel Core i7 system:Linux release:5.15.0 python:3.9.0")

    assert info.cpu == "Intel Core i7"
    assert info.arch == "x86_64"
    assert info.python == "3.9.0"
    assert info.is_complete()


def test_system_info_partial_record_is_valid_but_not_complete():
    info = SystemInfoParser.parse("arch:x86_64 cpu:Intel")

    assert SystemInfoParser.is_valid(info)
    assert not info.is_complete()
    assert SystemInfoParser.get_summary(info) == "arch:x86_64 cpu:Intel"


def test_libraries_torch_stops_at_next_key():
    libs = LibrariesParser.parse("torch:2.0.0+cu118 xformers:0.0.22")

    assert libs.torch == "2.0.0+cu118"
    assert libs.xformers == "0.0.22"


def test_libraries_torch_keeps_build_suffix():
    libs = LibrariesParser.parse("torch:2.0.1 autocast half diffusers:0.21.0 transformers:4.30.0")

    assert libs.torch == "2.0.1 autocast half"
    assert libs.diffusers == "0.21.0"
    assert libs.transformers == "4.30.0"


def test_libraries_unknown_key_appends_to_torch():
    assert LibrariesParser.parse("torch:2.0.1 cuda:11.8").torch == "2.0.1 cuda:11.8"


def test_libraries_required_and_version_lookup():
    libs = LibrariesParser.parse("torch:2.0.0 xformers:0.0.22")

    assert LibrariesParser.has_all_required(libs, ["torch", "xformers"])
    assert not LibrariesParser.has_all_required(libs, ["torch", "diffusers"])
    assert LibrariesParser.get_version(libs, "TORCH") == "2.0.0"
    assert LibrariesParser.get_version(libs, "numpy") is None


def test_gpu_info_device_driver_and_chip():
    gpu = GpuInfoParser.parse("device:NVIDIA 8GB driver:470.82.01 NVIDIA GeForce RTX 3080")

    assert gpu.device == "NVIDIA 8GB"
    assert gpu.driver == "470.82.01"
    assert gpu.gpu_chip == "NVIDIA GeForce RTX 3080"
    assert GpuInfoParser.get_summary(gpu) == "device:NVIDIA 8GB driver:470.82.01 NVIDIA GeForce RTX 3080"


def test_gpu_info_unknown_key_opens_chip():
    gpu = GpuInfoParser.parse("device:Radeon RX 6800 arch:gfx1030 rdna2")

    assert gpu.device == "Radeon RX 6800"
    assert gpu.driver is None
    assert gpu.gpu_chip == "arch:gfx1030 rdna2"


def test_gpu_info_empty_is_invalid():
    assert not GpuInfoParser.is_valid(GpuInfoParser.parse(""))


@pytest.mark.parametrize(
    "device, brand",
    [
        ("AMD-compatible NVIDIA driver", "nvidia"),
        ("Quadro RTX 4000", "nvidia"),
        ("Tesla T4", "nvidia"),
        ("Radeon RX 7900 XTX", "amd"),
        ("Intel Arc A770", "intel"),
        ("Apple M2", "unknown"),
    ],
)
def test_brand_precedence(device, brand):
    assert GpuInfoParser.get_brand_name(device) == brand


@pytest.mark.parametrize(
    "device, expected",
    [
        ("NVIDIA GeForce RTX 3070 Laptop GPU", True),
        ("Radeon Mobile Graphics", True),
        ("AMD Radeon RX 6800M", True),
        ("AMD Radeon RX 6800", False),
        ("NVIDIA RTX A2000M", False),
    ],
)
def test_laptop_detection(device, expected):
    assert GpuInfoParser.is_laptop_gpu(device) is expected
