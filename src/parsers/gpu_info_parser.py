from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from parsers.tokenizer import GREEDY, UNKNOWN_CATCH_ALL, KeyPolicy, TokenizerSpec, build_summary, tokenize

# "device:NVIDIA 8GB driver:470.82.01 NVIDIA GeForce RTX 3080"
#   device   -> "NVIDIA 8GB"   (bare tokens extend it; "GB" tokens always do)
#   driver   -> "470.82.01"
#   gpu_chip -> everything after driver: or after any unknown key:value token
GPU_INFO_SPEC = TokenizerSpec(
    keys={
        "device": KeyPolicy("device", continuation=GREEDY),
        "driver": KeyPolicy("driver", opens_catch_all=True),
    },
    unknown_keys=UNKNOWN_CATCH_ALL,
    catch_all="gpu_chip",
    absorb_into="device",
    absorb_marker="GB",
)

BRAND_KEYWORDS = (
    ("nvidia", ("nvidia", "quadro", "geforce", "tesla", "cuda")),
    ("amd", ("amd", "radeon")),
    ("intel", ("intel",)),
)
UNKNOWN_BRAND = "unknown"
BRANDS = tuple(brand for brand, _ in BRAND_KEYWORDS) + (UNKNOWN_BRAND,)


@dataclass
class ParsedGpuInfo:
    device: Optional[str] = None
    driver: Optional[str] = None
    gpu_chip: Optional[str] = None


class GpuInfoParser:
    """Parse ``runs.device_info`` and classify device strings."""

    @staticmethod
    def parse(device_info: Optional[str]) -> ParsedGpuInfo:
        return ParsedGpuInfo(**tokenize(device_info, GPU_INFO_SPEC))

    @staticmethod
    def is_valid(gpu: ParsedGpuInfo) -> bool:
        return gpu.device is not None or gpu.driver is not None or gpu.gpu_chip is not None

    @staticmethod
    def get_summary(gpu: ParsedGpuInfo) -> str:
        return build_summary([("device", gpu.device), ("driver", gpu.driver), (None, gpu.gpu_chip)])

    @staticmethod
    def get_brand_name(device: str) -> str:
        """Classify by case-insensitive keyword; nvidia wins over amd, amd over intel."""
        lowered = device.lower()
        for brand, keywords in BRAND_KEYWORDS:
            if any(word in lowered for word in keywords):
                return brand
        return UNKNOWN_BRAND

    @staticmethod
    def is_laptop_gpu(device: str) -> bool:
        """Laptop/Mobile in the name, or an AMD part with the "M" suffix (e.g. RX 6800M)."""
        if "Laptop" in device or "Mobile" in device:
            return True
        return "AMD" in device and device.endswith("M")
