from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from db.db_conn import DbConn
from db.gpu_repo import GpuRepo
from parsers.gpu_info_parser import BRANDS, GpuInfoParser

logger = logging.getLogger(__name__)


@dataclass
class BrandCount:
    brand_name: str
    count: int


@dataclass
class UpdateGpuBrandsReport:
    success: bool
    message: str
    total_updates: int = 0
    error_count: int = 0
    update_counts_by_brand: List[BrandCount] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _brand_counts(counts: Dict[str, int]) -> List[BrandCount]:
    return [BrandCount(brand_name=brand.capitalize(), count=counts.get(brand, 0)) for brand in BRANDS]


class UpdateGpuBrandsService:
    """Set ``GPU.brand`` from the device string, one short transaction per row."""

    def __init__(self, db: DbConn, gpu_repo: Optional[GpuRepo] = None) -> None:
        self.db = db
        self.gpu_repo = gpu_repo or GpuRepo()

    def run(self) -> UpdateGpuBrandsReport:
        logger.info("Updating GPU brand information")
        try:
            with self.db.session_scope() as session:
                gpus = self.gpu_repo.list_devices(session)
        except SQLAlchemyError as exc:
            logger.error("Failed to fetch GPU data: %s", exc)
            return UpdateGpuBrandsReport(success=False, message=f"Failed to fetch GPU data: {exc}")

        if not gpus:
            logger.info("No GPU data found to update")
            return UpdateGpuBrandsReport(
                success=True,
                message="No GPU data found to update",
                update_counts_by_brand=_brand_counts({}),
            )

        counts = {brand: 0 for brand in BRANDS}
        total_updates = 0
        error_count = 0
        for gpu_id, device in gpus:
            if device is None:
                error_count += 1
                logger.warning("GPU %s has no device, skipping", gpu_id)
                continue
            brand = GpuInfoParser.get_brand_name(device)
            try:
                with self.db.session_scope() as session:
                    self.gpu_repo.update(session, gpu_id, brand=brand)
            except SQLAlchemyError as exc:
                error_count += 1
                logger.warning("Failed to update GPU %s: %s", gpu_id, exc)
                continue
            counts[brand] += 1
            total_updates += 1

        logger.info("GPU brand update complete: %d total updates, %d errors", total_updates, error_count)
        return UpdateGpuBrandsReport(
            success=True,
            message="GPU brand information updated successfully!",
            total_updates=total_updates,
            error_count=error_count,
            update_counts_by_brand=_brand_counts(counts),
        )
