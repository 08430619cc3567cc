from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError

from db.db_conn import DbConn
from db.gpu_repo import GpuRepo
from parsers.gpu_info_parser import GpuInfoParser

logger = logging.getLogger(__name__)


@dataclass
class UpdateGpuLaptopInfoReport:
    success: bool
    message: str
    total_updates: int = 0
    laptop_only_updates: int = 0
    error_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class UpdateGpuLaptopInfoService:
    """Set ``GPU.isLaptop`` from the device string, one short transaction per row."""

    def __init__(self, db: DbConn, gpu_repo: Optional[GpuRepo] = None) -> None:
        self.db = db
        self.gpu_repo = gpu_repo or GpuRepo()

    def run(self) -> UpdateGpuLaptopInfoReport:
        logger.info("Updating GPU laptop information")
        try:
            with self.db.session_scope() as session:
                gpus = self.gpu_repo.list_devices(session)
        except SQLAlchemyError as exc:
            logger.error("Failed to fetch GPU data: %s", exc)
            return UpdateGpuLaptopInfoReport(success=False, message=f"Failed to fetch GPU data: {exc}")

        if not gpus:
            logger.info("No GPU data found to update")
            return UpdateGpuLaptopInfoReport(success=True, message="No GPU data found to update")

        total_updates = 0
        laptop_only_updates = 0
        error_count = 0
        for gpu_id, device in gpus:
            if device is None:
                error_count += 1
                logger.warning("GPU %s has no device, skipping", gpu_id)
                continue
            is_laptop = GpuInfoParser.is_laptop_gpu(device)
            try:
                with self.db.session_scope() as session:
                    self.gpu_repo.update(session, gpu_id, is_laptop=is_laptop)
            except SQLAlchemyError as exc:
                error_count += 1
                logger.warning("Failed to update GPU %s: %s", gpu_id, exc)
                continue
            total_updates += 1
            if is_laptop:
                laptop_only_updates += 1

        logger.info(
            "GPU laptop info update complete: %d total updates, %d laptop updates, %d errors",
            total_updates,
            laptop_only_updates,
            error_count,
        )
        return UpdateGpuLaptopInfoReport(
            success=True,
            message="GPU laptop information updated successfully!",
            total_updates=total_updates,
            laptop_only_updates=laptop_only_updates,
            error_count=error_count,
        )
