"""CLI: Rebuild the tables derived from runs, then run the update passes.

Examples:
    python src/main_process.py                 # everything, in dependency order
    python src/main_process.py --only GPU      # one table
    python src/main_process.py --skip-updates  # rebuild only
"""
from __future__ import annotations

import argparse
import logging
from typing import Iterable, Optional

from config import configure_logging, load_env_file
from db.db_conn import DbConn
from services import REDERIVATION_SERVICES
from services.update_gpu_brands import UpdateGpuBrandsService
from services.update_gpu_laptop_info import UpdateGpuLaptopInfoService
from services.update_run_model_map import UpdateRunModelMapService

logger = logging.getLogger("main_process")


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Rebuild derived benchmark tables")
    p.add_argument(
        "--only",
        action="append",
        choices=sorted(REDERIVATION_SERVICES),
        help="Rebuild only these tables (repeatable)",
    )
    p.add_argument("--skip-updates", action="store_true", help="Skip GPU brand/laptop and ModelMap passes")
    p.add_argument("--echo", action="store_true", help="Enable SQLAlchemy engine echo")
    return p.parse_args()


def run_all(db: DbConn, tables: Optional[Iterable[str]] = None, updates: bool = True) -> bool:
    """Run the selected rebuilds (all by default) and the update passes; True when all succeeded."""
    ok = True
    for name in tables or REDERIVATION_SERVICES:
        report = REDERIVATION_SERVICES[name](db).run()
        print(
            f"{name}: success={report.success} total={report.total_rows} "
            f"inserted={report.inserted_rows} errors={report.error_rows} skipped={report.skipped_rows}"
        )
        ok = ok and report.success

    if updates:
        brands = UpdateGpuBrandsService(db).run()
        by_brand = ", ".join(f"{c.brand_name}={c.count}" for c in brands.update_counts_by_brand)
        print(f"GPU brands: updates={brands.total_updates} ({by_brand})")

        laptops = UpdateGpuLaptopInfoService(db).run()
        print(f"GPU laptop flag: updates={laptops.total_updates} laptops={laptops.laptop_only_updates}")

        model_map = UpdateRunModelMapService(db).run()
        print(f"ModelMap backfill: updated={model_map.updated} not_found={model_map.not_found}")
        ok = ok and brands.success and laptops.success and model_map.success
    return ok


def main() -> int:
    load_env_file()
    configure_logging()
    args = parse_args()

    try:
        db = DbConn(echo=args.echo)
    except ValueError as exc:
        logger.error("%s", exc)
        return 2

    return 0 if run_all(db, tables=args.only, updates=not args.skip_updates) else 1


if __name__ == "__main__":
    raise SystemExit(main())
