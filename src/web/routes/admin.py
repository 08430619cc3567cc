from __future__ import annotations

from typing import List, Type

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from pydantic import BaseModel

from db.db_conn import DbConn
from db.runs_repo import RUN_FIELDS
from services import (
    ProcessAppDetailsService,
    ProcessGpuService,
    ProcessLibrariesService,
    ProcessPerformanceService,
    ProcessRunDetailsService,
    ProcessSystemInfoService,
)
from services.app_details_quality import AppDetailsQualityService
from services.rederive import RederivationService
from services.save_runs import RunDataValidationError, SaveRunsService
from services.update_gpu_brands import UpdateGpuBrandsService
from services.update_gpu_laptop_info import UpdateGpuLaptopInfoService
from services.update_run_model_map import UpdateRunModelMapService
from web.deps import get_db_conn, table_lock

router = APIRouter(prefix="/admin", tags=["admin"])

MAX_FILE_SIZE = 50 * 1024 * 1024
ALLOWED_FILE_EXTENSIONS = ("json",)


class ProcessingResponse(BaseModel):
    success: bool
    message: str
    total_rows: int
    inserted_rows: int
    error_rows: int
    skipped_rows: int = 0
    error_data: List[str] = []


class BrandCountResponse(BaseModel):
    brand_name: str
    count: int


class UpdateGpuBrandsResponse(BaseModel):
    success: bool
    message: str
    total_updates: int
    update_counts_by_brand: List[BrandCountResponse]


class UpdateGpuLaptopInfoResponse(BaseModel):
    success: bool
    message: str
    total_updates: int
    laptop_only_updates: int


class UpdateRunModelMapResponse(BaseModel):
    success: bool
    message: str
    updated: int
    not_found: int


class AppDetailsAnalysisResponse(BaseModel):
    total_rows: int
    null_app_name_null_url: int
    null_app_name_non_null_url: int


class FixAppNamesRequest(BaseModel):
    automatic1111: str
    vladmandic: str
    stable_diffusion: str
    null_app_name_null_url: str


class FixAppNamesResponse(BaseModel):
    message: str
    updated_counts: dict


def _to_response(report) -> ProcessingResponse:
    return ProcessingResponse(
        success=report.success,
        message=report.message,
        total_rows=report.total_rows,
        inserted_rows=report.inserted_rows,
        error_rows=report.error_rows,
        skipped_rows=report.skipped_rows,
        error_data=report.error_messages,
    )


def _rederive(service_class: Type[RederivationService], db: DbConn) -> ProcessingResponse:
    with table_lock(service_class.table_name):
        return _to_response(service_class(db).run())


@router.post("/save-data", response_model=ProcessingResponse)
def save_data(file: UploadFile = File(...), db: DbConn = Depends(get_db_conn)) -> ProcessingResponse:
    """Replace all runs (and everything derived from them) with an uploaded JSON array."""
    file_name = file.filename or "unknown.json"
    if file_name.rsplit(".", 1)[-1].lower() not in ALLOWED_FILE_EXTENSIONS:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Only JSON files are allowed")
    content = file.file.read()
    if len(content) > MAX_FILE_SIZE:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail="File size exceeds maximum allowed size of 50MB",
        )
    try:
        with table_lock("runs"):
            report = SaveRunsService(db).save_runs(content)
    except RunDataValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
    return _to_response(report)


@router.get("/run-fields", response_model=List[str])
def run_fields() -> List[str]:
    """Field names accepted per record by /save-data."""
    return list(RUN_FIELDS)


@router.post("/process-its", response_model=ProcessingResponse)
def process_its(db: DbConn = Depends(get_db_conn)) -> ProcessingResponse:
    return _rederive(ProcessPerformanceService, db)


@router.post("/process-app-details", response_model=ProcessingResponse)
def process_app_details(db: DbConn = Depends(get_db_conn)) -> ProcessingResponse:
    return _rederive(ProcessAppDetailsService, db)


@router.post("/process-system-info", response_model=ProcessingResponse)
def process_system_info(db: DbConn = Depends(get_db_conn)) -> ProcessingResponse:
    return _rederive(ProcessSystemInfoService, db)


@router.post("/process-libraries", response_model=ProcessingResponse)
def process_libraries(db: DbConn = Depends(get_db_conn)) -> ProcessingResponse:
    return _rederive(ProcessLibrariesService, db)


@router.post("/process-gpu", response_model=ProcessingResponse)
def process_gpu(db: DbConn = Depends(get_db_conn)) -> ProcessingResponse:
    return _rederive(ProcessGpuService, db)


@router.post("/process-run-details", response_model=ProcessingResponse)
def process_run_details(db: DbConn = Depends(get_db_conn)) -> ProcessingResponse:
    return _rederive(ProcessRunDetailsService, db)


@router.post("/update-gpu-brands", response_model=UpdateGpuBrandsResponse)
def update_gpu_brands(db: DbConn = Depends(get_db_conn)) -> UpdateGpuBrandsResponse:
    report = UpdateGpuBrandsService(db).run()
    return UpdateGpuBrandsResponse(
        success=report.success,
        message=report.message,
        total_updates=report.total_updates,
        update_counts_by_brand=[
            BrandCountResponse(brand_name=c.brand_name, count=c.count) for c in report.update_counts_by_brand
        ],
    )


@router.post("/update-gpu-laptop-info", response_model=UpdateGpuLaptopInfoResponse)
def update_gpu_laptop_info(db: DbConn = Depends(get_db_conn)) -> UpdateGpuLaptopInfoResponse:
    report = UpdateGpuLaptopInfoService(db).run()
    return UpdateGpuLaptopInfoResponse(
        success=report.success,
        message=report.message,
        total_updates=report.total_updates,
        laptop_only_updates=report.laptop_only_updates,
    )


@router.post("/update-run-more-details-with-modelmapid", response_model=UpdateRunModelMapResponse)
def update_run_more_details_with_modelmapid(db: DbConn = Depends(get_db_conn)) -> UpdateRunModelMapResponse:
    report = UpdateRunModelMapService(db).run()
    return UpdateRunModelMapResponse(
        success=report.success,
        message=report.message,
        updated=report.updated,
        not_found=report.not_found,
    )


@router.get("/app-details-analysis", response_model=AppDetailsAnalysisResponse)
def app_details_analysis(db: DbConn = Depends(get_db_conn)) -> AppDetailsAnalysisResponse:
    analysis = AppDetailsQualityService(db).analyze()
    return AppDetailsAnalysisResponse(**analysis.to_dict())


@router.post("/fix-app-names", response_model=FixAppNamesResponse)
def fix_app_names(payload: FixAppNamesRequest, db: DbConn = Depends(get_db_conn)) -> FixAppNamesResponse:
    try:
        counts = AppDetailsQualityService(db).fix_app_names(
            automatic1111=payload.automatic1111,
            vladmandic=payload.vladmandic,
            stable_diffusion=payload.stable_diffusion,
            null_app_name_null_url=payload.null_app_name_null_url,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
    return FixAppNamesResponse(message="App names updated successfully", updated_counts=counts.to_dict())
