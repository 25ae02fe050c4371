"""
Report Routes: dashboard overview, report generation and download.

GET  /api/reports/overview                         stats-card figures
POST /api/reports/{report_type}                    build a report, return its JSON
GET  /api/reports/{report_type}/download?format=   build and return as json / xlsx file
"""
import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import FileResponse, JSONResponse

from workforce_reports.api.deps import get_report_service
from workforce_reports.services.errors import DataUnavailableError, UnknownReportTypeError
from workforce_reports.services.report_export import EXPORT_FORMATS, export_filename, report_to_dict, write_export
from workforce_reports.services.report_service import ReportService

router = APIRouter(prefix="/api/reports", tags=["Reports"])
logger = logging.getLogger("workforce-reports.routes")

MEDIA_TYPES = {
    "json": "application/json",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}


async def _generate(service: ReportService, report_type: str):
    try:
        return await service.generate(report_type)
    except UnknownReportTypeError as e:
        logger.warning(f"Rejected report request: {e}")
        raise HTTPException(status_code=404, detail=str(e))
    except DataUnavailableError as e:
        logger.error(f"{report_type} report unavailable: {e}")
        raise HTTPException(status_code=503, detail=str(e))


@router.get("/overview")
async def report_overview(service: ReportService = Depends(get_report_service)):
    try:
        overview = await service.get_overview()
    except DataUnavailableError as e:
        logger.error(f"Overview unavailable: {e}")
        raise HTTPException(status_code=503, detail=str(e))
    return JSONResponse(content=overview.model_dump(mode="json", by_alias=True))


@router.post("/{report_type}")
async def generate_report(report_type: str, service: ReportService = Depends(get_report_service)):
    report = await _generate(service, report_type)
    return JSONResponse(content=report_to_dict(report))


@router.get("/{report_type}/download")
async def download_report(
    report_type: str,
    fmt: str = Query("json", alias="format"),
    service: ReportService = Depends(get_report_service),
):
    if fmt not in EXPORT_FORMATS:
        raise HTTPException(status_code=400, detail=f"format must be one of {', '.join(EXPORT_FORMATS)}")
    report = await _generate(service, report_type)
    try:
        path = await asyncio.to_thread(write_export, report, fmt)
    except OSError as e:
        logger.error(f"Export write failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Export failed: {e}")
    return FileResponse(path, media_type=MEDIA_TYPES[fmt], filename=export_filename(report, fmt))
