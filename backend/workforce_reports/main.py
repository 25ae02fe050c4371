"""
Workforce Reports API
FastAPI backend serving contractor-summary, budget-analysis and
performance-metrics reports to the dashboard.
"""
import os
import time
import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

load_dotenv()

from workforce_reports.api.deps import get_record_store
from workforce_reports.api.report_routes import router as report_router
from workforce_reports.services.logging_config import setup_logging
from workforce_reports.services.middleware import RequestTimingMiddleware
from workforce_reports.services.perf_monitor import tracker as perf_tracker

VERSION = "1.0.0"

_log_level = os.getenv("LOG_LEVEL", "INFO")
_json_logs = os.getenv("LOG_FORMAT", "json").lower() != "text"
setup_logging(level=_log_level, json_output=_json_logs)
logger = logging.getLogger("workforce-reports")

_PROCESS_START = time.monotonic()


@asynccontextmanager
async def lifespan(app: FastAPI):
    store = get_record_store()
    logger.info(f"Record store ready: {type(store).__name__}")
    yield


app = FastAPI(
    title="Workforce Reports API",
    version=VERSION,
    description="Contractor workforce reporting: headcount, budget and performance",
    lifespan=lifespan,
)

_cors_default = "http://localhost:3000,http://localhost:5173"
cors_origins = [o.strip() for o in os.getenv("CORS_ORIGINS", _cors_default).split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Accept", "X-Request-ID"],
    expose_headers=["Content-Disposition", "X-Request-ID"],
)
# Request timing must be outermost so it wraps all other middleware
app.add_middleware(RequestTimingMiddleware)

app.include_router(report_router)


@app.get("/health")
async def health_check():
    return {
        "status": "active",
        "version": VERSION,
        "data_source": os.getenv("REPORT_DATA_DIR") or "built-in",
    }


@app.get("/metrics")
async def metrics():
    """Report throughput, build durations, fallbacks and errors since process start."""
    snapshot = perf_tracker.get_metrics()
    return {"uptime_seconds": round(time.monotonic() - _PROCESS_START, 1), **snapshot}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("workforce_reports.main:app", host="0.0.0.0", port=8000, reload=True)
