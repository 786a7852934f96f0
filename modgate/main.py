"""
modgate FastAPI Application — Module admission checks over HTTP.

  POST /validate → validate a module fact sheet against a checkfile
  POST /audit    → validate many fact sheets against one checkfile
  GET  /audit/log → recent audit entries
  POST /generate → starter checkfile for a module
  POST /diff     → diff of the checkfiles generated for two modules
  GET  /health   → {"status": "ok"}
"""

from __future__ import annotations

import logging

from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from modgate.api.routes.checkfile import router as checkfile_router
from modgate.api.routes.health import router as health_router
from modgate.api.routes.validate import router as validate_router
from modgate.core.errors import (
    CheckfileSchemaError,
    ConfigurationError,
    ModuleFactError,
    RemoteCheckfileError,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("modgate")

app = FastAPI(
    title="modgate",
    description="Checkfile validation for binary program modules",
    version="1.0.0",
)

app.include_router(health_router)
app.include_router(validate_router)
app.include_router(checkfile_router)


@app.exception_handler(CheckfileSchemaError)
async def checkfile_error_handler(request: Request, exc: CheckfileSchemaError):
    logger.warning(f"Rejected checkfile on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=422,
        content={"error": "invalid_checkfile", "detail": str(exc)},
    )


@app.exception_handler(ModuleFactError)
async def module_fact_error_handler(request: Request, exc: ModuleFactError):
    logger.warning(f"Missing module facts on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=422,
        content={"error": "missing_module_facts", "detail": str(exc)},
    )


@app.exception_handler(RemoteCheckfileError)
async def remote_checkfile_error_handler(request: Request, exc: RemoteCheckfileError):
    logger.error(f"Remote checkfile fetch failed on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=502,
        content={"error": "remote_checkfile_unavailable", "detail": str(exc)},
    )


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    logger.error(f"Invalid configuration on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": "invalid_configuration", "detail": str(exc)},
    )
