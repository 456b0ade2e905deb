"""FastAPI application entrypoint for typelense service mode."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..detectors import detect_monorepo
from ..generators import generate_tsv_with_metadata
from ..logging import get_logger
from ..models import DetectionResult, TypeScriptError

logger = get_logger("service")


class DetectRequest(BaseModel):
    path: str


class PackageModel(BaseModel):
    name: str
    path: str
    version: Optional[str] = None


class DetectResponse(BaseModel):
    type: Optional[str] = None
    packages: List[PackageModel] = Field(default_factory=list)


class ErrorRecord(BaseModel):
    id: int
    packageName: str
    fileName: str
    errorCode: int
    description: str

    def to_error(self) -> TypeScriptError:
        return TypeScriptError(
            id=self.id,
            package_name=self.packageName,
            file_name=self.fileName,
            error_code=self.errorCode,
            description=self.description,
        )


class ReportRequest(BaseModel):
    base_dir: str
    errors: List[ErrorRecord] = Field(default_factory=list)
    metadata: Dict[str, Any] = Field(default_factory=dict)
    web: bool = False


class ReportResponse(BaseModel):
    output_dir: str
    error_count: int


class HealthResponse(BaseModel):
    status: str


def create_app(
    detector: Callable[[str], Optional[DetectionResult]] = detect_monorepo,
    reporter: Callable[..., Path] = generate_tsv_with_metadata,
) -> FastAPI:
    """Create the FastAPI application exposing detection and reporting."""

    app = FastAPI(title="typelense", version="0.1.0")

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/detect", response_model=DetectResponse)
    async def detect(payload: DetectRequest) -> DetectResponse:
        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(None, detector, payload.path)
        if result is None:
            return DetectResponse()
        return DetectResponse(
            type=result.monorepo_type.value,
            packages=[PackageModel(**package.to_dict()) for package in result.packages],
        )

    @app.post("/report", response_model=ReportResponse)
    async def report(payload: ReportRequest) -> ReportResponse:
        errors = [record.to_error() for record in payload.errors]

        def _run_report() -> Path:
            return reporter(errors, payload.metadata, payload.base_dir, payload.web)

        loop = asyncio.get_running_loop()
        output_dir = await loop.run_in_executor(None, _run_report)
        return ReportResponse(output_dir=str(output_dir), error_count=len(errors))

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(_: Any, exc: FileNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ValueError)
    async def value_error_handler(_: Any, exc: ValueError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    import uvicorn

    logger.info("Starting typelense service on %s:%d", host, port)
    uvicorn.run(create_app(), host=host, port=port)
