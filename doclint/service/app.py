"""FastAPI application entrypoint for doclint service mode."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .. import __version__
from ..config import load_config
from ..errors import InputError, UnknownCategoryError
from ..models import Category, DocumentReport, RunResult
from ..reporter import result_payload
from ..runner import Runner


class ValidateRequest(BaseModel):
    paths: List[str]
    category: Optional[str] = None
    strict: Optional[bool] = None


class DocumentRequest(BaseModel):
    path: str
    content: str
    category: Optional[str] = None


class HealthResponse(BaseModel):
    status: str


def _default_runner() -> Runner:
    return Runner(load_config(Path.cwd()))


def create_app(
    runner_factory: Callable[[], Runner] = _default_runner,
) -> FastAPI:
    """Create the FastAPI application exposing doclint validation."""

    app = FastAPI(title="doclint service", version=__version__)

    async def get_runner() -> Runner:
        return runner_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/validate")
    async def validate_paths(
        payload: ValidateRequest,
        runner: Runner = Depends(get_runner),
    ) -> Dict[str, Any]:
        category = Category.parse(payload.category) if payload.category else None

        def _run() -> RunResult:
            return runner.run(payload.paths, category=category, strict=payload.strict)

        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(None, _run)
        return result_payload(result)

    @app.post("/validate/document")
    async def validate_document(
        payload: DocumentRequest,
        runner: Runner = Depends(get_runner),
    ) -> Dict[str, Any]:
        def _check() -> DocumentReport:
            return runner.check_text(payload.content, payload.path, category=payload.category)

        loop = asyncio.get_running_loop()
        report = await loop.run_in_executor(None, _check)
        return report.to_dict()

    @app.exception_handler(InputError)
    async def input_error_handler(_: Any, exc: InputError) -> JSONResponse:
        status = 404 if not Path(exc.path).exists() else 400
        return JSONResponse(status_code=status, content={"detail": str(exc)})

    @app.exception_handler(UnknownCategoryError)
    async def category_error_handler(_: Any, exc: UnknownCategoryError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    import uvicorn

    uvicorn.run(create_app(), host=host, port=port)


__all__ = ["create_app", "run_service"]
