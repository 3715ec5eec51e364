"""FastAPI application exposing jsxprops lookups as tool endpoints."""

from __future__ import annotations

import asyncio
from functools import partial
from pathlib import Path
from typing import Any, Callable, Dict, List, Literal, Optional, TypeVar, Union

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..config import ConfigError, load_config
from ..engine import PropLookupEngine
from ..errors import InvalidPathError, PropLookupError
from ..formats import (
    analysis_to_dict,
    component_props_to_dict,
    missing_result_to_dict,
    query_result_to_dict,
)
from ..logging import get_logger
from ..models import PropCriterion
from ..paths import resolve_and_validate_path

logger = get_logger("service")

T = TypeVar("T")


class OutputOptions(BaseModel):
    include_columns: bool = True
    include_pretty_paths: bool = False


class AnalyzeRequest(OutputOptions):
    path: str
    component_name: Optional[str] = None
    prop_name: Optional[str] = None
    include_types: bool = True
    format: Literal["full", "compact", "minimal"] = "full"


class FindUsageRequest(OutputOptions):
    prop_name: str
    path: str
    component_name: Optional[str] = None
    format: Literal["full", "compact", "minimal"] = "full"


class ComponentPropsRequest(OutputOptions):
    component_name: str
    path: str


class MissingPropRequest(OutputOptions):
    component_name: str
    required_prop: str
    path: str
    assume_spread_has_required_prop: bool = True


class CriterionModel(BaseModel):
    name: str
    value: Optional[Union[bool, int, float, str]] = None
    operator: Literal["equals", "contains"] = "equals"
    exists: Optional[bool] = None


class QueryRequest(OutputOptions):
    component_name: str
    path: str
    prop_criteria: List[CriterionModel] = Field(min_length=1)
    logic: Literal["AND", "OR"] = "AND"


class HealthResponse(BaseModel):
    status: str


def _default_engine() -> PropLookupEngine:
    return PropLookupEngine(load_config(Path.cwd()))


async def _in_executor(func: Callable[[], T]) -> T:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, func)


def create_app(
    engine_factory: Callable[[], PropLookupEngine] = _default_engine,
) -> FastAPI:
    """Create the FastAPI application exposing prop lookup tools."""

    app = FastAPI(title="jsxprops Service", version="1.0.0")

    async def get_engine() -> PropLookupEngine:
        return engine_factory()

    def _validated(engine: PropLookupEngine, value: str) -> str:
        return str(
            resolve_and_validate_path(
                value,
                "path",
                allowed_roots=engine.config.allowed_roots,
                require_absolute=True,
            )
        )

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/tools/analyze_jsx_props")
    async def analyze_jsx_props(
        payload: AnalyzeRequest,
        engine: PropLookupEngine = Depends(get_engine),
    ) -> Dict[str, Any]:
        path = _validated(engine, payload.path)
        result = await _in_executor(
            partial(
                engine.analyze_props,
                path,
                component_name=payload.component_name,
                prop_name=payload.prop_name,
                include_types=payload.include_types,
            )
        )
        return analysis_to_dict(
            result,
            format=payload.format,
            include_columns=payload.include_columns,
            include_pretty_paths=payload.include_pretty_paths,
        )

    @app.post("/tools/find_prop_usage")
    async def find_prop_usage(
        payload: FindUsageRequest,
        engine: PropLookupEngine = Depends(get_engine),
    ) -> Dict[str, Any]:
        path = _validated(engine, payload.path)
        result = await _in_executor(
            partial(
                engine.find_prop_usage,
                payload.prop_name,
                path,
                component_name=payload.component_name,
            )
        )
        return analysis_to_dict(
            result,
            format=payload.format,
            include_columns=payload.include_columns,
            include_pretty_paths=payload.include_pretty_paths,
        )

    @app.post("/tools/get_component_props")
    async def get_component_props(
        payload: ComponentPropsRequest,
        engine: PropLookupEngine = Depends(get_engine),
    ) -> Dict[str, Any]:
        path = _validated(engine, payload.path)
        result = await _in_executor(
            partial(engine.get_component_props, payload.component_name, path)
        )
        return component_props_to_dict(
            result,
            include_columns=payload.include_columns,
            include_pretty_paths=payload.include_pretty_paths,
        )

    @app.post("/tools/find_components_without_prop")
    async def find_components_without_prop(
        payload: MissingPropRequest,
        engine: PropLookupEngine = Depends(get_engine),
    ) -> Dict[str, Any]:
        path = _validated(engine, payload.path)
        result = await _in_executor(
            partial(
                engine.find_components_without_prop,
                payload.component_name,
                payload.required_prop,
                path,
                assume_spread_has_required_prop=payload.assume_spread_has_required_prop,
            )
        )
        return missing_result_to_dict(
            result,
            include_columns=payload.include_columns,
            include_pretty_paths=payload.include_pretty_paths,
        )

    @app.post("/tools/query_components")
    async def query_components(
        payload: QueryRequest,
        engine: PropLookupEngine = Depends(get_engine),
    ) -> Dict[str, Any]:
        path = _validated(engine, payload.path)
        criteria = [
            PropCriterion(
                name=item.name,
                value=item.value,
                operator=item.operator,
                exists=item.exists,
            )
            for item in payload.prop_criteria
        ]
        result = await _in_executor(
            partial(
                engine.query_components,
                payload.component_name,
                criteria,
                path,
                logic=payload.logic,
            )
        )
        return query_result_to_dict(
            result,
            include_columns=payload.include_columns,
            include_pretty_paths=payload.include_pretty_paths,
        )

    @app.exception_handler(InvalidPathError)
    async def invalid_path_handler(_: Any, exc: InvalidPathError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(ValueError)
    async def value_error_handler(_: Any, exc: ValueError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(PropLookupError)
    async def lookup_error_handler(_: Any, exc: PropLookupError) -> JSONResponse:
        logger.error("Lookup failed: %s", exc)
        return JSONResponse(status_code=500, content={"detail": str(exc)})

    @app.exception_handler(ConfigError)
    async def config_error_handler(_: Any, exc: ConfigError) -> JSONResponse:
        return JSONResponse(status_code=500, content={"detail": f"Invalid configuration: {exc}"})

    return app


def run_service(
    host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app()
    uvicorn.run(app, host=host, port=port)
