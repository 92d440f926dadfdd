"""FastAPI entrypoint for the furigana annotation endpoint."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from furigana_service.annotate.annotator import FuriganaAnnotator, utf16_length
from furigana_service.config import AnnotatorConfig
from furigana_service.errors import AnnotationError, EmptyInputError, to_error_response
from furigana_service.obs.tracing import MetricsRecorder, Timer

LOGGER = logging.getLogger(__name__)


class FuriganaRequest(BaseModel):
    text: str | None = None


app = FastAPI(title="Furigana Service", version="0.1.0")

_annotator = FuriganaAnnotator.from_config(AnnotatorConfig.from_env())
_metrics = MetricsRecorder()


@app.exception_handler(RequestValidationError)
async def _invalid_body(request: Request, _exc: RequestValidationError) -> JSONResponse:
    LOGGER.info("event=annotation_request status=invalid_body path=%s", request.url.path)
    return JSONResponse(status_code=400, content=to_error_response(EmptyInputError()))


@app.get("/health")
def health() -> dict[str, Any]:
    return {
        "status": "ok",
        "llm_configured": _annotator.configured,
        "model": _annotator.config.model,
    }


@app.post("/api/furigana")
def furigana(request: FuriganaRequest) -> JSONResponse:
    text = request.text or ""
    html = ""
    error: AnnotationError | None = None
    with Timer() as timer:
        try:
            html = _annotator.annotate(text).html
        except AnnotationError as exc:
            error = exc

    _metrics.record(
        input_length=utf16_length(text),
        output_length=len(html),
        latency_ms=timer.elapsed_ms,
        error_kind=error.kind if error is not None else None,
    )
    if error is not None:
        return JSONResponse(status_code=error.status_code, content=to_error_response(error))
    return JSONResponse(status_code=200, content={"html": str(html)})


@app.get("/metrics")
def metrics() -> dict[str, Any]:
    return _metrics.summary()
