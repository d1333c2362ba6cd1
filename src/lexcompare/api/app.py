from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, List

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from lexcompare.api.schemas import ChoiceOfLawRequest, CompareRequest, SearchRequest
from lexcompare.api.security import require_api_key
from lexcompare.bootstrap import build_engine
from lexcompare.engine import ComparativeLawEngine
from lexcompare.errors import LexCompareError
from lexcompare.observability import log_event, redact_api_key, run_scope
from lexcompare.version import __version__

# -----------------------------------------------------------------------------
# App setup
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if getattr(app.state, "engine", None) is None:
        app.state.engine = build_engine()
    yield
    app.state.engine = None


app = FastAPI(title="lexcompare API", version="v1", lifespan=lifespan)


@app.middleware("http")
async def attach_run_id(request: Request, call_next):
    # callers may pass their own id to correlate a CLI or batch run with API calls
    with run_scope(request.headers.get("X-Run-ID")) as run_id:
        path = request.url.path
        log_event("request.start", path=path, api_key=redact_api_key(request.headers.get("X-API-Key")))
        response = await call_next(request)
        response.headers["X-Run-ID"] = run_id
        log_event("request.end", path=path, status=response.status_code)
        return response


# -----------------------------------------------------------------------------
# Error mapping
# -----------------------------------------------------------------------------
_STATUS_BY_KIND: Dict[str, int] = {
    "case_not_found": 404,
    "duplicate_id": 409,
    "duplicate_rule_entry": 409,
    "invalid_weighting": 422,
    "insufficient_facts": 422,
    "invalid_comparison": 422,
    "unknown_jurisdiction": 422,
    "feed_error": 422,
}


@app.exception_handler(LexCompareError)
async def handle_engine_error(request: Request, exc: LexCompareError):
    status = _STATUS_BY_KIND.get(exc.kind, 400)
    logger.info("Request %s failed with %s: %s", request.url.path, exc.kind, exc.message)
    return JSONResponse(status_code=status, content={"error": exc.to_dict()})


def _normalize_validation_errors(errors: List[Dict[str, Any]]) -> Dict[str, Any]:
    fields = []
    for err in errors:
        loc_parts = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        path = ".".join(["request", *loc_parts]) if loc_parts else "request"
        fields.append({"path": path, "message": err.get("msg", "Invalid request")})
    return {"error": {"kind": "validation_error", "fields": fields}}


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=422, content=_normalize_validation_errors(exc.errors()))


def _engine() -> ComparativeLawEngine:
    engine: ComparativeLawEngine | None = getattr(app.state, "engine", None)
    if engine is None:
        try:
            engine = build_engine()
        except LexCompareError as exc:
            logger.exception("Engine bootstrap failed during request")
            raise HTTPException(status_code=503, detail={"kind": exc.kind, "message": exc.message}) from exc
        app.state.engine = engine
    return engine


# -----------------------------------------------------------------------------
# Routes
# -----------------------------------------------------------------------------
@app.get("/health")
def health() -> Dict[str, Any]:
    engine = _engine()
    return {
        "ok": True,
        "version": __version__,
        "rules": len(engine.catalog),
        "jurisdictions": len(engine.catalog.jurisdictions()),
        "decisions": len(engine.index),
    }


@app.post("/v1/compare", dependencies=[Depends(require_api_key)])
def compare_rules(req: CompareRequest) -> Dict[str, Any]:
    result = _engine().compare(req.topic, req.jurisdictions)
    return result.to_dict()


@app.post("/v1/compare/report", response_class=PlainTextResponse, dependencies=[Depends(require_api_key)])
def compare_report(req: CompareRequest) -> str:
    engine = _engine()
    return engine.generate_report(engine.compare(req.topic, req.jurisdictions))


@app.post("/v1/choice-of-law", dependencies=[Depends(require_api_key)])
def choice_of_law(req: ChoiceOfLawRequest) -> Dict[str, Any]:
    result = _engine().analyze_choice_of_law(
        req.fact_pattern(),
        req.forum,
        req.approach,
        law_quality=req.law_quality or None,
        weight_overrides=req.weights or None,
    )
    return result.to_dict()


@app.post("/v1/cases/search", dependencies=[Depends(require_api_key)])
def search_cases(req: SearchRequest) -> Dict[str, Any]:
    results = _engine().search(req.keywords, court_level=req.court_level, topic=req.topic, limit=req.limit)
    return {"count": len(results), "results": [result.to_dict() for result in results]}


@app.get("/v1/cases/{case_id}", dependencies=[Depends(require_api_key)])
def get_case(case_id: str) -> Dict[str, Any]:
    return _engine().get_decision(case_id).to_dict()
