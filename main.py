import sys
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Query, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from prometheus_client import Counter, Histogram, make_asgi_app

from core.config import settings
from core.exceptions import PRSumException
from models.pull_request import PayloadHint
from models.summary_request import LLMSummaryRequest, PageRequest
from services.cache.summary_cache import SummaryCache
from services.extractor.dom import Document
from services.extractor.lexicon import get_default_lexicon
from services.llm.summarizer import LLMSummarizer
from services.payload.raw_payload import build_raw_payload
from services.pipeline import export_pr, export_structured, run_extraction
from services.pr.detector import detect_pr_context
from services.scraper.fetcher import fetch_document

# Prometheus metrics endpoint
metrics_app = make_asgi_app()

SUMMARY_REQUESTS = Counter("prsum_summaries_total", "Local summaries produced", ["mode"])
EXTRACTION_REQUESTS = Counter("prsum_extractions_total", "Structured extractions and raw payloads served", ["kind"])
LLM_REQUESTS = Counter("prsum_llm_summaries_total", "LLM summaries produced", ["provider"])
REQUEST_ERRORS = Counter("prsum_errors_total", "Requests that ended in a tagged failure", ["code"])
EXTRACTION_DURATION = Histogram("prsum_extraction_seconds", "Time spent extracting/summarizing a page")


# ------------------------------------------------------------------
# App lifecycle
# ------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        logger.remove()
        logger.add(sys.stderr, level=settings.LOG_LEVEL.upper())
        logger.info("Initializing application...")

        app.state.lexicon = get_default_lexicon()
        app.state.summary_cache = SummaryCache(settings.SUMMARY_CACHE_SIZE)
        app.state.llm = LLMSummarizer(settings)
        app.state.fetch_transport = None

        yield

        logger.info("Shutting down application...")
        app.state.summary_cache.clear()
    except Exception as e:
        logger.exception(f"Application lifecycle error: {str(e)}")
        raise


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Extracts and condenses web pages and pull requests into LLM-ready context",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_timing_header(request: Request, call_next):
    start_time = time.perf_counter()
    response = await call_next(request)
    process_time = time.perf_counter() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    return response


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    error = PRSumException(
        "Invalid request",
        code="VALIDATION_ERROR",
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        details={"errors": jsonable_encoder(exc.errors())},
    )
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.exception_handler(PRSumException)
async def prsum_exception_handler(request: Request, exc: PRSumException):
    REQUEST_ERRORS.labels(code=exc.code).inc()
    logger.warning(f"{exc.code} on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {str(exc)}")
    REQUEST_ERRORS.labels(code="INTERNAL_SERVER_ERROR").inc()
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "ok": False,
            "error": {
                "code": "INTERNAL_SERVER_ERROR",
                "message": "An unexpected error occurred",
                "status": 500,
            },
        },
    )


app.mount("/metrics", metrics_app)


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------
async def _load_document(page: PageRequest, req: Request) -> Document:
    """Use the supplied HTML, or download the page."""
    if page.html is not None:
        return Document.from_html(page.html, url=page.url)
    return await fetch_document(page.url, settings, transport=req.app.state.fetch_transport)


def _budget(page: PageRequest) -> int:
    """Requested budget, else the configured PR or page default."""
    if page.max_chars is not None:
        return page.max_chars
    if detect_pr_context(page.url).hint == PayloadHint.PR:
        return settings.PR_MAX_CHARS
    return settings.DEFAULT_MAX_CHARS


# ------------------------------------------------------------------
# Routes
# ------------------------------------------------------------------
@app.get("/health")
async def health_check():
    return {"status": "healthy", "timestamp": time.time()}


@app.get("/")
async def root():
    return {
        "name": settings.PROJECT_NAME,
        "version": "1.0.0",
        "description": "Extracts and condenses web pages and pull requests into LLM-ready context",
        "docs_url": "/docs",
        "health_check": "/health",
    }


@app.post("/api/v1/summarize")
async def summarize_page(page: PageRequest, req: Request):
    logger.info(f"Processing summary request for {page.url}")
    document = await _load_document(page, req)
    with EXTRACTION_DURATION.time():
        result = await run_in_threadpool(
            run_extraction, document, page.url, _budget(page), req.app.state.lexicon
        )
    mode = "pr" if result.pr is not None else "generic"
    SUMMARY_REQUESTS.labels(mode=mode).inc()
    return {
        "ok": True,
        "title": result.structured.title,
        "url": result.structured.url,
        "mode": mode,
        "summary": result.summary,
        "stats": result.structured.stats(),
        "low_confidence": bool(result.pr is not None and result.pr.is_low_confidence),
    }


@app.post("/api/v1/extract")
async def extract_page(page: PageRequest, req: Request):
    document = await _load_document(page, req)
    with EXTRACTION_DURATION.time():
        result = await run_in_threadpool(
            run_extraction, document, page.url, _budget(page), req.app.state.lexicon
        )
    if result.pr is not None:
        EXTRACTION_REQUESTS.labels(kind="pr").inc()
        return {"ok": True, "structured": {"title": result.pr.title, "url": result.pr.url}, "pr": export_pr(result.pr)}
    EXTRACTION_REQUESTS.labels(kind="structured").inc()
    return {"ok": True, "structured": export_structured(result.structured)}


@app.post("/api/v1/raw")
async def raw_page(page: PageRequest, req: Request):
    document = await _load_document(page, req)
    raw = await run_in_threadpool(build_raw_payload, document, page.url, req.app.state.lexicon)
    EXTRACTION_REQUESTS.labels(kind="raw").inc()
    return {"ok": True, "raw": raw.model_dump(mode="json")}


@app.post("/api/v1/summarize/llm")
async def summarize_with_llm(page: LLMSummaryRequest, req: Request):
    document = await _load_document(page, req)
    raw = await run_in_threadpool(build_raw_payload, document, page.url, req.app.state.lexicon)
    summary, provider = await req.app.state.llm.summarize(raw, page.max_chars, page.engine)
    LLM_REQUESTS.labels(provider=provider).inc()

    meta = (
        f"Title: {raw.title or '(untitled)'}  •  Mode: {raw.hint.value}  •  "
        f"Source size: text {len(raw.raw_text)} / html {len(raw.raw_html)}"
    )
    req.app.state.summary_cache.put(page.url, summary, meta=meta, engine=provider)
    return {"ok": True, "summary": summary, "provider": provider, "meta": meta}


@app.get("/api/v1/summaries")
async def last_summary(req: Request, url: str = Query(..., min_length=1)):
    entry = req.app.state.summary_cache.get(url)
    if entry is None:
        raise PRSumException(f"No summary recorded for {url}", code="NOT_FOUND", status_code=404)
    return {"ok": True, **entry.model_dump()}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
