# main.py
# FastAPI app exposing GET /api/days - countdown to the next Notion event

import logging
from datetime import date
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from config import Settings, load_settings
from errors import NotFoundError, UpstreamError
from models import ErrorResponse
from providers.notion import NotionSource
from utils import format_result, select_next_event, today_in
from widget import WIDGET_HTML

settings = load_settings()

app = FastAPI(title="Countdown API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

# logging
logging.basicConfig(level=logging.INFO)
log = logging.getLogger("countdown")

INTERNAL_ERROR = ErrorResponse(error="Internal Server Error").model_dump()


# global JSON error handling
# - NotFoundError -> 404 { "error": <message> }
# - UpstreamError / anything else -> 500 generic body, details only in the log
@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    log.warning("404: %s", exc.message)
    return JSONResponse(status_code=404, content=ErrorResponse(error=exc.message).model_dump())


@app.exception_handler(UpstreamError)
async def upstream_error_handler(request: Request, exc: UpstreamError):
    log.error("Error fetching data from Notion: %s", exc, exc_info=exc)
    return JSONResponse(status_code=500, content=INTERNAL_ERROR)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    log.warning("HTTP %s: %s", exc.status_code, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    # log stack once. do not leak details to client
    log.error("Unhandled exception", exc_info=exc)
    return JSONResponse(status_code=500, content=INTERNAL_ERROR)


# dependencies (overridden in tests)
def get_settings() -> Settings:
    return settings


def get_source(cfg: Settings = Depends(get_settings)) -> NotionSource:
    return NotionSource.from_settings(cfg)


def get_today(cfg: Settings = Depends(get_settings)) -> date:
    # recomputed per request
    return today_in(cfg.tz)


@app.get("/api/days")
async def get_days(
    source: NotionSource = Depends(get_source),
    today: date = Depends(get_today),
    cfg: Settings = Depends(get_settings),
):
    """
    Days until the nearest event on or after today, or the "today" marker.
    Candidates are re-checked and re-sorted here whatever the source filtered.
    """
    records = await source.fetch_candidates(today)
    if not records:
        raise NotFoundError("No upcoming pages found")

    event = select_next_event(records, today, tz=cfg.tz, placeholder=cfg.untitled)
    if event is None:
        raise NotFoundError("No valid future or today events found")

    result = format_result(event, today)
    log.info("next event %s on %s (%d candidates)", event.title, event.date.isoformat(), len(records))
    return result.model_dump()


@app.get("/", response_class=HTMLResponse)
def widget():
    return WIDGET_HTML


@app.get("/health")
def health():
    return {"ok": True}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000)
