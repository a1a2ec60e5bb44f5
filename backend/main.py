"""SEO meta tag analyzer API – FastAPI app and endpoints."""

import logging
from typing import Iterator

import requests
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from analyzer import analyze_url
from config import CORS_ALLOW_ORIGINS, HOST, LOG_LEVEL, PORT
from errors import AnalysisError
from schemas import AnalyzeRequest, AnalyzeResponse, ErrorResponse
from url_guard import Resolver, resolve_host

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="SEO Meta Analyzer API",
    description="Fetch a page and score its SEO meta tags",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_http_session() -> Iterator[requests.Session]:
    """One HTTP session per request, closed once the response is sent."""
    session = requests.Session()
    try:
        yield session
    finally:
        session.close()


def get_resolver() -> Resolver:
    return resolve_host


@app.exception_handler(AnalysisError)
async def analysis_error_handler(request: Request, exc: AnalysisError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Rejected analyze request: %s", exc.errors())
    return JSONResponse(status_code=422, content={"error": "Invalid URL format"})


@app.post(
    "/api/analyze",
    response_model=AnalyzeResponse,
    response_model_exclude_none=True,
    responses={
        400: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
def analyze(
    body: AnalyzeRequest,
    session: requests.Session = Depends(get_http_session),
    resolver: Resolver = Depends(get_resolver),
) -> AnalyzeResponse:
    """
    Pipeline: validate URL -> fetch page -> extract meta tags -> score -> return.
    """
    return analyze_url(body.url, resolver=resolver, session=session)


@app.get("/health")
def health() -> dict:
    """Health check for deployment."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=HOST, port=PORT)
