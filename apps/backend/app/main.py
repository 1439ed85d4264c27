"""FastAPI application exposing résumé text extraction."""

from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI, File, HTTPException, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.openapi.docs import get_swagger_ui_html
from fastapi.responses import HTMLResponse, JSONResponse

from resumetext import ExtractionOptions, Extractor, RawDocument, UnreadableDocumentError
from resumetext.core.utils import get_logger

app = FastAPI(title="resumetext API", version="0.1.0")
DOCS_PREFIX = "/api"

LOGGER = get_logger("resumetext.api")
extractor = Extractor(ExtractionOptions())


def _safe_filename(filename: str | None, default: str) -> str:
    """Return a filesystem-safe filename derived from user input."""

    if not filename:
        return default

    candidate = Path(filename).name
    return candidate or default


@app.get("/health", response_class=JSONResponse)
async def health() -> dict[str, str]:
    """Lightweight health endpoint for uptime checks."""
    return {"status": "ok"}


@app.get(
    f"{DOCS_PREFIX}/openapi.json",
    include_in_schema=False,
    name="prefixed_openapi",
)
async def prefixed_openapi() -> JSONResponse:
    """Expose the OpenAPI schema under the gateway's ``/api`` prefix."""

    return JSONResponse(app.openapi())


@app.get(f"{DOCS_PREFIX}/docs", include_in_schema=False)
async def prefixed_swagger_ui(request: Request) -> HTMLResponse:
    """Serve Swagger UI from the same ``/api`` prefix used by the gateway."""

    return get_swagger_ui_html(
        openapi_url=str(request.url_for("prefixed_openapi")),
        title=f"{app.title} - Swagger UI",
    )


@app.post(
    "/extract",
    response_class=JSONResponse,
    summary="Extract plain text from a résumé upload",
    response_description="Extracted text, truncated to the prompt limit, plus extraction details.",
)
async def extract_resume_text(
    file: UploadFile = File(..., description="PDF, DOCX or plain-text résumé."),
) -> dict[str, object]:
    """Recover the plain text of an uploaded résumé.

    Dispatch follows the file extension. Documents yielding too little text
    (typically scanned PDFs) are rejected with HTTP 422 so the client can ask
    for a text-based PDF or DOCX instead.
    """

    contents = await file.read()
    if not contents:
        raise HTTPException(status_code=400, detail=f"File '{file.filename}' is empty.")

    filename = _safe_filename(file.filename, "resume.txt")
    document = RawDocument(data=contents, filename=filename)

    try:
        result = await run_in_threadpool(extractor.extract, document)
    except UnreadableDocumentError as exc:
        LOGGER.info("Rejected '%s': %d usable characters", filename, exc.extracted_length)
        raise HTTPException(status_code=422, detail=exc.message) from exc

    payload = result.as_dict()
    payload["filename"] = filename
    return payload


__all__ = ["app"]
