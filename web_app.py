#!/usr/bin/env python3

"""FastAPI preview app for the video analysis email."""

import asyncio
import logging
import os
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, Response
from starlette.middleware.base import BaseHTTPMiddleware

# Load .env file if present (no dependency on python-dotenv)
_env_path = Path(__file__).parent / ".env"
if _env_path.is_file():
  for _line in _env_path.read_text().splitlines():
    _line = _line.strip()
    if _line and not _line.startswith("#") and "=" in _line:
      _k, _v = _line.split("=", 1)
      os.environ.setdefault(_k.strip(), _v.strip())

import report_service
import sample_analyses
from analysis_email import render_analysis_email, render_analysis_text
from email_models import AnalysisEmailInput

logging.basicConfig(level=logging.INFO)

app = FastAPI(title="Mindful Champion Email Preview", version="1.0")


# ---------------------------------------------------------------------------
# CORS middleware
# ---------------------------------------------------------------------------
_ALLOWED_ORIGINS = os.environ.get(
    "ALLOWED_ORIGINS", "http://localhost:8080,http://localhost:3000",
).split(",")
_ALLOWED_ORIGINS = [o.strip() for o in _ALLOWED_ORIGINS if o.strip()]

if _ALLOWED_ORIGINS:
  app.add_middleware(
      CORSMiddleware,
      allow_origins=_ALLOWED_ORIGINS,
      allow_methods=["GET", "POST"],
      allow_headers=["*"],
  )


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
  async def dispatch(self, request, call_next):
    response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    return response

app.add_middleware(SecurityHeadersMiddleware)


# ---------------------------------------------------------------------------
# Health check endpoint
# ---------------------------------------------------------------------------
@app.get("/health")
async def health_check():
  """Health check for uptime monitoring and load balancer probes."""
  return JSONResponse({"status": "healthy", "version": app.version})


async def _read_record(request: Request) -> AnalysisEmailInput:
  """Parse the request body into an input record; ValueError if unusable."""
  body = await request.json()
  return AnalysisEmailInput.from_dict(body)


@app.get("/preview/video-analysis", response_class=HTMLResponse)
async def preview_sample(
    variant: str = "full",
    seed: Optional[int] = None,
    message_index: Optional[int] = None,
):
  """Render one of the built-in sample records."""
  if variant not in sample_analyses.VARIANTS:
    return JSONResponse(
        {"error": f"Unknown variant '{variant}'. Use one of: {', '.join(sample_analyses.VARIANTS)}"},
        status_code=400,
    )
  data = AnalysisEmailInput.from_dict(sample_analyses.sample_payload(variant))
  return HTMLResponse(render_analysis_email(data, seed=seed, message_index=message_index))


@app.post("/api/preview/video-analysis")
async def preview_record(
    request: Request,
    format: str = "html",
    seed: Optional[int] = None,
    message_index: Optional[int] = None,
):
  """Render a posted analysis record as HTML (default) or plain text."""
  try:
    data = await _read_record(request)
  except ValueError as ex:
    logging.warning("Rejected preview request: %s", ex)
    return JSONResponse({"error": str(ex)}, status_code=400)

  if format == "text":
    return PlainTextResponse(render_analysis_text(data, seed=seed, message_index=message_index))
  return HTMLResponse(render_analysis_email(data, seed=seed, message_index=message_index))


@app.post("/api/preview/video-analysis/pdf")
async def preview_pdf(request: Request, seed: Optional[int] = None):
  """Render a posted analysis record as a PDF download."""
  try:
    data = await _read_record(request)
  except ValueError as ex:
    logging.warning("Rejected PDF preview request: %s", ex)
    return JSONResponse({"error": str(ex)}, status_code=400)

  loop = asyncio.get_running_loop()
  pdf_bytes = await loop.run_in_executor(
      None, lambda: report_service.generate_analysis_pdf(data, seed=seed))

  filename = f"video_analysis_{data.analysis_id}.pdf".replace(" ", "_").replace('"', "")
  return Response(
      content=pdf_bytes,
      media_type="application/pdf",
      headers={"Content-Disposition": f'attachment; filename="{filename}"'},
  )


if __name__ == "__main__":
  import uvicorn
  uvicorn.run(app, host="0.0.0.0", port=8080)
