"""
Fitlead Web API - FastAPI application.

Serves the lead funnel endpoints used by the chat UI and the read-only
dashboard endpoints.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fitlead import __version__
from fitlead.errors import FitleadError
from fitlead.web.dashboard_routes import router as dashboard_router
from fitlead.web.lead_routes import router as lead_router

logger = logging.getLogger(__name__)

app = FastAPI(title="Fitlead", version=__version__)


@app.exception_handler(FitleadError)
async def fitlead_error_handler(request: Request, exc: FitleadError):
    """Translate errors that escape a route into the {error, details?} body."""
    logger.error(f"{request.method} {request.url.path} failed: {exc.message} ({exc.__cause__ or exc})")
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())


@app.on_event("startup")
async def startup_event():
    """Log which providers are live on startup."""
    from fitlead.config import get_settings

    settings = get_settings()
    logging.getLogger("fitlead").setLevel(settings.log_level)
    logger.info("Fitlead starting up...")
    logger.info(f"  Diet plan generation: {'enabled' if settings.generation_configured else 'NOT CONFIGURED'}")
    logger.info(f"  WhatsApp delivery: {'twilio' if settings.messaging_configured else 'simulated'}")
    logger.info(f"  Google Sheets sink: {'enabled' if settings.sheets_configured else 'disabled'}")

    if settings.fitlead_log_prompts and settings.is_development:
        from fitlead.llm.prompt_logger import enable_prompt_logging

        enable_prompt_logging(True)
        logger.info("  Prompt logging: enabled (prompt_logs/)")


# CORS middleware for the chat/dashboard frontend dev server
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(lead_router, prefix="/api")
app.include_router(dashboard_router, prefix="/api")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}
