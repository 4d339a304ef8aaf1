"""
FastAPI Endpoints for the Lead Intent Scoring Engine
===================================================
RESTful API for offers, lead uploads and intent scoring.

Base URL: http://localhost:8000

Endpoints:
- GET  /                    - API info
- GET  /api/health          - Health check
- POST /api/offer           - Create an offer
- GET  /api/offer           - List offers
- POST /api/leads/upload    - Upload a CSV of leads (field: csvFile)
- GET  /api/leads           - Leads grouped by upload batch
- POST /api/score           - Score leads against an offer
- GET  /api/results         - All scoring results with a summary
- GET  /api/stats           - Engine statistics
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import FastAPI, File, Request, UploadFile
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from ..models.schemas import OfferCreate, ScoreRequest, UploadSummary
from ..config.settings import UPLOAD_CONFIG, configure_logging
from ..engine import LeadScoringEngine
from ..errors import IntentEngineError
from ..ingest.csv_loader import load_leads_csv

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


def success_response(data: Any, message: str = "Operation successful", status_code: int = 200) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder({"success": True, "message": message, "data": data}),
    )


def error_response(status_code: int, message: str, details: Any = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder({"success": False, "message": message, "details": details or {}}),
    )


def create_app(engine: Optional[LeadScoringEngine] = None) -> FastAPI:
    """Build the API around one engine instance (and its repositories)"""
    engine = engine or LeadScoringEngine()

    app = FastAPI(
        title="Lead Intent Scoring API",
        description="""
## Lead Qualification Backend

Scores prospects against an offer by combining deterministic rules with
a language-model intent classification.

### Quick Start:
1. `POST /api/offer` with the product's value props and ideal use cases
2. `POST /api/leads/upload` with a CSV (name, role, company, industry, location, linkedin_bio)
3. `POST /api/score` with the offer id and lead ids
4. `GET /api/results` for all results and a summary
        """,
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.engine = engine

    # CORS middleware - Allow all origins for frontend development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Health & Info Endpoints
    # =========================================================================

    @app.get("/", tags=["Info"])
    async def root():
        """API information and available endpoints"""
        return {
            "service": "Lead Intent Scoring Engine",
            "version": API_VERSION,
            "status": "running",
            "docs": "/docs",
            "endpoints": {
                "Create Offer": "POST /api/offer",
                "Upload Leads": "POST /api/leads/upload",
                "Score": "POST /api/score",
                "Results": "GET /api/results",
                "Health": "GET /api/health",
            },
        }

    @app.get("/api/health", tags=["Info"])
    async def health_check():
        """Health check endpoint for monitoring"""
        return {
            "status": "healthy",
            "service": "Lead Intent Scoring Engine",
            "version": API_VERSION,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "llm_configured": engine.ai_scorer.client.configured,
        }

    @app.get("/api/stats", tags=["Info"])
    async def get_stats():
        """Get engine statistics"""
        return engine.get_stats()

    # =========================================================================
    # Offers
    # =========================================================================

    @app.post("/api/offer", status_code=201, tags=["Offers"])
    async def create_offer(offer: OfferCreate):
        """Create an offer to score leads against"""
        created = engine.offers.create(offer)
        logger.info("Created offer %s (%s)", created.id, created.name)
        return JSONResponse(
            status_code=201,
            content=jsonable_encoder({
                "success": True,
                "offer_id": created.id,
                "message": "Offer created successfully",
                "data": created,
            }),
        )

    @app.get("/api/offer", tags=["Offers"])
    async def list_offers():
        """List all offers"""
        return success_response(engine.offers.get_all(), "Successfully retrieved offers")

    # =========================================================================
    # Leads
    # =========================================================================

    @app.post("/api/leads/upload", tags=["Leads"])
    async def upload_leads(csvFile: UploadFile = File(...)):
        """
        Upload a CSV of leads.

        The file must be CSV (by mime type or extension), at most 5MB, with
        the headers name, role, company, industry, location, linkedin_bio.
        """
        filename = (csvFile.filename or "").lower()
        valid_type = csvFile.content_type in UPLOAD_CONFIG["allowed_mime_types"]
        valid_ext = any(filename.endswith(ext) for ext in UPLOAD_CONFIG["allowed_extensions"])
        if not (valid_type or valid_ext):
            return error_response(400, "Only CSV files are allowed!")

        content = await csvFile.read(UPLOAD_CONFIG["max_file_size_bytes"] + 1)
        if len(content) > UPLOAD_CONFIG["max_file_size_bytes"]:
            return error_response(400, "File too large. Maximum 5MB allowed.")

        rows = load_leads_csv(content)
        batch_id, leads = engine.leads.add_batch(rows)
        logger.info("Uploaded batch %s with %d leads", batch_id, len(leads))

        return success_response(
            UploadSummary(batch_id=batch_id, leads_count=len(leads)),
            "Leads uploaded and processed successfully",
        )

    @app.get("/api/leads", tags=["Leads"])
    async def list_leads():
        """All uploaded leads, grouped by batch id"""
        return success_response(engine.leads.get_all_by_batch(), "Successfully retrieved leads data")

    # =========================================================================
    # Scoring
    # =========================================================================

    @app.post("/api/score", tags=["Scoring"])
    async def score_leads(request: ScoreRequest):
        """
        Score leads against an offer.

        Fails with 404 (and scores nothing) if the offer or any lead is missing.
        """
        results = await engine.score_batch(
            str(request.offerId),
            [str(lead_id) for lead_id in request.leadIds],
        )
        return success_response({"results": results}, "Leads scored successfully")

    @app.get("/api/results", tags=["Scoring"])
    async def get_results():
        """All stored scoring results with a summary"""
        report = engine.get_all_results()
        return success_response(report, "Scoring results retrieved successfully")

    # =========================================================================
    # Error Handlers
    # =========================================================================

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        details = [
            f"{'.'.join(str(p) for p in err.get('loc', ()) if p != 'body')}: {err.get('msg')}"
            for err in exc.errors()
        ]
        return error_response(400, "Validation failed", details)

    @app.exception_handler(IntentEngineError)
    async def engine_exception_handler(request: Request, exc: IntentEngineError):
        return error_response(exc.status_code, str(exc))

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s", request.url.path)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "detail": str(exc),
                "type": type(exc).__name__,
            },
        )

    return app


configure_logging()
app = create_app()
