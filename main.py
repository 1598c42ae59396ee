"""
IR Proposal Calculator - FastAPI Backend
Features:
- Current monthly IRRF table vs. proposed exemption/discount rules
- Salary input as number or pt-BR text, monthly or annual
- Salary range tables with CSV export
"""
import logging
import os
import sys

from fastapi import FastAPI
from fastapi.responses import HTMLResponse
from fastapi.middleware.cors import CORSMiddleware

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))
import config
from api.calculations import router as calculations_router

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="IR Proposal Calculator API",
    description="Compare income tax under the current table and the proposed exemption rules",
    version="1.0.0"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(calculations_router, prefix="/api")


# ============================================================================
# Endpoints
# ============================================================================

@app.get("/", response_class=HTMLResponse)
async def index():
    """Home page"""
    return HTMLResponse(
        content="<h1>Calculadora de IR</h1><p>Simule o impacto da nova proposta. Use /docs for API documentation</p>"
    )


@app.get("/health")
async def health_check():
    """Health check endpoint for deployment"""
    return {"status": "healthy", "service": "ir-proposal-calculator-api"}


# ============================================================================
# Main
# ============================================================================

if __name__ == "__main__":
    import uvicorn
    logger.info("Starting server on %s:%d", config.HOST, config.PORT)
    uvicorn.run("main:app", host=config.HOST, port=config.PORT, reload=True)
