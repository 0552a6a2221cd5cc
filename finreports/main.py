"""
Main FastAPI application - financial statements and ratio derivation.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from finreports.api.routers import reports
from finreports.core.logging import configure_logging
from finreports.domain.errors import DataUnavailable, InvalidParameter, ReportError
from finreports.infrastructure.database import init_db


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Application lifespan - startup and shutdown events."""
    configure_logging()
    init_db()
    yield


app = FastAPI(
    title="Financial Reports API",
    description="""
## Financial statements from the general ledger (BAS chart of accounts)

### Reports:
- **Resultaträkning**: Profit & Loss with optional comparison period
- **Balansräkning**: Balance Sheet with balance check
- **Kassaflödesanalys**: Cash Flow (indirect, from counter-postings)
- **Nyckeltal**: liquidity, leverage, profitability and efficiency ratios
- **Kundreskontra**: receivables aging and collection risk
- **Täckningsbidrag**: gross margin per customer or product
- **Budgetuppföljning**: actual vs authored budget
- **Dimensioner**: ledger totals per R1-R12 dimension value

### Principles:
- Read-only: reports never write to the ledger
- Every report is computed from one snapshot per request
    """,
    version="0.1.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(reports.router)


@app.get("/")
def root():
    return {
        "name": "Financial Reports API",
        "version": "0.1.0",
        "chart_of_accounts": "BAS",
        "docs": "/docs"
    }


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.exception_handler(InvalidParameter)
async def invalid_parameter_handler(request: Request, exc: InvalidParameter):
    """Handle enumerated parameters outside their value set."""
    return JSONResponse(status_code=400, content=exc.to_dict())


@app.exception_handler(DataUnavailable)
async def data_unavailable_handler(request: Request, exc: DataUnavailable):
    """Handle failed data feeds."""
    return JSONResponse(status_code=503, content=exc.to_dict())


@app.exception_handler(ReportError)
async def report_error_handler(request: Request, exc: ReportError):
    return JSONResponse(status_code=500, content=exc.to_dict())


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    """Handle validation errors."""
    return JSONResponse(
        status_code=400,
        content={"error": "ValueError", "message": str(exc)}
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
