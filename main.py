from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from config import Config
from errors import InvalidInputError, UnbalancedLedgerError
from models import (
    BalancesResponse,
    ErrorResponse,
    GroupSummary,
    SettlementRequest,
    SettlementResponse,
)
from settlement_optimizer import SettlementOptimizer
from summary import summarize_group

# Configure logging
logging.basicConfig(level=Config.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=Config.API_TITLE,
    description="Computes the minimum set of payments that settles a group's shared expenses",
    version=Config.API_VERSION
)

# CORS middleware to allow frontend connections
app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid roster or expense"},
    500: {"model": ErrorResponse, "description": "Ledger does not balance"},
}


# ===== ERROR HANDLERS =====
@app.exception_handler(InvalidInputError)
async def invalid_input_handler(request: Request, exc: InvalidInputError):
    logger.warning(f"Rejected {request.url.path}: {exc.message}")
    return JSONResponse(status_code=400, content=exc.to_dict())


@app.exception_handler(UnbalancedLedgerError)
async def unbalanced_ledger_handler(request: Request, exc: UnbalancedLedgerError):
    logger.error(f"Unbalanced ledger on {request.url.path}: {exc.message} residuals={exc.residuals}")
    return JSONResponse(status_code=500, content=exc.to_dict())


# ===== API ENDPOINTS =====
@app.get("/")
def root():
    return {"message": "Settlement Engine API"}


@app.post("/settlements", response_model=SettlementResponse, responses=ERROR_RESPONSES)
def calculate_settlements(request: SettlementRequest):
    """Calculate the minimum set of payments that settles the group"""
    result = SettlementOptimizer.optimize_settlements(request.expenses, request.roster)
    logger.info(f"Computed {len(result['settlements'])} settlements for {len(request.roster)} members")
    return SettlementResponse(**result)


@app.post("/balances", response_model=BalancesResponse, responses=ERROR_RESPONSES)
def calculate_balances(request: SettlementRequest):
    """Net balance of every member, positive when they are owed money"""
    balances = SettlementOptimizer.calculate_balances(request.expenses, request.roster)
    return BalancesResponse(
        total=SettlementOptimizer.total_spend(request.expenses),
        balances=balances
    )


@app.post("/summary", response_model=GroupSummary, responses=ERROR_RESPONSES)
def get_group_summary(request: SettlementRequest):
    """Spending totals, per-member breakdown and spending by category"""
    return summarize_group(request.expenses, request.roster)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=Config.HOST, port=Config.PORT)
