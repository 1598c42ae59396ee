import io
import logging

from fastapi import APIRouter, HTTPException
from fastapi.responses import StreamingResponse

from schemas.calculation import CalculationRequest, SalaryTableRequest
from services.calculation_service import (
    run_calculation_service,
    run_salary_table_service,
    export_salary_table_csv,
    rules_info_service,
    standard_brackets_service,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/default-rules")
async def default_rules_endpoint():
    """Default proposal parameters and their human-readable summary"""
    return rules_info_service()


@router.get("/standard-brackets")
async def standard_brackets_endpoint():
    """Current monthly progressive table"""
    return standard_brackets_service()


@router.post("/calculate")
async def calculate_endpoint(params: CalculationRequest):
    """
    Compare current and proposed tax for one salary.
    """
    try:
        return run_calculation_service(params)
    except Exception as e:
        logger.exception("Calculation failed")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/salary-table")
async def salary_table_endpoint(params: SalaryTableRequest):
    """
    Evaluate the proposal over a salary range.
    """
    try:
        return run_salary_table_service(params)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Salary table failed")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/export-table")
async def export_table_endpoint(params: SalaryTableRequest):
    """Salary range comparison as a CSV download"""
    try:
        content = export_salary_table_csv(params)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Table export failed")
        raise HTTPException(status_code=500, detail=str(e))

    return StreamingResponse(
        io.StringIO(content),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=ir_proposal_table.csv"}
    )
