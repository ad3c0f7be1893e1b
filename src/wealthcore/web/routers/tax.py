"""Tax computation API endpoints."""

from fastapi import APIRouter, HTTPException

from wealthcore.analysis.tax import (
    build_brackets,
    compute_ifi,
    compute_income_tax,
    compute_progressive_tax,
    marginal_rate,
    per_optimization,
)
from wealthcore.web.schemas import (
    ApiResponse,
    IFIRequest,
    IncomeTaxRequest,
    IncomeTaxResult,
    PERRequest,
    PERResult,
    ProgressiveTaxRequest,
    TaxResult,
)

router = APIRouter(prefix="/tax", tags=["tax"])


@router.post("/ifi", response_model=ApiResponse[TaxResult])
async def compute_ifi_tax(body: IFIRequest):
    """IFI (real-estate wealth tax) on a taxable value."""
    return ApiResponse(data=TaxResult(tax=compute_ifi(body.taxable_value), taxable_base=body.taxable_value))


@router.post("/progressive", response_model=ApiResponse[TaxResult])
async def compute_custom_schedule(body: ProgressiveTaxRequest):
    """Apply a caller-supplied bracket schedule."""
    try:
        brackets = build_brackets(body.schedule.thresholds, body.schedule.rates)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    tax = compute_progressive_tax(body.taxable_base, brackets)
    return ApiResponse(data=TaxResult(tax=tax, taxable_base=body.taxable_base))


@router.post("/income", response_model=ApiResponse[IncomeTaxResult])
async def compute_income(body: IncomeTaxRequest):
    """Income tax with the family quotient, plus the marginal rate reached."""
    return ApiResponse(
        data=IncomeTaxResult(
            tax=compute_income_tax(body.income, body.household_parts),
            marginal_rate=marginal_rate(body.income, body.household_parts),
            household_parts=body.household_parts,
        )
    )


@router.post("/per", response_model=ApiResponse[PERResult])
async def compute_per(body: PERRequest):
    """Retirement savings plan (PER) contribution estimate."""
    tmi = body.marginal_rate
    if tmi is None:
        tmi = marginal_rate(body.income, body.household_parts)

    result = per_optimization(body.income, tmi)
    return ApiResponse(data=PERResult(**result, marginal_rate=tmi))
