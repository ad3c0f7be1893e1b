"""Loan amortization API endpoints."""

from fastapi import APIRouter

from wealthcore.analysis.amortization import monthly_payment, payment_schedule, total_interest
from wealthcore.web.schemas import (
    ApiResponse,
    LoanPayment,
    LoanRequest,
    LoanSchedule,
    ScheduledPaymentItem,
)

router = APIRouter(prefix="/loans", tags=["loans"])


@router.post("/payment", response_model=ApiResponse[LoanPayment])
async def compute_payment(body: LoanRequest):
    """Monthly payment of a loan."""
    payment = monthly_payment(
        body.principal, body.annual_rate_percent, body.duration_months, body.scheme
    )
    return ApiResponse(
        data=LoanPayment(
            monthly_payment=payment,
            monthly_payment_rounded=round(payment * 100) / 100,
            scheme=body.scheme,
        )
    )


@router.post("/schedule", response_model=ApiResponse[LoanSchedule])
async def compute_schedule(body: LoanRequest):
    """Month-by-month repayment schedule of a loan."""
    schedule = payment_schedule(
        body.principal, body.annual_rate_percent, body.duration_months, body.scheme
    )
    return ApiResponse(
        data=LoanSchedule(
            scheme=body.scheme,
            payments=[
                ScheduledPaymentItem(
                    payment_number=p.payment_number,
                    principal=p.principal,
                    interest=p.interest,
                    total=p.total,
                    remaining_balance=p.remaining_balance,
                )
                for p in schedule
            ],
            total_interest=total_interest(schedule),
            total_paid=sum(p.total for p in schedule),
        )
    )
