# backend/app/routers/auth.py
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from emailrisk import format_validation_errors, normalize_email

from ..db import get_db
from ..services.accounts import AccountExistsError, email_exists, register_account
from ..services.risk import RiskScorer, get_scorer, log_attempt

router = APIRouter()


class SignupRequest(BaseModel):
    email: str
    full_name: Optional[str] = None


@router.post("/signup", status_code=201)
async def signup(
    body: SignupRequest,
    scorer: RiskScorer = Depends(get_scorer),
    db: AsyncSession = Depends(get_db),
):
    verdict = scorer.evaluate(body.email)
    log_attempt(verdict, "signup")

    if not verdict.is_valid:
        return JSONResponse(
            {"error": format_validation_errors(verdict), "riskScore": verdict.risk_score},
            status_code=400,
        )

    try:
        account = await register_account(db, verdict.email, body.full_name)
    except AccountExistsError:
        return JSONResponse(
            {"error": "An account with this email already exists"},
            status_code=409,
        )

    return {"id": account.id, "email": account.email, "warnings": list(verdict.warnings)}


@router.get("/accounts/{email}")
async def account_lookup(email: str, db: AsyncSession = Depends(get_db)):
    return {"email": normalize_email(email), "exists": await email_exists(db, email)}
