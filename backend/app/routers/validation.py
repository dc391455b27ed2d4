# backend/app/routers/validation.py
import csv
import io
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, Response, UploadFile
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from emailrisk import is_short_circuit

from ..config import settings
from ..db import get_db
from ..services.accounts import email_exists
from ..services.risk import RiskScorer, get_scorer, log_attempt
from ..utils.parser import SUPPORTED_EXTENSIONS, parse_address_file

router = APIRouter()
logger = logging.getLogger("medclarity.validation")


class ValidateEmailRequest(BaseModel):
    email: Optional[str] = None
    action: str = "validate"


@router.post("")
async def validate_email(
    body: ValidateEmailRequest,
    scorer: RiskScorer = Depends(get_scorer),
    db: AsyncSession = Depends(get_db),
):
    if not body.email or not body.email.strip():
        return JSONResponse({"error": "Email is required"}, status_code=400)

    verdict = scorer.evaluate(body.email)
    log_attempt(verdict, body.action)

    if is_short_circuit(verdict):
        return JSONResponse(
            {"isValid": False, "error": verdict.errors[0], "riskScore": verdict.risk_score},
            status_code=400,
        )

    # existing-account lookup runs after the risk check
    if body.action == "signup" and await email_exists(db, verdict.email):
        return JSONResponse(
            {"isValid": False, "error": "An account with this email already exists", "riskScore": 0},
            status_code=400,
        )

    payload = verdict.to_dict()
    payload["message"] = "Email is valid" if verdict.is_valid else "Email validation failed"
    return payload


# ---------------------------------------------------
# Batch screening (CSV / TXT / XLSX)
# ---------------------------------------------------
@router.post("/batch", response_model=None)
async def validate_batch(
    file: UploadFile = File(...),
    file_format: str = Query("json", pattern="^(json|csv)$"),
    scorer: RiskScorer = Depends(get_scorer),
):
    fname = (file.filename or "").lower()
    if not fname.endswith(SUPPORTED_EXTENSIONS):
        raise HTTPException(status_code=400, detail="Only CSV, TXT, XLSX allowed")

    content = await file.read()
    if len(content) > settings.MAX_UPLOAD_SIZE_MB * 1024 * 1024:
        raise HTTPException(status_code=413, detail="Upload too large")

    try:
        addresses = parse_address_file(fname, content)
    except Exception as e:
        logger.warning("Unreadable upload %s: %s", file.filename, e)
        raise HTTPException(status_code=400, detail="Could not parse uploaded file")

    verdicts = [scorer.evaluate(a) for a in addresses]
    valid = sum(1 for v in verdicts if v.is_valid)
    logger.info("Batch screening %s: total=%d valid=%d", file.filename, len(verdicts), valid)

    if file_format == "csv":
        buf = io.StringIO()
        writer = csv.writer(buf)
        writer.writerow(["email", "domain", "is_valid", "risk_score", "errors", "warnings"])
        for v in verdicts:
            writer.writerow([
                v.email,
                v.domain,
                v.is_valid,
                v.risk_score,
                "; ".join(v.errors),
                "; ".join(v.warnings),
            ])
        payload = ("\ufeff" + buf.getvalue()).encode("utf-8")
        return Response(
            payload,
            media_type="text/csv",
            headers={"Content-Disposition": 'attachment; filename="screening_results.csv"'},
        )

    return {
        "total": len(verdicts),
        "valid": valid,
        "invalid": len(verdicts) - valid,
        "results": [v.to_dict() for v in verdicts],
    }
