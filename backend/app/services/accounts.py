# backend/app/services/accounts.py
import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from emailrisk import normalize_email

from ..db import safe_commit
from ..models.account import Account

logger = logging.getLogger("medclarity.accounts")


class AccountExistsError(Exception):
    """An account is already registered for this address."""

    def __init__(self, email: str):
        super().__init__(f"An account with this email already exists: {email}")
        self.email = email


async def email_exists(db: AsyncSession, email: str) -> bool:
    normalized = normalize_email(email)
    if not normalized:
        return False
    q = await db.execute(select(Account.id).where(Account.email == normalized).limit(1))
    return q.scalar_one_or_none() is not None


async def register_account(db: AsyncSession, email: str, full_name: Optional[str] = None) -> Account:
    normalized = normalize_email(email)
    if await email_exists(db, normalized):
        raise AccountExistsError(normalized)

    account = Account(email=normalized, full_name=(full_name or "").strip() or None)
    db.add(account)
    try:
        await safe_commit(db, restage=lambda: db.add(account))
    except IntegrityError:
        # concurrent signup won the unique index
        await db.rollback()
        raise AccountExistsError(normalized)

    logger.info("Registered account %s for %s", account.id, normalized)
    return account
