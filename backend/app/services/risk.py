# backend/app/services/risk.py
import logging
from functools import lru_cache
from typing import Optional

from emailrisk import (
    ReferenceTables,
    ScoringPolicy,
    ValidationVerdict,
    evaluate,
    fetch_disposable_domains,
    get_policy,
    load_tables,
)

from ..config import Settings, settings as app_settings

logger = logging.getLogger("medclarity.validation")


def build_policy(settings: Settings) -> ScoringPolicy:
    policy = get_policy(settings.RISK_POLICY)
    overrides = {}
    if settings.REJECT_THRESHOLD is not None:
        overrides["reject_threshold"] = settings.REJECT_THRESHOLD
    if settings.ADVISORY_THRESHOLD is not None:
        overrides["advisory_threshold"] = settings.ADVISORY_THRESHOLD
    if settings.SHORT_CIRCUIT_ON_FORMAT_ERROR is not None:
        overrides["short_circuit_on_format_error"] = settings.SHORT_CIRCUIT_ON_FORMAT_ERROR
    return policy.replace(**overrides) if overrides else policy


def build_tables(settings: Settings) -> ReferenceTables:
    if settings.REFERENCE_TABLES_PATH:
        return load_tables(settings.REFERENCE_TABLES_PATH)
    return ReferenceTables.defaults()


class RiskScorer:
    """
    Policy + tables bound once per process.
    Tables are swapped whole, never mutated, so concurrent requests are safe.
    """

    def __init__(self, policy: ScoringPolicy, tables: ReferenceTables):
        self.policy = policy
        self.tables = tables

    def evaluate(self, email) -> ValidationVerdict:
        return evaluate(email, self.policy, self.tables)

    async def refresh_disposable(self, url: Optional[str], client=None) -> int:
        domains = await fetch_disposable_domains(url, client=client) if url else set()
        if domains:
            self.tables = self.tables.with_disposable(domains)
        return len(domains)


@lru_cache
def get_scorer() -> RiskScorer:
    scorer = RiskScorer(build_policy(app_settings), build_tables(app_settings))
    logger.info(
        "Risk scorer ready: policy=%s reject=%d short_circuit=%s",
        app_settings.RISK_POLICY,
        scorer.policy.reject_threshold,
        scorer.policy.short_circuit_on_format_error,
    )
    return scorer


def log_attempt(verdict: ValidationVerdict, action: str) -> None:
    logger.info(
        "Email validation: %s action=%s risk=%d valid=%s",
        verdict.email, action, verdict.risk_score, verdict.is_valid,
    )
