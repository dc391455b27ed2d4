# engine/emailrisk/score_engine.py
import re
from typing import Optional

from .disposable import is_disposable
from .models import ValidationVerdict
from .patterns import first_match
from .policy import DEFAULT_POLICY, ScoringPolicy
from .provider_profiles import identify_provider
from .syntax_engine import is_syntax_valid, normalize_email, split_address
from .tables import ReferenceTables

REPEATED_CHARS = re.compile(r"\.{2,}|\+{2,}")
SPECIAL_RUN = re.compile(r"[.+_-]{3,}")
DIGIT = re.compile(r"\d")

MSG_REQUIRED = "Email is required"
MSG_FORMAT = "Invalid email format"
MSG_DOMAIN = "Invalid email domain"
MSG_DISPOSABLE = "Disposable email addresses are not allowed"
MSG_SHORT = "Username is very short"
MSG_LONG = "Unusually long email username"
MSG_DIGITS = "Email contains unusually many numbers"
MSG_CHARS = "Email contains suspicious character patterns"
MSG_DOMAIN_SHAPE = "Domain appears invalid"
MSG_REJECTED = "Email appears to be fake or suspicious"
MSG_ADVISORY = "Email may be risky - please verify carefully"


def evaluate(
    email,
    policy: Optional[ScoringPolicy] = None,
    tables: Optional[ReferenceTables] = None,
) -> ValidationVerdict:
    """
    Score a candidate signup address without any network access.

    Hard failures (missing input, unusable domain, disposable provider, and
    bad format when the policy short-circuits) return score 100 at once.
    Everything else accumulates into one score compared with the policy
    thresholds at the end. Never raises.
    """
    if policy is None:
        policy = DEFAULT_POLICY
    if tables is None:
        tables = ReferenceTables.defaults()

    normalized = normalize_email(email)
    if not normalized:
        return ValidationVerdict(False, 100, (MSG_REQUIRED,), short_circuit=True)

    score = 0
    valid = True
    errors = []
    warnings = []

    if not is_syntax_valid(normalized):
        if policy.short_circuit_on_format_error:
            return ValidationVerdict(False, 100, (MSG_FORMAT,), email=normalized, short_circuit=True)
        valid = False
        errors.append(MSG_FORMAT)
        score += policy.format_penalty

    local, domain = split_address(normalized)
    if not domain:
        errors.append(MSG_DOMAIN)
        return ValidationVerdict(False, 100, tuple(errors), email=normalized, short_circuit=True)

    if is_disposable(domain, tables.disposable_domains):
        errors.append(MSG_DISPOSABLE)
        return ValidationVerdict(False, 100, tuple(errors), email=normalized, domain=domain, short_circuit=True)

    # first hit only
    hit = first_match(normalized, tables.patterns)
    if hit is not None:
        penalty = hit.penalty if hit.penalty is not None else policy.pattern_penalty
        if penalty:
            score += penalty
            warnings.append(hit.message)

    if identify_provider(domain, tables.trusted_domains) is not None:
        score = max(0, score - policy.trusted_bonus)
    else:
        score += policy.obscure_domain_penalty

    if policy.short_local_penalty and len(local) < policy.min_local_length:
        score += policy.short_local_penalty
        warnings.append(MSG_SHORT)
    if policy.long_local_penalty and len(local) > policy.max_local_length:
        score += policy.long_local_penalty
        warnings.append(MSG_LONG)

    digits = len(DIGIT.findall(normalized))
    if policy.digit_penalty and digits > len(local) * policy.digit_ratio:
        score += policy.digit_penalty
        warnings.append(MSG_DIGITS)

    if policy.repeated_char_penalty and REPEATED_CHARS.search(normalized):
        score += policy.repeated_char_penalty
        warnings.append(MSG_CHARS)
    elif policy.special_run_penalty and SPECIAL_RUN.search(normalized):
        score += policy.special_run_penalty
        warnings.append(MSG_CHARS)

    if policy.domain_shape_penalty and ("." not in domain or len(domain) < 4):
        score += policy.domain_shape_penalty
        warnings.append(MSG_DOMAIN_SHAPE)

    # clamp
    score = max(0, min(100, score))

    if score >= policy.reject_threshold:
        valid = False
        errors.append(MSG_REJECTED)
    elif policy.advisory_threshold is not None and score >= policy.advisory_threshold:
        warnings.append(MSG_ADVISORY)

    return ValidationVerdict(
        is_valid=valid,
        risk_score=int(score),
        errors=tuple(errors),
        warnings=tuple(warnings),
        email=normalized,
        domain=domain,
    )


def is_short_circuit(verdict: ValidationVerdict) -> bool:
    """True when evaluation stopped at a hard failure instead of scoring."""
    return verdict.short_circuit


def format_validation_errors(verdict: ValidationVerdict) -> str:
    return ". ".join([*verdict.errors, *verdict.warnings])
