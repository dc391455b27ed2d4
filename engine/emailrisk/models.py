"""
Value objects returned by the risk scorer.
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class ValidationVerdict:
    """
    Outcome of scoring one email address.

    Attributes:
        is_valid: Final accept/reject decision
        risk_score: Accumulated penalty, 0-100 (higher = more risky)
        errors: Hard-failure reasons, non-empty whenever is_valid is False
        warnings: Soft-risk observations that do not reject on their own
        email: Normalized address ("" when the input was unusable)
        domain: Domain part of the normalized address ("" when missing)
        short_circuit: True when evaluation stopped at a hard failure before scoring
    """
    is_valid: bool
    risk_score: int
    errors: Tuple[str, ...] = ()
    warnings: Tuple[str, ...] = ()
    email: str = ""
    domain: str = ""
    short_circuit: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """JSON body shape used by the HTTP layer."""
        return {
            "isValid": self.is_valid,
            "riskScore": self.risk_score,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "email": self.email,
            "domain": self.domain,
        }

    def __repr__(self) -> str:
        return (
            f"ValidationVerdict(is_valid={self.is_valid}, risk_score={self.risk_score}, "
            f"email={self.email!r})"
        )
