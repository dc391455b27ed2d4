# engine/emailrisk/policy.py
from dataclasses import dataclass, replace as _replace
from typing import Optional


@dataclass(frozen=True)
class ScoringPolicy:
    """
    Thresholds and penalties applied by the risk scorer.

    A penalty of 0 disables its check entirely (no score, no warning).
    """
    reject_threshold: int = 70
    advisory_threshold: Optional[int] = 40
    short_circuit_on_format_error: bool = False

    format_penalty: int = 50
    pattern_penalty: int = 30
    trusted_bonus: int = 20
    obscure_domain_penalty: int = 10

    min_local_length: int = 3
    short_local_penalty: int = 20
    max_local_length: int = 30
    long_local_penalty: int = 15

    digit_ratio: float = 0.7
    digit_penalty: int = 15

    repeated_char_penalty: int = 20
    special_run_penalty: int = 0
    domain_shape_penalty: int = 0

    def replace(self, **changes) -> "ScoringPolicy":
        return _replace(self, **changes)


DEFAULT_POLICY = ScoringPolicy()

# browser-side signup check
CLIENT_POLICY = ScoringPolicy(short_local_penalty=0)

# hosted validate-email function
SERVER_POLICY = ScoringPolicy(
    reject_threshold=60,
    advisory_threshold=None,
    short_circuit_on_format_error=True,
    pattern_penalty=40,
    trusted_bonus=0,
    obscure_domain_penalty=0,
    digit_penalty=20,
    repeated_char_penalty=0,
    special_run_penalty=25,
    domain_shape_penalty=30,
)

POLICIES = {
    "default": DEFAULT_POLICY,
    "client": CLIENT_POLICY,
    "server": SERVER_POLICY,
}


def get_policy(name: str) -> ScoringPolicy:
    try:
        return POLICIES[(name or "").strip().lower()]
    except KeyError:
        raise ValueError(f"unknown risk policy: {name!r} (expected one of {sorted(POLICIES)})")
