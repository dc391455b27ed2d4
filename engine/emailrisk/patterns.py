# engine/emailrisk/patterns.py
import re
from dataclasses import dataclass, field
from typing import Optional, Tuple

SUSPICIOUS_PATTERN_MESSAGE = "Email pattern appears suspicious"

PLACEHOLDER_WORDS = ("test", "fake", "spam", "temp", "demo", "admin", "null", "noreply")


@dataclass(frozen=True)
class SuspiciousPattern:
    """
    One entry of the ordered suspicious-address list.

    Attributes:
        pattern: Regular expression tested against the full normalized address
        penalty: Score added on a match (None means use the policy default)
        message: Warning recorded on a match
    """
    pattern: str
    penalty: Optional[int] = None
    message: str = SUSPICIOUS_PATTERN_MESSAGE
    regex: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        # re.error surfaces here, at table construction, never during scoring
        object.__setattr__(self, "regex", re.compile(self.pattern, re.IGNORECASE))

    def matches(self, email: str) -> bool:
        return self.regex.search(email) is not None


DEFAULT_PATTERNS: Tuple[SuspiciousPattern, ...] = (
    SuspiciousPattern(r"^[a-z]+\d{4,}@"),                               # name + many numbers
    SuspiciousPattern(r"^(?:%s)\d*@" % "|".join(PLACEHOLDER_WORDS)),   # placeholder words
    SuspiciousPattern(r"^\d{8,}@"),                                     # only numbers
    SuspiciousPattern(r"^[a-z]{1,2}@"),                                 # very short username
    SuspiciousPattern(r"^.+\+.+\+.+@"),                                 # multiple + tags
)


def first_match(email: str, patterns) -> Optional[SuspiciousPattern]:
    for p in patterns:
        if p.matches(email):
            return p
    return None
