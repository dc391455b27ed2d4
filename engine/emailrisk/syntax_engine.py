# engine/emailrisk/syntax_engine.py
import re
from typing import Tuple

# RFC-light regex (practical)
EMAIL_REGEX = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def normalize_email(addr) -> str:
    if not isinstance(addr, str) or not addr:
        return ""
    return addr.strip().lower()


def is_syntax_valid(addr: str) -> bool:
    if not addr or "@" not in addr:
        return False
    return EMAIL_REGEX.match(addr) is not None


def split_address(addr: str) -> Tuple[str, str]:
    """
    Split on the last '@'.
    Returns (local, domain); domain is "" when there is no '@'.
    """
    local, sep, domain = addr.rpartition("@")
    if not sep:
        return addr, ""
    return local, domain
