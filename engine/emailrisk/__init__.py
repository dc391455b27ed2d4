# engine/emailrisk/__init__.py

from .syntax_engine import (
    normalize_email,
    is_syntax_valid,
    split_address,
)

from .disposable import is_disposable
from .provider_profiles import identify_provider, is_email_trusted
from .patterns import SuspiciousPattern
from .policy import (
    ScoringPolicy,
    DEFAULT_POLICY,
    CLIENT_POLICY,
    SERVER_POLICY,
    get_policy,
)
from .tables import (
    ReferenceTables,
    ReferenceTableError,
    load_tables,
    tables_from_dict,
    fetch_disposable_domains,
)
from .models import ValidationVerdict
from .score_engine import evaluate, format_validation_errors, is_short_circuit

__all__ = [
    "normalize_email",
    "is_syntax_valid",
    "split_address",
    "is_disposable",
    "identify_provider",
    "is_email_trusted",
    "SuspiciousPattern",
    "ScoringPolicy",
    "DEFAULT_POLICY",
    "CLIENT_POLICY",
    "SERVER_POLICY",
    "get_policy",
    "ReferenceTables",
    "ReferenceTableError",
    "load_tables",
    "tables_from_dict",
    "fetch_disposable_domains",
    "ValidationVerdict",
    "evaluate",
    "format_validation_errors",
    "is_short_circuit",
]
