# engine/emailrisk/provider_profiles.py
from typing import Mapping, Optional

from .syntax_engine import normalize_email, split_address

# Major, long-established consumer mail providers.
TRUSTED_PROVIDERS = {
    "gmail.com": "gmail",
    "yahoo.com": "yahoo",
    "hotmail.com": "microsoft",
    "outlook.com": "microsoft",
    "live.com": "microsoft",
    "msn.com": "microsoft",
    "icloud.com": "apple",
    "protonmail.com": "protonmail",
    "aol.com": "aol",
    "mail.com": "mail.com",
    "zoho.com": "zoho",
    "yandex.com": "yandex",
    "fastmail.com": "fastmail",
}


def identify_provider(domain: str, providers: Optional[Mapping[str, str]] = None) -> Optional[str]:
    if not domain:
        return None
    if providers is None:
        providers = TRUSTED_PROVIDERS
    return providers.get(domain.lower())


def is_email_trusted(email: str, providers: Optional[Mapping[str, str]] = None) -> bool:
    """True when the address belongs to one of the trusted providers."""
    _, domain = split_address(normalize_email(email))
    return identify_provider(domain, providers) is not None
