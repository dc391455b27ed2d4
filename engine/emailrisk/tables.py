# engine/emailrisk/tables.py
"""
Reference tables used by the risk scorer.

The bundled lists live in disposable.py, provider_profiles.py and patterns.py.
Deployments can extend or replace them from a JSON document, and can pull a
published disposable-domain list over HTTP, without touching scoring logic.
"""
import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet, Mapping, Optional, Set, Tuple

import httpx

from .disposable import DISPOSABLE_PROVIDERS
from .patterns import DEFAULT_PATTERNS, SuspiciousPattern
from .provider_profiles import TRUSTED_PROVIDERS

logger = logging.getLogger("emailrisk.tables")


class ReferenceTableError(ValueError):
    """Raised when a reference-table document cannot be loaded."""


@dataclass(frozen=True)
class ReferenceTables:
    disposable_domains: FrozenSet[str]
    trusted_domains: Mapping[str, str]
    patterns: Tuple[SuspiciousPattern, ...]

    @classmethod
    def defaults(cls) -> "ReferenceTables":
        return _DEFAULTS

    def with_disposable(self, domains) -> "ReferenceTables":
        extra = {d.strip().lower() for d in domains if d and d.strip()}
        return ReferenceTables(
            disposable_domains=self.disposable_domains | frozenset(extra),
            trusted_domains=self.trusted_domains,
            patterns=self.patterns,
        )


_DEFAULTS = ReferenceTables(
    disposable_domains=DISPOSABLE_PROVIDERS,
    trusted_domains=dict(TRUSTED_PROVIDERS),
    patterns=DEFAULT_PATTERNS,
)


def _merge_domain_set(base: FrozenSet[str], raw, key: str) -> FrozenSet[str]:
    result = set(base)
    if isinstance(raw, list):
        entries = {d: True for d in raw}
    elif isinstance(raw, dict):
        entries = raw
    else:
        raise ReferenceTableError(f"{key} must be a list or an object")

    for domain, member in entries.items():
        if not isinstance(domain, str) or not domain.strip():
            raise ReferenceTableError(f"{key} contains an invalid domain: {domain!r}")
        domain = domain.strip().lower()
        if member:
            result.add(domain)
        else:
            result.discard(domain)
    return frozenset(result)


def _merge_trusted(base: Mapping[str, str], raw) -> dict:
    result = dict(base)
    if isinstance(raw, list):
        entries = {d: True for d in raw}
    elif isinstance(raw, dict):
        entries = raw
    else:
        raise ReferenceTableError("trusted_domains must be a list or an object")

    for domain, member in entries.items():
        if not isinstance(domain, str) or not domain.strip():
            raise ReferenceTableError(f"trusted_domains contains an invalid domain: {domain!r}")
        domain = domain.strip().lower()
        if member is False or member is None:
            result.pop(domain, None)
        elif isinstance(member, str):
            if not member.strip():
                raise ReferenceTableError(f"trusted_domains has an empty provider label for {domain!r}")
            result[domain] = member
        else:
            result[domain] = domain
    return result


def _parse_patterns(raw) -> Tuple[SuspiciousPattern, ...]:
    if not isinstance(raw, list):
        raise ReferenceTableError("suspicious_patterns must be a list")

    patterns = []
    for i, item in enumerate(raw):
        if not isinstance(item, dict) or not isinstance(item.get("pattern"), str):
            raise ReferenceTableError(f"suspicious_patterns[{i}] needs a string 'pattern'")
        penalty = item.get("penalty")
        if penalty is not None and (isinstance(penalty, bool) or not isinstance(penalty, int)):
            raise ReferenceTableError(f"suspicious_patterns[{i}].penalty must be an integer")
        kwargs = {"pattern": item["pattern"], "penalty": penalty}
        if item.get("message"):
            kwargs["message"] = str(item["message"])
        try:
            patterns.append(SuspiciousPattern(**kwargs))
        except re.error as e:
            raise ReferenceTableError(f"suspicious_patterns[{i}] is not a valid regex: {e}") from e
    return tuple(patterns)


def tables_from_dict(doc: dict, base: Optional[ReferenceTables] = None) -> ReferenceTables:
    if not isinstance(doc, dict):
        raise ReferenceTableError("reference tables document must be a JSON object")

    if base is None:
        base = ReferenceTables.defaults()
    if doc.get("replace"):
        base = ReferenceTables(frozenset(), {}, ())

    disposable = base.disposable_domains
    if "disposable_domains" in doc:
        disposable = _merge_domain_set(disposable, doc["disposable_domains"], "disposable_domains")

    trusted = base.trusted_domains
    if "trusted_domains" in doc:
        trusted = _merge_trusted(trusted, doc["trusted_domains"])

    patterns = base.patterns
    if "suspicious_patterns" in doc:
        patterns = _parse_patterns(doc["suspicious_patterns"])

    return ReferenceTables(disposable_domains=disposable, trusted_domains=trusted, patterns=patterns)


def load_tables(path, base: Optional[ReferenceTables] = None) -> ReferenceTables:
    path = Path(path)
    try:
        doc = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ReferenceTableError(f"cannot read reference tables from {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ReferenceTableError(f"invalid JSON in {path}: {e}") from e

    tables = tables_from_dict(doc, base)
    logger.info(
        "Loaded reference tables from %s (disposable=%d trusted=%d patterns=%d)",
        path, len(tables.disposable_domains), len(tables.trusted_domains), len(tables.patterns),
    )
    return tables


def parse_domain_list(text: str) -> Set[str]:
    domains = set()
    for line in text.splitlines():
        line = line.split("#", 1)[0].strip().lower()
        if line:
            domains.add(line)
    return domains


async def fetch_disposable_domains(
    url: str,
    client: Optional[httpx.AsyncClient] = None,
    timeout: float = 10.0,
) -> Set[str]:
    """
    Download a published disposable-domain list (one domain per line).
    Any network or HTTP error -> empty set; the bundled list still applies.
    """
    if not url:
        return set()

    async def _get(c: httpx.AsyncClient) -> Set[str]:
        r = await c.get(url, timeout=timeout)
        r.raise_for_status()
        return parse_domain_list(r.text)

    try:
        if client is not None:
            domains = await _get(client)
        else:
            async with httpx.AsyncClient() as c:
                domains = await _get(c)
    except httpx.HTTPError as e:
        logger.warning("Disposable list fetch failed for %s: %s", url, e)
        return set()

    logger.info("Fetched %d disposable domains from %s", len(domains), url)
    return domains
