"""Header namespace translation between x-amz- and x-goog- vocabularies.

Both directions are pure functions over ``httpx.Headers``: they return a new
header collection and leave their input alone, so the round trip can be
checked directly.
"""

from dataclasses import dataclass

import httpx

from .consts import SOURCE_HEADER_PREFIX, TARGET_HEADER_PREFIX


@dataclass(frozen=True)
class NamespaceRule:
    """Case-insensitive header-name prefix rewrite."""

    source_prefix: str
    target_prefix: str

    def __post_init__(self):
        object.__setattr__(self, "source_prefix", self.source_prefix.lower())
        object.__setattr__(self, "target_prefix", self.target_prefix.lower())

    def inverse(self) -> "NamespaceRule":
        return NamespaceRule(self.target_prefix, self.source_prefix)

    def matches(self, name: str) -> bool:
        return name.lower().startswith(self.source_prefix)

    def rename(self, name: str) -> str:
        """Swap the prefix of a matching name; the result is lower-cased."""
        return self.target_prefix + name.lower()[len(self.source_prefix) :]


OUTBOUND_RULE = NamespaceRule(SOURCE_HEADER_PREFIX, TARGET_HEADER_PREFIX)
INBOUND_RULE = OUTBOUND_RULE.inverse()


def translate_headers(headers: httpx.Headers, rule: NamespaceRule) -> httpx.Headers:
    """Rename every header matching ``rule`` and return the new collection.

    Matching headers move to the renamed key with their values untouched;
    repeated values of one key all move, in order. A header already present
    under a renamed key is replaced. Everything else keeps its raw name
    casing and position.

    Args:
        headers: Request or response headers.
        rule: Prefix rewrite to apply.

    Returns:
        New headers with no name carrying ``rule.source_prefix``.
    """
    encoding = headers.encoding
    kept: list[tuple[bytes, bytes]] = []
    renamed: list[tuple[bytes, bytes]] = []

    for raw_key, raw_value in headers.raw:
        name = raw_key.decode(encoding)
        if rule.matches(name):
            renamed.append((rule.rename(name).encode(encoding), raw_value))
        else:
            kept.append((raw_key, raw_value))

    if not renamed:
        return httpx.Headers(headers.raw, encoding=encoding)

    overwritten = {key for key, _ in renamed}
    kept = [(key, value) for key, value in kept if key.lower() not in overwritten]
    return httpx.Headers(kept + renamed, encoding=encoding)


def translate_request_headers(headers: httpx.Headers) -> httpx.Headers:
    """x-amz-* request headers become x-goog-*."""
    return translate_headers(headers, OUTBOUND_RULE)


def translate_response_headers(headers: httpx.Headers) -> httpx.Headers:
    """x-goog-* response headers become x-amz-*."""
    return translate_headers(headers, INBOUND_RULE)


def find_prefixed(headers: httpx.Headers, prefix: str) -> list[str]:
    """Return the (lower-cased) header names starting with ``prefix``."""
    prefix = prefix.lower()
    return [name for name in headers.keys() if name.startswith(prefix)]
