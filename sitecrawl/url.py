"""Seed parsing, frontier admission filtering, and link extraction helpers."""

from __future__ import annotations

from typing import Collection, Iterable, Sequence
from urllib.parse import SplitResult, quote, urljoin, urlsplit, urlunsplit

from bs4 import BeautifulSoup

from .constants import (
    ALLOWED_SEED_SCHEMES,
    DEFAULT_EXCLUDED_EXTENSIONS,
    DEFAULT_PORTS,
    FORBIDDEN_HOST_CHARS,
)
from .types import AdmissionResult, AdmissionStatus, LinkExtractionError, SeedURLError


SEED_UNPARSABLE_MESSAGE = "Seed URL provided can not be parsed as a valid URL"


def _has_default_port(scheme: str, port: int | None) -> bool:
    if port is None:
        return False
    return DEFAULT_PORTS.get(scheme) == port


def _host_port(parsed_url: SplitResult, scheme: str) -> str:
    host = (parsed_url.hostname or "").lower()
    if ":" in host:
        host = f"[{host}]"

    port = parsed_url.port
    if port is not None and not _has_default_port(scheme, port):
        return f"{host}:{port}"
    return host


def _is_valid_host(host: str) -> bool:
    if not host:
        return False
    return not any(ch in FORBIDDEN_HOST_CHARS or ch.isspace() or not ch.isprintable() for ch in host)


def _userinfo(parsed_url: SplitResult) -> str:
    if not parsed_url.username:
        return ""
    userinfo = quote(parsed_url.username, safe="")
    if parsed_url.password:
        userinfo += ":" + quote(parsed_url.password, safe="")
    return userinfo + "@"


def parse_seed_url(raw: str) -> tuple[str, str]:
    """Parse an absolute seed URL into `(href, origin)`.

    `href` is the seed with lowercase scheme/host, default port stripped and an
    empty path replaced by `/`. `origin` is `scheme://host[:port]`, the literal
    prefix every in-scope URL must start with.
    """

    if not isinstance(raw, str) or not raw.strip():
        raise SeedURLError(SEED_UNPARSABLE_MESSAGE)

    try:
        parsed = urlsplit(raw.strip())
        scheme = parsed.scheme.lower()
        host_port = _host_port(parsed, scheme) if parsed.hostname else ""
    except ValueError as exc:
        # Out-of-range port or unbalanced IPv6 brackets.
        raise SeedURLError(SEED_UNPARSABLE_MESSAGE) from exc

    if scheme not in ALLOWED_SEED_SCHEMES or not _is_valid_host(parsed.hostname or ""):
        raise SeedURLError(SEED_UNPARSABLE_MESSAGE)

    origin = f"{scheme}://{host_port}"
    href = urlunsplit(
        (scheme, _userinfo(parsed) + host_port, parsed.path or "/", parsed.query, parsed.fragment)
    )
    return href, origin


def seed_origin(url: str) -> str:
    """Return the origin (`scheme://host[:port]`) of an absolute URL."""

    return parse_seed_url(url)[1]


def validate_url_list(value: object, name: str) -> None:
    """Require a non-empty list/tuple of strings; raise otherwise."""

    if not isinstance(value, (list, tuple)):
        raise TypeError(f"{name} provided to tidy_queue is invalid: expected a list of strings")
    if not value:
        raise ValueError(f"{name} provided to tidy_queue is invalid: empty")
    if not all(isinstance(url, str) for url in value):
        raise TypeError(f"{name} provided to tidy_queue is invalid: non-string entry")


def _blocked_by_robots(url: str, disallowed_paths: Iterable[str], *, strict_paths: bool) -> bool:
    paths = [path for path in disallowed_paths if path]
    if not paths:
        return False

    if strict_paths:
        path = urlsplit(url).path or "/"
        return any(path.startswith(prefix) for prefix in paths)

    return any(path in url for path in paths)


def has_excluded_extension(
    url: str,
    excluded_extensions: Sequence[str] = DEFAULT_EXCLUDED_EXTENSIONS,
) -> bool:
    lowered = url.lower()
    return any(lowered.endswith(ext) for ext in excluded_extensions)


def classify_candidate(
    candidate: str,
    seed_origin: str,
    disallowed_paths: Iterable[str],
    excluded_urls: Collection[str],
    *,
    strict_paths: bool = False,
    excluded_extensions: Sequence[str] = DEFAULT_EXCLUDED_EXTENSIONS,
) -> AdmissionStatus:
    """Return the first admission rule `candidate` fails, or ADMITTED."""

    if candidate in excluded_urls:
        return AdmissionStatus.SKIPPED_SEEN
    if _blocked_by_robots(candidate, disallowed_paths, strict_paths=strict_paths):
        return AdmissionStatus.SKIPPED_ROBOTS
    if not candidate.startswith(seed_origin):
        return AdmissionStatus.SKIPPED_OUT_OF_SCOPE
    if has_excluded_extension(candidate, excluded_extensions):
        return AdmissionStatus.SKIPPED_FILE_TYPE
    return AdmissionStatus.ADMITTED


def admit(
    candidate: str,
    seed_origin: str,
    disallowed_paths: Iterable[str],
    excluded_urls: Collection[str],
    *,
    strict_paths: bool = False,
    excluded_extensions: Sequence[str] = DEFAULT_EXCLUDED_EXTENSIONS,
) -> bool:
    """Return True when `candidate` may join the frontier."""

    status = classify_candidate(
        candidate,
        seed_origin,
        disallowed_paths,
        excluded_urls,
        strict_paths=strict_paths,
        excluded_extensions=excluded_extensions,
    )
    return status == AdmissionStatus.ADMITTED


def tidy_queue(
    frontier: Sequence[str],
    visited: Collection[str],
    disallowed_paths: Sequence[str],
    seed_origin: str,
    discovered: Sequence[str],
    *,
    unprocessable: Collection[str] = (),
    strict_paths: bool = False,
    excluded_extensions: Sequence[str] = DEFAULT_EXCLUDED_EXTENSIONS,
    results: list[AdmissionResult] | None = None,
) -> list[str]:
    """Drop the processed head of `frontier` and append newly admitted links.

    The result is `frontier[1:] + admitted`, where `admitted` is `discovered`
    screened against the already-seen set (visited, queued, unprocessable),
    robots rules, origin scope, and excluded file types. Inputs are not mutated.
    When `results` is given, one AdmissionResult per discovered URL is appended.
    """

    validate_url_list(frontier, "URL queue")
    validate_url_list(discovered, "Discovered URLs")

    if not isinstance(disallowed_paths, (list, tuple)):
        raise TypeError("Robots.txt disallowed paths provided to tidy_queue is not a list")
    if not isinstance(visited, (list, tuple, set, frozenset)):
        raise TypeError("Visited URLs provided to tidy_queue is not a collection")
    if not isinstance(seed_origin, str) or not seed_origin:
        raise ValueError("Seed origin provided to tidy_queue is invalid")

    excluded: set[str] = {*visited, *frontier, *unprocessable}
    admitted: list[str] = []

    for url in discovered:
        status = classify_candidate(
            url,
            seed_origin,
            disallowed_paths,
            excluded,
            strict_paths=strict_paths,
            excluded_extensions=excluded_extensions,
        )
        if results is not None:
            results.append(AdmissionResult(url=url, status=status))
        if status == AdmissionStatus.ADMITTED:
            # Same link twice on one page must only be queued once.
            excluded.add(url)
            admitted.append(url)

    return [*frontier[1:], *admitted]


def extract_links(html: str, seed_origin: str) -> list[str]:
    """Return raw in-origin links from `<a href>` tags in document order.

    Hrefs that already start with `seed_origin` are kept verbatim; root-relative
    hrefs are resolved against it. Everything else is dropped. Duplicates and
    previously seen URLs are kept; filtering happens in `tidy_queue`.
    """

    if not isinstance(html, str) or not html:
        raise ValueError("HTML provided to extract_links is invalid")
    if not isinstance(seed_origin, str) or not seed_origin:
        raise ValueError("Seed origin provided to extract_links is invalid")

    soup = BeautifulSoup(html, "lxml")
    out: list[str] = []

    for element in soup.find_all("a", href=True):
        href = element.get("href")
        if not href:
            continue

        if href.startswith(seed_origin):
            out.append(href)
        elif href.startswith("/"):
            try:
                out.append(urljoin(seed_origin, href))
            except ValueError as exc:
                raise LinkExtractionError(
                    f"Could not construct a valid URL from extracted link {href!r}: {exc}"
                ) from exc

    return out


__all__ = [
    "SEED_UNPARSABLE_MESSAGE",
    "admit",
    "classify_candidate",
    "extract_links",
    "has_excluded_extension",
    "parse_seed_url",
    "seed_origin",
    "tidy_queue",
    "validate_url_list",
]
