"""Default values shared by config, fetcher, robots, and URL filtering."""

from __future__ import annotations


DEFAULT_RATE_LIMIT_SECONDS = 1.0
DEFAULT_TIMEOUT_SECONDS: float | None = None
DEFAULT_USER_AGENT = "sitecrawl/0.1 (+polite single-origin crawler)"
DEFAULT_RESPECT_ROBOTS = True
DEFAULT_STRICT_ROBOTS_PATHS = False

DEFAULT_EXCLUDED_EXTENSIONS = (".pdf", ".mp3", ".m4a", ".png", ".jpg")

ALLOWED_SEED_SCHEMES = ("http", "https")
DEFAULT_PORTS = {"http": 80, "https": 443}

ROBOTS_TXT_PATH = "/robots.txt"
HTML_DOCTYPE_MARKER = "<!doctype html"

SUPPORTED_CONFIG_SUFFIXES = (".json", ".yaml", ".yml")
JSON_INDENT = 2

# Characters a URL host may never contain (control characters are checked separately).
FORBIDDEN_HOST_CHARS = frozenset(" #%/<>?@\\^|")

COMPLETION_MARKER = "Web crawler complete"
