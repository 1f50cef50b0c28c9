from __future__ import annotations

import logging
from typing import Dict, Mapping

# CDF accepts legacy API keys in the "api-key" header alongside bearer tokens.
SENSITIVE_HEADERS = frozenset({"authorization", "cookie", "api-key", "x-api-key"})


def get_logger(logger: logging.Logger | None = None) -> logging.Logger:
    return logger if logger is not None else logging.getLogger("cdf_graphql")


def sanitize_headers(headers: Mapping[str, str]) -> Dict[str, str]:
    return {
        key: "<redacted>" if key.lower() in SENSITIVE_HEADERS else value
        for key, value in headers.items()
    }
