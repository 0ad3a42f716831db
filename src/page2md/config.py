"""Local configuration for page2md."""

from __future__ import annotations

import os


DEFAULT_FETCH_TIMEOUT_S = 10.0
DEFAULT_FETCH_MAX_RETRIES = 2
DEFAULT_FETCH_BACKOFF_S = 0.5
DEFAULT_USER_AGENT = "page2md/0.1 (+https://github.com/page2md/page2md)"
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_OUTPUT_DIR = "."
DEFAULT_SUMMARY_HEADING = "Page Summary"

PAGE2MD_FETCH_TIMEOUT_S = float(os.getenv("PAGE2MD_FETCH_TIMEOUT_S", str(DEFAULT_FETCH_TIMEOUT_S)))
PAGE2MD_FETCH_MAX_RETRIES = int(os.getenv("PAGE2MD_FETCH_MAX_RETRIES", str(DEFAULT_FETCH_MAX_RETRIES)))
PAGE2MD_FETCH_BACKOFF_S = float(os.getenv("PAGE2MD_FETCH_BACKOFF_S", str(DEFAULT_FETCH_BACKOFF_S)))
PAGE2MD_USER_AGENT = os.getenv("PAGE2MD_USER_AGENT", DEFAULT_USER_AGENT)
PAGE2MD_LOG_LEVEL = os.getenv("PAGE2MD_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
# Where the CLI writes saved Markdown files when --output-dir is not given.
PAGE2MD_OUTPUT_DIR = os.getenv("PAGE2MD_OUTPUT_DIR", DEFAULT_OUTPUT_DIR)
PAGE2MD_SUMMARY_HEADING = os.getenv("PAGE2MD_SUMMARY_HEADING", DEFAULT_SUMMARY_HEADING)
