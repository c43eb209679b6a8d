"""Shared defaults for htpasswd-codec."""

from pathlib import Path

# Environment overrides
ENV_FILE = "HTPASSWD_FILE"
ENV_ENCODING = "HTPASSWD_ENCODING"
ENV_CREATE_MISSING = "HTPASSWD_CREATE_MISSING"

# Defaults
DEFAULT_FILE = Path(".htpasswd")
DEFAULT_ENCODING = "utf-8"

# Format
FIELD_SEPARATOR = ":"
COMMENT_PREFIX = "#"
