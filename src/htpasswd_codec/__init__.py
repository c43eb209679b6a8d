"""htpasswd-codec — parse and stringify htpasswd credential files."""

from htpasswd_codec.codec import CredentialTable, parse, stringify
from htpasswd_codec.config import HtpasswdConfig
from htpasswd_codec.errors import (
    HtpasswdError,
    HtpasswdFileError,
    InvalidFieldError,
    UserNotFoundError,
)

__all__ = [
    "CredentialTable",
    "HtpasswdConfig",
    "HtpasswdError",
    "HtpasswdFileError",
    "InvalidFieldError",
    "UserNotFoundError",
    "parse",
    "stringify",
]
