"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from htpasswd_codec import HtpasswdConfig

JOHN_HASH = "$apr1$hdqQY4oe$6PtEz0XH6ORg.GPKCTpG31"
JANE_HASH = "$apr1$D7qCR.yD$vfKO/2urv89Okpxl8VGpb/"


@pytest.fixture
def sample_text() -> str:
    """htpasswd text with a bare username, a comment and a repeated user."""
    return f"""johndoe:{JOHN_HASH}
janedoe
# comment
janedoe:{JANE_HASH}
        """


@pytest.fixture
def htpasswd_file(tmp_path: Path, sample_text: str) -> Path:
    path = tmp_path / "auth" / ".htpasswd"
    path.parent.mkdir(parents=True)
    path.write_text(sample_text)
    return path


@pytest.fixture
def tmp_config(htpasswd_file: Path) -> HtpasswdConfig:
    """Return an HtpasswdConfig pointing at the sample file."""
    return HtpasswdConfig(htpasswd_file=htpasswd_file, encoding="utf-8", create_missing=False)
