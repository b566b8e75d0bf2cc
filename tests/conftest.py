#Description: Shared fixtures: synthetic credentials and a frozen signing clock.

import pytest

from adapters import okx_signing
from models.schemas import Credentials

FIXED_TS = "2024-01-02T03:04:05.678Z"


@pytest.fixture
def creds():
    return Credentials(api_key="key-1", secret_key="s3cret", passphrase="pass-1", project_id="proj-1")


@pytest.fixture
def fixed_ts(monkeypatch):
    monkeypatch.setattr(okx_signing, "iso_timestamp", lambda now=None: FIXED_TS)
    return FIXED_TS
