"""Tests for environment credential lookups."""
from __future__ import annotations

import pytest

from snapfeed.security.secrets import MissingSecretError, is_placeholder, require_secret, storage_key_pair


@pytest.mark.parametrize("value", [None, "", "   ", "changeme", " Your-Secret-Here "])
def test_is_placeholder(value):
    assert is_placeholder(value) is True


def test_require_secret_trims_and_enforces_length(monkeypatch):
    monkeypatch.setenv("SNAPFEED_TEST_KEY", "  a-long-enough-signing-key  ")
    assert require_secret("SNAPFEED_TEST_KEY", min_length=16) == "a-long-enough-signing-key"

    monkeypatch.setenv("SNAPFEED_TEST_KEY", "short")
    with pytest.raises(MissingSecretError, match="at least 16"):
        require_secret("SNAPFEED_TEST_KEY", min_length=16)

    monkeypatch.setenv("SNAPFEED_TEST_KEY", "changeme")
    with pytest.raises(MissingSecretError) as exc_info:
        require_secret("SNAPFEED_TEST_KEY")
    assert "changeme" not in str(exc_info.value)


def test_storage_key_pair_is_all_or_nothing(monkeypatch):
    monkeypatch.delenv("SNAPFEED_ACCESS", raising=False)
    monkeypatch.setenv("SNAPFEED_SECRET", "placeholder")
    assert storage_key_pair("SNAPFEED_ACCESS", "SNAPFEED_SECRET") is None

    monkeypatch.setenv("SNAPFEED_ACCESS", "AKIAEXAMPLE")
    with pytest.raises(MissingSecretError, match="SNAPFEED_SECRET"):
        storage_key_pair("SNAPFEED_ACCESS", "SNAPFEED_SECRET")

    monkeypatch.setenv("SNAPFEED_SECRET", "s3cr3t")
    pair = storage_key_pair("SNAPFEED_ACCESS", "SNAPFEED_SECRET")
    assert pair.access_key == "AKIAEXAMPLE" and pair.secret_key == "s3cr3t"
