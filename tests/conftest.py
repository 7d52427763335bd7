"""Pytest conftest module with fixtures shared by the xapirpc tests"""
import pytest

from xapirpc import logger


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep the user's XAPI_* variables and preferences file out of every test.

    XDG_CONFIG_HOME points to an empty temporary directory, so the
    preferences file is missing unless a test writes one, and any log
    target a test opens is closed afterwards.
    """
    for name in ("XAPI_HOST", "XAPI_USER", "XAPI_PASSWORD"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    yield
    logger.closeLogs()
