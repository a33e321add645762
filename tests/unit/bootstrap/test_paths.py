"""Tests for snykstep.bootstrap.paths."""

from __future__ import annotations

from pathlib import Path

import pytest

from snykstep.bootstrap.paths import (
    DEFAULT_HOME_DIR_NAME,
    SNYKSTEP_HOME_ENV,
    SnykStepPaths,
    get_snykstep_home,
)


class TestGetSnykstepHome:
    def test_env_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(SNYKSTEP_HOME_ENV, str(tmp_path))
        assert get_snykstep_home() == tmp_path

    def test_default_under_user_home(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(SNYKSTEP_HOME_ENV, raising=False)
        assert get_snykstep_home() == Path.home() / DEFAULT_HOME_DIR_NAME


class TestSnykStepPaths:
    def test_layout(self, tmp_path: Path) -> None:
        paths = SnykStepPaths(tmp_path)
        assert paths.installations_file == tmp_path / "config" / "installations.yml"
        assert paths.credentials_file == tmp_path / "config" / "credentials.yml"

    def test_default_uses_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(SNYKSTEP_HOME_ENV, str(tmp_path))
        assert SnykStepPaths.default().home == tmp_path

