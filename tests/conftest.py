"""Shared fixtures for snykstep tests."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest

from snykstep.credentials.models import SecretText, SnykApiToken
from snykstep.credentials.store import CredentialStore
from snykstep.steps.snyk_build_step import SnykBuildStepDescriptor, reset_descriptor
from snykstep.tools.installation import InstallationRegistry


@pytest.fixture
def credential_store() -> CredentialStore:
    """Store with global, folder-scoped, per-user and non-Snyk credentials."""
    return CredentialStore([
        SnykApiToken(id="snyk-global", description="Global token", token="g-secret"),
        SnykApiToken(id="snyk-team-a", scope="team-a", token="a-secret"),
        SnykApiToken(id="snyk-alice", owner="alice", token="alice-secret"),
        SecretText(id="other-secret", secret="nope"),
    ])


@pytest.fixture
def descriptor(tmp_path: Path, credential_store: CredentialStore) -> SnykBuildStepDescriptor:
    registry = InstallationRegistry(tmp_path / "installations.yml")
    return SnykBuildStepDescriptor(registry=registry, credential_store=credential_store)


@pytest.fixture
def snykstep_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point SNYKSTEP_HOME at a temp dir and reset the descriptor singleton."""
    home = tmp_path / ".snykstep"
    monkeypatch.setenv("SNYKSTEP_HOME", str(home))
    reset_descriptor()
    yield home
    reset_descriptor()
