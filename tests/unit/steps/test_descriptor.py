"""Tests for SnykBuildStepDescriptor."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from snykstep.core.models import ValidationKind
from snykstep.credentials.store import CredentialStore
from snykstep.security.acl import Item, Permission, Principal
from snykstep.steps.snyk_build_step import (
    SnykBuildStep,
    SnykBuildStepDescriptor,
    get_descriptor,
    reset_descriptor,
)
from snykstep.tools.installation import InstallationRegistry, SnykInstallation


class TestMetadata:
    def test_display_name(self, descriptor: SnykBuildStepDescriptor) -> None:
        assert descriptor.display_name == "Invoke Snyk Security task"

    def test_applicable_to_any_job_type(self, descriptor: SnykBuildStepDescriptor) -> None:
        assert descriptor.is_applicable(object)
        assert descriptor.is_applicable(None)


class TestInstallations:
    """Installation registry owned by the descriptor."""

    def test_no_installations_initially(self, descriptor: SnykBuildStepDescriptor) -> None:
        assert descriptor.get_installations() == ()
        assert descriptor.has_installations_available() is False

    def test_available_after_registering(self, descriptor: SnykBuildStepDescriptor) -> None:
        descriptor.set_installations(SnykInstallation("latest", "/opt/snyk"))
        assert descriptor.has_installations_available() is True
        assert descriptor.get_installation("latest") == SnykInstallation("latest", "/opt/snyk")

    def test_loaded_at_construction(self, tmp_path: Path, credential_store: CredentialStore) -> None:
        path = tmp_path / "installations.yml"
        InstallationRegistry(path).replace(SnykInstallation("latest", "/opt/snyk"))

        descriptor = SnykBuildStepDescriptor(InstallationRegistry(path), credential_store)
        assert [i.name for i in descriptor.get_installations()] == ["latest"]

    def test_set_installations_persists(
        self, tmp_path: Path, descriptor: SnykBuildStepDescriptor, credential_store: CredentialStore
    ) -> None:
        descriptor.set_installations(
            SnykInstallation("a", "/opt/a"),
            SnykInstallation("b", "/opt/b"),
        )
        fresh = SnykBuildStepDescriptor(
            InstallationRegistry(tmp_path / "installations.yml"), credential_store
        )
        assert fresh.get_installations() == descriptor.get_installations()

    def test_availability_check_logs_details(
        self, descriptor: SnykBuildStepDescriptor, caplog: pytest.LogCaptureFixture
    ) -> None:
        descriptor.set_installations(SnykInstallation("latest", "/opt/snyk"))
        with caplog.at_level(logging.DEBUG, logger="snykstep"):
            descriptor.has_installations_available()
        assert "configured snyk installations: 1" in caplog.text
        assert "latest" in caplog.text

    def test_fill_installation_items(self, descriptor: SnykBuildStepDescriptor) -> None:
        descriptor.set_installations(SnykInstallation("b", "/b"), SnykInstallation("a", "/a"))
        assert descriptor.fill_snyk_installation_items().values() == ["b", "a"]


class TestFillSeverityItems:
    def test_all_levels_once_in_order(self, descriptor: SnykBuildStepDescriptor) -> None:
        assert descriptor.fill_severity_items().values() == ["low", "medium", "high", "critical"]


class TestFillSnykTokenIdItems:
    def test_admin_lists_visible_tokens(self, descriptor: SnykBuildStepDescriptor) -> None:
        admin = Principal("admin", frozenset({Permission.ADMINISTER}))
        model = descriptor.fill_snyk_token_id_items(admin, None, None)
        assert model.values() == ["", "snyk-global"]

    def test_restricted_user_sees_current_only(self, descriptor: SnykBuildStepDescriptor) -> None:
        model = descriptor.fill_snyk_token_id_items(Principal("bob"), Item("team-a/app"), "snyk-team-a")
        assert model.values() == ["snyk-team-a"]


class TestCheckSnykTokenId:
    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_blank_is_error(self, descriptor: SnykBuildStepDescriptor, value) -> None:
        result = descriptor.check_snyk_token_id(value)
        assert result.kind == ValidationKind.ERROR
        assert result.message == "Snyk API token is required."

    def test_unknown_id_is_error(self, descriptor: SnykBuildStepDescriptor) -> None:
        result = descriptor.check_snyk_token_id("missing")
        assert result.kind == ValidationKind.ERROR
        assert result.message == "Cannot find currently selected Snyk API token."

    def test_wrong_type_is_error(self, descriptor: SnykBuildStepDescriptor) -> None:
        assert descriptor.check_snyk_token_id("other-secret").is_error

    def test_folder_scoped_token_is_not_globally_visible(
        self, descriptor: SnykBuildStepDescriptor
    ) -> None:
        assert descriptor.check_snyk_token_id("snyk-team-a").is_error

    def test_existing_token_is_ok(self, descriptor: SnykBuildStepDescriptor) -> None:
        assert descriptor.check_snyk_token_id("snyk-global").is_ok

    def test_value_is_trimmed(self, descriptor: SnykBuildStepDescriptor) -> None:
        assert descriptor.check_snyk_token_id("  snyk-global  ").is_ok


class TestCheckProjectName:
    def test_name_without_monitoring_warns(self, descriptor: SnykBuildStepDescriptor) -> None:
        result = descriptor.check_project_name("web", "false")
        assert result.kind == ValidationKind.WARNING
        assert result.message == (
            "Project name will be ignored, because the project is not monitored on build."
        )

    def test_flag_is_trimmed(self, descriptor: SnykBuildStepDescriptor) -> None:
        assert descriptor.check_project_name("web", " false ").kind == ValidationKind.WARNING

    @pytest.mark.parametrize("flag", ["true", None, "", "FALSE", "no"])
    def test_name_with_other_flag_is_ok(self, descriptor: SnykBuildStepDescriptor, flag) -> None:
        assert descriptor.check_project_name("web", flag).is_ok

    @pytest.mark.parametrize("flag", ["true", "false", None])
    @pytest.mark.parametrize("name", [None, "", "  "])
    def test_blank_name_is_ok(self, descriptor: SnykBuildStepDescriptor, name, flag) -> None:
        assert descriptor.check_project_name(name, flag).is_ok


class TestCheckSnykInstallation:
    def test_warns_when_none_configured(self, descriptor: SnykBuildStepDescriptor) -> None:
        assert descriptor.check_snyk_installation(None).kind == ValidationKind.WARNING

    def test_unknown_name_is_error(self, descriptor: SnykBuildStepDescriptor) -> None:
        descriptor.set_installations(SnykInstallation("latest", "/opt/snyk"))
        assert descriptor.check_snyk_installation("other").is_error

    def test_known_or_blank_is_ok(self, descriptor: SnykBuildStepDescriptor) -> None:
        descriptor.set_installations(SnykInstallation("latest", "/opt/snyk"))
        assert descriptor.check_snyk_installation("latest").is_ok
        assert descriptor.check_snyk_installation("").is_ok


class TestCheckStep:
    def test_runs_every_check(self, descriptor: SnykBuildStepDescriptor) -> None:
        descriptor.set_installations(SnykInstallation("latest", "/opt/snyk"))
        step = SnykBuildStep.from_form({
            "snyk_token_id": "snyk-global",
            "monitor_project_on_build": False,
            "project_name": "web",
            "snyk_installation": "latest",
        })
        results = dict(descriptor.check_step(step))
        assert results["snyk_token_id"].is_ok
        assert results["project_name"].kind == ValidationKind.WARNING
        assert results["snyk_installation"].is_ok


class TestSingleton:
    def test_get_descriptor_is_shared(self, snykstep_home: Path) -> None:
        first = get_descriptor()
        assert get_descriptor() is first
        assert SnykBuildStep.get_descriptor() is first

    def test_reset_installs_given_descriptor(
        self, snykstep_home: Path, descriptor: SnykBuildStepDescriptor
    ) -> None:
        reset_descriptor(descriptor)
        assert get_descriptor() is descriptor

    def test_default_descriptor_uses_home(self, snykstep_home: Path) -> None:
        config = snykstep_home / "config"
        config.mkdir(parents=True)
        (config / "credentials.yml").write_text(
            "credentials:\n  - id: home-token\n    token: x\n"
        )
        InstallationRegistry(config / "installations.yml").replace(
            SnykInstallation("latest", "/opt/snyk")
        )

        descriptor = get_descriptor()
        assert descriptor.check_snyk_token_id("home-token").is_ok
        assert descriptor.has_installations_available()
