"""Snyk security build step and its descriptor."""

from __future__ import annotations

import threading
from typing import Any, Dict, List, Mapping, Optional, Tuple

from snykstep.bootstrap.paths import SnykStepPaths
from snykstep.core.logging import get_logger
from snykstep.core.models import DEFAULT_SEVERITY, FormValidation, ListBoxModel, Severity
from snykstep.core.util import fix_empty_and_trim
from snykstep.credentials.listing import list_credential_options
from snykstep.credentials.models import SnykApiToken
from snykstep.credentials.store import CredentialStore, load_credential_store
from snykstep.security.acl import SYSTEM, Item, Principal
from snykstep.steps.builder import Builder, BuildStepDescriptor
from snykstep.tools.installation import InstallationRegistry, SnykInstallation

LOGGER = get_logger(__name__)

DISPLAY_NAME = "Invoke Snyk Security task"

# Form field name -> attribute name
FORM_FIELDS: Dict[str, str] = {
    "failOnIssues": "fail_on_issues",
    "monitorProjectOnBuild": "monitor_project_on_build",
    "severity": "severity",
    "snykTokenId": "snyk_token_id",
    "targetFile": "target_file",
    "organisation": "organisation",
    "projectName": "project_name",
    "snykInstallation": "snyk_installation",
}

BOOLEAN_FIELDS = ("fail_on_issues", "monitor_project_on_build")


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "on", "yes", "1")
    return bool(value)


class SnykBuildStep(Builder):
    """Configuration of one "Invoke Snyk Security task" build step.

    Setters assign without validating; the descriptor's ``check_*`` methods
    report problems per field. An unrecognized severity is stored as None.
    """

    def __init__(self) -> None:
        self.fail_on_issues: bool = True
        self.monitor_project_on_build: bool = True
        self._severity: Optional[Severity] = DEFAULT_SEVERITY
        self.snyk_token_id: Optional[str] = None
        self.target_file: Optional[str] = None
        self.organisation: Optional[str] = None
        self.project_name: Optional[str] = None
        self.snyk_installation: Optional[str] = None

    @property
    def severity(self) -> Optional[str]:
        return self._severity.value if self._severity is not None else None

    @severity.setter
    def severity(self, value: Optional[str]) -> None:
        self._severity = Severity.get_if_present(value)

    @classmethod
    def from_form(cls, data: Mapping[str, Any]) -> "SnykBuildStep":
        """Bind submitted form or config data.

        Accepts both form field names (``snykTokenId``) and attribute names
        (``snyk_token_id``). Unknown keys are ignored, and a null or blank
        boolean keeps its default.
        """
        step = cls()
        for key, value in data.items():
            attribute = FORM_FIELDS.get(key, key)
            if attribute not in FORM_FIELDS.values():
                continue
            if attribute in BOOLEAN_FIELDS:
                if value is None or (isinstance(value, str) and not value.strip()):
                    continue
                value = _to_bool(value)
            elif value is not None:
                value = str(value)
            setattr(step, attribute, value)
        return step

    def to_dict(self) -> Dict[str, Any]:
        """Persisted form, keyed by attribute name."""
        return {attribute: getattr(self, attribute) for attribute in FORM_FIELDS.values()}

    def perform(self, build: Any, launcher: Any, listener: Any) -> bool:
        return super().perform(build, launcher, listener)

    @classmethod
    def get_descriptor(cls) -> "SnykBuildStepDescriptor":
        return get_descriptor()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SnykBuildStep):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self.to_dict().items() if v is not None)
        return f"SnykBuildStep({fields})"


class SnykBuildStepDescriptor(BuildStepDescriptor):
    """Installation registry and form support for the Snyk build step.

    Shared by every form-rendering request. Only the installation registry is
    mutable; every ``fill_*`` and ``check_*`` method is side-effect free.

    Args:
        registry: Installation registry, loaded at construction.
        credential_store: Store used for credential listing and checks.
    """

    def __init__(
        self,
        registry: Optional[InstallationRegistry] = None,
        credential_store: Optional[CredentialStore] = None,
    ) -> None:
        if registry is None or credential_store is None:
            paths = SnykStepPaths.default()
            if registry is None:
                registry = InstallationRegistry(paths.installations_file)
            if credential_store is None:
                credential_store = load_credential_store(paths.credentials_file)
        self._registry = registry
        self._credential_store = credential_store
        self._registry.load()

    @property
    def display_name(self) -> str:
        return DISPLAY_NAME

    @property
    def credential_store(self) -> CredentialStore:
        return self._credential_store

    def get_installations(self) -> Tuple[SnykInstallation, ...]:
        return self._registry.installations

    def set_installations(self, *installations: SnykInstallation) -> None:
        self._registry.replace(*installations)

    def get_installation(self, name: str) -> Optional[SnykInstallation]:
        return self._registry.get(name)

    def has_installations_available(self) -> bool:
        installations = self._registry.installations
        LOGGER.debug(f"configured snyk installations: {len(installations)}")
        for installation in installations:
            LOGGER.debug(f"- details: {installation}")
        return len(installations) > 0

    def fill_severity_items(self) -> ListBoxModel:
        model = ListBoxModel()
        for severity in Severity:
            model.add(severity.value)
        return model

    def fill_snyk_token_id_items(
        self,
        principal: Principal,
        item: Optional[Item],
        snyk_token_id: Optional[str],
    ) -> ListBoxModel:
        return list_credential_options(
            principal,
            item,
            SnykApiToken,
            snyk_token_id,
            self._credential_store,
        )

    def fill_snyk_installation_items(self) -> ListBoxModel:
        model = ListBoxModel()
        for installation in self._registry.installations:
            model.add(installation.name)
        return model

    def check_snyk_token_id(self, value: Optional[str]) -> FormValidation:
        token_id = fix_empty_and_trim(value)
        if token_id is None:
            return FormValidation.error("Snyk API token is required.")
        if self._credential_store.find_by_id(SnykApiToken, token_id, None, SYSTEM) is None:
            return FormValidation.error("Cannot find currently selected Snyk API token.")
        return FormValidation.ok()

    def check_project_name(
        self,
        value: Optional[str],
        monitor_project_on_build: Optional[str],
    ) -> FormValidation:
        if fix_empty_and_trim(value) is not None and fix_empty_and_trim(monitor_project_on_build) == "false":
            return FormValidation.warning(
                "Project name will be ignored, because the project is not monitored on build."
            )
        return FormValidation.ok()

    def check_snyk_installation(self, value: Optional[str]) -> FormValidation:
        if not self.has_installations_available():
            return FormValidation.warning("No Snyk installations are configured.")
        name = fix_empty_and_trim(value)
        if name is not None and self._registry.get(name) is None:
            return FormValidation.error(f"Cannot find Snyk installation '{name}'.")
        return FormValidation.ok()

    def check_step(self, step: SnykBuildStep) -> List[Tuple[str, FormValidation]]:
        """Run every field check against a configured step.

        Returns:
            ``(field, result)`` pairs in form order.
        """
        monitor = "true" if step.monitor_project_on_build else "false"
        return [
            ("snyk_token_id", self.check_snyk_token_id(step.snyk_token_id)),
            ("project_name", self.check_project_name(step.project_name, monitor)),
            ("snyk_installation", self.check_snyk_installation(step.snyk_installation)),
        ]


_descriptor: Optional[SnykBuildStepDescriptor] = None
_descriptor_lock = threading.Lock()


def get_descriptor() -> SnykBuildStepDescriptor:
    """Return the process-wide descriptor, creating it on first use."""
    global _descriptor
    if _descriptor is None:
        with _descriptor_lock:
            if _descriptor is None:
                _descriptor = SnykBuildStepDescriptor()
    return _descriptor


def reset_descriptor(descriptor: Optional[SnykBuildStepDescriptor] = None) -> None:
    """Replace the process-wide descriptor (None forces a reload on next use)."""
    global _descriptor
    with _descriptor_lock:
        _descriptor = descriptor
