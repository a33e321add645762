"""Tests for the options command."""

from __future__ import annotations

from argparse import Namespace
from pathlib import Path

from snykstep.cli.commands.options import OptionsCommand
from snykstep.cli.exit_codes import EXIT_SUCCESS
from snykstep.steps.snyk_build_step import SnykBuildStepDescriptor, reset_descriptor
from snykstep.tools.installation import SnykInstallation


def _args(field: str, **kwargs) -> Namespace:
    defaults = {"field": field, "item": None, "folder": False, "current": None, "user": None}
    defaults.update(kwargs)
    return Namespace(**defaults)


class TestOptionsCommand:
    def test_command_name(self) -> None:
        assert OptionsCommand().name == "options"

    def test_severity(self, capsys, snykstep_home: Path, descriptor: SnykBuildStepDescriptor) -> None:
        reset_descriptor(descriptor)
        assert OptionsCommand().execute(_args("severity")) == EXIT_SUCCESS
        lines = capsys.readouterr().out.split()
        assert lines == ["low", "medium", "high", "critical"]

    def test_credentials_as_operator(
        self, capsys, snykstep_home: Path, descriptor: SnykBuildStepDescriptor
    ) -> None:
        reset_descriptor(descriptor)
        OptionsCommand().execute(_args("credentials", item="team-a/app"))
        out = capsys.readouterr().out
        assert "- none -" in out
        assert "'snyk-global'" in out
        assert "snyk-team-a" in out

    def test_credentials_for_folder(
        self, capsys, snykstep_home: Path, descriptor: SnykBuildStepDescriptor
    ) -> None:
        reset_descriptor(descriptor)
        OptionsCommand().execute(_args("credentials", item="team-a"))
        assert "snyk-team-a" not in capsys.readouterr().out

        OptionsCommand().execute(_args("credentials", item="team-a", folder=True))
        assert "snyk-team-a" in capsys.readouterr().out

    def test_credentials_as_unprivileged_user(
        self, capsys, snykstep_home: Path, descriptor: SnykBuildStepDescriptor
    ) -> None:
        reset_descriptor(descriptor)
        OptionsCommand().execute(_args("credentials", user="bob", current="snyk-team-a"))
        out = capsys.readouterr().out
        assert "snyk-global" not in out
        assert "- current -: 'snyk-team-a'" in out

    def test_unprivileged_user_without_current_value(
        self, capsys, snykstep_home: Path, descriptor: SnykBuildStepDescriptor
    ) -> None:
        reset_descriptor(descriptor)
        OptionsCommand().execute(_args("credentials", user="bob"))
        assert "(no options)" in capsys.readouterr().out

    def test_installations_none_configured(
        self, capsys, snykstep_home: Path, descriptor: SnykBuildStepDescriptor
    ) -> None:
        reset_descriptor(descriptor)
        OptionsCommand().execute(_args("installations"))
        assert "No Snyk installations configured" in capsys.readouterr().out

    def test_installations(
        self, capsys, snykstep_home: Path, descriptor: SnykBuildStepDescriptor
    ) -> None:
        descriptor.set_installations(SnykInstallation("latest", "/opt/snyk"))
        reset_descriptor(descriptor)
        OptionsCommand().execute(_args("installations"))
        assert "latest" in capsys.readouterr().out
