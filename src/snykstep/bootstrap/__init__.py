"""Home directory layout for snykstep."""

from snykstep.bootstrap.paths import SnykStepPaths, get_snykstep_home

__all__ = ["SnykStepPaths", "get_snykstep_home"]
