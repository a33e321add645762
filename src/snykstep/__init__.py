"""snykstep - Snyk security build step for CI jobs."""

__version__ = "0.1.0"
