"""Core models and helpers shared across snykstep."""
