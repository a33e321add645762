"""Exit codes for the snykstep CLI.

- 0: Success (configuration valid, command completed)
- 1: Validation errors found in the step configuration
- 2: Invalid usage (bad arguments, unreadable config or registry files)
"""

from __future__ import annotations

EXIT_SUCCESS = 0
EXIT_VALIDATION_ERRORS = 1
EXIT_INVALID_USAGE = 2
