"""Exit codes used by the errata CLI."""

VALIDATION_EXIT_CODE = 2
