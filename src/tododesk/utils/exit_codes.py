"""
Exit codes for tododesk.

Semantic exit codes so scripts can tell what went wrong.
"""

# Success
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments or validation error
ERROR_INVALID_ARGS = 2

# Database could not be opened or queried
ERROR_STORAGE = 4

# Resource not found
ERROR_NOT_FOUND = 5

# Operation refused (e.g. deleting a default category)
ERROR_PERMISSION_DENIED = 6
