"""Process exit codes shared by CLI commands."""

SUCCESS = 0
GENERAL_ERROR = 1
USAGE_ERROR = 2
NOT_FOUND = 3
STORAGE_ERROR = 4
DECODE_ERROR = 5
