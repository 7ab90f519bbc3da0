# Storage layout
COMMANDS_STORAGE_PREFIX = "commands"

# Backend defaults (overridden by COMMAND_REPOSITORY_TYPE, COMMAND_STORAGE_TYPE and S3_* env vars)
DEFAULT_STORAGE_TYPE = "memory"
DEFAULT_REPOSITORY_TYPE = "storage"
DEFAULT_BUCKET_NAME = "command-api-store"
DEFAULT_S3_ENDPOINT = "storage.googleapis.com"
MEMORY_STORAGE_BASE_URL = "memory://commands"

# API
COMMANDS_ROUTE_PREFIX = "/api/commands"
DEFAULT_PORT = 8000
