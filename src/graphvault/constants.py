"""Limits and defaults shared by the restore pipeline, client and config."""

# Batch upload limits (records per remote call)
MAX_BATCH_SIZE = 500

# Retry and timeout constants
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_MIN_WAIT_SECONDS = 1
DEFAULT_RETRY_MAX_WAIT_SECONDS = 30
DEFAULT_TIMEOUT_SECONDS = 60

# Worker pool bounds
MAX_WORKERS = 50
DEFAULT_MAX_WORKERS = 8

# HugeGraph defaults
DEFAULT_GRAPH_NAME = "hugegraph"

# Dump files are always written as UTF-8 text, one JSON document per line
DUMP_ENCODING = "utf-8"

# HTTP status codes treated as transient (retryable)
HTTP_REQUEST_TIMEOUT = 408
HTTP_TOO_MANY_REQUESTS = 429
HTTP_SERVER_ERROR_MIN = 500
