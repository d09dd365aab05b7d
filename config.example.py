# config.example.py

"""
Documentation-only module (safe to commit).

Configuration is loaded from environment variables (optionally via a local .env file).
Only the page-feeder CLI reads it; the library API takes everything as arguments.
"""

ENV_VARS = {
    # Logging
    "PAGE_FEEDER_LOG_LEVEL": "Console logging level (default: INFO).",
    "PAGE_FEEDER_DATA_DIR": "Directory for page_feeder.log (default: .local/page_feeder).",
    # Feeding
    "PAGE_FEEDER_POLL_INTERVAL_SECONDS": "How often the drain loop re-checks is_running() (default: 0.05).",
    "PAGE_FEEDER_WORKERS": "WorkQueue concurrency used by the CLI (default: 4).",
    "PAGE_FEEDER_PAGE_SIZE": "Items per page for the JSON file source (default: 100).",
    "PAGE_FEEDER_TOKEN_FIELD": "Request field carrying the continuation token (default: ExclusiveStartKey).",
}
