# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "POCKET_APP_NAME": "App display name (default: pocket-todo).",
    "POCKET_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Connectors
    "POCKET_CONSOLE_ENABLED": "Run the console REPL (true/false, default: true).",
    # Storage
    "POCKET_STORE_BACKEND": "Key-value backend: sqlite or json (default: sqlite).",
    # Paths (gitignored)
    "POCKET_DATA_DIR": "Local data directory (default: .local/pocket_todo).",
    "POCKET_SQLITE_PATH": "SQLite store path (default: <data_dir>/task_preferences.sqlite3).",
    "POCKET_JSON_PATH": "JSON store path (default: <data_dir>/task_preferences.json).",
}
