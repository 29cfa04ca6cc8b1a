# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Put local values in .env (gitignored); real environment variables always win.

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "MODEST_APP_NAME": "App display name (default: modest-todo).",
    "MODEST_LOG_LEVEL": "Console logging level (default: WARNING). The log file always gets DEBUG.",
    "MODEST_LOG_TO_FILE": "Write <data_dir>/modest_todo.log (true/false, default: true).",
    # Paths (gitignored)
    "MODEST_DATA_DIR": "Local data directory (default: .local/modest_todo).",
    "MODEST_TASKS_PATH": "Task list JSON file (default: <data_dir>/tasks.json).",
    # Initial view / defaults
    "MODEST_DEFAULT_SORT": "Initial sort: created | due | due-far | priority | priority-low.",
    "MODEST_DEFAULT_FILTER": "Initial status filter: all | incomplete | completed.",
    "MODEST_DEFAULT_DUE_DAYS": "Days from today used as due date when /add omits one (default: 7).",
}
