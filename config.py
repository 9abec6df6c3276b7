# -*- coding: utf-8 -*-
import os

APP_NAME = "STEGOCLIENT"
APP_VERSION = "0.1.0"
APP_DESCRIPTION = "Steganography service client"

# GUI theming + sizing
GUI_SETTINGS = {
    "window": {
        "title": f"{APP_NAME}: {APP_DESCRIPTION}",
        "width": 1000,
        "height": 720,
        "min_width": 900,
        "min_height": 640,
    },
    "preview": {
        "max_width": 480,
        "max_height": 360,
    },
}

# Logging
LOGGING_SETTINGS = {
    "level": "INFO",           # DEBUG/INFO/WARNING/ERROR
    "log_dir": "logs",
    "log_file": "stegoclient.log",
    "max_bytes": 2 * 1024 * 1024,
    "backup_count": 3,
}

# Remote service
API_SETTINGS = {
    "base_url": "http://localhost:8080/api",
    "env_var": "STEGOCLIENT_API_BASE",
    "timeout": 60.0,           # seconds, applies to connect and read
}

# Single-flight behaviour per form: "supersede" or "reject"
SUBMISSION_SETTINGS = {
    "policy": "supersede",
}


def resolve_api_base(override=None):
    """Return the service base URL: explicit override, then environment, then default."""
    if override:
        return override.rstrip("/")
    from_env = os.environ.get(API_SETTINGS["env_var"])
    if from_env:
        return from_env.rstrip("/")
    return API_SETTINGS["base_url"].rstrip("/")
