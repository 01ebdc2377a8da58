"""Run the API under uvicorn.

Usage:
    python main.py

The port comes from the config file's ``app.port`` or the PORT env var.
"""

import uvicorn

from core.config import AppConfig


if __name__ == "__main__":
    config = AppConfig.load()
    uvicorn.run(
        "app:app",
        host="0.0.0.0",
        port=config.app.port,
        log_level=config.app.log_level.lower(),
    )
