"""Main entry point for the channel tracing demo API."""

import os
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from channel_tracing.api import create_fastapi_app
from channel_tracing.config import TracingSettings
from channel_tracing.logging_config import setup_logging


def main():
    """Run the application."""
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env")
    setup_logging(log_level=TracingSettings.from_env().log_level)

    # Get configuration from environment
    api_host = os.getenv("API_HOST", "localhost")
    api_port = int(os.getenv("API_PORT", "8000"))

    app = create_fastapi_app()

    uvicorn.run(
        app,
        host=api_host,
        port=api_port,
        log_level="info",
    )


if __name__ == "__main__":
    main()
