"""
Main entrypoint: Crypto Wrapped FastAPI server under uvicorn.

Env: API_HOST, API_PORT, LOG_LEVEL, ETHERSCAN_API_KEY, ETHERSCAN_API_URL, WRAPPED_TIMEZONE.

Equivalent: uvicorn backend_wrapped.api_server.app:app --host 0.0.0.0 --port 8000
"""

import os

# Configure structured JSON logging before other imports that may log
from backend_wrapped.wrapped_logging import get_logger

logger = get_logger("main")


def main() -> None:
    """Run the API server in the main thread."""
    from backend_wrapped.api_server.app import app
    from backend_wrapped.config.settings import get_settings
    import uvicorn

    settings = get_settings()
    if not settings.explorer.api_key:
        logger.warning("main_config_warning", message="ETHERSCAN_API_KEY is not set; explorer calls will fail")

    logger.info("main_server_starting", host=settings.api_host, port=settings.api_port)
    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_level=os.getenv("LOG_LEVEL", "info").lower())


if __name__ == "__main__":
    main()
