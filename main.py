"""
Main entrypoint: run the SuiSense FastAPI server with uvicorn.

Env: API_HOST, API_PORT (or PORT), SUI_NETWORK, SUI_RPC_URL, OPENAI_API_KEY,
WALRUS_PUBLISHER_URL, LOG_LEVEL, LOG_FORMAT.

Equivalent: uvicorn backend_suisense.api_server.app:app --host 0.0.0.0 --port 8000
"""

import os

# Configure structured JSON logging before other imports that may log
from backend_suisense.suisense_logging import get_logger

logger = get_logger("main")


def main() -> None:
    """Run the API server in the main thread until SIGINT/SIGTERM."""
    from backend_suisense.config.env import get_api_host, get_api_port

    api_host = get_api_host()
    api_port = get_api_port()

    from backend_suisense.api_server.app import app
    import uvicorn

    logger.info("main_server_starting", host=api_host, port=api_port)
    uvicorn.run(app, host=api_host, port=api_port, log_level=os.getenv("LOG_LEVEL", "info").lower())


if __name__ == "__main__":
    main()
