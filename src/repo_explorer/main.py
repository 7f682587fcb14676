from __future__ import annotations
import logging
import uvicorn
from repo_explorer.infrastructure.config import get_settings

def main() -> None:
    """Start the uvicorn ASGI server."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    )
    if settings.openai_api_key is None:
        logging.getLogger(__name__).warning(
            "OPENAI_API_KEY is not set; file analysis is disabled."
        )
    if settings.github_token is None:
        logging.getLogger(__name__).warning(
            "No GitHub token detected. API requests may be rate limited."
        )
    uvicorn.run(
        "repo_explorer.interface.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
