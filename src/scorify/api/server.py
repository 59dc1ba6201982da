"""Run the Scorify API with uvicorn."""

import uvicorn

from scorify.core.config import get_settings


def main() -> None:
    """Serve scorify.api.app:app on the configured host and port."""
    settings = get_settings()
    uvicorn.run(
        "scorify.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
