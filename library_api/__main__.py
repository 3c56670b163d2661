"""Run the API with uvicorn: ``python -m library_api``."""

import uvicorn

from .infrastructure.config.settings import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "library_api.interfaces.main:app",
        host=settings.APP_HOST,
        port=settings.APP_PORT,
        reload=settings.DEBUG,
        log_config=None,
    )


if __name__ == "__main__":
    main()
