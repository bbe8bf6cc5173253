"""Launch the Daywise API server (``python -m daywise``)."""
import uvicorn

from daywise.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "daywise.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
