"""Run the API with uvicorn."""

import uvicorn

from demo_app.config import settings


def main() -> None:
    uvicorn.run(
        "demo_app.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
