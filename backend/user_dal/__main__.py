"""`python -m user_dal` — serve the API with uvicorn using settings from the environment."""

import uvicorn

from user_dal.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "user_dal.main:app",
        host=settings.http_host,
        port=settings.http_port,
        timeout_keep_alive=settings.http_read_timeout_seconds,
        log_config=None,
    )


if __name__ == "__main__":
    main()
