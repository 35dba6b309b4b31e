"""Run the API server: ``python -m shopcatalog``."""

from __future__ import annotations

import uvicorn

from shopcatalog.core.config import Settings


def main() -> None:
    settings = Settings.from_env()
    uvicorn.run(
        "shopcatalog.api:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
