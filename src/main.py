"""Entry point: `python -m src.main`"""

import uvicorn

from src.api.app import create_app
from src.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
