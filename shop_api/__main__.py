"""Run the API with uvicorn: python -m shop_api"""

import uvicorn

from shop_api.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "shop_api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        reload=False,
    )


if __name__ == "__main__":
    main()
