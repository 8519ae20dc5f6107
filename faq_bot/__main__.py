# Nombre de archivo: __main__.py
# Ubicación de archivo: faq_bot/__main__.py
# Descripción: Entrypoint `python -m faq_bot` (Uvicorn con factory)

import uvicorn

from faq_bot.app.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "faq_bot.app.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
