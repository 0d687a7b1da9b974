"""
Launch the pricing service
"""
import uvicorn

from pricing_service.config import get_settings
from pricing_service.core.logging import setup_logging


if __name__ == "__main__":
    settings = get_settings()

    setup_logging(
        log_level=settings.LOG_LEVEL,
        is_debug=settings.DEBUG,
        service_name=settings.APP_NAME
    )

    print(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    print(f"Server: http://{settings.HOST}:{settings.PORT}")
    print(f"Docs: http://{settings.HOST}:{settings.PORT}/docs")
    print(f"Debug mode: {settings.DEBUG}")
    print()

    uvicorn.run(
        "pricing_service.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
