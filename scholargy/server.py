"""
Process entry point: runs the API under uvicorn.

Binds to 0.0.0.0:$PORT (8080 by default, as App Service expects). uvicorn
handles SIGINT/SIGTERM and shuts the app down gracefully.
"""

import uvicorn

from scholargy.config import settings


def main() -> None:
    print("=" * 60)
    print("Starting Scholargy backend")
    print(f"   Environment: {settings.ENVIRONMENT}")
    print(f"   Listening on http://0.0.0.0:{settings.PORT}")
    print(f"   API Docs:    http://localhost:{settings.PORT}/docs")
    print("=" * 60)

    uvicorn.run(
        "scholargy.main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.is_development(),
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
