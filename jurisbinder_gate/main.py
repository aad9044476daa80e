"""
Main entry point for the JurisBinder gate.
"""

from .api import app  # noqa: F401

if __name__ == "__main__":
    import uvicorn

    from .config import get_settings

    settings = get_settings()
    uvicorn.run(
        "jurisbinder_gate.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        # The in-memory store lives in a single process
        workers=1,
    )
