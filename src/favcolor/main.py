# src/favcolor/main.py
"""Main entry point for the favcolor application.

Importing this module builds the app from the environment; a missing
SESSION_SECRET aborts startup with `ConfigurationError`.
"""

from favcolor.application import create_app

app = create_app()


def run() -> None:
    """Serve the application with uvicorn."""
    import os

    import uvicorn

    uvicorn.run(
        "favcolor.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=app.state.settings.debug,
    )


if __name__ == "__main__":
    run()
