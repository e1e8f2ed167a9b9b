"""Main entry point for the Catso application."""

import os


def main() -> None:
    """Run the Catso application with uvicorn."""
    import uvicorn

    from catso.config import config

    port = int(os.getenv("BIND_PORT", str(config.PORT)))
    host = os.getenv("BIND_HOST", "127.0.0.1")

    uvicorn.run(
        "catso.main:app",
        host=host,
        port=port,
        reload=False,
    )


if __name__ == "__main__":
    main()
