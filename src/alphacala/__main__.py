"""Entry point for running AlphaCala via ``python -m alphacala``."""

from __future__ import annotations

import logging
import os

import uvicorn


def main() -> None:
    """Start the FastAPI-powered AlphaCala web server."""

    logging.basicConfig(
        level=os.environ.get("ALPHACALA_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    host = os.environ.get("ALPHACALA_HOST", "0.0.0.0")
    port = int(os.environ.get("ALPHACALA_PORT", "8000"))
    uvicorn.run("alphacala.ui:app", host=host, port=port, reload=False)


if __name__ == "__main__":
    main()
