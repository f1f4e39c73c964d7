"""
Run the API with uvicorn on the configured port.

Usage:
    python -m rakshak
"""

from __future__ import annotations

import uvicorn

from .core.config import settings


def main() -> None:
    uvicorn.run("rakshak.main:app", host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
