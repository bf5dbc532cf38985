"""
Entry point for the BSP scene service.

Running this script with ``python run.py`` starts the FastAPI server
that builds and traverses BSP trees for remote viewers.  The host and
port default to ``0.0.0.0:8000`` and can be overridden with the
``BSP_HOST`` and ``BSP_PORT`` environment variables.  Set ``BSP_DEBUG``
to log a summary of every tree build.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import logging
import uvicorn

logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def main() -> None:
    """Run the Uvicorn server hosting the scene service."""
    # Make ``bspview`` importable when running from a source checkout.
    backend_dir = Path(__file__).resolve().parent / "backend"
    if str(backend_dir) not in sys.path:
        sys.path.append(str(backend_dir))

    from bspview.main import app  # type: ignore

    host = os.getenv("BSP_HOST", "0.0.0.0")
    port = int(os.getenv("BSP_PORT", "8000"))
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
