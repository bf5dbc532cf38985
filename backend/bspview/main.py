"""
Main application module for the BSP scene service.

This file sets up the FastAPI application, configures CORS so browser
based viewers can call the API from another origin, and exposes a
simple health check endpoint.  The scene router is included under the
``/api`` namespace.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes_scenes import router as scenes_router


def create_app() -> FastAPI:
    """Factory to create and configure the FastAPI application.

    Returns:
        FastAPI: The configured FastAPI application instance.
    """
    app = FastAPI(title="bspview")

    # Allow all origins by default.  In production you should restrict
    # this to the domains that are allowed to access your API.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Health check endpoint for monitoring and deployment probes.
    @app.get("/api/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(scenes_router, prefix="/api", tags=["scenes"])

    return app


# Create the application instance.  Uvicorn will import this when
# running `uvicorn bspview.main:app` from within backend/
app = create_app()
