"""Local development server.

Serves both functions under the same paths the hosting platform routes them to, so a
frontend can be developed against `uvicorn ai_functions.main:app --reload`.
"""

from __future__ import annotations

from fastapi import FastAPI

from ai_functions.api.router import router as functions_router
from ai_functions.api.schemas import HealthOut
from ai_functions.core.logging import setup_logging
from ai_functions.core.metrics import PrometheusMetricsMiddleware, metrics_router
from ai_functions.core.middleware.http_logging import HttpLoggingMiddleware

setup_logging()


def create_app() -> FastAPI:
    app = FastAPI(
        title="AI Functions",
        description=(
            "Local runner for the serverless functions.\n\n"
            "- `ai-proxy` relays a prompt to the chat-completion API using a server-held key.\n"
            "- `ai-handler` runs local keyword analysis on a piece of text.\n\n"
            "Both routes build the same event object as the hosting runtime and call the same "
            "handler code as the deployed functions."
        ),
        openapi_tags=[
            {
                "name": "health",
                "description": "Basic uptime check for the dev server.",
            },
            {
                "name": "functions",
                "description": "The deployed functions, served at their platform paths.",
            },
            {
                "name": "monitoring",
                "description": "Prometheus-compatible metrics endpoint.",
            },
        ],
    )

    app.add_middleware(PrometheusMetricsMiddleware)
    app.add_middleware(HttpLoggingMiddleware)

    @app.get(
        "/health",
        response_model=HealthOut,
        tags=["health"],
        summary="Health check",
        description=(
            "Lightweight endpoint to verify the dev server is running. It does not call the "
            "upstream API."
        ),
    )
    async def health() -> HealthOut:
        return HealthOut(status="ok")

    app.include_router(metrics_router)
    app.include_router(functions_router)
    return app


app = create_app()
