import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shielded_notes import __version__
from shielded_notes.api.routes import router
from shielded_notes.config import Settings, configure_logging
from shielded_notes.crypto.primitives import CryptoPrimitives, ReferencePrimitives

logger = logging.getLogger("shielded_notes.api")


def create_app(
    settings: Settings | None = None,
    primitives: CryptoPrimitives | None = None,
) -> FastAPI:
    """Build the note service. Settings default to the environment."""
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings.log_level)

        app.state.settings = settings
        app.state.primitives = primitives or ReferencePrimitives()
        logger.info(
            f"Note service ready (primitives={type(app.state.primitives).__name__}, "
            f"max_tx_notes={settings.max_tx_notes})"
        )

        yield

    app = FastAPI(
        title="Shielded Notes API",
        description="Commitment, nullifier and spend-signature derivation for shielded notes",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    app.include_router(router)

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        logger.warning(f"Rejected {request.url.path}: {exc}")
        return JSONResponse(
            status_code=400,
            content={"detail": str(exc), "field": getattr(exc, "field", None)},
        )

    @app.get("/health")
    async def health_check():
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


app = create_app()
