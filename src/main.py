import logging
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from src.api.errors import register_exception_handlers
from src.api.router import router as api_router
from src.config import Settings, settings as default_settings
from src.context import AppContext
from src.worker.runners import WorkerRunner

logger = logging.getLogger("users_api.api")


def create_app(settings: Settings | None = None, *, runner: WorkerRunner | None = None) -> FastAPI:
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        context = AppContext.build(settings, runner=runner)
        app.state.context = context
        logger.info(
            "startup env=%s users_file=%s max_iterations=%s",
            settings.app_env,
            settings.users_path,
            settings.max_iterations,
        )

        yield

        logger.info("shutdown")
        await context.aclose()

    app = FastAPI(title="Users API", lifespan=lifespan)

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next):
        """Attach a request id to every response and log a compact access line.

        - If the caller provides X-Request-ID, we reuse it.
        - Otherwise we generate a UUID4.
        """

        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id

        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.info(
                "access request_id=%s method=%s path=%s status=500 duration_ms=%.2f",
                request_id,
                request.method,
                request.url.path,
                (time.perf_counter() - start) * 1000,
            )
            raise
        duration_ms = (time.perf_counter() - start) * 1000

        response.headers["X-Request-ID"] = request_id
        logger.info(
            "access request_id=%s method=%s path=%s status=%s duration_ms=%.2f",
            request_id,
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
        )
        return response

    register_exception_handlers(app)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    app.include_router(api_router)
    return app


app = create_app()
