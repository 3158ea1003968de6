from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from loginkit.api.alerts import router as alerts_router
from loginkit.api.auth import router as auth_router
from loginkit.api.health import router as health_router
from loginkit.core.bootstrap import initialize_database
from loginkit.core.errors import (
    http_exception_handler,
    request_id_middleware,
    unhandled_exception_handler,
    validation_exception_handler,
)
from loginkit.core.logging import configure_logging
from loginkit.core.settings import settings
from loginkit.memory.database import engine


configure_logging(settings.log_level)

app = FastAPI(title="Loginkit API", version="0.1.0")
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(alerts_router)
app.middleware("http")(request_id_middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["x-client-id", "x-request-id"],
)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


@app.on_event("startup")
async def on_startup():
    await initialize_database(engine)


@app.on_event("shutdown")
async def on_shutdown():
    await engine.dispose()
