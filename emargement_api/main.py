# emargement_api/main.py
import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from emargement_api.config import Settings, get_settings
from emargement_api.database import build_engine, build_session_factory, init_db
from emargement_api.utils.errors import register_exception_handlers
from emargement_api.utils.hashing import PasswordHasher
from emargement_api.utils.request_log import configure_logging, register_request_logging
from emargement_api.utils.tokenJWT import TokenService

# Routers
from emargement_api.routes.auth import router as auth_router
from emargement_api.routes.sessions import router as sessions_router
from emargement_api.routes.emargement import router as emargement_router

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    # Missing SECRET_KEY fails here, before the app exists
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    engine = build_engine(settings.DATABASE_URL)
    try:
        init_db(engine)
    except SQLAlchemyError:
        logger.exception("Database initialization failed. Check DATABASE_URL.")
        raise

    app = FastAPI(title="Emargement API", version="1.0.0")

    # Process-wide collaborators, read-only after startup
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.token_service = TokenService(
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
        expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    )
    app.state.password_hasher = PasswordHasher(rounds=settings.BCRYPT_ROUNDS)

    # CORS Configuration
    origins = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]
    if settings.FRONTEND_URL:
        origins.append(settings.FRONTEND_URL)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_request_logging(app)
    register_exception_handlers(app)

    # Router registration
    app.include_router(auth_router)
    app.include_router(sessions_router)
    app.include_router(emargement_router)

    @app.get("/")
    def read_root():
        return {"message": "Emargement API running"}

    return app


def run() -> None:
    uvicorn.run("emargement_api.main:create_app", factory=True, host="0.0.0.0", port=3000)


if __name__ == "__main__":
    run()
