from fastapi import FastAPI

from .database import Base, engine
from .models import *  # noqa: F401,F403
from .member_routes import router as member_router
from .middleware import MemberInfoMiddleware
from .core.logging import configure_logging
from .core.settings import settings


def create_app() -> FastAPI:
    app = FastAPI(title="Account Verification API", version="1.0.0")

    @app.on_event("startup")
    def on_startup():
        settings.validate_for_runtime()
        configure_logging(settings)
        Base.metadata.create_all(bind=engine)

    app.add_middleware(MemberInfoMiddleware)
    app.include_router(member_router)
    return app


app = create_app()
