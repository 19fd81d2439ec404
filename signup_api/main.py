import logging
from contextlib import asynccontextmanager
from importlib.metadata import PackageNotFoundError, version

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from signup_api.auth.passwords import check_password_hashing
from signup_api.core.config import Settings, get_settings, validate_runtime_config
from signup_api.core.log import configure_logging
from signup_api.database import check_connection, ensure_user_schema, make_engine, make_session_factory
from signup_api.routes.graphql_routes import build_graphql_router

logger = logging.getLogger(__name__)

PACKAGE_NAME = "signup-api"


def _package_version() -> str:
    try:
        return version(PACKAGE_NAME)
    except PackageNotFoundError:
        return "0.0.0"


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    engine = make_engine(settings.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings.log_dir, settings.log_level)
        validate_runtime_config(settings)
        check_password_hashing()
        try:
            check_connection(engine)
            ensure_user_schema(engine)
        except SQLAlchemyError:
            logger.exception('Database initialization failed. Check DATABASE_URL and database credentials.')
            raise
        logger.info('%s startup sequence completed (version %s)', PACKAGE_NAME, _package_version())
        yield
        engine.dispose()
        logger.info('%s shut down', PACKAGE_NAME)

    app = FastAPI(title=PACKAGE_NAME, version=_package_version(), lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = make_session_factory(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_origins != ['*'],
        allow_methods=['*'],
        allow_headers=['*'],
    )

    @app.get('/')
    def root():
        return {'status': 'signup-api running'}

    app.include_router(build_graphql_router(settings), prefix='/graphql')

    return app


app = create_app()
