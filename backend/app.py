import logging
from collections.abc import AsyncGenerator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager

from litestar import Litestar
from litestar.datastructures import State
from litestar.di import Provide
from litestar.logging.config import LoggingConfig
from litestar.openapi import OpenAPIConfig
from litestar.openapi.plugins import SwaggerRenderPlugin
from litestar.openapi.spec import Components, SecurityScheme

from core.auth import provide_identity
from core.config import AppConfig
from core.errors import EXCEPTION_HANDLERS
from core.store import Store, create_store
from api.contacts import ContactsController
from api.health import HealthController, PingController
from api.users import UsersController


logger = logging.getLogger(__name__)


async def provide_store(state: State) -> Store:
    """Dependency provider for the store opened at startup."""
    return state.store


def _lifespan(
    config: AppConfig, store: Store
) -> Callable[[Litestar], AbstractAsyncContextManager[None]]:
    @asynccontextmanager
    async def lifespan(app: Litestar) -> AsyncGenerator[None, None]:
        config.validate()
        await store.open()
        logger.info("Started in %s mode", config.app.environment)
        try:
            yield
        finally:
            await store.close()

    return lifespan


def create_app(config: AppConfig | None = None, store: Store | None = None) -> Litestar:
    """Build the application.

    Args:
        config: Defaults to ``AppConfig.load()``.
        store: Defaults to the store selected by ``config``; it is opened and
            closed by the app's lifespan either way.
    """
    config = config or AppConfig.load()
    store = store or create_store(config)

    return Litestar(
        route_handlers=[
            UsersController,
            ContactsController,
            HealthController,
            PingController,
        ],
        dependencies={
            "store": Provide(provide_store),
            "identity": Provide(provide_identity),
        },
        exception_handlers=EXCEPTION_HANDLERS,
        lifespan=[_lifespan(config, store)],
        state=State({"config": config, "store": store}),
        logging_config=LoggingConfig(
            root={"level": config.app.log_level, "handlers": ["queue_listener"]},
            log_exceptions="never",
        ),
        openapi_config=OpenAPIConfig(
            title="Contact Management API",
            version="0.1.0",
            description="A simple CRUD API for managing personal contacts",
            path="/docs",
            render_plugins=[SwaggerRenderPlugin()],
            components=Components(
                security_schemes={
                    "bearerAuth": SecurityScheme(
                        type="http", scheme="bearer", bearer_format="JWT"
                    ),
                },
            ),
        ),
    )


app = create_app()
