from dataclasses import dataclass

from litestar import Controller, get

from core.store import InMemoryStore, Store


@dataclass
class HealthResponse:
    status: str
    store: str
    store_connected: bool = False


class HealthController(Controller):
    path = "/api/health"
    tags = ["health"]

    @get()
    async def health_check(self, store: Store) -> HealthResponse:
        return HealthResponse(
            status="ok",
            store="memory" if isinstance(store, InMemoryStore) else "postgres",
            store_connected=await store.ping(),
        )


class PingController(Controller):
    path = "/api/ping"
    tags = ["health"]

    @get()
    async def ping(self) -> dict:
        return {"message": "pong"}
