import json
from dataclasses import dataclass, field

import aiohttp
import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from ftb2pack.api.client import ModpacksAPIClient
from tests.factories import target_doc


@dataclass
class FakeRemote:
    """In-process HTTP server answering from a path -> (status, body) table."""

    server: TestServer
    routes: dict[str, tuple[int, bytes]] = field(default_factory=dict)
    requested: list[str] = field(default_factory=list)

    def url(self, path: str) -> str:
        return str(self.server.make_url(path))

    def serve(self, path: str, body: bytes | str, status: int = 200) -> str:
        if isinstance(body, str):
            body = body.encode("utf-8")
        self.routes[path] = (status, body)
        return self.url(path)

    def serve_json(self, path: str, document, status: int = 200) -> str:
        return self.serve(path, json.dumps(document), status)


@pytest_asyncio.fixture
async def remote():
    fake: FakeRemote | None = None

    async def handler(request: web.Request) -> web.Response:
        fake.requested.append(request.path)
        status, body = fake.routes.get(request.path, (404, b"not found"))
        return web.Response(status=status, body=body)

    app = web.Application()
    app.router.add_route("GET", "/{tail:.*}", handler)
    server = TestServer(app)
    await server.start_server()
    fake = FakeRemote(server=server)
    yield fake
    await server.close()


@pytest_asyncio.fixture
async def session():
    async with aiohttp.ClientSession() as s:
        yield s


@pytest_asyncio.fixture
async def api_client(remote, session):
    client = ModpacksAPIClient(
        api_url=remote.url("/modpack/"),
        catalog_url=remote.url("/v1/modpacks"),
        session=session,
    )
    yield client
    await client.close()


@pytest.fixture
def standard_targets():
    return [
        target_doc("game", "minecraft", "1.20.1"),
        target_doc("modloader", "forge", "47.0"),
    ]
