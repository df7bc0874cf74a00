"""
Test suite for WasenderBuilder and the core plugin.

Tests plugin registration, middleware ordering, lifespan hook ordering and
the application state the core plugin sets up.
"""

import pytest
from fastapi import Depends, FastAPI, Request
from fastapi.testclient import TestClient
from starlette.middleware.base import BaseHTTPMiddleware

from wasender.api.dependencies import get_event_dispatcher, get_wasender_client
from wasender.core.app import create_app
from wasender.core.events import WasenderEventDispatcher
from wasender.core.factory import WasenderBuilder
from wasender.core.plugins import WasenderCorePlugin
from wasender.messaging.client import WasenderClient


class RecordingPlugin:
    """Plugin that records its configuration and lifespan calls."""

    def __init__(self, name: str = "test"):
        self.name = name
        self.calls: list[str] = []

    def configure(self, builder: WasenderBuilder) -> None:
        self.calls.append("configure")
        builder.add_startup_hook(self.startup)
        builder.add_shutdown_hook(self.shutdown)

    async def startup(self, app: FastAPI) -> None:
        self.calls.append("startup")

    async def shutdown(self, app: FastAPI) -> None:
        self.calls.append("shutdown")


class NamedMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, name: str = "test", **kwargs):
        super().__init__(app)
        self.name = name

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        order = response.headers.get("x-order", "")
        response.headers["x-order"] = f"{order},{self.name}" if order else self.name
        return response


class TestWasenderBuilderCore:
    def test_builder_initialization(self):
        builder = WasenderBuilder()

        assert builder.plugins == []
        assert builder.middlewares == []
        assert builder.routers == []
        assert builder.startup_hooks == []
        assert builder.shutdown_hooks == []
        assert builder.config_overrides == {}

    def test_fluent_interface(self):
        builder = WasenderBuilder()
        plugin = RecordingPlugin()

        async def hook(app):
            pass

        result = (
            builder.add_plugin(plugin)
            .add_middleware(NamedMiddleware, priority=80, name="test")
            .add_startup_hook(hook, priority=60)
            .add_shutdown_hook(hook, priority=40)
            .configure(title="Test App")
        )

        assert result is builder
        assert builder.plugins == [plugin]
        assert builder.middlewares == [(NamedMiddleware, {"name": "test"}, 80)]
        assert builder.startup_hooks == [(hook, 60)]
        assert builder.shutdown_hooks == [(hook, 40)]
        assert builder.config_overrides == {"title": "Test App"}

    def test_default_priorities(self):
        builder = WasenderBuilder()

        async def hook(app):
            pass

        builder.add_middleware(NamedMiddleware, name="default")
        builder.add_startup_hook(hook)

        assert builder.middlewares[0][2] == 50
        assert builder.startup_hooks[0][1] == 50

    def test_build_creates_fastapi_app(self):
        app = WasenderBuilder().build()

        assert isinstance(app, FastAPI)
        assert app.title == "Wasender Application"

    def test_build_with_custom_config(self):
        app = WasenderBuilder().configure(title="Custom App", version="2.0.0").build()

        assert app.title == "Custom App"
        assert app.version == "2.0.0"

    def test_plugins_are_configured_during_build(self):
        plugin = RecordingPlugin()

        WasenderBuilder().add_plugin(plugin).build()

        assert plugin.calls == ["configure"]

    def test_middleware_priority_ordering(self):
        app = (
            WasenderBuilder()
            .add_middleware(NamedMiddleware, priority=10, name="outer")
            .add_middleware(NamedMiddleware, priority=90, name="inner")
            .add_middleware(NamedMiddleware, priority=50, name="middle")
            .build()
        )

        @app.get("/ping")
        async def ping():
            return {"ok": True}

        response = TestClient(app).get("/ping")

        # Responses pass inner middleware first
        assert response.headers["x-order"] == "inner,middle,outer"


@pytest.mark.asyncio
class TestWasenderBuilderLifespan:
    async def test_hook_priority_ordering(self):
        startup_order = []
        shutdown_order = []

        def recorder(order, name):
            async def hook(app):
                order.append(name)

            hook.__name__ = name
            return hook

        app = (
            WasenderBuilder()
            .add_startup_hook(recorder(startup_order, "late"), priority=90)
            .add_startup_hook(recorder(startup_order, "early"), priority=10)
            .add_startup_hook(recorder(startup_order, "user"), priority=50)
            .add_shutdown_hook(recorder(shutdown_order, "core"), priority=90)
            .add_shutdown_hook(recorder(shutdown_order, "user"), priority=10)
            .build()
        )

        async with app.router.lifespan_context(app):
            assert startup_order == ["early", "user", "late"]
            assert shutdown_order == []

        assert shutdown_order == ["core", "user"]

    async def test_plugin_lifecycle(self):
        plugin = RecordingPlugin()
        app = WasenderBuilder().add_plugin(plugin).build()

        async with app.router.lifespan_context(app):
            assert plugin.calls == ["configure", "startup"]

        assert plugin.calls == ["configure", "startup", "shutdown"]

    async def test_failing_startup_hook_aborts_startup(self):
        async def broken(app):
            raise RuntimeError("startup failed")

        app = WasenderBuilder().add_startup_hook(broken).build()

        with pytest.raises(RuntimeError, match="startup failed"):
            async with app.router.lifespan_context(app):
                pass

    async def test_failing_shutdown_hook_does_not_stop_others(self):
        calls = []

        async def broken(app):
            raise RuntimeError("shutdown failed")

        async def cleanup(app):
            calls.append("cleanup")

        app = (
            WasenderBuilder()
            .add_shutdown_hook(broken, priority=90)
            .add_shutdown_hook(cleanup, priority=10)
            .build()
        )

        async with app.router.lifespan_context(app):
            pass

        assert calls == ["cleanup"]


class TestWasenderCorePlugin:
    def test_plugin_registers_webhook_router_and_hooks(self, config):
        builder = WasenderBuilder()
        plugin = WasenderCorePlugin(config=config, configure_logging=False)

        plugin.configure(builder)

        assert len(builder.routers) == 1
        assert [priority for _, priority in builder.startup_hooks] == [10]
        assert [priority for _, priority in builder.shutdown_hooks] == [90]

    def test_app_state_during_lifespan(self, config):
        dispatcher = WasenderEventDispatcher()
        app = (
            WasenderBuilder()
            .add_plugin(WasenderCorePlugin(dispatcher, config, configure_logging=False))
            .build()
        )

        @app.get("/state")
        async def state(
            client: WasenderClient = Depends(get_wasender_client),
            event_dispatcher: WasenderEventDispatcher = Depends(get_event_dispatcher),
        ):
            return {
                "api_key": client.api_key,
                "same_dispatcher": event_dispatcher is dispatcher,
            }

        with TestClient(app) as test_client:
            response = test_client.get("/state")
            session = app.state.http_session

        assert response.json() == {"api_key": "testkey", "same_dispatcher": True}
        assert session.closed
        assert app.state.wasender_client is None

    def test_webhook_route_is_mounted(self, config):
        dispatcher = WasenderEventDispatcher()
        received = []
        dispatcher.subscribe_all(received.append)
        app = (
            WasenderBuilder()
            .add_plugin(WasenderCorePlugin(dispatcher, config, configure_logging=False))
            .build()
        )

        with TestClient(app) as test_client:
            response = test_client.post(
                "/wasender/webhook",
                json={"event": "messages.upsert"},
                headers={"x-webhook-signature": "testsecret"},
            )

        assert response.status_code == 200
        assert len(received) == 1

    def test_missing_client_dependency_raises(self):
        app = FastAPI()

        @app.get("/client")
        async def client_route(client: WasenderClient = Depends(get_wasender_client)):
            return {}

        with pytest.raises(RuntimeError):
            TestClient(app).get("/client")


class TestCreateApp:
    def test_create_app_uses_settings(self, config):
        app = create_app(WasenderEventDispatcher(), config, title="My App")

        assert app.title == "My App"
        assert app.version == config.version
        assert app.docs_url is None

        response = TestClient(app).post("/wasender/webhook", json={"event": "x"})

        assert response.status_code == 400
        assert response.text == "Invalid signature"

    def test_docs_enabled_in_development(self):
        from wasender.core.config.settings import Settings

        app = create_app(config=Settings(environment="DEV", log_level="INFO"))

        assert app.docs_url == "/docs"
