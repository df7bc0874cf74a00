"""
WasenderBuilder - FastAPI application factory

Builds FastAPI applications from plugins, routers and prioritized
startup/shutdown hooks run by one lifespan.
"""

from collections.abc import Callable
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from fastapi import FastAPI

from ..logging.logger import get_app_logger

if TYPE_CHECKING:
    from .plugin import WasenderPlugin


class WasenderBuilder:
    """
    Fluent builder for FastAPI applications that receive Wasender webhooks.

    Example:
        app = (WasenderBuilder()
            .add_plugin(WasenderCorePlugin(dispatcher))
            .configure(title="My Wasender App")
            .build())
    """

    def __init__(self):
        self.plugins: list[WasenderPlugin] = []
        self.middlewares: list[tuple[type, dict, int]] = []  # (class, kwargs, priority)
        self.routers: list[tuple[Any, dict]] = []  # (router, include_kwargs)
        self.startup_hooks: list[tuple[Callable, int]] = []  # (hook, priority)
        self.shutdown_hooks: list[tuple[Callable, int]] = []  # (hook, priority)
        self.config_overrides: dict[str, Any] = {}

    def add_plugin(self, plugin: "WasenderPlugin") -> "WasenderBuilder":
        """Add a plugin. Returns self for method chaining."""
        self.plugins.append(plugin)
        return self

    def add_middleware(
        self, middleware_class: type, priority: int = 50, **kwargs: Any
    ) -> "WasenderBuilder":
        """
        Add middleware with priority ordering.

        Lower numbers run first (outer middleware), higher numbers run
        closer to the routes.
        """
        self.middlewares.append((middleware_class, kwargs, priority))
        return self

    def add_router(self, router: Any, **kwargs: Any) -> "WasenderBuilder":
        """Add a router; kwargs are passed to app.include_router()."""
        self.routers.append((router, kwargs))
        return self

    def add_startup_hook(self, hook: Callable, priority: int = 50) -> "WasenderBuilder":
        """
        Add a startup hook.

        Hooks are async callables taking the FastAPI app and run in
        ascending priority order (10: core setup, 50: user hooks).
        """
        self.startup_hooks.append((hook, priority))
        return self

    def add_shutdown_hook(self, hook: Callable, priority: int = 50) -> "WasenderBuilder":
        """
        Add a shutdown hook.

        Shutdown hooks run in descending priority order, so core cleanup
        registered at 90 runs last.
        """
        self.shutdown_hooks.append((hook, priority))
        return self

    def configure(self, **overrides: Any) -> "WasenderBuilder":
        """Override FastAPI constructor arguments."""
        self.config_overrides.update(overrides)
        return self

    def build(self) -> FastAPI:
        """
        Build the FastAPI application.

        1. Configure plugins (sync registration only)
        2. Create FastAPI app with the unified lifespan
        3. Add middleware by priority
        4. Include routers
        """
        logger = get_app_logger()
        logger.debug(f"🏗️ Building FastAPI app with {len(self.plugins)} plugins")

        for plugin in self.plugins:
            plugin.configure(self)

        @asynccontextmanager
        async def unified_lifespan(app: FastAPI):
            try:
                await self._execute_all_startup_hooks(app)
                yield
            finally:
                await self._execute_all_shutdown_hooks(app)

        default_config = {
            "title": "Wasender Application",
            "description": "WasenderAPI webhook receiver",
            "version": "1.0.0",
            "lifespan": unified_lifespan,
        }
        default_config.update(self.config_overrides)

        app = FastAPI(**default_config)

        # FastAPI wraps middleware in reverse order of addition
        sorted_middlewares = sorted(self.middlewares, key=lambda x: x[2], reverse=True)
        for middleware_class, kwargs, priority in sorted_middlewares:
            app.add_middleware(middleware_class, **kwargs)
            logger.debug(
                f"Added middleware {middleware_class.__name__} (priority: {priority})"
            )

        for router, kwargs in self.routers:
            app.include_router(router, **kwargs)

        logger.info(
            f"🎉 WasenderBuilder created FastAPI app: {len(self.plugins)} plugins, "
            f"{len(self.middlewares)} middlewares, {len(self.routers)} routers"
        )
        return app

    async def _execute_all_startup_hooks(self, app: FastAPI) -> None:
        """Run startup hooks in ascending priority; the first failure aborts startup."""
        logger = get_app_logger()

        for hook, priority in sorted(self.startup_hooks, key=lambda x: x[1]):
            hook_name = getattr(hook, "__name__", "anonymous_hook")
            logger.debug(f"⚡ Executing startup hook: {hook_name} (priority: {priority})")
            try:
                await hook(app)
            except Exception as e:
                logger.error(f"❌ Startup hook {hook_name} failed: {e}", exc_info=True)
                raise

    async def _execute_all_shutdown_hooks(self, app: FastAPI) -> None:
        """Run shutdown hooks in descending priority; failures are logged and skipped."""
        logger = get_app_logger()

        for hook, priority in sorted(
            self.shutdown_hooks, key=lambda x: x[1], reverse=True
        ):
            hook_name = getattr(hook, "__name__", "anonymous_hook")
            try:
                logger.debug(
                    f"🛑 Executing shutdown hook: {hook_name} (priority: {priority})"
                )
                await hook(app)
            except Exception as e:
                # Keep shutting down the remaining hooks
                logger.error(
                    f"❌ Error in shutdown hook {hook_name}: {e}", exc_info=True
                )
