# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""Taskmanager CLI: operational commands.

Commands:
    serve         Run the HTTP API under uvicorn.
    flush-cache   Delete every cached task list page.

Environment:
    Settings are read the same way the service reads them (env vars, `.env`).
"""

from __future__ import annotations

import asyncio

import typer

from taskmanager_api.adapters.repositories.task_cache_keys import LIST_CACHE_PREFIX
from taskmanager_api.config.settings import get_settings
from taskmanager_api.domain.exceptions import CacheUnavailableError
from taskmanager_api.infrastructure.caching.json_cache import RedisJsonCache
from taskmanager_api.infrastructure.caching.redis_client import RedisHandle
from taskmanager_api.infrastructure.logging.logger import configure_root_logging, get_json_logger

configure_root_logging()
log = get_json_logger(__name__)

app = typer.Typer(add_completion=False, no_args_is_help=True)


@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", help="Bind address."),  # noqa: B008
    port: int = typer.Option(8080, envvar="PORT", help="Bind port."),  # noqa: B008
    reload: bool = typer.Option(False, help="Reload on code changes (development)."),  # noqa: B008
) -> None:
    """Run the API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "taskmanager_api.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


async def flush_task_list_cache(cache: RedisJsonCache) -> None:
    """Remove the whole task list key space."""
    await cache.delete_by_prefix(LIST_CACHE_PREFIX)


@app.command("flush-cache")
def flush_cache() -> None:
    """Delete all cached task list pages (keys under ``tasks:list:``)."""
    settings = get_settings()

    async def _run() -> None:
        async with RedisHandle.from_settings(settings) as handle:
            cache = RedisJsonCache(
                handle.client, operation_timeout_s=settings.cache_operation_timeout_s
            )
            await flush_task_list_cache(cache)

    try:
        asyncio.run(_run())
    except CacheUnavailableError as exc:
        log.error("cli.flush_cache_failed", extra={"extra": {"error": exc.message}})
        typer.echo(f"flush-cache failed: {exc.message}", err=True)
        raise typer.Exit(code=1) from exc
    log.info("cli.flush_cache_done", extra={"extra": {"prefix": LIST_CACHE_PREFIX}})
    typer.echo(f"flushed keys under {LIST_CACHE_PREFIX!r}")


def main() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
