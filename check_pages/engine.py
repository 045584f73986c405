# File: check_pages/engine.py
"""check_pages.engine: точки входа для запуска проверки (async и sync)."""

from __future__ import annotations

import asyncio
from typing import Any, Mapping, Optional, Union

from check_pages.checker import VerificationQueue
from check_pages.config import RunConfiguration
from check_pages.fetcher import Fetchers, HttpFetcher, create_session
from check_pages.issues import CheckResult
from check_pages.logger import Host, LoggingHost, logger, validate_host

__all__ = ["start_check", "check_pages"]

Options = Union[RunConfiguration, Mapping[str, Any]]


def _as_config(options: Options) -> RunConfiguration:
    if isinstance(options, RunConfiguration):
        return options
    if not isinstance(options, Mapping):
        raise TypeError("options parameter is missing or invalid; it should be an object")
    return RunConfiguration.model_validate(dict(options))


async def start_check(options: Options, host: Optional[Host] = None) -> CheckResult:
    """
    Проверяет страницы из options.page_urls и возвращает CheckResult.

    Ошибки конфигурации (pydantic.ValidationError, TypeError) возникают
    до первого запроса; все остальные проблемы попадают в результат.
    """
    config = _as_config(options)
    host = host if host is not None else LoggingHost()
    validate_host(host)

    logger.debug("Checking %d pages", len(config.page_urls))
    async with create_session(config.user_agent, config.timeout) as session:
        fetchers = Fetchers(HttpFetcher(session, retry_times=config.retry_times))
        result = await VerificationQueue(config, host, fetchers).run()
    logger.debug("Finished with %d issues", result.issue_count)
    return result


def check_pages(options: Options, host: Optional[Host] = None) -> CheckResult:
    """Синхронная обёртка над :func:`start_check`."""
    return asyncio.run(start_check(options, host))
