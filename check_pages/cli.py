# === FILE: check_pages/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска check_pages через командную строку.

Команды:
  check     Проверить страницы (и их ссылки) и вывести/сохранить отчёт
  config    Показать итоговую конфигурацию

Общие опции:
  --config PATH       YAML/JSON-файл с опциями (pageUrls, checkLinks, ...)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования

Коды выхода команды check:
  0  проблем не найдено
  1  найдены проблемы
  2  ошибка конфигурации

Пример:
  check-pages check http://example.com/ --check-links --no-redirects --summary --json report.json
"""
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from check_pages import __version__
from check_pages.config import load_config
from check_pages.engine import check_pages
from check_pages.logger import LoggingHost, init_logging
from check_pages.report.html_report import render_html
from check_pages.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])

BOOLEAN_OPTIONS = (
    "check_links",
    "check_xhtml",
    "check_caching",
    "check_compression",
    "no_redirects",
    "no_local_links",
    "no_empty_fragments",
    "only_same_domain",
    "query_hashes",
    "summary",
)


def print_error(message: str, code: int = 1):
    click.secho(message, fg='red', err=True)
    sys.exit(code)


def _load(ctx, **overrides):
    try:
        return load_config(ctx.obj['config_path'], **overrides)
    except (ValidationError, OSError, ValueError, TypeError) as e:
        print_error(f'Ошибка конфигурации: {e}', code=2)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='check-pages, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу опций (YAML или JSON).'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stdout, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(levelname)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд check-pages."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


@cli.command('check', context_settings=CONTEXT_SETTINGS)
@click.argument('page_urls', nargs=-1)
@click.option('--check-links', is_flag=True, help='Проверять ссылки страниц')
@click.option('--check-xhtml', is_flag=True, help='Проверять XHTML-корректность')
@click.option('--check-caching', is_flag=True, help='Проверять Cache-Control и ETag')
@click.option('--check-compression', is_flag=True, help='Проверять Content-Encoding')
@click.option('--no-redirects', is_flag=True, help='Редирект ссылки считается проблемой')
@click.option('--no-local-links', is_flag=True, help='Ссылка на localhost считается проблемой')
@click.option('--no-empty-fragments', is_flag=True, help='Пустой фрагмент (#) считается проблемой')
@click.option('--only-same-domain', is_flag=True, help='Проверять только ссылки своего домена')
@click.option('--query-hashes', is_flag=True, help='Сверять sha1/md5/crc32 из query-строки')
@click.option('--summary', is_flag=True, help='Вывести сводку проблем в конце')
@click.option('--ignore', 'links_to_ignore', multiple=True, help='Ссылка, которую не проверять (можно несколько)')
@click.option('--max-response-time', type=float, default=None, help='Лимит времени ответа страницы (мс)')
@click.option('--user-agent', default=None, help='Заголовок User-Agent')
@click.option('--no-user-agent', is_flag=True, help='Не отправлять User-Agent')
@click.option('--timeout', type=float, default=None, help='Таймаут одного запроса (секунд)')
@click.option('--retry-times', type=int, default=None, help='Повторы после сетевой ошибки')
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option(
    '--html', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить HTML-отчёт в файл'
)
@click.pass_context
def check(ctx, page_urls, links_to_ignore, max_response_time, user_agent, no_user_agent,
          timeout, retry_times, json_output, html_output, **flags):
    """Проверить страницы и завершиться с кодом 1 при найденных проблемах."""
    overrides = {name: True for name in BOOLEAN_OPTIONS if flags.get(name)}
    overrides.update(
        page_urls=list(page_urls) or None,
        links_to_ignore=list(links_to_ignore) or None,
        max_response_time=max_response_time,
        user_agent='' if no_user_agent else user_agent,
        timeout=timeout,
        retry_times=retry_times,
    )
    cfg = _load(ctx, **overrides)

    result = check_pages(cfg, LoggingHost())

    if json_output:
        try:
            click.echo(f'JSON report: {render_json(result, json_output)}')
        except OSError as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if html_output:
        try:
            click.echo(f'HTML report: {render_html(result, html_output)}')
        except OSError as e:
            print_error(f'Ошибка при сохранении HTML: {e}')

    if result.error:
        print_error(result.error)


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать итоговую конфигурацию в JSON."""
    cfg = _load(ctx)
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
