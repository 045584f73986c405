"""
Загрузка и валидация параметров одного запуска check_pages.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel, to_snake

from check_pages import __version__
from check_pages.targets import normalize_page_url

DEFAULT_USER_AGENT = f"check-pages/{__version__}"


class RunConfiguration(BaseModel):
    """Неизменяемый снимок параметров запуска.

    Поля принимаются как в snake_case (``check_links``), так и в camelCase
    (``checkLinks``).
    """
    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    page_urls: list[str] = Field(..., description="Страницы для проверки.")
    check_links: bool = Field(False, description="Проверять все ссылки страниц.")
    check_xhtml: bool = Field(False, description="Проверять XHTML-корректность разметки.")
    check_caching: bool = Field(False, description="Проверять Cache-Control и ETag.")
    check_compression: bool = Field(False, description="Проверять Content-Encoding.")
    no_redirects: bool = Field(False, description="Считать редирект ссылки ошибкой.")
    no_local_links: bool = Field(False, description="Считать ссылку на localhost ошибкой.")
    no_empty_fragments: bool = Field(False, description="Считать пустой фрагмент (#) ошибкой.")
    only_same_domain: bool = Field(False, description="Проверять только ссылки своего домена.")
    query_hashes: bool = Field(False, description="Сверять sha1/md5/crc32 из query-строки.")
    summary: bool = Field(False, description="Вывести сводку проблем в конце.")
    links_to_ignore: list[str] = Field(default_factory=list, description="Ссылки, которые не проверяются.")
    max_response_time: Optional[float] = Field(None, gt=0, description="Лимит времени ответа страницы (мс).")
    user_agent: Optional[str] = Field(DEFAULT_USER_AGENT, description="Заголовок User-Agent; None отключает.")
    timeout: float = Field(60.0, gt=0, description="Таймаут на один запрос (секунд).")
    retry_times: int = Field(0, ge=0, description="Повторы после сетевой ошибки.")

    @field_validator("page_urls", mode="after")
    @classmethod
    def _add_file_scheme(cls, v: list[str]) -> list[str]:
        return [normalize_page_url(u) for u in v]

    @field_validator("max_response_time", mode="before")
    @classmethod
    def _zero_means_unset(cls, v: Any) -> Any:
        if v is None or v == 0 or v == "":
            return None
        return v

    @field_validator("user_agent", mode="before")
    @classmethod
    def _empty_disables_header(cls, v: Any) -> Any:
        if v == "":
            return None
        return v


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def read_options(path: Union[str, Path]) -> dict[str, Any]:
    """Читает YAML или JSON и возвращает словарь опций с ключами в snake_case."""
    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")
    return {to_snake(str(k)): v for k, v in data.items()}


def load_config(path: Union[str, Path, None] = None, **overrides: Any) -> RunConfiguration:
    """
    Собирает RunConfiguration из файла (если указан) и явных переопределений.
    Переопределения со значением None игнорируются.
    """
    data: dict[str, Any] = read_options(path) if path is not None else {}
    data.update({k: v for k, v in overrides.items() if v is not None})
    return RunConfiguration.model_validate(data)
