"""
Конфигурация для генерации Moya клиента
"""

import logging
import os
from typing import Optional
import toml
from dataclasses import asdict, dataclass, fields

logger = logging.getLogger(__name__)


@dataclass
class OpenApiConfig:
    """Конфигурация генератора"""

    url: Optional[str] = None
    dirname: Optional[str] = None

    enum_name: str = "API"
    auth: str = "bearer"
    access_level: str = "public"
    base_url: Optional[str] = None

    use_var: bool = False
    optional_init: bool = True
    group_by_tag: bool = False
    strict_paths: bool = False

    @classmethod
    def from_file(
        cls, config_path: str = "openapi.toml", search_dir: str = None
    ) -> Optional["OpenApiConfig"]:
        """Загрузка конфигурации из файла"""
        # Если указана директория для поиска, ищем конфиг там
        if search_dir and os.path.isdir(search_dir):
            config_in_dir = os.path.join(search_dir, "openapi.toml")
            if os.path.exists(config_in_dir):
                config_path = config_in_dir

        if not os.path.exists(config_path):
            return None

        try:
            config_data = toml.load(config_path)
        except (toml.TomlDecodeError, OSError) as e:
            logger.warning("Не удалось прочитать %s: %s", config_path, e)
            return None

        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in config_data.items() if k in known}
        values.setdefault("dirname", "api_client")
        return cls(**values)

    def save_to_file(self, config_path: str = "openapi.toml") -> None:
        """Сохранение конфигурации в файл"""
        # toml не умеет записывать None
        config_data = {k: v for k, v in asdict(self).items() if v is not None}

        with open(config_path, "w") as f:
            toml.dump(config_data, f)

    def merge_with_args(self, args) -> "OpenApiConfig":
        """Объединение с аргументами командной строки"""
        values = asdict(self)
        values["url"] = args.url or self.url
        values["dirname"] = args.dirname or self.dirname

        # Необязательные флаги CLI переписывают конфиг, только если переданы
        for name in ("enum_name", "auth", "base_url", "group_by_tag", "strict_paths"):
            value = getattr(args, name, None)
            if value is not None:
                values[name] = value

        return OpenApiConfig(**values)
