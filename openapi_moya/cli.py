import argparse
import logging
import os
import sys
from typing import Optional

from openapi_moya.config import OpenApiConfig
from openapi_moya.exceptions import GeneratorError
from openapi_moya.generator import ApiClientGenerator
from openapi_moya.internal.types.models import Project
from openapi_moya.loader import load_document


def confirm_choice(message: str) -> bool:
    """Запрос подтверждения у пользователя"""
    while True:
        choice = input(f"{message} (y/n): ").lower().strip()
        if choice in ["y", "yes", "да", ""]:
            return True
        elif choice in ["n", "no", "нет"]:
            return False
        print("Введите y/n")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Генерация Swift/Moya клиента из OpenAPI")
    parser.add_argument("--url", type=str, help="URL или путь к OpenAPI/Swagger JSON")
    parser.add_argument("--dirname", type=str, help="Директория для генерации клиента")
    parser.add_argument("--enum-name", type=str, help="Имя enum с операциями (API)")
    parser.add_argument(
        "--auth", type=str, help="Авторизация: bearer, basic, none или custom:<схема>"
    )
    parser.add_argument("--base-url", type=str, help="Базовый URL вместо host/basePath")
    parser.add_argument(
        "--group-by-tag", action="store_true", default=None, help="Отдельный enum на каждый тег"
    )
    parser.add_argument(
        "--strict-paths",
        action="store_true",
        default=None,
        help="Ошибка при несовпадении {плейсхолдеров} пути и path-параметров",
    )
    parser.add_argument(
        "--init-config", action="store_true", help="Создать конфиг файл openapi.toml"
    )
    parser.add_argument(
        "--force", action="store_true", help="Генерировать без подтверждения"
    )
    parser.add_argument("--verbose", action="store_true", help="Подробный лог")
    return parser


def _resolve_config(args, file_config: Optional[OpenApiConfig]) -> OpenApiConfig:
    """Итоговый конфиг: файл, аргументы или их объединение"""
    if file_config is None:
        if not args.url:
            print("❌ Ошибка: Укажите URL или создайте конфиг с --init-config")
            sys.exit(1)
        return OpenApiConfig(dirname="api_client").merge_with_args(args)

    if not (args.url or args.dirname):
        print("📋 Используется конфиг из openapi.toml")
        return file_config

    # Есть и конфиг и аргументы - спрашиваем пользователя
    print("🔧 Найден конфиг файл openapi.toml:")
    print(f"   URL: {file_config.url}")
    print(f"   Директория: {file_config.dirname}")
    print(f"   Enum: {file_config.enum_name}")
    print()

    if args.force or confirm_choice("Использовать конфиг из файла?"):
        return file_config
    return file_config.merge_with_args(args)


def _generate_project(config: OpenApiConfig) -> Project:
    """Загрузка документа и генерация - без записи на диск"""
    if not config.url:
        raise ValueError("URL не указан в конфигурации")

    print(f"🚀 Генерация Moya клиента из {config.url}")

    print("📥 Загрузка OpenAPI документа...")
    openapi_spec = load_document(config.url)

    print("⚙️ Генерация Swift кода...")
    return ApiClientGenerator(openapi_spec, config).generate()


def _save_project_files(project: Project, target_path: str):
    """Запись .swift файлов проекта"""
    models = [f for f in project.files if f.file_name.startswith("Models/")]
    print(f"💾 Сохранение {len(project.files)} файлов (моделей: {len(models)})...")

    for code_file in project.files:
        path = os.path.join(target_path, code_file.file_name)
        os.makedirs(os.path.dirname(path), exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            f.write(str(code_file))

    print("✅ Генерация завершена успешно!")
    print(f"📦 Клиент создан в: {os.path.abspath(target_path)}")


def generate():
    """Универсальная команда генерации Moya клиента"""
    args = _build_parser().parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.init_config:
        config = OpenApiConfig(dirname="api_client").merge_with_args(args)
        config.save_to_file()
        print("✅ Создан конфиг файл openapi.toml")
        return

    file_config = OpenApiConfig.from_file(search_dir=args.dirname)
    config = _resolve_config(args, file_config)

    if not config.url:
        print("❌ Ошибка: URL не указан ни в конфиге, ни в аргументах")
        sys.exit(1)

    # Конфиг найден в указанной директории - генерируем прямо в нее
    in_place = bool(args.dirname and file_config)
    target_path = args.dirname if in_place else os.path.join(".", config.dirname)

    try:
        project = _generate_project(config)
    except (GeneratorError, ValueError) as e:
        print(f"❌ Ошибка генерации: {e}")
        sys.exit(1)

    if in_place:
        print(f"📁 Генерация в существующую папку: {target_path}")
    else:
        print(f"📁 Создание новой папки: {config.dirname}")
    _save_project_files(project, target_path)

    if not file_config and (args.force or confirm_choice("Сохранить настройки в openapi.toml?")):
        config_path = os.path.join(target_path, "openapi.toml")
        config.save_to_file(config_path)
        print(f"💾 Конфиг сохранен в {config_path}")


if __name__ == "__main__":
    generate()
