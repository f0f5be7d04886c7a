"""
Тесты для системы конфигурации
"""

import os
import tempfile

from openapi_moya.config import OpenApiConfig


class TestOpenApiConfig:
    """Тесты конфигурации генератора"""

    def test_config_creation(self):
        """Тест создания конфигурации"""
        config = OpenApiConfig(url="http://localhost:8000/openapi.json", dirname="PetClient")

        assert config.url == "http://localhost:8000/openapi.json"
        assert config.dirname == "PetClient"

    def test_config_save_and_load(self):
        """Тест сохранения и загрузки конфигурации"""
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = os.path.join(temp_dir, "test_openapi.toml")

            # Создаем и сохраняем конфиг
            original_config = OpenApiConfig(
                url="http://api.example.com/swagger.json",
                dirname="example_client",
                enum_name="PetAPI",
                group_by_tag=True,
            )
            original_config.save_to_file(config_path)

            # Загружаем конфиг
            loaded_config = OpenApiConfig.from_file(config_path)

            assert loaded_config is not None
            assert loaded_config.url == "http://api.example.com/swagger.json"
            assert loaded_config.dirname == "example_client"
            assert loaded_config.enum_name == "PetAPI"
            assert loaded_config.group_by_tag is True
            assert loaded_config.base_url is None

    def test_config_search_dir(self, tmp_path):
        """Конфиг ищется в указанной директории"""
        OpenApiConfig(url="spec.json", dirname="client").save_to_file(
            str(tmp_path / "openapi.toml")
        )

        config = OpenApiConfig.from_file(search_dir=str(tmp_path))

        assert config is not None
        assert config.url == "spec.json"

    def test_config_file_not_exists(self):
        """Тест загрузки несуществующего конфига"""
        config = OpenApiConfig.from_file("nonexistent.toml")
        assert config is None

    def test_config_invalid_file(self, tmp_path):
        """Битый toml не читается"""
        config_path = tmp_path / "openapi.toml"
        config_path.write_text("url = ")

        assert OpenApiConfig.from_file(str(config_path)) is None

    def test_config_unknown_keys_and_default_dirname(self, tmp_path):
        """Неизвестные ключи игнорируются, dirname по умолчанию api_client"""
        config_path = tmp_path / "openapi.toml"
        config_path.write_text('url = "spec.json"\ntemplate = "old"\n')

        config = OpenApiConfig.from_file(str(config_path))

        assert config.url == "spec.json"
        assert config.dirname == "api_client"

    def test_config_merge_with_args(self):
        """Тест объединения конфига с аргументами"""
        config = OpenApiConfig(
            url="http://localhost:8000", dirname="original_client", auth="basic"
        )

        # Мокаем args
        class MockArgs:
            def __init__(self):
                self.url = "http://api.new.com"
                self.dirname = None

        args = MockArgs()
        merged = config.merge_with_args(args)

        assert merged.url == "http://api.new.com"  # Переписан из args
        assert merged.dirname == "original_client"  # Остался из config
        assert merged.auth == "basic"

    def test_config_merge_swift_flags(self):
        """Переданные флаги CLI переписывают конфиг"""
        config = OpenApiConfig(url="spec.json", enum_name="PetAPI")

        class MockArgs:
            url = None
            dirname = None
            enum_name = None
            auth = "none"
            base_url = "http://localhost"
            group_by_tag = True
            strict_paths = None

        merged = config.merge_with_args(MockArgs())

        assert merged.enum_name == "PetAPI"
        assert merged.auth == "none"
        assert merged.base_url == "http://localhost"
        assert merged.group_by_tag is True
        assert merged.strict_paths is False

    def test_default_values(self):
        """Тест значений по умолчанию"""
        config = OpenApiConfig()

        assert config.url is None
        assert config.dirname is None
        assert config.enum_name == "API"
        assert config.auth == "bearer"
        assert config.access_level == "public"
        assert config.optional_init is True
        assert config.strict_paths is False
