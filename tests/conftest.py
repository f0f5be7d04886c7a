import copy

import pytest

from openapi_moya.config import OpenApiConfig
from openapi_moya.generator import ApiClientGenerator

PETSTORE_SPEC = {
    "swagger": "2.0",
    "info": {"title": "Petstore", "version": "1.0.0"},
    "host": "petstore.example.com",
    "basePath": "/v1",
    "paths": {
        "/pets/{id}": {
            "get": {
                "operationId": "getPet",
                "parameters": [
                    {"name": "id", "in": "path", "required": True, "type": "string"}
                ],
                "responses": {
                    "200": {
                        "description": "OK",
                        "schema": {"$ref": "#/definitions/Pet"},
                    }
                },
            }
        }
    },
    "definitions": {
        "Pet": {
            "type": "object",
            "required": ["id", "name"],
            "properties": {
                "id": {"type": "integer", "format": "int64"},
                "name": {"type": "string"},
                "status": {"type": "string", "enum": ["open", "closed"]},
            },
        }
    },
}


@pytest.fixture
def petstore_spec():
    return copy.deepcopy(PETSTORE_SPEC)


@pytest.fixture
def render():
    """Генерация документа в словарь {имя файла: текст}"""

    def _render(spec, **config_values):
        project = ApiClientGenerator(spec, OpenApiConfig(**config_values)).generate()
        return {code_file.file_name: str(code_file) for code_file in project.files}

    return _render
