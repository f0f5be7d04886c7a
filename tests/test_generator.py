"""
Тесты для генератора Swift/Moya клиента
"""

import copy
import itertools

import pytest

from openapi_moya import generate_client
from openapi_moya.config import OpenApiConfig
from openapi_moya.exceptions import DocumentError, SchemaError
from openapi_moya.internal.generator.endpoint_generator import form_data_part, moya_task
from openapi_moya.internal.types.primitives import (
    Operation,
    OperationParameter,
    ParameterPosition,
    ParameterType,
)

GET_PET_API = '''// Generated by openapi-moya. Do not edit.

import Foundation
import Moya

public enum API {
    ///
    /// - responses:
    ///     - 200: Pet
    case getPet(id: String)
}

extension API: TargetType, AccessTokenAuthorizable {
    public var baseURL: URL { URL(string: "https://petstore.example.com/v1")! }

    public var path: String {
        switch self {
        case .getPet(let id): return "/pets/\\(id)"
        }
    }

    public var method: Moya.Method {
        switch self {
        case .getPet: return .get
        }
    }

    public var task: Task {
        switch self {
        case .getPet: return .requestPlain
        }
    }

    public var headers: [String: String]? {
        switch self {
        case .getPet: return nil
        }
    }

    public var authorizationType: AuthorizationType? {
        switch self {
        case .getPet: return .bearer
        }
    }

    public var sampleData: Data { Data() }
}

extension API {
    /// Декодирование ответа по коду статуса
    public func decodeResponse(statusCode: Int, data: Data) throws -> Any {
        switch self {
        case .getPet:
            switch statusCode {
            case 200: return try JSONDecoder().decodeSafe(Pet.self, from: data)
            default: throw ResponseDecodeError.unknownCode(statusCode)
            }
        }
    }
}
'''

PET_MODEL = '''// Generated by openapi-moya. Do not edit.

import Foundation

public struct Pet: Codable {
    public enum Status: String, CaseIterable, Codable {
        case closed = "closed"
        case open = "open"
    }

    public let id: Int64
    public let name: String
    public let status: Status?

    public init(id: Int64, name: String, status: Status? = nil) {
        self.id = id
        self.name = name
        self.status = status
    }
}
'''


def single_operation(operation, path="/pets", method="post", schemas=None):
    return {
        "openapi": "3.0.0",
        "info": {"title": "Test API", "version": "1.0.0"},
        "servers": [{"url": "https://api.example.com"}],
        "paths": {path: {method: operation}},
        "components": {"schemas": schemas or {}},
    }


def model_spec(properties, required=()):
    """Схема Item, доступная через операцию GET /items"""
    return {
        "paths": {
            "/items": {
                "get": {
                    "operationId": "listItems",
                    "responses": {
                        "200": {"description": "OK", "schema": {"$ref": "#/definitions/Item"}}
                    },
                }
            }
        },
        "definitions": {
            "Item": {"type": "object", "required": list(required), "properties": properties}
        },
    }


def make_parameter(name, position, required=True, param_type=ParameterType.STRING):
    return OperationParameter(name=name, position=position, required=required, type=param_type)


class TestOpenApiMoyaGenerator:
    """Тесты основной функциональности генератора"""

    def test_project_files(self, petstore_spec):
        """Файлы проекта: поддержка, модели, endpoints"""
        project = generate_client(petstore_spec)

        assert [f.file_name for f in project.files] == [
            "Support.swift",
            "Models/Pet.swift",
            "API.swift",
        ]
        assert "func decodeSafe" in str(project.get_file("Support.swift"))

    def test_get_operation(self, petstore_spec, render):
        """GET с path-параметром и одним ответом"""
        files = render(petstore_spec)

        assert files["API.swift"] == GET_PET_API

    def test_model_with_nested_enum(self, petstore_spec, render):
        """Строковый enum становится вложенным enum со значениями по алфавиту"""
        files = render(petstore_spec)

        assert files["Models/Pet.swift"] == PET_MODEL

    def test_body_and_query(self, render):
        """Тело и query дают composite, а не requestJSONEncodable"""
        spec = single_operation(
            {
                "operationId": "createPet",
                "parameters": [{"name": "limit", "in": "query", "schema": {"type": "integer"}}],
                "requestBody": {
                    "required": True,
                    "content": {
                        "application/json": {"schema": {"$ref": "#/components/schemas/NewPet"}}
                    },
                },
                "responses": {"201": {"description": "Created"}},
            },
            schemas={"NewPet": {"type": "object", "properties": {"name": {"type": "string"}}}},
        )

        api = render(spec)["API.swift"]

        assert "case createPet(limit: Int?, request: NewPet)" in api
        assert (
            "case .createPet(let limit, let request): return .requestCompositeParameters("
            'bodyParameters: ["request": request], bodyEncoding: JSONEncoding(), '
            'urlParameters: (["limit": limit] as [String: Any?]).unopt())'
        ) in api
        assert (
            "case .createPet: return Dictionary<String, Any?>(dictionaryLiteral: "
            '("Content-Type", "application/json")).unoptString()'
        ) in api
        assert "case 201: return Void()" in api
        assert 'URL(string: "https://api.example.com")!' in api

    def test_output_independent_of_document_order(self, render):
        """Порядок параметров, свойств и путей не влияет на результат"""
        spec = {
            "host": "api.example.com",
            "paths": {
                "/a/{x}/{y}": {
                    "get": {
                        "operationId": "getA",
                        "parameters": [
                            {"name": "x", "in": "path", "required": True, "type": "string"},
                            {"name": "y", "in": "path", "required": True, "type": "string"},
                            {"name": "q", "in": "query", "type": "integer"},
                            {"name": "p", "in": "query", "type": "integer"},
                        ],
                        "responses": {
                            "200": {"description": "OK", "schema": {"$ref": "#/definitions/A"}},
                            "404": {"description": "Not found"},
                        },
                    }
                },
                "/b": {"post": {"operationId": "postB", "responses": {}}},
            },
            "definitions": {
                "A": {
                    "type": "object",
                    "properties": {
                        "zeta": {"type": "string"},
                        "alpha": {"type": "integer"},
                        "mid": {"type": "boolean"},
                    },
                }
            },
        }

        permuted = copy.deepcopy(spec)
        permuted["paths"] = dict(reversed(list(permuted["paths"].items())))
        operation = permuted["paths"]["/a/{x}/{y}"]["get"]
        operation["parameters"].reverse()
        operation["responses"] = dict(reversed(list(operation["responses"].items())))
        schema = permuted["definitions"]["A"]
        schema["properties"] = dict(reversed(list(schema["properties"].items())))

        assert render(spec) == render(permuted)

    def test_response_codes(self, render):
        """Коды ответов: лексикографический порядок, диапазоны и default"""
        spec = single_operation(
            {
                "operationId": "listPets",
                "responses": {
                    "default": {"description": "Error", "schema": {"type": "string"}},
                    "404": {"description": "Not found"},
                    "200": {
                        "description": "OK",
                        "schema": {"type": "array", "items": {"$ref": "#/components/schemas/Pet"}},
                    },
                    "2XX": {"description": "Other"},
                },
            },
            method="get",
            schemas={"Pet": {"type": "object", "properties": {}}},
        )

        api = render(spec)["API.swift"]

        assert (
            "            switch statusCode {\n"
            "            case 200: return try JSONDecoder().decodeSafe([Pet].self, from: data)\n"
            "            case 200...299: return Void()\n"
            "            case 404: return Void()\n"
            "            default: return try JSONDecoder().decodeSafe(String.self, from: data)\n"
            "            }"
        ) in api
        assert "///     - 200: [Pet]" in api

    def test_invalid_response_code(self, render):
        spec = single_operation(
            {"operationId": "listPets", "responses": {"ok": {"description": "OK"}}}
        )

        with pytest.raises(DocumentError):
            render(spec)

    def test_authorization(self, render):
        """Тип авторизации из конфига, security отключает авторизацию"""
        spec = {
            "paths": {
                "/login": {"post": {"operationId": "login", "security": [], "responses": {}}},
                "/me": {"get": {"operationId": "me", "responses": {}}},
            }
        }

        api = render(spec, auth="custom:Token")["API.swift"]

        assert "case .login: return .none" in api
        assert 'case .me: return .custom("Token")' in api
        assert "case .me: return .basic" in render(spec, auth="basic")["API.swift"]

    def test_unknown_authorization(self, petstore_spec, render):
        with pytest.raises(ValueError):
            render(petstore_spec, auth="digest")

    def test_group_by_tag(self, render):
        """Отдельный enum на каждый тег"""
        spec = {
            "paths": {
                "/pets": {
                    "get": {"operationId": "listPets", "tags": ["pets"], "responses": {}},
                    "post": {"operationId": "createPet", "responses": {}},
                }
            }
        }

        files = render(spec, group_by_tag=True)

        assert "public enum PetsAPI {" in files["PetsAPI.swift"]
        assert "case listPets" in files["PetsAPI.swift"]
        assert "case createPet" in files["DefaultAPI.swift"]
        assert "API.swift" not in files

    def test_deprecated_operation(self, render):
        spec = single_operation(
            {
                "operationId": "oldPets",
                "description": "Старый метод",
                "deprecated": True,
                "responses": {},
            }
        )

        api = render(spec)["API.swift"]

        assert (
            "    /// Старый метод\n"
            "    /// - responses:\n"
            "    @available(*, deprecated)\n"
            "    case oldPets"
        ) in api

    def test_form_data_upload(self, render):
        """formData с файлом дает uploadCompositeMultipart"""
        spec = {
            "paths": {
                "/upload": {
                    "post": {
                        "operationId": "upload",
                        "consumes": ["multipart/form-data"],
                        "parameters": [
                            {"name": "file", "in": "formData", "required": True, "type": "file"},
                            {"name": "note", "in": "formData", "type": "string"},
                        ],
                        "responses": {},
                    }
                }
            }
        }

        api = render(spec)["API.swift"]

        assert "case upload(file: FileValue, note: String?)" in api
        assert (
            "case .upload(let file, let note): return .uploadCompositeMultipart(["
            'file.moyaFormData(name: "file"), '
            "note == nil ? nil : MultipartFormData(provider: .data(String(describing: note!)"
            '.data(using: .utf8)!), name: "note")].compactMap({ $0 }), urlParameters: [:])'
        ) in api

    def test_header_parameters(self, render):
        spec = single_operation(
            {
                "operationId": "me",
                "parameters": [{"name": "token", "in": "header", "schema": {"type": "string"}}],
                "responses": {},
            },
            method="get",
        )

        api = render(spec)["API.swift"]

        assert (
            "case .me(let token): return Dictionary<String, Any?>(dictionaryLiteral: "
            '("token", token)).unoptString()'
        ) in api

    def test_case_name_collision(self, render):
        """operationId, дающие одно имя case"""
        spec = {
            "paths": {
                "/a": {"get": {"operationId": "GetPet", "responses": {}}},
                "/b": {"get": {"operationId": "getPet", "responses": {}}},
            }
        }

        with pytest.raises(DocumentError):
            render(spec)


class TestTaskSelection:
    """Выбор Task для всех сочетаний body/query/formData"""

    @pytest.mark.parametrize(
        "has_body, has_query, has_form", list(itertools.product([False, True], repeat=3))
    )
    def test_task_selection(self, has_body, has_query, has_form):
        parameters = []
        if has_body:
            parameters.append(make_parameter("request", ParameterPosition.BODY))
        if has_query:
            parameters.append(make_parameter("limit", ParameterPosition.QUERY))
        if has_form:
            parameters.append(make_parameter("note", ParameterPosition.FORM_DATA))

        task = moya_task(Operation(id="op", path="/", method="post", parameters=parameters))
        url_parameters = '["limit": limit]' if has_query else "[:]"

        if has_form:
            assert task == (
                ".uploadCompositeMultipart([MultipartFormData(provider: "
                '.data(String(describing: note).data(using: .utf8)!), name: "note")]'
                f".compactMap({{ $0 }}), urlParameters: {url_parameters})"
            )
        elif not has_body and not has_query:
            assert task == ".requestPlain"
        elif has_body and not has_query:
            assert task == ".requestJSONEncodable(request)"
        else:
            body_parameters = '["request": request]' if has_body else "[:]"
            assert task == (
                f".requestCompositeParameters(bodyParameters: {body_parameters}, "
                f"bodyEncoding: JSONEncoding(), urlParameters: {url_parameters})"
            )

    def test_two_body_parameters(self):
        """Несколько body-параметров - composite"""
        operation = Operation(
            id="op",
            path="/",
            method="post",
            parameters=[
                make_parameter("b", ParameterPosition.BODY),
                make_parameter("a", ParameterPosition.BODY, required=False),
            ],
        )

        assert moya_task(operation) == (
            '.requestCompositeParameters(bodyParameters: (["a": a, "b": b] as [String: Any?])'
            ".unopt(), bodyEncoding: JSONEncoding(), urlParameters: [:])"
        )


class TestModelGeneration:
    """Тесты генерации структур"""

    def test_initializer_alphabetical(self, render):
        """Параметры init по алфавиту, опциональные со значением nil"""
        spec = model_spec(
            {"zeta": {"type": "integer"}, "alpha": {"type": "integer"}, "mid": {"type": "integer"}},
            required=["zeta", "alpha"],
        )

        model = render(spec)["Models/Item.swift"]

        assert "public init(alpha: Int, mid: Int? = nil, zeta: Int) {" in model

    def test_required_toggle(self, render):
        """required управляет опциональностью свойства"""
        properties = {"name": {"type": "string"}}

        assert "public let name: String\n" in render(model_spec(properties, ["name"]))["Models/Item.swift"]
        assert "public let name: String?\n" in render(model_spec(properties))["Models/Item.swift"]

    def test_optional_init_disabled(self, render):
        spec = model_spec({"name": {"type": "string"}})

        model = render(spec, optional_init=False)["Models/Item.swift"]

        assert "public init(name: String?) {" in model

    def test_use_var_and_access_level(self, render):
        spec = model_spec({"name": {"type": "string"}}, ["name"])

        model = render(spec, use_var=True, access_level="internal")["Models/Item.swift"]

        assert "internal struct Item: Codable {" in model
        assert "internal var name: String" in model

    def test_coding_keys(self, render):
        """CodingKeys только если имя в Swift отличается от ключа JSON"""
        spec = model_spec(
            {"pet-name": {"type": "string"}, "default": {"type": "string"}, "id": {"type": "integer"}}
        )

        model = render(spec)["Models/Item.swift"]

        assert (
            "    enum CodingKeys: String, CodingKey {\n"
            "        case `default`\n"
            "        case id\n"
            '        case pet_name = "pet-name"\n'
            "    }"
        ) in model
        assert "public let `default`: String?" in model

    def test_no_coding_keys_for_plain_names(self, petstore_spec, render):
        assert "CodingKeys" not in render(petstore_spec)["Models/Pet.swift"]

    def test_property_types(self, render):
        """Форматы, массивы, словари и ссылки"""
        spec = model_spec(
            {
                "ratio": {"type": "number", "format": "float"},
                "tags": {"type": "array", "items": {"type": "string"}},
                "counts": {"type": "object", "additionalProperties": {"type": "integer"}},
                "owner": {"$ref": "#/definitions/Item"},
                "extra": {"type": "object"},
            }
        )

        model = render(spec)["Models/Item.swift"]

        assert "public let ratio: Float?" in model
        assert "public let tags: [String]?" in model
        assert "public let counts: [String: Int]?" in model
        assert "public let owner: Item?" in model
        assert "public let extra: AnyObjectValue?" in model

    def test_cyclic_models(self, render):
        """Обе схемы цикла попадают в проект"""
        spec = {
            "paths": {},
            "definitions": {
                "A": {"type": "object", "properties": {"b": {"$ref": "#/definitions/B"}}},
                "B": {"type": "object", "properties": {"a": {"$ref": "#/definitions/A"}}},
            },
        }
        spec["paths"]["/a"] = {
            "get": {
                "operationId": "getA",
                "responses": {"200": {"description": "OK", "schema": {"$ref": "#/definitions/A"}}},
            }
        }

        files = render(spec)

        assert "public let b: B?" in files["Models/A.swift"]
        assert "public let a: A?" in files["Models/B.swift"]

    def test_enum_case_collision(self, render):
        """Значения enum, дающие один идентификатор"""
        spec = model_spec({"status": {"type": "string", "enum": ["Open", "open"]}})

        with pytest.raises(SchemaError):
            render(spec)

    def test_property_identifier_collision(self, render):
        """Разные ключи JSON, дающие одно имя свойства"""
        spec = model_spec({"pet-name": {"type": "string"}, "pet_name": {"type": "string"}})

        with pytest.raises(SchemaError) as exc_info:
            render(spec)

        assert exc_info.value.location == "Item"

    def test_unreferenced_schema_not_generated(self, render):
        """Генерируются только схемы, достижимые из операций"""
        spec = model_spec({"name": {"type": "string"}})
        spec["paths"] = {}

        assert "Models/Item.swift" not in render(spec)


class TestParameterEnums:
    """Enum параметров операций"""

    def test_same_parameter_name_in_two_operations(self, render):
        """Одно имя параметра с разными значениями в разных операциях"""
        spec = {
            "paths": {
                "/orders": {
                    "get": {
                        "operationId": "listOrders",
                        "parameters": [
                            {"name": "status", "in": "query", "type": "string", "enum": ["placed", "delivered"]}
                        ],
                        "responses": {},
                    }
                },
                "/pets": {
                    "get": {
                        "operationId": "listPets",
                        "parameters": [
                            {"name": "status", "in": "query", "type": "string", "enum": ["available", "sold"]}
                        ],
                        "responses": {},
                    }
                },
            }
        }

        api = render(spec)["API.swift"]

        assert (
            "    public enum ListOrdersStatus: String, CaseIterable, Codable {\n"
            '        case delivered = "delivered"\n'
            '        case placed = "placed"\n'
            "    }"
        ) in api
        assert (
            "    public enum ListPetsStatus: String, CaseIterable, Codable {\n"
            '        case available = "available"\n'
            '        case sold = "sold"\n'
            "    }"
        ) in api
        assert "case listOrders(status: ListOrdersStatus?)" in api
        assert "case listPets(status: ListPetsStatus?)" in api

    def test_raw_values_sent(self, render):
        """В путь, query и заголовки уходит rawValue, а не имя case"""
        spec = single_operation(
            {
                "operationId": "byKind",
                "parameters": [
                    {
                        "name": "kind",
                        "in": "path",
                        "required": True,
                        "schema": {"type": "string", "enum": ["Cat", "big-dog"]},
                    },
                    {"name": "sort", "in": "query", "schema": {"type": "string", "enum": ["asc", "desc"]}},
                    {
                        "name": "mode",
                        "in": "header",
                        "required": True,
                        "schema": {"type": "string", "enum": ["full", "short"]},
                    },
                ],
                "responses": {},
            },
            path="/pets/{kind}",
            method="get",
        )

        api = render(spec)["API.swift"]

        assert "case byKind(kind: ByKindKind, sort: ByKindSort?, mode: ByKindMode)" in api
        assert 'case big_dog = "big-dog"' in api
        assert 'case .byKind(let kind, _, _): return "/pets/\\(kind.rawValue)"' in api
        assert (
            "case .byKind(_, let sort, _): return .requestCompositeParameters("
            "bodyParameters: [:], bodyEncoding: JSONEncoding(), "
            'urlParameters: (["sort": sort?.rawValue] as [String: Any?]).unopt())'
        ) in api
        assert (
            "case .byKind(_, _, let mode): return Dictionary<String, Any?>(dictionaryLiteral: "
            '("mode", mode.rawValue)).unoptString()'
        ) in api

    def test_form_data_raw_value(self):
        """Часть multipart для enum передает rawValue"""
        param = OperationParameter(
            name="color",
            position=ParameterPosition.FORM_DATA,
            type=ParameterType.STRING,
            enum=["red", "green"],
        )

        assert form_data_part(param) == (
            "color == nil ? nil : MultipartFormData(provider: "
            '.data(String(describing: color!.rawValue).data(using: .utf8)!), name: "color")'
        )

    def test_parameter_identifier_collision(self, render):
        """Параметры одной операции, дающие одно имя в case"""
        spec = single_operation(
            {
                "operationId": "search",
                "parameters": [
                    {"name": "pet-name", "in": "query", "schema": {"type": "string"}},
                    {"name": "pet_name", "in": "header", "schema": {"type": "string"}},
                ],
                "responses": {},
            },
            method="get",
        )

        with pytest.raises(SchemaError) as exc_info:
            render(spec)

        assert exc_info.value.location == "search"


class TestGeneratorConfig:
    """Конфиг влияет на имена и базовый URL"""

    def test_enum_name_and_base_url(self, petstore_spec):
        config = OpenApiConfig(enum_name="PetAPI", base_url="http://localhost:8080")

        project = generate_client(petstore_spec, config)
        api = str(project.get_file("PetAPI.swift"))

        assert "public enum PetAPI {" in api
        assert 'URL(string: "http://localhost:8080")!' in api
