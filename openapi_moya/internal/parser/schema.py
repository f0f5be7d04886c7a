"""
Разбор узлов схем в Primitive / PropertyField / OperationParameter
"""

from typing import Any, Dict, List, Optional

from ...exceptions import SchemaError
from ..types.primitives import (
    CONTAINER_TYPES,
    NUMERIC_TYPES,
    OperationParameter,
    OperationResult,
    ParameterFormat,
    ParameterPosition,
    ParameterType,
    Primitive,
    PropertyField,
)

# Порядок выбора content type, когда их объявлено несколько
CONTENT_TYPE_PRIORITY = [
    "application/json",
    "multipart/form-data",
    "application/x-www-form-urlencoded",
    "text/plain",
    "application/octet-stream",
    "*/*",
]


def pick_content_type(content: Dict[str, Any]) -> Optional[str]:
    """Детерминированный выбор одного content type из словаря content"""
    if not content:
        return None

    for content_type in CONTENT_TYPE_PRIORITY:
        if content_type in content:
            return content_type

    return sorted(content)[0]


class PrimitiveParser:
    """Валидирующий разбор сырых узлов документа"""

    def __init__(self, resolver):
        # resolver должен иметь метод resolve(ref)
        self.resolver = resolver

    def parse_primitive(self, info: Any, location: str) -> Primitive:
        return Primitive(**self._primitive_fields(info, location))

    def parse_property(
        self, name: str, required: bool, info: Any, location: str
    ) -> PropertyField:
        fields = self._primitive_fields(info, location)
        return PropertyField(
            name=name,
            required=required,
            enum=self._enum_values(info),
            additional_properties=self._additional_properties(info, location),
            **fields,
        )

    def parse_parameter(self, info: Any, location: str) -> OperationParameter:
        """Параметр операции: имя и позиция из самого параметра, тип из schema (если есть)"""
        if not isinstance(info, dict):
            raise SchemaError("Параметр должен быть объектом", location)

        name = info.get("name")
        if not isinstance(name, str) or not name:
            raise SchemaError("У параметра нет имени", location)

        location = f"{location}/{name}"

        try:
            position = ParameterPosition(info.get("in"))
        except ValueError:
            raise SchemaError(f"Неизвестная позиция параметра: {info.get('in')!r}", location)

        type_info = info["schema"] if isinstance(info.get("schema"), dict) else info
        fields = self._primitive_fields(type_info, location)

        return OperationParameter(
            name=name,
            required=bool(info.get("required", False)),
            position=position,
            description=info.get("description"),
            enum=self._enum_values(type_info),
            additional_properties=self._additional_properties(type_info, location),
            **fields,
        )

    def parse_result(self, info: Any, location: str) -> OperationResult:
        """Ответ: тип берется из первой подходящей content-схемы"""
        if not isinstance(info, dict):
            raise SchemaError("Ответ должен быть объектом", location)

        schema = None
        content = info.get("content")
        if isinstance(content, dict) and content:
            details = content[pick_content_type(content)]
            if isinstance(details, dict):
                schema = details.get("schema")
        elif isinstance(info.get("schema"), dict):
            # Swagger 2: schema лежит прямо в ответе
            schema = info["schema"]

        primitive = (
            self.parse_primitive(schema, location) if schema is not None else Primitive()
        )

        return OperationResult(
            description=info.get("description") or "", primitive=primitive
        )

    def _primitive_fields(self, info: Any, location: str) -> Dict[str, Any]:
        if not isinstance(info, dict):
            raise SchemaError("Узел схемы должен быть объектом", location)

        param_type = self.classify(info, location)

        param_format = None
        if param_type in NUMERIC_TYPES and info.get("format") is not None:
            try:
                param_format = ParameterFormat(info["format"])
            except ValueError:
                raise SchemaError(f"Неизвестный формат: {info['format']!r}", location)

        items = None
        if param_type in CONTAINER_TYPES:
            items_info = info.get("items")
            if not isinstance(items_info, dict) or not items_info:
                raise SchemaError(f"Для типа {param_type.value} не указан items", location)
            items = self.parse_primitive(items_info, f"{location}/items")

        schema_ref = info.get("$ref")
        if schema_ref is not None:
            if not isinstance(schema_ref, str):
                raise SchemaError("$ref должен быть строкой", location)
            self.resolver.resolve(schema_ref)

        return {
            "type": param_type,
            "format": param_format,
            "items": items,
            "schema_ref": schema_ref,
        }

    @staticmethod
    def classify(info: Dict[str, Any], location: str) -> ParameterType:
        # Загрузка файла: объект со свойством "file"
        properties = info.get("properties")
        if isinstance(properties, dict) and "file" in properties:
            return ParameterType.FILE

        declared = info.get("type")
        if declared is None:
            declared = "object" if "$ref" in info else "none"

        if isinstance(declared, str):
            try:
                return ParameterType(declared)
            except ValueError:
                pass

        raise SchemaError(f"Неизвестный тип: {declared!r}", location)

    @staticmethod
    def _enum_values(info: Dict[str, Any]) -> Optional[List[str]]:
        values = info.get("enum")
        if isinstance(values, list) and all(isinstance(v, str) for v in values):
            return list(values)
        return None

    def _additional_properties(
        self, info: Dict[str, Any], location: str
    ) -> Optional[Primitive]:
        additional = info.get("additionalProperties")
        if isinstance(additional, dict) and additional:
            return self.parse_primitive(additional, f"{location}/additionalProperties")
        return None
