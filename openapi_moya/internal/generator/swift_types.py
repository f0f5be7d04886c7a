from typing import Dict, List, Optional

from ...exceptions import SchemaError
from ..types.models import Variable
from ..types.primitives import (
    ParameterFormat,
    ParameterType,
    Primitive,
    PropertyField,
)
from ..utils.naming import (
    capitalized_first_letter,
    escape_identifier,
    lowered_first_letter,
    strip_escape,
)

BASE_TYPES = {
    ParameterType.NONE: "Void",
    ParameterType.INTEGER: "Int",
    ParameterType.STRING: "String",
    ParameterType.BOOLEAN: "Bool",
    ParameterType.OBJECT: "AnyObjectValue",
    ParameterType.NUMBER: "Double",
    ParameterType.FILE: "FileValue",
}

FORMAT_TYPES = {
    ParameterFormat.UUID: "UUID",
    ParameterFormat.DOUBLE: "Double",
    ParameterFormat.FLOAT: "Float",
    ParameterFormat.INT32: "Int32",
    ParameterFormat.INT64: "Int64",
    # Время передается как unix timestamp
    ParameterFormat.DATE_TIME: "Int64",
}


def property_identifier(name: str) -> str:
    """Имя свойства/параметра в Swift: petId, `default`"""
    return escape_identifier(lowered_first_letter(name))


def enum_type_name(name: str, scope: Optional[str] = None) -> str:
    """
    Имя вложенного enum для свойства: status -> Status.

    scope задает префикс для enum параметров операции:
    status в listPets -> ListPetsStatus.
    """
    type_name = capitalized_first_letter(strip_escape(property_identifier(name)))
    if scope:
        type_name = capitalized_first_letter(strip_escape(escape_identifier(scope))) + type_name
    return escape_identifier(type_name)


def enum_case_identifier(value: str) -> str:
    return escape_identifier(value.lower())


def is_string_enum(field: PropertyField) -> bool:
    return field.type == ParameterType.STRING and field.enum is not None


def check_identifiers(names: List[str], location: str) -> None:
    """Разные имена из документа не должны давать один идентификатор Swift"""
    seen: Dict[str, str] = {}
    for name in names:
        identifier = property_identifier(name)
        if identifier in seen:
            raise SchemaError(
                f"Имена {seen[identifier]!r} и {name!r} дают один идентификатор '{identifier}'",
                location,
            )
        seen[identifier] = name


class SwiftTypeEmitter:
    """Отображение Primitive в выражение типа Swift"""

    def __init__(self, resolver):
        self.resolver = resolver

    def type_of(self, primitive: Primitive) -> Variable:
        if primitive.type == ParameterType.ARRAY:
            return Variable(value=self.type_of(primitive.items), wrap_name="Array")

        if primitive.type == ParameterType.DICTIONARY:
            return Variable(value=self.type_of(primitive.items), wrap_name="Dictionary")

        if primitive.type == ParameterType.OBJECT and primitive.schema_ref:
            schema = self.resolver.schema_for(primitive)
            return Variable(value=escape_identifier(schema.title))

        if primitive.type in (ParameterType.INTEGER, ParameterType.NUMBER) and primitive.format:
            return Variable(value=FORMAT_TYPES[primitive.format])

        return Variable(value=BASE_TYPES[primitive.type])

    def property_type(self, field: PropertyField, scope: Optional[str] = None) -> Variable:
        """Тип свойства с учетом enum, additionalProperties и required"""
        if is_string_enum(field):
            var_type = Variable(value=enum_type_name(field.name, scope))
        elif field.type == ParameterType.OBJECT and field.additional_properties is not None:
            var_type = Variable(
                value=self.type_of(field.additional_properties), wrap_name="Dictionary"
            )
        else:
            var_type = self.type_of(field)

        return var_type if field.required else var_type.optional()
