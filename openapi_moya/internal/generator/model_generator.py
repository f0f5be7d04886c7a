from typing import List, Optional

from ...exceptions import SchemaError
from ..types.models import (
    Declaration,
    EnumCase,
    Function,
    Parameter,
    Property,
)
from ..types.primitives import AggregateSchema, PropertyField
from ..utils.naming import escape_identifier, strip_escape, swift_string_literal
from .swift_types import (
    SwiftTypeEmitter,
    check_identifiers,
    enum_case_identifier,
    enum_type_name,
    is_string_enum,
    property_identifier,
)


def enum_declaration(
    field: PropertyField, access: str, location: str, scope: Optional[str] = None
) -> Optional[Declaration]:
    """Вложенный String enum для свойства или параметра с enum"""
    if not is_string_enum(field):
        return None

    declaration = Declaration(
        kind="enum",
        name=enum_type_name(field.name, scope),
        inherits=["String", "CaseIterable", "Codable"],
        access=access,
    )

    seen = {}
    for value in sorted(set(field.enum)):
        case_name = enum_case_identifier(value)
        if case_name in seen:
            raise SchemaError(
                f"Значения {seen[case_name]!r} и {value!r} дают один case '{case_name}'",
                location,
            )
        seen[case_name] = value
        declaration.add(EnumCase(name=case_name, raw_value=swift_string_literal(value)))

    return declaration


class ModelGenerator:
    """Генерация Codable структур из AggregateSchema"""

    def __init__(
        self,
        types: SwiftTypeEmitter,
        access_level: str = "public",
        use_var: bool = False,
        optional_init: bool = True,
    ):
        self.types = types
        self.access_level = access_level
        self.use_var = use_var
        self.optional_init = optional_init

    @staticmethod
    def file_name(schema: AggregateSchema) -> str:
        return f"Models/{strip_escape(escape_identifier(schema.title))}.swift"

    def generate(self, schema: AggregateSchema) -> Declaration:
        properties = schema.sorted_properties
        check_identifiers([f.name for f in properties], schema.title)

        struct = Declaration(
            kind="struct",
            name=escape_identifier(schema.title),
            inherits=["Codable"],
            access=self.access_level,
        )

        for field in properties:
            nested = enum_declaration(field, self.access_level, schema.title)
            if nested is not None:
                struct.add(nested)

        coding_keys = self._coding_keys(properties)
        if coding_keys is not None:
            struct.add(coding_keys)

        for field in properties:
            struct.add(
                Property(
                    parameter=Parameter(
                        name=property_identifier(field.name),
                        var_type=self.types.property_type(field),
                    ),
                    access=self.access_level,
                    mutable=self.use_var,
                )
            )

        struct.add(self._initializer(properties))
        return struct

    def _initializer(self, properties: List[PropertyField]) -> Function:
        parameters = []
        for field in properties:
            default = "nil" if self.optional_init and not field.required else None
            parameters.append(
                Parameter(
                    name=property_identifier(field.name),
                    var_type=self.types.property_type(field),
                    default=default,
                )
            )

        init = Function(name="init", parameters=parameters, access=self.access_level)
        if properties:
            init.add_code_block(
                "\n".join(
                    f"self.{property_identifier(f.name)} = {property_identifier(f.name)}"
                    for f in properties
                )
            )
        return init

    @staticmethod
    def _coding_keys(properties: List[PropertyField]) -> Optional[Declaration]:
        """CodingKeys нужны, только если имя в Swift отличается от ключа JSON"""
        if all(strip_escape(property_identifier(f.name)) == f.name for f in properties):
            return None

        coding_keys = Declaration(
            kind="enum", name="CodingKeys", inherits=["String", "CodingKey"], access=""
        )
        for field in properties:
            identifier = property_identifier(field.name)
            raw_value = None
            if strip_escape(identifier) != field.name:
                raw_value = swift_string_literal(field.name)
            coding_keys.add(EnumCase(name=identifier, raw_value=raw_value))

        return coding_keys
