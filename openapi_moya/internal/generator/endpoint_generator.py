import re
from typing import Dict, List

from ...exceptions import DocumentError, SchemaError
from ..types.models import (
    CodeBlock,
    ComputedProperty,
    Declaration,
    EnumCase,
    Function,
    Parameter,
    Switch,
    Variable,
)
from ..types.primitives import (
    Operation,
    OperationParameter,
    ParameterPosition,
    ParameterType,
)
from ..utils.naming import escape_identifier, lowered_first_letter, swift_string_literal
from .model_generator import enum_declaration
from .swift_types import (
    SwiftTypeEmitter,
    check_identifiers,
    is_string_enum,
    property_identifier,
)

BODY = ParameterPosition.BODY
QUERY = ParameterPosition.QUERY
FORM_DATA = ParameterPosition.FORM_DATA
HEADER = ParameterPosition.HEADER
PATH = ParameterPosition.PATH


def auth_expression(auth: str) -> str:
    """bearer / basic / none / custom:<scheme> -> выражение AuthorizationType"""
    if auth in ("bearer", "basic", "none"):
        return f".{auth}"
    if auth.startswith("custom:") and auth[len("custom:"):]:
        return f".custom({swift_string_literal(auth[len('custom:'):])})"
    raise ValueError(f"Неизвестный тип авторизации: {auth}")


def case_name(operation: Operation) -> str:
    return escape_identifier(lowered_first_letter(operation.id))


def sorted_parameters(operation: Operation) -> List[OperationParameter]:
    """Параметры в порядке (позиция, имя) для объявления case"""
    return sorted(
        operation.parameters,
        key=lambda p: (p.position.rank, property_identifier(p.name)),
    )


def parameters_at(
    operation: Operation, position: ParameterPosition
) -> List[OperationParameter]:
    return [p for p in sorted_parameters(operation) if p.position == position]


def case_pattern(operation: Operation, *positions: ParameterPosition) -> str:
    """Шаблон для switch: .name(let a, _) с привязкой только нужных параметров"""
    name = "." + case_name(operation)
    if not any(p.position in positions for p in operation.parameters):
        return name

    bindings = [
        f"let {property_identifier(p.name)}" if p.position in positions else "_"
        for p in sorted_parameters(operation)
    ]
    return f"{name}({', '.join(bindings)})"


def wire_value(param: OperationParameter) -> str:
    """Значение параметра для передачи: у enum - rawValue, а не имя case"""
    identifier = property_identifier(param.name)
    if not is_string_enum(param):
        return identifier
    return f"{identifier}.rawValue" if param.required else f"{identifier}?.rawValue"


def moya_path(operation: Operation) -> str:
    """Подстановка path-параметров в шаблон пути (непарные плейсхолдеры остаются как есть)"""
    result = operation.path
    for param in parameters_at(operation, PATH):
        result = result.replace("{" + param.name + "}", "\\(" + wire_value(param) + ")")
    return '"' + result.replace('"', '\\"') + '"'


def parameters_map(parameters: List[OperationParameter]) -> str:
    """Словарь параметров; с опциональными значениями проходит через unopt()"""
    if not parameters:
        return "[:]"

    entries = ", ".join(f"{swift_string_literal(p.name)}: {wire_value(p)}" for p in parameters)
    if any(not p.required for p in parameters):
        return f"([{entries}] as [String: Any?]).unopt()"
    return f"[{entries}]"


def form_data_part(param: OperationParameter) -> str:
    identifier = property_identifier(param.name)
    name = swift_string_literal(param.name)

    if param.type == ParameterType.FILE:
        accessor = identifier if param.required else f"{identifier}?"
        return f"{accessor}.moyaFormData(name: {name})"

    value = identifier if param.required else f"{identifier}!"
    if is_string_enum(param):
        value += ".rawValue"
    part = (
        f"MultipartFormData(provider: .data(String(describing: {value})"
        f".data(using: .utf8)!), name: {name})"
    )
    return part if param.required else f"{identifier} == nil ? nil : {part}"


def moya_task(operation: Operation) -> str:
    """Выбор Task: multipart -> plain -> JSON body -> composite"""
    body = parameters_at(operation, BODY)
    query = parameters_at(operation, QUERY)
    form = parameters_at(operation, FORM_DATA)

    if form:
        parts = ", ".join(form_data_part(p) for p in form)
        return (
            f".uploadCompositeMultipart([{parts}].compactMap({{ $0 }}), "
            f"urlParameters: {parameters_map(query)})"
        )
    if not body and not query:
        return ".requestPlain"
    if len(body) == 1 and not query:
        return f".requestJSONEncodable({property_identifier(body[0].name)})"
    return (
        f".requestCompositeParameters(bodyParameters: {parameters_map(body)}, "
        f"bodyEncoding: JSONEncoding(), urlParameters: {parameters_map(query)})"
    )


def moya_headers(operation: Operation) -> str:
    headers = [
        f"({swift_string_literal(p.name)}, {wire_value(p)})"
        for p in parameters_at(operation, HEADER)
    ]

    content_type = next((t for t in operation.consumes if t != "*/*"), None)
    if content_type is not None:
        headers.append(f'("Content-Type", {swift_string_literal(content_type)})')

    if not headers:
        return "nil"
    return (
        "Dictionary<String, Any?>(dictionaryLiteral: "
        + ", ".join(headers)
        + ").unoptString()"
    )


def status_pattern(code: str, location: str) -> str:
    """200 -> 200, 2XX -> 200...299"""
    if code.isdigit():
        return str(int(code))

    match = re.fullmatch(r"([1-5])XX", code.upper())
    if match:
        first = int(match.group(1)) * 100
        return f"{first}...{first + 99}"

    raise DocumentError(f"Неизвестный код ответа: {code!r}", location)


class EndpointGenerator:
    """Генерация enum операций и его реализации TargetType для Moya"""

    def __init__(
        self,
        types: SwiftTypeEmitter,
        access_level: str = "public",
        auth: str = "bearer",
    ):
        self.types = types
        self.access_level = access_level
        self.auth = auth_expression(auth)

    def generate(
        self, operations: List[Operation], enum_name: str, base_url: str
    ) -> List[Declaration]:
        operations = sorted(operations, key=case_name)
        self._check_case_names(operations, enum_name)

        return [
            self._enum_declaration(operations, enum_name),
            self._target_type(operations, enum_name, base_url),
            self._decoder(operations, enum_name),
        ]

    @staticmethod
    def _check_case_names(operations: List[Operation], enum_name: str) -> None:
        seen: Dict[str, str] = {}
        for operation in operations:
            name = case_name(operation)
            if name in seen:
                raise DocumentError(
                    f"operationId '{operation.id}' и '{seen[name]}' дают один case '{name}'",
                    enum_name,
                )
            seen[name] = operation.id

    def _enum_declaration(self, operations: List[Operation], enum_name: str) -> Declaration:
        api_enum = Declaration(kind="enum", name=enum_name, access=self.access_level)

        # Enum параметров именуются по операции: listPets + status -> ListPetsStatus
        nested: Dict[str, Declaration] = {}
        for operation in operations:
            for param in sorted_parameters(operation):
                declaration = enum_declaration(
                    param, self.access_level, operation.id, scope=case_name(operation)
                )
                if declaration is None:
                    continue
                existing = nested.get(declaration.name)
                if existing is not None and str(existing) != str(declaration):
                    raise SchemaError(
                        f"Имя enum {declaration.name} уже занято другой операцией", operation.id
                    )
                nested[declaration.name] = declaration

        for name in sorted(nested):
            api_enum.add(nested[name])

        for operation in operations:
            api_enum.add(self._case(operation))

        return api_enum

    def _case(self, operation: Operation) -> EnumCase:
        doc = (operation.description or "").splitlines() or [""]
        doc.append("- responses:")
        doc.extend(
            f"    - {code}: {self.types.type_of(operation.responses[code].primitive)}"
            for code in sorted(operation.responses)
        )

        parameters = sorted_parameters(operation)
        check_identifiers([p.name for p in parameters], operation.id)

        return EnumCase(
            name=case_name(operation),
            parameters=[
                Parameter(
                    name=property_identifier(p.name),
                    var_type=self.types.property_type(p, scope=case_name(operation)),
                )
                for p in parameters
            ],
            doc=doc,
            attributes=["@available(*, deprecated)"] if operation.deprecated else [],
        )

    def _target_type(
        self, operations: List[Operation], enum_name: str, base_url: str
    ) -> Declaration:
        extension = Declaration(
            kind="extension",
            name=enum_name,
            inherits=["TargetType", "AccessTokenAuthorizable"],
        )

        extension.add(
            ComputedProperty(
                name="baseURL",
                var_type="URL",
                access=self.access_level,
                code=CodeBlock(code=f"URL(string: {swift_string_literal(base_url)})!"),
            )
        )

        path = Switch(subject="self")
        method = Switch(subject="self")
        task = Switch(subject="self")
        headers = Switch(subject="self")
        authorization = Switch(subject="self")

        for operation in operations:
            plain = "." + case_name(operation)
            path.add_case(case_pattern(operation, PATH), f"return {moya_path(operation)}")
            method.add_case(plain, f"return .{operation.method}")
            task.add_case(
                case_pattern(operation, BODY, QUERY, FORM_DATA),
                f"return {moya_task(operation)}",
            )
            headers.add_case(case_pattern(operation, HEADER), f"return {moya_headers(operation)}")
            authorization.add_case(
                plain, f"return {self.auth if operation.has_authorization else '.none'}"
            )

        for name, var_type, code in (
            ("path", "String", path),
            ("method", "Moya.Method", method),
            ("task", "Task", task),
            ("headers", "[String: String]?", headers),
            ("authorizationType", "AuthorizationType?", authorization),
        ):
            extension.add(
                ComputedProperty(name=name, var_type=var_type, access=self.access_level, code=code)
            )

        extension.add(
            ComputedProperty(
                name="sampleData",
                var_type="Data",
                access=self.access_level,
                code=CodeBlock(code="Data()"),
            )
        )

        return extension

    def _decoder(self, operations: List[Operation], enum_name: str) -> Declaration:
        extension = Declaration(kind="extension", name=enum_name)

        dispatch = Switch(subject="self")
        for operation in operations:
            dispatch.add_case(
                "." + case_name(operation), *str(self._response_switch(operation)).split("\n")
            )

        decode = Function(
            name="decodeResponse",
            parameters=[
                Parameter(name="statusCode", var_type=Variable(value="Int")),
                Parameter(name="data", var_type=Variable(value="Data")),
            ],
            response="Any",
            access=self.access_level,
            throws=True,
            doc=["Декодирование ответа по коду статуса"],
        )
        decode.add_code_block(dispatch)
        extension.add(decode)

        return extension

    def _response_switch(self, operation: Operation) -> Switch:
        """Ветки по кодам ответа в лексикографическом порядке"""
        switch = Switch(
            subject="statusCode",
            default=["throw ResponseDecodeError.unknownCode(statusCode)"],
        )

        for code in sorted(operation.responses):
            primitive = operation.responses[code].primitive
            if primitive.type == ParameterType.NONE:
                body = "return Void()"
            else:
                body = (
                    "return try JSONDecoder().decodeSafe("
                    f"{self.types.type_of(primitive)}.self, from: data)"
                )

            if code == "default":
                switch.default = [body]
            else:
                switch.add_case(status_pattern(code, operation.id), body)

        return switch
