import logging
import re
from typing import Any, Dict, List

from ...exceptions import DocumentError
from ..types.context import GenerationContext
from ..types.primitives import Operation, OperationParameter, ParameterPosition
from .schema import pick_content_type
from .schema_resolver import SchemaResolver

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")


class OpenApiParser:
    """Парсер OpenAPI/Swagger документа в GenerationContext"""

    def __init__(self, openapi_dict: Dict[str, Any], strict_paths: bool = False):
        if not isinstance(openapi_dict, dict):
            raise DocumentError("Корень документа должен быть объектом")

        self.openapi_dict = openapi_dict
        self.strict_paths = strict_paths

    def parse(self) -> GenerationContext:
        """Один проход по документу: все пути, операции и схемы"""
        context = GenerationContext(
            document=self.openapi_dict,
            resolver=SchemaResolver(self.openapi_dict),
            host=self.openapi_dict.get("host"),
            base_path=self.openapi_dict.get("basePath"),
            servers=[
                server["url"]
                for server in self.openapi_dict.get("servers", [])
                if isinstance(server, dict) and "url" in server
            ],
        )

        paths = self.openapi_dict.get("paths", {})
        if not isinstance(paths, dict):
            raise DocumentError("paths должен быть объектом")

        seen_ids: Dict[str, str] = {}
        for path in sorted(paths):
            path_spec = paths[path]
            if not isinstance(path_spec, dict):
                raise DocumentError("Описание пути должно быть объектом", path)

            for method in HTTP_METHODS:
                if method not in path_spec:
                    continue

                operation = self._parse_operation(
                    context, path, method, path_spec[method], path_spec.get("parameters", [])
                )

                if operation.id in seen_ids:
                    raise DocumentError(
                        f"operationId '{operation.id}' уже используется в {seen_ids[operation.id]}",
                        f"{method.upper()} {path}",
                    )
                seen_ids[operation.id] = f"{method.upper()} {path}"

                logger.debug("Операция %s", operation)
                context.add_operation(operation)

        return context

    def _parse_operation(
        self,
        context: GenerationContext,
        path: str,
        method: str,
        spec: Any,
        shared_parameters: List[Any],
    ) -> Operation:
        location = f"{method.upper()} {path}"
        if not isinstance(spec, dict):
            raise DocumentError("Описание операции должно быть объектом", location)

        operation_id = spec.get("operationId")
        if not isinstance(operation_id, str) or not operation_id:
            raise DocumentError("Не указан operationId", location)

        parser = context.resolver.parser

        # Параметры уровня пути, переопределяемые параметрами операции
        parameters: Dict[tuple, OperationParameter] = {}
        for param_spec in list(shared_parameters or []) + list(spec.get("parameters", [])):
            if isinstance(param_spec, dict) and "$ref" in param_spec:
                param_spec = context.resolver.lookup(param_spec["$ref"])
            param = parser.parse_parameter(param_spec, f"{location}/parameters")
            parameters[(param.name, param.position)] = param

        tags = spec.get("tags", [])
        if not isinstance(tags, list):
            raise DocumentError("tags должен быть списком", location)

        consumes = list(spec.get("consumes", []))

        request_body = spec.get("requestBody")
        if isinstance(request_body, dict):
            content = request_body.get("content") or {}
            if not isinstance(content, dict):
                raise DocumentError("requestBody.content должен быть объектом", location)
            content_type = pick_content_type(content)
            if content_type is not None:
                details = content[content_type]
                if not isinstance(details, dict):
                    raise DocumentError(f"Неверное описание {content_type}", location)
                body_info = details.get("schema") or {}
                consumes = [content_type]
                parameters[("request", ParameterPosition.BODY)] = parser.parse_parameter(
                    {
                        "name": "request",
                        "in": "body",
                        "required": request_body.get("required", False),
                        "description": "request",
                        "schema": body_info,
                    },
                    f"{location}/requestBody",
                )

        responses_spec = spec.get("responses")
        if not isinstance(responses_spec, dict):
            raise DocumentError("Не указаны responses", location)

        responses = {
            str(code): parser.parse_result(value, f"{location}/responses/{code}")
            for code, value in responses_spec.items()
        }

        operation = Operation(
            id=operation_id,
            path=path,
            method=method,
            description=spec.get("description") or spec.get("summary"),
            tags=[str(tag) for tag in tags],
            parameters=list(parameters.values()),
            responses=responses,
            has_authorization="security" not in spec,
            deprecated=bool(spec.get("deprecated", False)),
            consumes=consumes,
            produces=list(spec.get("produces", [])),
        )

        self._check_path_placeholders(operation)
        return operation

    def _check_path_placeholders(self, operation: Operation) -> None:
        """Сверка {placeholder} в пути с path-параметрами"""
        placeholders = set(re.findall(r"\{([^}]+)\}", operation.path))
        declared = {p.name for p in operation.parameters_at(ParameterPosition.PATH)}

        if placeholders == declared:
            return

        message = (
            f"Плейсхолдеры пути {sorted(placeholders)} не совпадают "
            f"с path-параметрами {sorted(declared)}"
        )
        if self.strict_paths:
            raise DocumentError(message, operation.id)

        logger.warning("%s: %s", operation.id, message)
