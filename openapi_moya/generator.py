"""
Главный модуль генератора - чистый интерфейс
"""

import logging
from typing import Dict, Any, List

from .config import OpenApiConfig
from .exceptions import DocumentError
from .internal.generator.endpoint_generator import EndpointGenerator
from .internal.generator.model_generator import ModelGenerator
from .internal.generator.swift_types import SwiftTypeEmitter
from .internal.generator.templates import templates
from .internal.parser.openapi import OpenApiParser
from .internal.types.context import GenerationContext
from .internal.types.models import CodeBlock, Project
from .internal.types.primitives import Operation
from .internal.utils import capitalized_first_letter, escape_identifier, strip_escape

logger = logging.getLogger(__name__)


class ApiClientGenerator:
    """Чистый интерфейс для генерации Swift/Moya клиента"""

    def __init__(self, openapi_spec: Dict[str, Any], config: OpenApiConfig = None):
        self.config = config or OpenApiConfig()
        self.parser = OpenApiParser(openapi_spec, strict_paths=self.config.strict_paths)

    def generate(self) -> Project:
        """Генерация проекта клиента"""
        context = self.parser.parse()
        types = SwiftTypeEmitter(context.resolver)
        project = Project(name=self.config.enum_name)

        self._generate_support(project)
        self._generate_models(project, context, types)
        self._generate_endpoints(project, context, types)

        logger.debug(
            "Сгенерировано %d схем и %d операций",
            len(context.schemas),
            len(context.operations),
        )
        return project

    def _generate_support(self, project: Project) -> None:
        support = project.add_file(
            "Support.swift", header=templates.header, imports=["Foundation", "Moya"]
        )
        support.add_code_block(CodeBlock(code=templates.support))

    def _generate_models(
        self, project: Project, context: GenerationContext, types: SwiftTypeEmitter
    ) -> None:
        models = ModelGenerator(
            types,
            access_level=self.config.access_level,
            use_var=self.config.use_var,
            optional_init=self.config.optional_init,
        )

        for schema in context.schemas:
            model_file = project.add_file(
                models.file_name(schema), header=templates.header, imports=["Foundation"]
            )
            model_file.declarations.append(models.generate(schema))

    def _generate_endpoints(
        self, project: Project, context: GenerationContext, types: SwiftTypeEmitter
    ) -> None:
        endpoints = EndpointGenerator(
            types, access_level=self.config.access_level, auth=self.config.auth
        )
        base_url = context.base_url(self.config.base_url)

        groups: Dict[str, List[Operation]]
        if self.config.group_by_tag:
            groups = {}
            for tag, operations in sorted(context.operations_by_tag.items()):
                enum_name = self._tag_enum_name(tag)
                if enum_name in groups:
                    raise DocumentError(f"Теги дают одно имя enum '{enum_name}'", tag)
                groups[enum_name] = operations
        else:
            groups = {self.config.enum_name: context.operations}

        for enum_name, operations in groups.items():
            endpoints_file = project.add_file(
                f"{strip_escape(enum_name)}.swift",
                header=templates.header,
                imports=["Foundation", "Moya"],
            )
            endpoints_file.declarations.extend(
                endpoints.generate(operations, enum_name, base_url)
            )

    def _tag_enum_name(self, tag: str) -> str:
        return escape_identifier(capitalized_first_letter(tag) + self.config.enum_name)


def generate_client(openapi_spec: Dict[str, Any], config: OpenApiConfig = None) -> Project:
    """Создание Moya клиента из OpenAPI спецификации"""
    generator = ApiClientGenerator(openapi_spec, config)
    return generator.generate()
