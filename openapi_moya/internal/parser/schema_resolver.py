import logging
from typing import Any, Dict, List, Optional

from ...exceptions import SchemaError
from ..types.primitives import AggregateSchema, Primitive
from .schema import PrimitiveParser

logger = logging.getLogger(__name__)


class SchemaResolver:
    """
    Резолвер ссылок на схемы с мемоизацией.

    Перед разбором свойств схемы в карту кладется заглушка, поэтому
    повторный вход в resolve() для той же ссылки (цикл A -> B -> A)
    сразу возвращает заглушку и рекурсия завершается. Ссылка, полученная
    внутри цикла до завершения разбора, видит схему без свойств; Primitive
    хранит только ключ ссылки, поэтому после прохода все участники цикла
    получают достроенную схему через schema_for().
    """

    def __init__(self, document: Dict[str, Any]):
        self.document = document
        self.schemes: Dict[str, AggregateSchema] = {}
        self.parser = PrimitiveParser(self)
        self._titles: Dict[str, str] = {}

    def resolve(self, ref: str) -> AggregateSchema:
        """Получение схемы по ссылке вида #/definitions/Pet"""
        if ref in self.schemes:
            return self.schemes[ref]

        segments = self._segments(ref)
        title = segments[-1]

        owner = self._titles.get(title)
        if owner is not None and owner != ref:
            raise SchemaError(f"Схема с именем '{title}' уже объявлена в {owner}", ref)
        self._titles[title] = ref

        self.schemes[ref] = AggregateSchema(title=title, placeholder=True)

        info = self._lookup(ref, segments)
        logger.debug("Разбор схемы %s", ref)

        declared = info.get("type")
        if declared is not None:
            self.parser.classify({"type": declared}, ref)

        required = info.get("required", [])
        if not isinstance(required, list):
            raise SchemaError("required должен быть списком", ref)

        properties_info = info.get("properties", {})
        if not isinstance(properties_info, dict):
            raise SchemaError("properties должен быть объектом", ref)

        properties = [
            self.parser.parse_property(
                name, name in required, value, f"{ref}/properties/{name}"
            )
            for name, value in properties_info.items()
        ]

        schema = AggregateSchema(title=title, properties=properties)
        self.schemes[ref] = schema
        return schema

    def schema_for(self, primitive: Primitive) -> Optional[AggregateSchema]:
        if primitive.schema_ref is None:
            return None
        return self.resolve(primitive.schema_ref)

    @property
    def schemas(self) -> List[AggregateSchema]:
        """Все разобранные схемы, отсортированные по имени"""
        return sorted(
            (s for s in self.schemes.values() if not s.placeholder),
            key=lambda s: s.title,
        )

    def lookup(self, ref: str) -> Dict[str, Any]:
        """Сырой узел документа по ссылке (например, #/parameters/limit)"""
        return self._lookup(ref, self._segments(ref))

    @staticmethod
    def _segments(ref: str) -> List[str]:
        if not ref.startswith("#/"):
            raise SchemaError("Поддерживаются только локальные ссылки вида #/...", ref)

        segments = [
            s.replace("~1", "/").replace("~0", "~") for s in ref[2:].split("/")
        ]
        if not all(segments):
            raise SchemaError("Пустой сегмент в ссылке", ref)

        return segments

    def _lookup(self, ref: str, segments: List[str]) -> Dict[str, Any]:
        node: Any = self.document
        for segment in segments:
            if not isinstance(node, dict) or segment not in node:
                raise SchemaError("Ссылка не разрешается", ref)
            node = node[segment]

        if not isinstance(node, dict):
            raise SchemaError("Ссылка указывает не на объект", ref)

        return node
