from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from .primitives import AggregateSchema, Operation

if TYPE_CHECKING:
    from ..parser.schema_resolver import SchemaResolver

# Группа операций без тегов; совпадает с тегом "Default", если он объявлен в документе
DEFAULT_TAG = "Default"


@dataclass
class GenerationContext:
    """Состояние одного прохода генерации: документ, схемы и операции"""

    document: Dict[str, Any]
    resolver: "SchemaResolver"

    operations: List[Operation] = field(default_factory=list)
    operations_by_tag: Dict[str, List[Operation]] = field(default_factory=dict)

    host: Optional[str] = None
    base_path: Optional[str] = None
    servers: List[str] = field(default_factory=list)

    @property
    def schemas(self) -> List[AggregateSchema]:
        return self.resolver.schemas

    def base_url(self, override: Optional[str] = None) -> str:
        """Базовый URL: из конфига, из host/basePath или из servers"""
        if override:
            return override
        if self.host:
            return f"https://{self.host}{self.base_path or ''}"
        if self.servers:
            return self.servers[0]
        return "https://localhost" + (self.base_path or "")

    def add_operation(self, operation: Operation) -> None:
        self.operations.append(operation)
        for tag in operation.tags or [DEFAULT_TAG]:
            self.operations_by_tag.setdefault(tag, []).append(operation)
