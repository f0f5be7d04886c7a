from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class ParameterPosition(str, Enum):
    PATH = "path"
    QUERY = "query"
    HEADER = "header"
    FORM_DATA = "formData"
    BODY = "body"

    @property
    def rank(self) -> int:
        return list(ParameterPosition).index(self)


class ParameterType(str, Enum):
    NONE = "none"
    INTEGER = "integer"
    STRING = "string"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"
    DICTIONARY = "dictionary"
    NUMBER = "number"
    FILE = "file"


class ParameterFormat(str, Enum):
    UUID = "uuid"
    DOUBLE = "double"
    FLOAT = "float"
    INT32 = "int32"
    INT64 = "int64"
    DATE_TIME = "date-time"


# Форматы имеют смысл только для числовых типов
NUMERIC_TYPES = {ParameterType.INTEGER, ParameterType.NUMBER}

# Типы, которым обязателен items
CONTAINER_TYPES = {ParameterType.ARRAY, ParameterType.DICTIONARY}


class Primitive(BaseModel):
    """Рекурсивное описание типа"""

    type: ParameterType = ParameterType.NONE
    format: Optional[ParameterFormat] = None
    items: Optional["Primitive"] = None
    schema_ref: Optional[str] = None

    def __str__(self):
        if self.type in CONTAINER_TYPES and self.items is not None:
            return f"[{self.items}]"
        return self.schema_ref or self.type.value


class PropertyField(Primitive):
    name: str
    required: bool = False
    enum: Optional[List[str]] = None
    additional_properties: Optional[Primitive] = None


class OperationParameter(PropertyField):
    position: ParameterPosition
    description: Optional[str] = None


class OperationResult(BaseModel):
    description: str = ""
    primitive: Primitive = Primitive()

    def __str__(self):
        return str(self.primitive)


class AggregateSchema(BaseModel):
    """Именованная схема объекта. Не изменяется после построения"""

    model_config = ConfigDict(frozen=True)

    title: str
    properties: List[PropertyField] = []
    placeholder: bool = False

    @property
    def sorted_properties(self) -> List[PropertyField]:
        return sorted(self.properties, key=lambda p: p.name)


class Operation(BaseModel):
    id: str
    path: str
    method: str

    description: Optional[str] = None
    tags: List[str] = []

    parameters: List[OperationParameter] = []
    responses: Dict[str, OperationResult] = {}

    has_authorization: bool = True
    deprecated: bool = False

    consumes: List[str] = []
    produces: List[str] = []

    def __str__(self):
        return f"{self.method}: {self.path} - {self.id}"

    def parameters_at(self, *positions: ParameterPosition) -> List[OperationParameter]:
        return [p for p in self.parameters if p.position in positions]


Primitive.model_rebuild()
