from .config import OpenApiConfig
from .exceptions import DocumentError, GeneratorError, SchemaError
from .generator import ApiClientGenerator, generate_client
from .loader import load_document

__all__ = [
    "ApiClientGenerator",
    "DocumentError",
    "GeneratorError",
    "OpenApiConfig",
    "SchemaError",
    "generate_client",
    "load_document",
]
