"""
Исключения генератора
"""

from typing import Optional


class GeneratorError(Exception):
    """Базовая ошибка генерации"""

    def __init__(self, message: str, location: Optional[str] = None):
        self.message = message
        self.location = location
        super().__init__(f"{location}: {message}" if location else message)


class DocumentError(GeneratorError):
    """Документ не читается или имеет неверную структуру"""


class SchemaError(GeneratorError):
    """Схема не разрешается или содержит неизвестный тип/формат"""
