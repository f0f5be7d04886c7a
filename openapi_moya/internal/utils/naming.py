"""Утилиты для работы с именами Swift идентификаторов"""

import re

# Ключевые слова Swift, которые нельзя использовать без обратных кавычек
SWIFT_KEYWORDS = {
    "associatedtype",
    "class",
    "deinit",
    "enum",
    "extension",
    "fileprivate",
    "func",
    "import",
    "init",
    "inout",
    "internal",
    "let",
    "open",
    "operator",
    "private",
    "protocol",
    "public",
    "rethrows",
    "static",
    "struct",
    "subscript",
    "typealias",
    "var",
    "break",
    "case",
    "continue",
    "default",
    "defer",
    "do",
    "else",
    "fallthrough",
    "for",
    "guard",
    "if",
    "in",
    "repeat",
    "return",
    "switch",
    "where",
    "while",
    "as",
    "Any",
    "catch",
    "false",
    "is",
    "nil",
    "super",
    "self",
    "Self",
    "throw",
    "throws",
    "true",
    "try",
    "Type",
    "Protocol",
}


def escape_identifier(name: str) -> str:
    """
    Превращает произвольное имя из документа в допустимый Swift идентификатор.

    Единственная точка экранирования: все имена, которые попадают в
    сгенерированный код как идентификаторы, проходят через эту функцию.

    Examples:
        >>> escape_identifier("default")
        '`default`'
        >>> escape_identifier("in-progress")
        'in_progress'
        >>> escape_identifier("2fa")
        '_2fa'
    """
    name = re.sub(r"[^0-9A-Za-z_]", "_", name)

    if not name:
        return "_"

    if name[0].isdigit():
        name = f"_{name}"

    if name in SWIFT_KEYWORDS:
        return f"`{name}`"

    return name


def lowered_first_letter(name: str) -> str:
    return name[:1].lower() + name[1:]


def capitalized_first_letter(name: str) -> str:
    return name[:1].upper() + name[1:]


def strip_escape(identifier: str) -> str:
    """Убирает обратные кавычки (для сравнения имен и строковых литералов)"""
    return identifier.strip("`")


def swift_string_literal(value: str) -> str:
    """Строковый литерал Swift с экранированием"""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'
