from typing import Optional, Union, List

from pydantic import BaseModel, field_validator

INDENT = "    "


def indent(text: str, level: int = 1) -> str:
    """Сдвиг всех непустых строк на level отступов"""
    prefix = INDENT * level
    return "\n".join(prefix + line if line else line for line in text.split("\n"))


class Variable(BaseModel):
    """Выражение типа Swift: Int, [Pet], [String: Int], Pet?"""

    value: Union["Variable", str]
    wrap_name: Optional[str] = None

    @field_validator("wrap_name")
    def wrap_name_check(cls, value):
        if value not in (None, "Array", "Dictionary", "Optional"):
            raise ValueError(f"Unknown wrap: {value}")
        return value

    def __str__(self):
        if self.wrap_name == "Array":
            return f"[{self.value}]"
        if self.wrap_name == "Dictionary":
            return f"[String: {self.value}]"
        if self.wrap_name == "Optional":
            return f"{self.value}?"
        return str(self.value)

    @property
    def is_optional(self) -> bool:
        return self.wrap_name == "Optional"

    def optional(self) -> "Variable":
        if self.is_optional:
            return self
        return Variable(value=self, wrap_name="Optional")


class Parameter(BaseModel):
    name: str

    var_type: Optional[Variable] = None
    default: Optional[str] = None

    def __str__(self):
        return (
            self.name
            + (f": {self.var_type}" if self.var_type else "")
            + (f" = {self.default}" if self.default else "")
        )


class CodeBlock(BaseModel):
    order: int = 0
    code: str = ""

    def __str__(self):
        return self.code.replace("\t", INDENT)


class Property(BaseModel):
    """Хранимое свойство: public let name: Type"""

    parameter: Parameter
    access: str = "public"
    mutable: bool = False
    order: int = 0

    def __str__(self):
        keyword = "var" if self.mutable else "let"
        return f"{self.access} {keyword} {self.parameter}".lstrip()


class EnumCase(BaseModel):
    name: str
    parameters: List[Parameter] = []
    raw_value: Optional[str] = None

    doc: List[str] = []
    attributes: List[str] = []
    order: int = 0

    def __str__(self):
        lines = [f"/// {line}".rstrip() for line in self.doc]
        lines.extend(self.attributes)

        declaration = f"case {self.name}"
        if self.parameters:
            declaration += "(" + ", ".join(map(str, self.parameters)) + ")"
        if self.raw_value is not None:
            declaration += f" = {self.raw_value}"

        lines.append(declaration)
        return "\n".join(lines)


class SwitchCase(BaseModel):
    patterns: List[str]
    body: List[str]

    def __str__(self):
        # Пустой список шаблонов - ветка default
        head = "case " + ", ".join(self.patterns) + ":" if self.patterns else "default:"
        if len(self.body) == 1:
            return f"{head} {self.body[0]}"
        return head + "\n" + indent("\n".join(self.body))


class Switch(BaseModel):
    """switch subject { case ...: ... default: ... }"""

    subject: str
    cases: List[SwitchCase] = []
    default: Optional[List[str]] = None

    def add_case(self, patterns: Union[str, List[str]], *body: str) -> "Switch":
        if isinstance(patterns, str):
            patterns = [patterns]
        self.cases.append(SwitchCase(patterns=patterns, body=list(body)))
        return self

    def __str__(self):
        lines = [f"switch {self.subject} {{"]
        lines.extend(map(str, self.cases))
        if self.default is not None:
            lines.append(str(SwitchCase(patterns=[], body=self.default)))
        lines.append("}")
        return "\n".join(lines)


class Function(BaseModel):
    name: str
    parameters: List[Parameter] = []
    response: Optional[str] = None

    access: str = "public"
    throws: bool = False
    doc: List[str] = []

    code: List[Union[Switch, CodeBlock]] = []
    order: int = 0

    def __str__(self) -> str:
        signature = f"{self.access} ".lstrip()
        if self.name == "init":
            signature += "init("
        else:
            signature += f"func {self.name}("
        signature += ", ".join(map(str, self.parameters)) + ")"
        if self.throws:
            signature += " throws"
        if self.response:
            signature += f" -> {self.response}"

        lines = [f"/// {line}".rstrip() for line in self.doc]
        lines.append(signature + " {")
        lines.extend(indent(str(block)) for block in self.code)
        lines.append("}")
        return "\n".join(lines)

    def add_code_block(self, code_block: Union[Switch, CodeBlock, str]) -> "Function":
        if isinstance(code_block, str):
            code_block = CodeBlock(code=code_block)

        self.code.append(code_block)
        return self


class ComputedProperty(BaseModel):
    """public var name: Type { ... }"""

    name: str
    var_type: str
    access: str = "public"

    code: Union[Switch, CodeBlock]
    order: int = 0

    def __str__(self):
        head = f"{self.access} var {self.name}: {self.var_type}".lstrip()
        body = str(self.code)
        if "\n" not in body:
            return f"{head} {{ {body} }}"
        return f"{head} {{\n{indent(body)}\n}}"


Member = Union[
    "Declaration", Property, EnumCase, Function, ComputedProperty, CodeBlock
]


class Declaration(BaseModel):
    """struct / enum / extension со вложенными членами"""

    kind: str
    name: str
    inherits: List[str] = []
    access: str = "public"

    members: List[Member] = []
    order: int = 0

    def __str__(self) -> str:
        head = f"{self.access} ".lstrip() if self.kind != "extension" else ""
        head += f"{self.kind} {self.name}"
        if self.inherits:
            head += ": " + ", ".join(self.inherits)

        body = self._render_members()
        if not body:
            return head + " {}"
        return head + " {\n" + indent(body) + "\n}"

    def _render_members(self) -> str:
        # Подряд идущие case и свойства без пустых строк между ними
        chunks: List[str] = []
        previous_simple = False
        for member in sorted(self.members, key=lambda x: x.order, reverse=True):
            simple = isinstance(member, (Property, EnumCase))
            text = str(member)
            if chunks and simple and previous_simple and "\n" not in text:
                chunks[-1] += "\n" + text
            else:
                chunks.append(text)
            previous_simple = simple and "\n" not in text
        return "\n\n".join(chunks)

    def add(self, member: Member) -> Member:
        self.members.append(member)
        return member

    def add_declaration(self, declaration: Union["Declaration", str], **kwargs) -> "Declaration":
        if isinstance(declaration, str):
            declaration = Declaration(name=declaration, **kwargs)

        self.members.append(declaration)
        return declaration


class CodeFile(BaseModel):
    file_name: str

    header: List[str] = []
    imports: List[str] = []
    declarations: List[Union[Declaration, CodeBlock]] = []

    def __str__(self):
        parts = []
        if self.header:
            parts.append("\n".join(f"// {line}".rstrip() for line in self.header))
        if self.imports:
            parts.append("\n".join(f"import {name}" for name in self.imports))
        parts.extend(
            str(d)
            for d in sorted(self.declarations, key=lambda x: x.order, reverse=True)
        )
        return "\n\n".join(parts) + "\n"

    def add_declaration(self, declaration: Union[Declaration, str], **kwargs) -> Declaration:
        if isinstance(declaration, str):
            declaration = Declaration(name=declaration, **kwargs)

        self.declarations.append(declaration)
        return declaration

    def add_code_block(self, code_block: Union[CodeBlock, str], **kwargs) -> "CodeFile":
        if isinstance(code_block, str):
            code_block = CodeBlock(code=code_block, **kwargs)

        self.declarations.append(code_block)
        return self


Variable.model_rebuild()
Declaration.model_rebuild()


class Project(BaseModel):
    name: str
    files: List[CodeFile] = []

    def add_file(self, file_name: Union[CodeFile, str], **kwargs) -> CodeFile:
        if isinstance(file_name, str):
            file_name = CodeFile(file_name=file_name, **kwargs)

        self.files.append(file_name)
        return file_name

    def get_file(self, file_name: str) -> Optional[CodeFile]:
        for code_file in self.files:
            if code_file.file_name == file_name:
                return code_file
        return None
