from typing import Optional


class TemplateError(ValueError):
    """Raised when template text cannot be turned into instructions."""


class TemplateSyntaxError(TemplateError):
    def __init__(self, message: str, position: int, char: Optional[str] = None, state: str = ""):
        self.position = position
        self.char = char
        self.state = state
        where = f"at offset {position}"
        if char is not None:
            where += f" ({char!r})"
        super().__init__(f"{message} {where}")


class TemplateValidationError(TemplateError):
    def __init__(self, command: str, message: str):
        self.command = command
        super().__init__(message)
