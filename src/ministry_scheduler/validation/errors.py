"""Validation error reporting for settings files."""

from pydantic import ValidationError

MAX_ERRORS_DISPLAYED = 10


class FileValidationError(Exception):
    """A settings file is not valid JSON or holds invalid settings."""

    def __init__(self, file_path: str, validation_error: ValidationError):
        super().__init__(file_path)
        self.file_path = file_path
        self.validation_error = validation_error

    def errors(self) -> list[dict]:
        return self.validation_error.errors()

    def __str__(self) -> str:
        """
        One line per problem, named by setting.

        Example:
            Invalid settings in config.json:
              role_order: Value error, duplicate role in role_order
              (whole file): Invalid JSON: ...
        """
        problems = self.errors()
        lines = [f"Invalid settings in {self.file_path}:"]
        for error in problems[:MAX_ERRORS_DISPLAYED]:
            setting = ".".join(str(part) for part in error.get("loc", ()))
            lines.append(f"  {setting or '(whole file)'}: {error.get('msg', '')}")

        hidden = len(problems) - MAX_ERRORS_DISPLAYED
        if hidden > 0:
            lines.append(f"  ... and {hidden} more problem(s)")
        return "\n".join(lines)
