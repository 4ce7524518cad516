from __future__ import annotations


class SchemaCheckError(Exception):
    pass


class ValidatorNotFound(SchemaCheckError):
    def __init__(self, validator: str, *, reason: str | None = None) -> None:
        self.validator = validator
        self.reason = reason
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.reason:
            return f"Validator not found: {self.validator} ({self.reason})"
        return f"Validator not found: {self.validator}"


class SettingsError(SchemaCheckError):
    pass
