from typing import Any, Optional


class LiteraryValidator:
    """Numeric checks for literary values, tendencies and thresholds read from scenario files."""

    @staticmethod
    def integer(raw: Any, field: str) -> int:
        # bool is an int subclass; "true" is not a weight
        if isinstance(raw, bool) or not isinstance(raw, int):
            raise ValueError(f"{field} must be an integer, got {raw!r}")
        return raw

    @staticmethod
    def boolean(raw: Any, field: str) -> bool:
        # "false" is a non-empty string, so truthiness cannot be used
        if not isinstance(raw, bool):
            raise ValueError(f"{field} must be true or false, got {raw!r}")
        return raw

    @staticmethod
    def literary_value(raw: Any, field: str) -> int:
        value = LiteraryValidator.integer(raw, field)
        if value < 0:
            raise ValueError(f"{field} must be non-negative, got {value}")
        return value

    @staticmethod
    def capacity(raw: Any, field: str) -> int:
        """Library limits. Zero is accepted and yields a library that is always full."""
        value = LiteraryValidator.integer(raw, field)
        if value < 0:
            raise ValueError(f"{field} must be non-negative, got {value}")
        return value


class TextValidator:
    """Very basic text validations for names and titles."""

    @staticmethod
    def _is_non_empty(text: Optional[str]) -> bool:
        if not isinstance(text, str):
            return False
        return bool(text.strip())

    @staticmethod
    def validate_title(title: Optional[str]) -> bool:
        return TextValidator._is_non_empty(title)

    @staticmethod
    def validate_name(name: Optional[str]) -> bool:
        # must not be digits only
        if not TextValidator._is_non_empty(name):
            return False
        return not name.strip().isdigit()
