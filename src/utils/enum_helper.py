"""Enum conversion utilities for config parsing"""

from enum import Enum
from typing import Any, List, Optional, Type, TypeVar

from models.errors import ConfigurationError

# Generic type for any Enum subclass
E = TypeVar("E", bound=Enum)


class EnumHelper:
    """
    Parse config strings into Enum members:
    - by member name (case-insensitive): "debug" → LogLevel.DEBUG
    - by member value: "FadeIn" → AnimationType.FADE_IN
    """

    @staticmethod
    def from_string(enum_class: Type[E], name: Any, default: Optional[E] = None,
                    field: Optional[str] = None) -> E:
        """
        Parse string (name or value) to Enum member.

        Args:
            enum_class: Enum class to parse into
            name: Member name (case-insensitive) or member value
            default: Returned when name is None
            field: Config field name, used in the error

        Raises:
            ConfigurationError: no matching member
        """
        if isinstance(name, enum_class):
            return name
        if name is None and default is not None:
            return default

        for member in enum_class:
            if member.value == name:
                return member
            if isinstance(name, str) and member.name.upper() == name.upper():
                return member

        raise ConfigurationError(
            f"Invalid {enum_class.__name__}: {name!r}, expected one of: "
            f"{', '.join(EnumHelper.list_names(enum_class, lowercase=True))}",
            field=field,
        )

    @staticmethod
    def list_names(enum_class: Type[E], lowercase: bool = False) -> List[str]:
        if lowercase:
            return [member.name.lower() for member in enum_class]
        return [member.name for member in enum_class]
