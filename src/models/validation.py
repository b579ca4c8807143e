"""
Option validation rules for animation primitives

Each primitive declares a rule set (required fields, type per field,
numeric range per field, enum membership per field). validate_options()
checks an options mapping against it and raises ValidationError on the
first violation.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

from models.errors import ConfigurationError, ValidationError


@dataclass(frozen=True)
class Range:
    """Inclusive numeric range (min/max) or minimum list length"""
    min: Optional[float] = None
    max: Optional[float] = None
    min_length: Optional[int] = None


@dataclass(frozen=True)
class ValidationRules:
    """Declarative rule set for one primitive type"""
    required: List[str] = field(default_factory=list)
    types: Dict[str, str] = field(default_factory=dict)
    ranges: Dict[str, Range] = field(default_factory=dict)
    enums: Dict[str, Sequence[Any]] = field(default_factory=dict)


def type_name(value: Any) -> str:
    """Type name of a value in the vocabulary of the rule sets"""
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, str):
        return "string"
    if value is None:
        return "null"
    return type(value).__name__


def is_number(value: Any) -> bool:
    """True for finite ints/floats (bool excluded)"""
    if type_name(value) != "number":
        return False
    return isinstance(value, int) or math.isfinite(value)


def validate_options(options: Optional[Mapping[str, Any]], rules: ValidationRules) -> None:
    """
    Validate options against a rule set.

    Args:
        options: Primitive options
        rules: Rule set declared by the primitive class

    Raises:
        ConfigurationError: options missing entirely
        ValidationError: first violated rule (field + constraint)
    """
    if options is None:
        raise ConfigurationError("Options object is required")

    for name in rules.required:
        if options.get(name) is None:
            raise ValidationError(name, "is required")

    for name, expected in rules.types.items():
        value = options.get(name)
        if value is None:
            continue
        actual = type_name(value)
        if actual != expected:
            raise ValidationError(name, f"must be of type {expected}, got {actual}")
        if expected == "number" and not is_number(value):
            raise ValidationError(name, f"must be a finite number, got {value!r}")
        if expected == "array" and name == "leds":
            for led in value:
                if not is_number(led) or int(led) != led:
                    raise ValidationError(name, f"must contain integer channels, got {led!r}")

    for name, bounds in rules.ranges.items():
        value = options.get(name)
        if value is None:
            continue
        if bounds.min is not None and is_number(value) and value < bounds.min:
            raise ValidationError(name, f"must be >= {bounds.min:g}")
        if bounds.max is not None and is_number(value) and value > bounds.max:
            raise ValidationError(name, f"must be <= {bounds.max:g}")
        if bounds.min_length is not None and isinstance(value, (list, tuple)) and len(value) < bounds.min_length:
            raise ValidationError(name, f"must have at least {bounds.min_length} elements")

    for name, allowed in rules.enums.items():
        value = options.get(name)
        if value is not None and value not in allowed:
            raise ValidationError(name, f"must be one of: {', '.join(str(a) for a in allowed)}")
