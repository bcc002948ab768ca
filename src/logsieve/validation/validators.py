"""
Reusable validation functions for configuration values.

Each validator returns the normalised value or raises ``ValidationError``
naming the offending field.
"""

from pathlib import Path
from typing import Any, Iterable, List, Optional, Tuple, Union

from .exceptions import ValidationError


def validate_positive_integer(
    value: Any,
    min_value: int = 1,
    max_value: Optional[int] = None,
    field_name: str = "value"
) -> int:
    """
    Validate that a value is a positive integer.

    Args:
        value: Value to validate
        min_value: Minimum allowed value (inclusive)
        max_value: Maximum allowed value (inclusive), None for no limit
        field_name: Name of the field being validated

    Returns:
        Validated integer value

    Raises:
        ValidationError: If validation fails
    """
    if isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value}",
            field_name=field_name,
            value=value
        )
    try:
        int_value = int(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value}",
            field_name=field_name,
            value=value
        )
    if int_value < min_value:
        raise ValidationError(
            f"{field_name} must be >= {min_value}, got {int_value}",
            field_name=field_name,
            value=value
        )
    if max_value is not None and int_value > max_value:
        raise ValidationError(
            f"{field_name} must be <= {max_value}, got {int_value}",
            field_name=field_name,
            value=value
        )
    return int_value


def validate_positive_float(
    value: Any,
    min_value: float = 0.0,
    max_value: Optional[float] = None,
    field_name: str = "value"
) -> float:
    """
    Validate that a value is a positive float.

    Args:
        value: Value to validate
        min_value: Minimum allowed value (inclusive)
        max_value: Maximum allowed value (inclusive), None for no limit
        field_name: Name of the field being validated

    Returns:
        Validated float value

    Raises:
        ValidationError: If validation fails
    """
    try:
        float_value = float(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"{field_name} must be a valid number, got {value}",
            field_name=field_name,
            value=value
        )
    if float_value < min_value:
        raise ValidationError(
            f"{field_name} must be >= {min_value}, got {float_value}",
            field_name=field_name,
            value=value
        )
    if max_value is not None and float_value > max_value:
        raise ValidationError(
            f"{field_name} must be <= {max_value}, got {float_value}",
            field_name=field_name,
            value=value
        )
    return float_value


def validate_directory(path: Union[str, Path], field_name: str = "directory") -> Path:
    """
    Validate that a path exists and is a directory.

    Returns:
        The resolved absolute path

    Raises:
        ValidationError: If the path is missing or not a directory
    """
    candidate = Path(path).expanduser()
    if not candidate.exists():
        raise ValidationError(
            f"{field_name} does not exist: {candidate}",
            field_name=field_name,
            value=str(path)
        )
    if not candidate.is_dir():
        raise ValidationError(
            f"{field_name} is not a directory: {candidate}",
            field_name=field_name,
            value=str(path)
        )
    return candidate.resolve()


def validate_enum_choice(
    value: Any,
    choices: List[str],
    field_name: str = "value",
    case_sensitive: bool = True
) -> str:
    """
    Validate that a value is one of the allowed choices.

    Args:
        value: Value to validate
        choices: List of allowed choices
        field_name: Name of the field being validated
        case_sensitive: Whether the comparison should be case-sensitive

    Returns:
        Validated choice, in the spelling used by ``choices``

    Raises:
        ValidationError: If value is not in choices
    """
    str_value = str(value)

    if case_sensitive:
        if str_value not in choices:
            raise ValidationError(
                f"{field_name} must be one of {choices}, got {value}",
                field_name=field_name,
                value=value
            )
        return str_value

    lower_choices = [choice.lower() for choice in choices]
    lower_value = str_value.lower()
    if lower_value not in lower_choices:
        raise ValidationError(
            f"{field_name} must be one of {choices}, got {value}",
            field_name=field_name,
            value=value
        )
    return choices[lower_choices.index(lower_value)]


def validate_patterns(patterns: Any, field_name: str = "patterns") -> Tuple[str, ...]:
    """
    Validate the exclusion pattern list.

    Duplicates are collapsed while keeping first-seen order. An empty list is
    valid (no-op filter) but an empty string pattern is not, since it would
    match every line.

    Raises:
        ValidationError: If patterns is not a list of non-empty strings
    """
    if patterns is None:
        return ()
    if isinstance(patterns, (str, bytes)) or not isinstance(patterns, Iterable):
        raise ValidationError(
            f"{field_name} must be a list of strings, got {patterns!r}",
            field_name=field_name,
            value=patterns
        )

    unique: dict = {}
    for index, pattern in enumerate(patterns):
        if not isinstance(pattern, str):
            raise ValidationError(
                f"{field_name}[{index}] must be a string, got {pattern!r}",
                field_name=field_name,
                value=pattern
            )
        if pattern == "":
            raise ValidationError(
                f"{field_name}[{index}] must not be empty",
                field_name=field_name,
                value=pattern
            )
        unique.setdefault(pattern, None)
    return tuple(unique)


def validate_extensions(extensions: Any, field_name: str = "extensions") -> Tuple[str, ...]:
    """
    Validate file extensions, normalising each to start with a dot.

    Raises:
        ValidationError: If the list is empty or holds non-string values
    """
    if isinstance(extensions, str) or not isinstance(extensions, Iterable):
        raise ValidationError(
            f"{field_name} must be a list of strings, got {extensions!r}",
            field_name=field_name,
            value=extensions
        )

    normalised = []
    for ext in extensions:
        if not isinstance(ext, str) or not ext.strip("."):
            raise ValidationError(
                f"{field_name} contains an invalid extension: {ext!r}",
                field_name=field_name,
                value=ext
            )
        normalised.append(ext if ext.startswith(".") else f".{ext}")

    if not normalised:
        raise ValidationError(
            f"{field_name} must contain at least one extension",
            field_name=field_name,
            value=extensions
        )
    return tuple(normalised)
