"""
===============================================
Condition translation for parameterized WHERE.
===============================================

Turns a mapping of column name to constraint value into a predicate clause
and the positional arguments bound to its placeholders. Pure functions, no
I/O.

Constraint values:
    - non-string value        -> ``col = $n``
    - ``'>=21'``, ``'<>x'``   -> ``col >= $n`` with the token stripped
    - ``'a*b?'``              -> ``col LIKE $n`` with ``*``/``?`` as ``%``/``_``
    - any other string        -> ``col = $n``

Comparison tokens are tried across the whole token set before wildcards are
looked at, so ``'>=a*'`` is a comparison against ``'a*'``. Literal ``%`` and
``_`` inside a pattern are not escaped.

Example:
    >>> where_builder({'age': '>=21', 'name': 'J*'})
    ('age >= $1 AND name LIKE $2', ['21', 'J%'])
    >>> where_builder({'age': '>=21'}, placeholder='format')
    ('age >= %s', ['21'])
"""

from collections.abc import Mapping
from typing import Any, Callable, Dict, List, Tuple

# Longer tokens first: '>=' must win over '>'
COMPARISON_OPERATORS = ('>=', '<=', '<>', '>', '<')

WILDCARDS = {'*': '%', '?': '_'}

PLACEHOLDER_STYLES: Dict[str, Callable[[int], str]] = {
    'numeric': lambda index: f"${index}",
    'format': lambda index: '%s',
}

# DB-API paramstyle (as reported by a SQLAlchemy dialect) -> placeholder style
_PARAMSTYLE_PLACEHOLDERS = {
    'numeric_dollar': 'numeric',
    'format': 'format',
    'pyformat': 'format',
}


class TranslationError(ValueError):
    """Raised when conditions cannot be translated to a predicate clause."""
    pass


def placeholder_for_paramstyle(paramstyle: str) -> str:
    """
    Map a DB-API paramstyle to a placeholder style understood by where_builder.

    Args:
        paramstyle: Driver paramstyle, e.g. ``engine.dialect.paramstyle``

    Returns:
        ``'numeric'`` or ``'format'``

    Raises:
        TranslationError: If the driver uses a style without positional binds
    """
    try:
        return _PARAMSTYLE_PLACEHOLDERS[paramstyle]
    except KeyError:
        raise TranslationError(
            f"Unsupported paramstyle '{paramstyle}', "
            f"expected one of {sorted(_PARAMSTYLE_PLACEHOLDERS)}"
        ) from None


def classify_value(value: Any) -> Tuple[str, Any]:
    """
    Work out the SQL operator for a constraint value.

    Args:
        value: Constraint value from a conditions mapping

    Returns:
        Tuple of (operator, value to bind)

    Example:
        >>> classify_value('<>closed')
        ('<>', 'closed')
        >>> classify_value('a*b?')
        ('LIKE', 'a%b_')
        >>> classify_value(42)
        ('=', 42)
    """
    if not isinstance(value, str):
        return '=', value

    for operator in COMPARISON_OPERATORS:
        if value.startswith(operator):
            return operator, value[len(operator):]

    if any(marker in value for marker in WILDCARDS):
        pattern = value
        for marker, replacement in WILDCARDS.items():
            pattern = pattern.replace(marker, replacement)
        return 'LIKE', pattern

    return '=', value


def where_builder(
    conditions: Mapping,
    placeholder: str = 'numeric'
) -> Tuple[str, List[Any]]:
    """
    Build a predicate clause from a conditions mapping.

    Args:
        conditions: Ordered mapping of column name to constraint value
        placeholder: Placeholder style, 'numeric' ($1, $2...) or 'format' (%s)

    Returns:
        Tuple of (clause, args). An empty mapping gives ``('', [])`` and the
        caller must leave out the WHERE keyword.

    Raises:
        TranslationError: If conditions is not a mapping, a key is not a
            string, or the placeholder style is unknown
    """
    if not isinstance(conditions, Mapping):
        raise TranslationError(
            f"Conditions must be a mapping, got {type(conditions).__name__}"
        )

    try:
        render = PLACEHOLDER_STYLES[placeholder]
    except KeyError:
        raise TranslationError(f"Unknown placeholder style '{placeholder}'") from None

    clauses = []
    args = []

    for index, (column, value) in enumerate(conditions.items(), start=1):
        if not isinstance(column, str) or not column:
            raise TranslationError(f"Column names must be non-empty strings, got {column!r}")

        operator, bound = classify_value(value)
        clauses.append(f"{column} {operator} {render(index)}")
        args.append(bound)

    return ' AND '.join(clauses), args
