"""Clause model for the query builders.

Every condition a builder accumulates is one of a closed set of immutable
clause variants.  Each variant carries exactly the data it needs to render
itself and to contribute its bindings; the renderer dispatches on the type.

Boolean joining
---------------
``boolean`` is the keyword that *precedes* the clause when it is not the
first one in its list.  The marker of the first clause is never rendered.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal, Union

if TYPE_CHECKING:
    from querykit.query.select import SelectQuery

Boolean = Literal["AND", "OR"]
JoinKind = Literal["INNER", "LEFT", "RIGHT", "CROSS"]
Direction = Literal["ASC", "DESC"]
UnionKind = Literal["UNION", "UNION ALL"]


# ---------------------------------------------------------------------------
# WHERE / HAVING conditions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BasicClause:
    """``column operator ?`` with one bound value."""

    column: str
    operator: str
    value: Any
    boolean: Boolean = "AND"


@dataclass(frozen=True)
class InClause:
    """``column IN (?, ...)`` with one binding per value."""

    column: str
    values: tuple[Any, ...]
    boolean: Boolean = "AND"


@dataclass(frozen=True)
class NotInClause:
    """``column NOT IN (?, ...)`` with one binding per value."""

    column: str
    values: tuple[Any, ...]
    boolean: Boolean = "AND"


@dataclass(frozen=True)
class NullClause:
    """``column IS NULL``."""

    column: str
    boolean: Boolean = "AND"


@dataclass(frozen=True)
class NotNullClause:
    """``column IS NOT NULL``."""

    column: str
    boolean: Boolean = "AND"


@dataclass(frozen=True)
class BetweenClause:
    """``column BETWEEN ? AND ?``."""

    column: str
    low: Any
    high: Any
    boolean: Boolean = "AND"


@dataclass(frozen=True)
class RawClause:
    """Verbatim SQL with caller-supplied bindings.

    The number of ``?`` tokens in ``sql`` is not checked against
    ``bindings``.
    """

    sql: str
    bindings: tuple[Any, ...] = ()
    boolean: Boolean = "AND"


@dataclass(frozen=True)
class ExistsClause:
    """``EXISTS (sql)`` carrying the subquery's own bindings."""

    sql: str
    bindings: tuple[Any, ...] = ()
    boolean: Boolean = "AND"


@dataclass(frozen=True)
class NotExistsClause:
    """``NOT EXISTS (sql)`` carrying the subquery's own bindings."""

    sql: str
    bindings: tuple[Any, ...] = ()
    boolean: Boolean = "AND"


Clause = Union[
    BasicClause,
    InClause,
    NotInClause,
    NullClause,
    NotNullClause,
    BetweenClause,
    RawClause,
    ExistsClause,
    NotExistsClause,
]

#: HAVING conditions share the shape of a basic WHERE condition.
HavingClause = BasicClause


# ---------------------------------------------------------------------------
# Other SELECT pieces
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class JoinClause:
    """A single JOIN entry.  CROSS joins carry only ``table``."""

    kind: JoinKind
    table: str
    left: str | None = None
    operator: str | None = None
    right: str | None = None


@dataclass(frozen=True)
class OrderClause:
    """A single ORDER BY item."""

    column: str
    direction: Direction = "ASC"


@dataclass(frozen=True)
class UnionClause:
    """A UNION branch appended after the primary statement.

    ``query`` is either raw SQL text or a ``SelectQuery`` that is rendered
    when the owning query renders.
    """

    kind: UnionKind
    query: SelectQuery | str
