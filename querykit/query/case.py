"""CASE expression builder.

A :class:`CaseExpression` is a self-contained sub-tree that renders to a
SQL fragment plus its own ordered bindings.  Passing one to
:meth:`~querykit.query.select.SelectQuery.select` inlines the fragment into
the select list and merges the bindings into the parent render.

Two forms are supported::

    # Simple CASE: compare a subject column against each arm's value
    CaseExpression("status").when("active").then("Active User").else_("Unknown")

    # Searched CASE: each arm carries its own condition
    (
        CaseExpression()
        .when("age", "<", 18).then("minor")
        .when("country", "USA").then("domestic")   # implicit "="
        .when("score > bonus").then("raw condition")
        .as_("label")
    )
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Self, Union

from querykit.errors import CaseExpressionError
from querykit.query.base import MISSING, RenderedSQL
from querykit.query.bindings import BindingAccumulator


@dataclass
class SimpleArm:
    """``WHEN ? THEN ?`` against the subject column."""

    value: Any
    then: Any = None


@dataclass
class SearchedArm:
    """``WHEN column operator ? THEN ?``."""

    column: str
    operator: str
    value: Any
    then: Any = None


@dataclass
class RawArm:
    """``WHEN <raw condition> THEN ?``."""

    condition: str
    then: Any = None


Arm = Union[SimpleArm, SearchedArm, RawArm]


class CaseExpression:
    """Fluent builder for ``CASE … END`` expressions.

    Args:
        column: Optional subject column.  When set, single-argument
            :meth:`when` calls create simple-form arms.
    """

    def __init__(self, column: str | None = None) -> None:
        self._column = column
        self._arms: list[Arm] = []
        self._else_value: Any = None
        self._alias: str | None = None

    @property
    def column(self) -> str | None:
        return self._column

    @property
    def arms(self) -> tuple[Arm, ...]:
        return tuple(self._arms)

    @property
    def alias(self) -> str | None:
        return self._alias

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def when(self, condition: Any, operator: Any = MISSING, value: Any = MISSING) -> Self:
        """Add a WHEN arm.

        * ``when(value)`` with a subject column: simple arm;
        * ``when(column, value)``: searched arm with ``=``;
        * ``when(column, operator, value)``: searched arm;

        With a subject column every arm renders as ``WHEN ? THEN ?`` and
        binds only its compare value; the arm column and operator are
        ignored.
        * ``when("raw sql")`` without a subject column: raw condition.
        """
        if operator is MISSING:
            if self._column is not None:
                self._arms.append(SimpleArm(condition))
            else:
                self._arms.append(RawArm(str(condition)))
        elif value is MISSING:
            self._arms.append(SearchedArm(condition, "=", operator))
        else:
            self._arms.append(SearchedArm(condition, str(operator), value))
        return self

    def then(self, value: Any) -> Self:
        """Set the result of the most recent WHEN arm.

        Raises:
            CaseExpressionError: If no WHEN arm has been added yet.
        """
        if not self._arms:
            raise CaseExpressionError("No WHEN clause to add THEN to.")
        self._arms[-1].then = value
        return self

    def else_(self, value: Any) -> Self:
        self._else_value = value
        return self

    def as_(self, alias: str) -> Self:
        self._alias = alias
        return self

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self) -> RenderedSQL:
        """Render to ``CASE … END [AS alias]`` and its bindings.

        Raises:
            CaseExpressionError: If the expression has no WHEN arm.
        """
        if not self._arms:
            raise CaseExpressionError("CASE expression must have at least one WHEN clause.")

        bindings = BindingAccumulator()
        add = bindings.add
        parts = ["CASE"]
        if self._column is not None:
            parts.append(self._column)

        for arm in self._arms:
            if isinstance(arm, RawArm):
                parts.append(f"WHEN {arm.condition} THEN {add(arm.then)}")
            elif isinstance(arm, SimpleArm) or self._column is not None:
                parts.append(f"WHEN {add(arm.value)} THEN {add(arm.then)}")
            else:
                parts.append(
                    f"WHEN {arm.column} {arm.operator} {add(arm.value)} THEN {add(arm.then)}"
                )

        if self._else_value is not None:
            parts.append(f"ELSE {add(self._else_value)}")
        parts.append("END")
        if self._alias:
            parts.append(f"AS {self._alias}")
        return RenderedSQL(" ".join(parts), bindings.values)

    def to_sql(self) -> str:
        return self.render().sql

    @property
    def bindings(self) -> list[Any]:
        return self.render().bindings

    def __str__(self) -> str:
        return self.to_sql()
