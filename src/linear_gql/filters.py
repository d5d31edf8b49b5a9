# Copyright (c) 2026 Dedalus Labs, Inc. and its contributors
# SPDX-License-Identifier: MIT

"""Filter values for Linear's GraphQL filter inputs.

Filters are small immutable nodes that serialize to the exact nested,
camelCase shapes Linear expects (``IssueFilter``, ``ProjectFilter``,
``TeamFilter``, ``UserFilter``, ``WorkflowStateFilter``,
``IssueLabelFilter``). Optional comparator fields are omitted when unset,
never sent as ``null``.

Node types:
  StringFilter     -- eq / eqIgnoreCase / containsIgnoreCase
  NumberFilter     -- numeric eq
  DateComparator   -- lt / gt bounds
  ValueSet         -- nin (excluded values)
  MatchAll         -- ``{}``; matches anything (used under ``some``)
  Where            -- one object holding several named fields
  AnyOf            -- ``{"or": [...]}``
  AllOf            -- ``{"and": [...]}``

Issue filter builders:
  team, assignee, creator, status, project, label, priority, estimate,
  viewer, due_date, created_at, updated_at, exclude_completed,
  has_any_relation

Other builders:
  project_state, project_lead, team_key, user_email, workflow_state,
  state_team, label_team, labels_named, project_name

Composition:
  combine(filters)  -- None / the single filter / AllOf
  serialize(filter) -- JSON value (None stays None)
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

from linear_gql.types import JSONObject


class Filter(Protocol):
    """Anything that serializes to a Linear filter object."""

    def to_json(self) -> JSONObject: ...


# --- Leaf comparators ---


@dataclass(frozen=True, slots=True)
class StringFilter:
    """String comparator; unset comparators are omitted."""

    # fmt: off
    eq:                   str | None = None
    eq_ignore_case:       str | None = None
    contains_ignore_case: str | None = None
    # fmt: on

    def to_json(self) -> JSONObject:
        out: JSONObject = {}
        if self.eq is not None:
            out["eq"] = self.eq
        if self.eq_ignore_case is not None:
            out["eqIgnoreCase"] = self.eq_ignore_case
        if self.contains_ignore_case is not None:
            out["containsIgnoreCase"] = self.contains_ignore_case
        return out


@dataclass(frozen=True, slots=True)
class NumberFilter:
    """Numeric equality."""

    eq: int | float

    def to_json(self) -> JSONObject:
        return {"eq": self.eq}


@dataclass(frozen=True, slots=True)
class DateComparator:
    """Date bounds; ``lt`` is "before", ``gt`` is "after"."""

    # fmt: off
    lt: str | None = None
    gt: str | None = None
    # fmt: on

    def to_json(self) -> JSONObject:
        out: JSONObject = {}
        if self.lt is not None:
            out["lt"] = self.lt
        if self.gt is not None:
            out["gt"] = self.gt
        return out


@dataclass(frozen=True, slots=True)
class ValueSet:
    """Exclusion set (``nin``)."""

    nin: tuple[str, ...]

    def to_json(self) -> JSONObject:
        return {"nin": list(self.nin)}


@dataclass(frozen=True, slots=True)
class MatchAll:
    """Empty filter object, e.g. the ``{}`` in ``relations: {some: {}}``."""

    def to_json(self) -> JSONObject:
        return {}


# --- Structure ---


@dataclass(frozen=True, slots=True)
class Where:
    """A single filter object with one or more named fields."""

    fields: tuple[tuple[str, Filter], ...]

    def to_json(self) -> JSONObject:
        return {name: value.to_json() for name, value in self.fields}


def where(**fields: Filter) -> Where:
    """Build a ``Where`` from keyword fields, keeping argument order."""
    return Where(tuple(fields.items()))


@dataclass(frozen=True, slots=True)
class AnyOf:
    """Disjunction."""

    filters: tuple[Filter, ...]

    def to_json(self) -> JSONObject:
        return {"or": [f.to_json() for f in self.filters]}


@dataclass(frozen=True, slots=True)
class AllOf:
    """Conjunction."""

    filters: tuple[Filter, ...]

    def to_json(self) -> JSONObject:
        return {"and": [f.to_json() for f in self.filters]}


def combine(filters: Iterable[Filter]) -> Filter | None:
    """Conjoin independently built filters.

    No filters yields None (omit the variable entirely), one filter is
    returned as-is, two or more are wrapped in ``AllOf`` in input order.
    Linear treats an empty filter object differently from an absent one,
    so the three cases must stay distinct.
    """
    items = tuple(filters)
    if not items:
        return None
    if len(items) == 1:
        return items[0]
    return AllOf(items)


def serialize(value: Filter | None) -> JSONObject | None:
    """Serialize an optional filter."""
    return value.to_json() if value is not None else None


# --- Issue filters ---


def _person(field_name: str, text: str) -> Where:
    # callers pass either an email or a display name
    return where(
        **{
            field_name: AnyOf(
                (
                    where(email=StringFilter(eq_ignore_case=text)),
                    where(displayName=StringFilter(eq_ignore_case=text)),
                )
            )
        }
    )


def team(key: str) -> Where:
    """Issues of the team with ``key`` (normalized to upper case)."""
    return where(team=where(key=StringFilter(eq_ignore_case=key.strip().upper())))


def assignee(text: str) -> Where:
    """Issues whose assignee's email or display name equals ``text``."""
    return _person("assignee", text)


def creator(text: str) -> Where:
    """Issues whose creator's email or display name equals ``text``."""
    return _person("creator", text)


def status(name: str) -> Where:
    """Issues in the workflow state named ``name`` (case-insensitive)."""
    return where(state=where(name=StringFilter(eq_ignore_case=name)))


def project(name: str) -> Where:
    """Issues in a project whose name contains ``name`` (case-insensitive)."""
    return where(project=where(name=StringFilter(contains_ignore_case=name)))


def label(name: str) -> Where:
    """Issues carrying a label named ``name`` (case-insensitive)."""
    return where(labels=where(some=where(name=StringFilter(eq_ignore_case=name))))


def priority(value: int) -> Where:
    return where(priority=NumberFilter(value))


def estimate(value: float) -> Where:
    return where(estimate=NumberFilter(value))


def viewer(user_id: str) -> Where:
    """Issues assigned to the user with id ``user_id``."""
    return where(assignee=where(id=StringFilter(eq=user_id)))


def _date_range(field_name: str, before: str | None, after: str | None) -> Where | None:
    if before is None and after is None:
        return None
    return where(**{field_name: DateComparator(lt=before, gt=after)})


def due_date(before: str | None = None, after: str | None = None) -> Where | None:
    return _date_range("dueDate", before, after)


def created_at(before: str | None = None, after: str | None = None) -> Where | None:
    return _date_range("createdAt", before, after)


def updated_at(before: str | None = None, after: str | None = None) -> Where | None:
    return _date_range("updatedAt", before, after)


def exclude_completed() -> Where:
    """Issues not in a completed or canceled state."""
    return where(state=where(type=ValueSet(("completed", "canceled"))))


def has_any_relation() -> Where:
    """Issues with at least one relation of any type.

    Linear's ``IssueFilter.relations`` only supports existence, so this
    cannot tell "blocks" apart from "blocked by". Both intents map here and
    results may include issues related in the other direction.
    """
    return where(relations=where(some=MatchAll()))


# --- Project filters ---


def project_state(state: str) -> Where:
    return where(state=StringFilter(eq=state))


def project_lead(text: str) -> Where:
    """Projects whose lead's email or display name equals ``text``."""
    return _person("lead", text)


def project_name(name: str) -> Where:
    """Projects whose name contains ``name`` (case-insensitive)."""
    return where(name=StringFilter(contains_ignore_case=name))


# --- Resolution filters ---


def team_key(key: str) -> Where:
    """``TeamFilter`` for an exact, upper-cased team key."""
    return where(key=StringFilter(eq=key.strip().upper()))


def user_email(email: str) -> Where:
    """``UserFilter`` for an email, case-insensitive."""
    return where(email=StringFilter(eq_ignore_case=email))


def workflow_state(name: str, key: str) -> Where:
    """``WorkflowStateFilter`` for a state name within one team."""
    return where(name=StringFilter(eq_ignore_case=name), team=team_key(key))


def state_team(key: str) -> Where:
    """``WorkflowStateFilter`` for every state of one team."""
    return where(team=where(key=StringFilter(eq_ignore_case=key)))


def label_team(key: str) -> Where:
    """``IssueLabelFilter`` for every label of one team."""
    return where(team=where(key=StringFilter(eq_ignore_case=key)))


def labels_named(names: Iterable[str]) -> AnyOf:
    """``IssueLabelFilter`` matching any of ``names`` (case-insensitive)."""
    return AnyOf(tuple(where(name=StringFilter(eq_ignore_case=n)) for n in names))
