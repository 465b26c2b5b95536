"""Field-level validation helpers shared by routers and services.

Pydantic reports one error dict per problem.  The API surfaces them as
``"<root>/<path> <message>"`` strings, e.g. ``body/address Required``, joined
with ``", "`` in the order pydantic encountered them.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, NamedTuple, TypeVar

from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

_QUOTED = re.compile(r"'([^']*)'")


class FieldViolation(NamedTuple):
    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path} {self.message}"

    def as_dict(self) -> dict[str, str]:
        return {"path": self.path, "message": self.message}


class PayloadValidationError(Exception):
    """A payload did not match its schema. Not an HTTP error by itself."""

    def __init__(self, violations: Sequence[FieldViolation]):
        self.violations = list(violations)
        super().__init__(join_violations(self.violations))

    @property
    def details(self) -> list[dict[str, str]]:
        return [v.as_dict() for v in self.violations]


def _render_path(root: str, loc: Iterable[Any]) -> str:
    return f"{root}/" + "/".join(str(part) for part in loc)


def _quote(value: Any) -> str:
    return f"'{value}'" if isinstance(value, str) else repr(value)


def _message_for(error: Mapping[str, Any]) -> str:
    kind = error["type"]
    ctx = error.get("ctx") or {}

    if kind == "missing":
        return "Required"
    if kind == "enum":
        allowed = " | ".join(f"'{v}'" for v in _QUOTED.findall(ctx.get("expected", "")))
        return f"Invalid enum value. Expected {allowed}, received {_quote(error.get('input'))}"
    if kind == "value_error" and "error" in ctx:
        return str(ctx["error"])
    return error["msg"]


def collect_violations(
    errors: Iterable[Mapping[str, Any]], root: str = "body"
) -> list[FieldViolation]:
    """Convert pydantic error dicts into ordered ``FieldViolation`` items.

    Unknown keys of the same object are folded into a single
    ``Unrecognized key(s) in object`` violation at the parent path.
    """
    violations: list[FieldViolation | None] = []
    extras: dict[tuple, tuple[int, list[str]]] = {}

    for error in errors:
        loc = tuple(error.get("loc", ()))
        # FastAPI prefixes request errors with their source ("body", "query", ...)
        if loc and loc[0] == root:
            loc = loc[1:]

        if error["type"] == "extra_forbidden":
            parent, key = loc[:-1], loc[-1] if loc else ""
            if parent not in extras:
                extras[parent] = (len(violations), [])
                violations.append(None)  # placeholder, filled below
            extras[parent][1].append(str(key))
            continue

        violations.append(FieldViolation(_render_path(root, loc), _message_for(error)))

    for parent, (slot, keys) in extras.items():
        listed = ", ".join(f"'{k}'" for k in keys)
        violations[slot] = FieldViolation(
            _render_path(root, parent), f"Unrecognized key(s) in object: {listed}"
        )

    return [v for v in violations if v is not None]


def join_violations(violations: Iterable[FieldViolation]) -> str:
    return ", ".join(str(v) for v in violations)


def validate_payload(schema: type[ModelT], payload: Any, root: str = "body") -> ModelT:
    """Validate *payload* against *schema* or raise :class:`PayloadValidationError`."""
    try:
        return schema.model_validate(payload)
    except ValidationError as exc:
        raise PayloadValidationError(collect_violations(exc.errors(), root)) from exc
