"""Path templates — ``/foo/:foo_id/bar/:id`` compiled into matchers.

A template is tokenized into literal and variable segments first, then
compiled into two anchored regular expressions with the same groups:

- ``pattern`` recognizes concrete request paths and captures values.
- ``name_pattern`` run against the template itself recovers the
  variable names in declaration order.

Literal segments are escaped, so ``/v1.0/items`` only matches a
literal dot. Variables match one or more characters other than ``/``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TypeAlias

from wren.errors import RouteTemplateError

VARIABLE_PREFIX = ":"
VARIABLE_VALUE = r"[^/]+"

_NAME_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


@dataclass(frozen=True, slots=True)
class Literal:
    """A fixed path segment: ``users`` in ``/users/:id``."""

    text: str


@dataclass(frozen=True, slots=True)
class Variable:
    """A named path segment: ``:id`` in ``/users/:id``."""

    name: str


Segment: TypeAlias = Literal | Variable


def parse_template(template: str) -> tuple[Segment, ...]:
    """Split a template into literal and variable segments.

    Examples::

        "/"                  -> (Literal(""),)
        "/users"             -> (Literal("users"),)
        "/users/:id"         -> (Literal("users"), Variable("id"))
        "/foo/:foo_id/bar/:id" -> (Literal("foo"), Variable("foo_id"),
                                   Literal("bar"), Variable("id"))

    Raises ``RouteTemplateError`` for malformed templates.
    """
    if not template.startswith("/"):
        raise RouteTemplateError(template, "templates must start with '/'")

    segments: list[Segment] = []
    seen: set[str] = set()
    for part in template[1:].split("/"):
        if not part.startswith(VARIABLE_PREFIX):
            if VARIABLE_PREFIX in part:
                raise RouteTemplateError(
                    template, f"segment {part!r} mixes literal text with ':'"
                )
            segments.append(Literal(part))
            continue

        name = part[len(VARIABLE_PREFIX) :]
        if not name:
            raise RouteTemplateError(template, "variable segment has no name")
        if not _NAME_RE.fullmatch(name):
            raise RouteTemplateError(
                template, f"variable name {name!r} must be a Python-style identifier"
            )
        if name in seen:
            raise RouteTemplateError(template, f"variable {name!r} declared twice")
        seen.add(name)
        segments.append(Variable(name))
    return tuple(segments)


def _compile(segments: tuple[Segment, ...], variable: str) -> re.Pattern[str]:
    parts = [
        variable if isinstance(seg, Variable) else re.escape(seg.text) for seg in segments
    ]
    return re.compile("^/" + "/".join(parts) + "$")


@dataclass(frozen=True, slots=True)
class PathTemplate:
    """A compiled route template.

    Build with ``PathTemplate.compile()``; the dataclass itself performs
    no validation.
    """

    template: str
    segments: tuple[Segment, ...]
    pattern: re.Pattern[str] = field(repr=False, compare=False)
    name_pattern: re.Pattern[str] = field(repr=False, compare=False)

    @classmethod
    def compile(cls, template: str) -> PathTemplate:
        """Tokenize and compile *template*.

        Raises ``RouteTemplateError`` if the template is malformed.
        """
        segments = parse_template(template)
        return cls(
            template=template,
            segments=segments,
            pattern=_compile(segments, f"({VARIABLE_VALUE})"),
            name_pattern=_compile(segments, f"{VARIABLE_PREFIX}({VARIABLE_VALUE})"),
        )

    @property
    def names(self) -> tuple[str, ...]:
        """Variable names in declaration order, read back from the template."""
        found = self.name_pattern.fullmatch(self.template)
        if found is None:
            return ()
        return found.groups()

    def matches(self, path: str) -> bool:
        """True if *path* has this template's shape."""
        return self.pattern.fullmatch(path) is not None

    def match(self, path: str) -> dict[str, str] | None:
        """Return the variable bindings for *path*, or ``None`` on mismatch."""
        found = self.pattern.fullmatch(path)
        if found is None:
            return None
        return dict(zip(self.names, found.groups(), strict=True))
