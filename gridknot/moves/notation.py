"""
Compact text notation for Cromwell moves, used by the command line.

    translate:<up|down|left|right>
    commute:<row|column>:<start_index>
    stabilize:<nw|ne|sw|se>:<i>:<j>
    destabilize:<nw|ne|sw|se>:<i>:<j>

Tokens are case-insensitive. format_move() produces the lowercase form that
parse_move() reads back.
"""

from __future__ import annotations

from .types import (
    Axis,
    Cardinality,
    Commutation,
    CromwellMove,
    Destabilization,
    Direction,
    Stabilization,
    Translation,
)

_ARITY = {"translate": 1, "commute": 2, "stabilize": 3, "destabilize": 3}


def _int(token: str, text: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise ValueError(f"expected an integer in move {text!r}, got {token!r}") from None


def _enum(enum_cls: type, token: str, text: str):  # type: ignore[no-untyped-def]
    try:
        return enum_cls(token.upper())
    except ValueError:
        choices = ", ".join(m.value.lower() for m in enum_cls)
        raise ValueError(f"unknown value {token!r} in move {text!r} (choose from {choices})") from None


def parse_move(text: str) -> CromwellMove:
    """Parse one move from its text notation. Raises ValueError if malformed."""
    parts = [p.strip() for p in text.strip().split(":")]
    kind = parts[0].lower()
    if kind not in _ARITY:
        raise ValueError(f"unknown move kind {parts[0]!r} in {text!r}")
    args = parts[1:]
    if len(args) != _ARITY[kind]:
        raise ValueError(f"move {kind!r} takes {_ARITY[kind]} argument(s), got {len(args)}")

    if kind == "translate":
        return Translation(_enum(Direction, args[0], text))
    if kind == "commute":
        return Commutation(_enum(Axis, args[0], text), _int(args[1], text))
    cardinality = _enum(Cardinality, args[0], text)
    i, j = _int(args[1], text), _int(args[2], text)
    if kind == "stabilize":
        return Stabilization(cardinality, i, j)
    return Destabilization(cardinality, i, j)


def format_move(move: CromwellMove) -> str:
    if isinstance(move, Translation):
        return f"translate:{move.direction.value.lower()}"
    if isinstance(move, Commutation):
        return f"commute:{move.axis.value.lower()}:{move.start_index}"
    if isinstance(move, Stabilization):
        return f"stabilize:{move.cardinality.value.lower()}:{move.i}:{move.j}"
    if isinstance(move, Destabilization):
        return f"destabilize:{move.cardinality.value.lower()}:{move.i}:{move.j}"
    raise TypeError(f"not a Cromwell move: {move!r}")
