from __future__ import annotations

from dataclasses import dataclass


NOTATION_MARK = "`"


@dataclass(frozen=True)
class Parameter:
    name: str
    declared_type: str


@dataclass(frozen=True)
class ReturnType:
    declared_type: str

    @property
    def binding_name(self) -> str:
        return self.declared_type.replace("*", "", 1).lower()[:1]


@dataclass(frozen=True)
class Signature:
    raw: str
    name: str
    parameters: tuple[Parameter, ...]
    returns: tuple[ReturnType, ...]
    notation: str | None = None
    has_parameter_list: bool = False

    @property
    def head(self) -> str:
        """Signature text before the notation, trimmed."""
        return self.raw.split(NOTATION_MARK, 1)[0].strip()


def split_notation(raw: str) -> tuple[str, str | None]:
    if NOTATION_MARK not in raw:
        return raw.strip(), None
    head, notation = raw.split(NOTATION_MARK, 1)
    return head.strip(), notation


def _parse_parameter(segment: str) -> Parameter:
    tokens = segment.split()
    if not tokens:
        return Parameter(name="", declared_type="")
    return Parameter(name=tokens[0], declared_type=" ".join(tokens[1:]))


def _parse_returns(clause: str) -> tuple[ReturnType, ...]:
    clause = clause.strip()
    if "(" in clause:
        # multiple returns: (int, error)
        clause = clause.split("(", 1)[1].split(")", 1)[0]
    if not clause.strip():
        return ()
    return tuple(ReturnType(part.strip()) for part in clause.split(","))


def parse_signature(raw: str) -> Signature:
    head, notation = split_notation(raw)
    if "(" not in head:
        return Signature(raw=raw, name=head, parameters=(), returns=(), notation=notation)

    name, rest = head.split("(", 1)
    params_text, _, return_clause = rest.partition(")")
    parameters = tuple(_parse_parameter(seg) for seg in params_text.split(","))
    return Signature(
        raw=raw,
        name=name.strip(),
        parameters=parameters,
        returns=_parse_returns(return_clause),
        notation=notation,
        has_parameter_list=True,
    )
