from __future__ import annotations

from typing import Callable, Dict

from .signature import Signature


UNDEFINED_LOGGING_ID = '"undefined"'


def signature_without_notation(sig: Signature) -> str:
    return sig.head


def method_name(sig: Signature) -> str:
    return sig.name


def parameter_names(sig: Signature) -> str:
    return ", ".join(p.name for p in sig.parameters)


def signature_without_return(sig: Signature) -> str:
    head = sig.head
    if not sig.has_parameter_list:
        return head
    open_idx = head.index("(")
    close_idx = head.find(")", open_idx)
    if close_idx == -1:
        return head
    return head[: close_idx + 1].strip()


def _binding_names(sig: Signature, disambiguate: bool) -> list[str]:
    names = [ret.binding_name for ret in sig.returns]
    if not disambiguate:
        return names
    seen: Dict[str, int] = {}
    unique = []
    for name in names:
        seen[name] = seen.get(name, 0) + 1
        unique.append(name if seen[name] == 1 else f"{name}{seen[name]}")
    return unique


def named_return(sig: Signature, disambiguate: bool = False) -> str:
    bindings = _binding_names(sig, disambiguate)
    parts = [f"{name} {ret.declared_type}" for name, ret in zip(bindings, sig.returns)]
    return f"({', '.join(parts)})"


def logging_id(sig: Signature) -> str:
    if not sig.parameters or not sig.parameters[0].name:
        return UNDEFINED_LOGGING_ID
    return sig.parameters[0].name


Rule = Callable[..., str]

# Placeholder token -> derivation; invoked only for tokens present in a template.
RULES: Dict[str, Rule] = {
    "METHODSIGNATURE": signature_without_notation,
    "METHODNAME": method_name,
    "PARAMETERS": parameter_names,
    "LOGGINGID": logging_id,
    "METHODSIGNATUREWITHOUTRETURN": signature_without_return,
    "NAMEDRETURN": named_return,
}

# Rules accepting keyword options from settings.
RULE_OPTIONS: Dict[str, tuple[str, ...]] = {
    "NAMEDRETURN": ("disambiguate",),
}

CURSOR_TOKEN = "REPLACE"
