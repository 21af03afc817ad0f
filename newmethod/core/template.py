from __future__ import annotations

from typing import Dict, Mapping, Optional

from .derive import RULE_OPTIONS, RULES, Rule
from .signature import Signature


LEFT = "[["
RIGHT = "]]"


def placeholder(token: str) -> str:
    return f"{LEFT}{token}{RIGHT}"


def has_token(template: str, token: str) -> bool:
    return placeholder(token) in template


def substitute(template: str, value: str, token: str) -> str:
    marker = placeholder(token)
    if marker not in template:
        return template
    return template.replace(marker, value)


def tokens_in(template: str, rules: Mapping[str, Rule] = RULES) -> set[str]:
    return {token for token in rules if has_token(template, token)}


def derive_values(
    sig: Signature,
    tokens,
    rules: Mapping[str, Rule] = RULES,
    options: Optional[Dict[str, object]] = None,
) -> Dict[str, str]:
    options = options or {}
    values = {}
    for token in tokens:
        kwargs = {k: options[k] for k in RULE_OPTIONS.get(token, ()) if k in options}
        values[token] = rules[token](sig, **kwargs)
    return values


def render(
    template: str,
    sig: Signature,
    rules: Mapping[str, Rule] = RULES,
    **options,
) -> str:
    present = [token for token in rules if has_token(template, token)]
    values = derive_values(sig, present, rules, options)
    text = template
    for token in present:
        text = substitute(text, values[token], token)
    return text
