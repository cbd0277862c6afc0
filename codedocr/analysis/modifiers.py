"""Modifier keyword to boolean flag derivation."""

from __future__ import annotations

from typing import AbstractSet, Dict, Mapping

PRIVATE_FLAG = "is_private"

PROPERTY_FLAGS: Mapping[str, str] = {
    "is_public": "public",
    "is_static": "static",
    "is_readonly": "readonly",
    "is_virtual": "virtual",
    "is_override": "override",
    "is_sealed": "sealed",
    "is_abstract": "abstract",
    "is_extern": "extern",
    "is_unsafe": "unsafe",
    "is_partial": "partial",
    "is_const": "const",
    "is_volatile": "volatile",
    "is_new": "new",
    "is_internal": "internal",
    "is_protected": "protected",
    PRIVATE_FLAG: "private",
}

METHOD_FLAGS: Mapping[str, str] = {
    name: PROPERTY_FLAGS[name]
    for name in (
        "is_public",
        "is_static",
        "is_virtual",
        "is_override",
        "is_abstract",
        "is_extern",
        "is_internal",
        "is_protected",
        PRIVATE_FLAG,
    )
}


def derive_modifier_flags(
    modifiers: AbstractSet[str], flags: Mapping[str, str] = PROPERTY_FLAGS
) -> Dict[str, bool]:
    """Map a modifier keyword set onto ``flags``.

    Every flag tests membership of its keyword, except ``is_private`` which
    also requires ``public`` to be absent. No modifiers at all means every
    flag is False, including ``is_private``.
    """
    result = {name: keyword in modifiers for name, keyword in flags.items()}
    if PRIVATE_FLAG in result:
        result[PRIVATE_FLAG] = "private" in modifiers and "public" not in modifiers
    return result


__all__ = ["METHOD_FLAGS", "PROPERTY_FLAGS", "derive_modifier_flags"]
