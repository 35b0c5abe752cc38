"""Function-signature canonicalisation for selector ("sighash") hashing.

``transfer(address to, uint256 amount)`` and
``transfer(address,uint256)`` name the same function; only the canonical
form (types only, no spaces) is hashed.
"""

from __future__ import annotations

import re

from ethkit.exceptions import InvalidSignatureError

_SIGNATURE_PATTERN = re.compile(r"^\s*([A-Za-z_$][A-Za-z0-9_$]*)\s*\((.*)\)\s*$", re.DOTALL)


def canonical_signature(signature: str) -> str:
    """Return *signature* reduced to ``name(type1,type2,...)``.

    Each parameter keeps only its leading whitespace-delimited token, so
    parameter names and modifiers such as ``indexed`` are discarded.

    Raises
    ------
    InvalidSignatureError
        When *signature* is not of the form ``<identifier>(<args>)``.
    """
    match = _SIGNATURE_PATTERN.match(signature)
    if match is None:
        raise InvalidSignatureError(
            f"invalid function signature: {signature!r}",
            hint="Expected something like 'transfer(address to, uint256 amount)'.",
        )

    name, params = match.group(1), match.group(2)
    types: list[str] = []
    if params.strip():
        for param in params.split(","):
            tokens = param.split()
            if not tokens:
                raise InvalidSignatureError(
                    f"empty parameter in function signature: {signature!r}",
                )
            types.append(tokens[0])
    return f"{name}({','.join(types)})"
