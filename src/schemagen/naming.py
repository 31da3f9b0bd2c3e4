"""Name conversion between storage identifiers and generated type names."""

import re

_UNDERSCORE_WORD = re.compile(r"_+([a-z])")


def to_type_name(name: str) -> str:
    """Convert a storage identifier to a generated type name.

    The first character is upper-cased and each underscore run followed by a
    lowercase letter collapses into that letter upper-cased:
    `user_account` -> `UserAccount`.
    """
    if not name:
        return name
    return name[0].upper() + _UNDERSCORE_WORD.sub(lambda m: m.group(1).upper(), name[1:])
