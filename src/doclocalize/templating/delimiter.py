"""Token delimiter configuration.

A token starts at a fixed prefix and ends either at an explicit suffix or,
when no suffix is configured, just before the first character matching a
stop condition.

Python 3.13+.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass

from doclocalize.constants import DEFAULT_PREFIX, DEFAULT_STOP_CONDITION

__all__ = ["DEFAULT_DELIMITER", "DelimiterSpec"]

# Option keys accepted by DelimiterSpec.from_options (plugin-style and Python names)
_OPTION_KEYS = {
    "prefix": "prefix",
    "suffix": "suffix",
    "stopCondition": "stop_condition",
    "stop_condition": "stop_condition",
}


@dataclass(frozen=True, slots=True)
class DelimiterSpec:
    """How the textual extent of a token is recognized.

    Attributes:
        prefix: Text that introduces a token (default: "R.")
        suffix: Text that closes a token. When None, the token ends before
            the first character matching stop_condition.
        stop_condition: Pattern matching the first character after a
            suffix-less token. Strings are compiled at construction.
            Ignored when suffix is set.

    Example:
        >>> DelimiterSpec().uses_suffix  # R.section1.token2
        False
        >>> DelimiterSpec(prefix="${", suffix="}").uses_suffix  # ${section1.token2}
        True
    """

    prefix: str = DEFAULT_PREFIX
    suffix: str | None = None
    stop_condition: re.Pattern[str] = DEFAULT_STOP_CONDITION

    def __post_init__(self) -> None:
        """Validate delimiters and compile a string stop condition.

        Raises:
            ValueError: If prefix or suffix is empty, or stop_condition is
                not a valid regular expression
        """
        if not self.prefix:
            msg = "Delimiter prefix cannot be empty"
            raise ValueError(msg)
        if self.suffix == "":
            msg = "Delimiter suffix cannot be empty; use None for stop-condition tokens"
            raise ValueError(msg)
        if isinstance(self.stop_condition, str):
            try:
                compiled = re.compile(self.stop_condition)
            except re.error as e:
                msg = f"Invalid stop condition pattern {self.stop_condition!r}: {e}"
                raise ValueError(msg) from e
            object.__setattr__(self, "stop_condition", compiled)

    @property
    def uses_suffix(self) -> bool:
        """True when tokens are closed by an explicit suffix."""
        return self.suffix is not None

    @classmethod
    def from_options(cls, options: Mapping[str, object]) -> DelimiterSpec:
        """Build a delimiter from an option mapping.

        Accepts ``{"prefix": ..., "suffix": ...}`` or
        ``{"prefix": ..., "stopCondition": ...}``; missing keys keep their
        defaults.

        Raises:
            ValueError: On unknown keys or invalid values
        """
        unknown = sorted(set(options) - set(_OPTION_KEYS))
        if unknown:
            msg = f"Unknown delimiter option(s): {', '.join(unknown)}"
            raise ValueError(msg)
        kwargs = {_OPTION_KEYS[key]: value for key, value in options.items()}
        return cls(**kwargs)  # type: ignore[arg-type]


DEFAULT_DELIMITER = DelimiterSpec()
"""Default delimiter: prefix "R." with stop-condition extent."""
