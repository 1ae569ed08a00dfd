"""
Configuration for schema compilation, conversion and serialization.
"""

from __future__ import annotations

from dataclasses import dataclass

from jsonschema import Draft4Validator, Draft6Validator, Draft7Validator, Draft201909Validator, Draft202012Validator

# Validator class used when a schema carries no "$schema" keyword
DRAFTS = {
    "4": Draft4Validator,
    "6": Draft6Validator,
    "7": Draft7Validator,
    "2019-09": Draft201909Validator,
    "2020-12": Draft202012Validator,
}


@dataclass(frozen=True)
class ProviderConfig:
    """Configuration options for schema handling."""

    # Maximum document nesting depth accepted by to_object
    max_depth: int = 100

    # Draft used for schemas without "$schema"
    default_draft: str = "2020-12"

    # Whether "format" keywords are asserted
    check_formats: bool = False

    # Escape non-ASCII characters in to_json output
    ensure_ascii: bool = False

    # Indentation for to_json output (None = compact)
    indent: int | None = None

    def __post_init__(self):
        if not isinstance(self.max_depth, int) or isinstance(self.max_depth, bool):
            raise ValueError(f"max_depth must be an integer, got {self.max_depth!r}")
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be positive, got {self.max_depth}")
        if not isinstance(self.default_draft, str) or self.default_draft not in DRAFTS:
            raise ValueError(f"Unknown draft '{self.default_draft}', expected one of {', '.join(DRAFTS)}")
        for name in ("check_formats", "ensure_ascii"):
            if not isinstance(getattr(self, name), bool):
                raise ValueError(f"{name} must be a boolean, got {getattr(self, name)!r}")
        if self.indent is not None and (not isinstance(self.indent, int) or isinstance(self.indent, bool) or self.indent < 0):
            raise ValueError(f"indent must be a non-negative integer or null, got {self.indent!r}")

    @property
    def validator_class(self) -> type:
        return DRAFTS[self.default_draft]

    @staticmethod
    def from_dict(d: dict) -> ProviderConfig:
        """Create a config from a dictionary, ignoring unknown keys.

        Raises:
            ValueError: If a value has the wrong type or is out of range
        """
        if not isinstance(d, dict):
            raise ValueError(f"Configuration must be a JSON object, got {type(d).__name__}")
        known = {k: v for k, v in d.items() if k in ProviderConfig.__dataclass_fields__}
        if "default_draft" in known:
            known["default_draft"] = str(known["default_draft"])
        return ProviderConfig(**known)

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "max_depth": self.max_depth,
            "default_draft": self.default_draft,
            "check_formats": self.check_formats,
            "ensure_ascii": self.ensure_ascii,
            "indent": self.indent,
        }


DEFAULT_CONFIG = ProviderConfig()
