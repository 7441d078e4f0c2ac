"""
Run configuration for mutant generation.

A `MutationConfig` is a frozen value passed explicitly through every mutator
call, so concurrent generations never share mutable settings. Named presets
cover the accessor idioms of different host languages.
"""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class MutationConfig:
    """Settings that shape the emitted mutant set.

    Attributes:
        accessor_selectors: Method names substituted for an indexed read.
            Their roles, in order: bounds-tolerant access returning a default,
            access that raises when the key is missing, membership test.
        drop_selector: Method called for the `seq[n..-1]` rewrite.
        verbose: Print dispatcher detail lines to stderr.
    """

    accessor_selectors: tuple[str, ...] = ("at", "fetch", "key?")
    drop_selector: str = "drop"
    verbose: bool = False

    @classmethod
    def from_preset(cls, preset: str, **overrides) -> MutationConfig:
        """Return the named preset, optionally with some fields overridden."""
        try:
            config = PRESETS[preset]
        except KeyError:
            valid = ", ".join(sorted(PRESETS))
            raise ValueError(f"Unknown preset '{preset}'. Valid presets: {valid}") from None
        return replace(config, **overrides) if overrides else config


PRESETS: dict[str, MutationConfig] = {
    "default": MutationConfig(),
    "python": MutationConfig(accessor_selectors=("get", "__getitem__", "__contains__")),
}

DEFAULT_CONFIG = PRESETS["default"]
