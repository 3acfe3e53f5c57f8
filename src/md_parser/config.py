"""ContextVar-based render configuration for md_parser.

Provides thread-local configuration using Python's ContextVars (PEP 567).
The grammar itself is fixed; configuration only affects HTML output.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

Usage:
    # Via the Markdown class
    md = Markdown(config=RenderConfig(escape_html=True))
    html = md("a < b")  # Sets config internally via ContextVar

    # Or use the context manager
    with render_config_context(RenderConfig(line_separator="\\n")):
        html = HtmlRenderer().render(tree)

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, fields
from typing import Any


@dataclass(frozen=True, slots=True)
class RenderConfig:
    """Immutable render configuration.

    Attributes:
        escape_html: Escape &, <, > in literal text. Off by default: source
            characters pass through verbatim.
        line_separator: String placed between the lines of a paragraph.
            Empty by default: lines are concatenated.

    """

    escape_html: bool = False
    line_separator: str = ""

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "RenderConfig":
        """Create RenderConfig from dictionary.

        Only includes keys that are valid RenderConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> RenderConfig.from_dict({"escape_html": True, "other": 1}).escape_html
            True

        """
        valid_fields = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: RenderConfig = RenderConfig()

# Thread-local configuration via ContextVar
_render_config: ContextVar[RenderConfig] = ContextVar(
    "render_config",
    default=_DEFAULT_CONFIG,
)


def get_render_config() -> RenderConfig:
    """Get current render configuration (thread-local)."""
    return _render_config.get()


def set_render_config(config: RenderConfig) -> None:
    """Set render configuration for current context."""
    _render_config.set(config)


def reset_render_config() -> None:
    """Reset to the default configuration."""
    _render_config.set(_DEFAULT_CONFIG)


@contextmanager
def render_config_context(config: RenderConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with render_config_context(RenderConfig(escape_html=True)):
        ...     get_render_config().escape_html
        True
        >>> get_render_config().escape_html
        False

    """
    previous = _render_config.get()
    _render_config.set(config)
    try:
        yield
    finally:
        _render_config.set(previous)


__all__ = [
    "RenderConfig",
    "get_render_config",
    "set_render_config",
    "reset_render_config",
    "render_config_context",
]
