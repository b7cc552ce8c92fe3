"""
Pluggable generation strategies.

Each field of a generated person (name, phone, e-mail, address, ID card) has
a default generator. Callers may register a plugin function for a field; the
plugin runs first, and its result is used only if it passes the field's
acceptance check. A plugin that raises or returns an unacceptable value is
logged and the default generator is used instead.

Plugin call signatures:

    name_generator(gender) -> str
    phone_generator() -> str
    email_generator(name) -> str
    address_generator(area_code, area_name) -> str
    id_card_generator(area_code=..., birthday=..., gender=...) -> str
"""

from enum import Enum
from typing import Any, Callable, Optional

from cnid_synth.logging.setup import get_logger
from cnid_synth.utils.validators import (
    validate_chinese_id_card_with_checksum,
    validate_phone,
)

logger = get_logger(__name__)


class PluginType(str, Enum):
    """Supported plugin types."""

    NAME = "name_generator"
    PHONE = "phone_generator"
    EMAIL = "email_generator"
    ADDRESS = "address_generator"
    ID_CARD = "id_card_generator"


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value)


def _is_email(value: Any) -> bool:
    return _is_text(value) and "@" in value


def _is_phone(value: Any) -> bool:
    return _is_text(value) and validate_phone(value)


def _is_id_card(value: Any) -> bool:
    return _is_text(value) and validate_chinese_id_card_with_checksum(value)


# Acceptance checks applied to plugin results
_ACCEPTORS: dict[PluginType, Callable[[Any], bool]] = {
    PluginType.NAME: _is_text,
    PluginType.PHONE: _is_phone,
    PluginType.EMAIL: _is_email,
    PluginType.ADDRESS: _is_text,
    PluginType.ID_CARD: _is_id_card,
}


def _to_plugin_type(kind: PluginType | str) -> PluginType:
    if isinstance(kind, PluginType):
        return kind
    try:
        return PluginType(kind)
    except ValueError:
        raise ValueError(f"Unsupported plugin type: {kind}") from None


class PluginRegistry:
    """Per-generator registry of plugin functions."""

    def __init__(self) -> None:
        self._plugins: dict[PluginType, Callable[..., Any]] = {}

    def register(self, kind: PluginType | str, plugin: Callable[..., Any]) -> None:
        """Register a plugin for a field, replacing any previous one.

        Raises:
            ValueError: If the type is unsupported or the plugin is not callable.
        """
        plugin_type = _to_plugin_type(kind)
        if not callable(plugin):
            raise ValueError("Plugin must be callable")
        self._plugins[plugin_type] = plugin

    def remove(self, kind: PluginType | str) -> None:
        """Remove the plugin for a field. Unknown or unset types are ignored."""
        try:
            plugin_type = _to_plugin_type(kind)
        except ValueError:
            return
        self._plugins.pop(plugin_type, None)

    def get(self, kind: PluginType | str) -> Optional[Callable[..., Any]]:
        return self._plugins.get(_to_plugin_type(kind))

    def run(
        self,
        kind: PluginType,
        default: Callable[[], str],
        *args: Any,
        **kwargs: Any,
    ) -> str:
        """Run the plugin for a field, falling back to the default generator.

        Args:
            kind: The field being generated.
            default: Zero-argument default generator.
            *args: Positional arguments passed to the plugin.
            **kwargs: Keyword arguments passed to the plugin.

        Returns:
            The accepted plugin result or the default generator's result.
        """
        plugin = self._plugins.get(kind)
        if plugin is not None:
            try:
                result = plugin(*args, **kwargs)
            except Exception as e:
                logger.warning(
                    "Plugin raised, using default generator",
                    extra={"plugin": kind.value, "error": str(e)},
                )
            else:
                if _ACCEPTORS[kind](result):
                    return result
                logger.warning(
                    "Plugin result rejected, using default generator",
                    extra={"plugin": kind.value, "result": repr(result)[:50]},
                )
        return default()
