"""Chained action strings.

``onSuccess``/``onError`` name their follow-up action as ``verb:payload``:

- ``navigate:<route>[?k=v&k=v]``
- ``show_dialog:<message>``
- ``update_state:<key>=<value>``
- ``<verb>:<data>`` for any other verb, routed to the custom handler table

There is no escaping; the first ``:`` and the first ``=`` split.
"""

from ..core import get_logger
from ..models import (
    Action,
    CustomAction,
    NavigateAction,
    ShowDialogAction,
    UpdateStateAction,
)

logger = get_logger(__name__)


def parse_query(query: str) -> dict[str, str]:
    """``k=v&k=v``; parameters without ``=`` are skipped."""
    params: dict[str, str] = {}
    for param in query.split("&"):
        key, sep, value = param.partition("=")
        if sep:
            params[key] = value
    return params


def parse_chained_action(text: str) -> Action | None:
    """
    Parse a chained action string.

    Returns:
        The action, or None when the string is malformed (logged, not raised)
    """
    verb, sep, payload = text.partition(":")
    if not sep:
        logger.warning("chained_action_invalid", action=text, reason="missing ':'")
        return None

    if verb == "navigate":
        route, has_query, query = payload.partition("?")
        return NavigateAction(route=route, payload=parse_query(query) if has_query else None)

    if verb == "show_dialog":
        return ShowDialogAction(title="Info", message=payload, dialog_type="info")

    if verb == "update_state":
        key, has_value, value = payload.partition("=")
        if not has_value:
            logger.warning("chained_action_invalid", action=text, reason="missing '='")
            return None
        return UpdateStateAction(key=key, value=value)

    return CustomAction(action=verb, data={"data": payload})
