# app/services/conversation.py
from typing import Any, Dict, List

from app.errors import ClientInputError

MAX_HISTORY_MESSAGES = 12


def _role(message: Any) -> Any:
    return message.get("role") if isinstance(message, dict) else None


def truncate_messages(messages: Any, limit: int = MAX_HISTORY_MESSAGES) -> List[Dict[str, Any]]:
    """
    Keep the first system message plus the last `limit` other messages, in order.

    Only one system message is preserved; any later ones are dropped.
    """
    if not isinstance(messages, list):
        raise ClientInputError("Invalid messages format")

    system_message = None
    history = []
    for message in messages:
        if _role(message) == "system":
            if system_message is None:
                system_message = message
        else:
            history.append(message)

    recent = history[-limit:] if limit > 0 else []
    if system_message is not None:
        return [system_message] + recent
    return recent
