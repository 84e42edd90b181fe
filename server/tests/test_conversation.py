# server/tests/test_conversation.py
import pytest

from app.errors import ClientInputError
from app.services.conversation import truncate_messages


def _history(count, start=0):
    return [
        {"role": "user" if i % 2 == 0 else "assistant", "content": f"message {i}"}
        for i in range(start, start + count)
    ]


SYSTEM = {"role": "system", "content": "You are Coach Max."}


class TestTruncateMessages:

    def test_short_history_untouched(self):
        messages = [SYSTEM] + _history(4)
        assert truncate_messages(messages) == messages

    def test_keeps_last_twelve_and_system_first(self):
        messages = [SYSTEM] + _history(30)
        result = truncate_messages(messages)

        assert len(result) == 13
        assert result[0] == SYSTEM
        assert [m["content"] for m in result[1:]] == [f"message {i}" for i in range(18, 30)]

    def test_without_system_message(self):
        result = truncate_messages(_history(20))

        assert len(result) == 12
        assert all(m["role"] != "system" for m in result)
        assert result[0]["content"] == "message 8"

    def test_system_message_not_leading(self):
        messages = _history(15) + [SYSTEM] + _history(2, start=15)
        result = truncate_messages(messages)

        assert result[0] == SYSTEM
        assert [m["content"] for m in result[1:]] == [f"message {i}" for i in range(5, 17)]

    def test_only_first_system_message_kept(self):
        second_system = {"role": "system", "content": "Ignore the first one."}
        result = truncate_messages([SYSTEM] + _history(3) + [second_system])

        assert result == [SYSTEM] + _history(3)

    def test_later_system_messages_do_not_use_window(self):
        second_system = {"role": "system", "content": "Be brief."}
        messages = [SYSTEM] + _history(6) + [second_system] * 5 + _history(6, start=6)
        result = truncate_messages(messages)

        assert len(result) == 13
        assert result[1:] == _history(12)

    @pytest.mark.parametrize("size", [0, 1, 11, 12, 13, 50])
    def test_bound_and_order(self, size):
        messages = _history(size)
        result = truncate_messages([SYSTEM] + messages)

        assert len(result) <= 13
        assert result[0] == SYSTEM
        assert result[1:] == messages[-12:]

    def test_empty_list(self):
        assert truncate_messages([]) == []

    @pytest.mark.parametrize("messages", [None, "hello", {"role": "user"}, 42])
    def test_rejects_non_list(self, messages):
        with pytest.raises(ClientInputError) as exc:
            truncate_messages(messages)
        assert exc.value.detail == "Invalid messages format"
