import pytest

from services.chat_history import ChatHistoryService


class TestChatHistoryService:
    """Tests for ChatHistoryService."""

    def test_empty_history(self, services):
        assert services.chat_history.find_by_user("42") == []

    def test_append_keeps_order(self, services):
        services.chat_history.append("42", "user", "What's my balance?")
        services.chat_history.append("42", "assistant", "You have $4250.33.")

        history = services.chat_history.find_by_user("42")

        assert [(m.role, m.content) for m in history] == [
            ("user", "What's my balance?"),
            ("assistant", "You have $4250.33."),
        ]

    def test_oldest_messages_are_evicted(self, db_manager_with_schema):
        history = ChatHistoryService(db_manager_with_schema, limit=3)

        for i in range(5):
            history.append("42", "user", f"message {i}")

        assert [m.content for m in history.find_by_user("42")] == [
            "message 2",
            "message 3",
            "message 4",
        ]

    def test_eviction_is_per_user(self, db_manager_with_schema):
        history = ChatHistoryService(db_manager_with_schema, limit=2)

        history.append("1", "user", "one")
        for i in range(3):
            history.append("2", "user", f"two-{i}")

        assert [m.content for m in history.find_by_user("1")] == ["one"]
        assert len(history.find_by_user("2")) == 2

    def test_default_limit_is_twenty(self, services):
        for i in range(25):
            services.chat_history.append("42", "user", str(i))

        history = services.chat_history.find_by_user("42")

        assert len(history) == 20
        assert history[0].content == "5"

    def test_invalid_role_raises(self, services):
        with pytest.raises(ValueError, match="Invalid chat role"):
            services.chat_history.append("42", "system", "nope")

    def test_invalid_limit_raises(self, db_manager_with_schema):
        with pytest.raises(ValueError):
            ChatHistoryService(db_manager_with_schema, limit=0)

    def test_clear(self, services):
        services.chat_history.append("42", "user", "hi")
        services.chat_history.append("7", "user", "hello")

        removed = services.chat_history.clear("42")

        assert removed == 1
        assert services.chat_history.find_by_user("42") == []
        assert len(services.chat_history.find_by_user("7")) == 1
