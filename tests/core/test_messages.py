"""
Tests for the message log.
"""

from core.constants import MessageCategory
from core.messages import MessageLog


def test_messages_are_kept_newest_first():
    log = MessageLog()
    log.add("first")
    log.add("second", MessageCategory.COMBAT)
    recent = log.recent()
    assert [m.text for m in recent] == ["second", "first"]
    assert recent[0].category == MessageCategory.COMBAT
    assert log.texts() == ["first", "second"]


def test_log_is_capped():
    log = MessageLog(max_messages=3)
    for i in range(5):
        log.add(f"message {i}")
    assert len(log) == 3
    assert log.texts() == ["message 2", "message 3", "message 4"]


def test_messages_are_stamped_with_the_turn():
    log = MessageLog()
    log.turn = 7
    log.add("hello")
    assert log.recent(1)[0].turn == 7


def test_contains_and_clear():
    log = MessageLog()
    log.add("Goblin is slain!")
    assert log.contains("slain")
    assert not log.contains("level")
    log.clear()
    assert len(log) == 0
