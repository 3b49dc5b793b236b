from tomato.config import env_int


def test_env_int_reads_value(monkeypatch) -> None:
    monkeypatch.setenv("TOMATO_POLL_MS", "25")
    assert env_int("TOMATO_POLL_MS", 10) == 25


def test_env_int_falls_back_on_garbage(monkeypatch) -> None:
    monkeypatch.setenv("TOMATO_POLL_MS", "fast")
    assert env_int("TOMATO_POLL_MS", 10) == 10


def test_env_int_clamps_to_minimum(monkeypatch) -> None:
    monkeypatch.setenv("TOMATO_POLL_MS", "0")
    assert env_int("TOMATO_POLL_MS", 10) == 1
    monkeypatch.delenv("TOMATO_POLL_MS")
    assert env_int("TOMATO_POLL_MS", 10) == 10
