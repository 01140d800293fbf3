import json

from contract_size.history import HISTORY_LIMIT, HistoryStore
from contract_size.scoring import score_size


def _address(n: int) -> str:
    return "0x" + f"{n:040x}"


def test_record_prepends_new_addresses(tmp_path):
    store = HistoryStore(str(tmp_path / "history.json"))
    store.record(_address(1), score_size(1024), observed_at=1)
    store.record(_address(2), score_size(2048), observed_at=2)

    assert [entry.address for entry in store.entries()] == [_address(2), _address(1)]


def test_same_address_is_replaced_in_place_case_insensitive(tmp_path):
    store = HistoryStore(str(tmp_path / "history.json"))
    lower = "0x" + "ab" * 20
    store.record(lower, score_size(1024), observed_at=1)
    store.record(_address(7), score_size(4096), observed_at=2)
    store.record(lower.upper().replace("0X", "0x"), score_size(8192), observed_at=3)

    entries = store.entries()
    assert len(entries) == 2
    assert entries[1].address.lower() == lower
    assert entries[1].report.size_bytes == 8192
    assert entries[1].observed_at == 3


def test_history_is_capped(tmp_path):
    store = HistoryStore(str(tmp_path / "history.json"))
    for n in range(HISTORY_LIMIT + 1):
        store.record(_address(n), score_size(1024 * (n + 1)), observed_at=n)

    entries = store.entries()
    assert len(entries) == HISTORY_LIMIT
    assert entries[0].address == _address(HISTORY_LIMIT)
    assert store.get(_address(0)) is None


def test_save_and_load(tmp_path):
    path = tmp_path / "nested" / "history.json"
    store = HistoryStore(str(path))
    store.record(_address(1), score_size(100 * 1024), observed_at=42)
    store.save()

    reloaded = HistoryStore(str(path))
    entries = reloaded.load()
    assert len(entries) == 1
    assert entries[0].observed_at == 42
    assert entries[0].report == score_size(100 * 1024)
    assert reloaded.get(_address(1).upper().replace("0X", "0x")) is not None


def test_empty_store_does_not_write(tmp_path):
    path = tmp_path / "history.json"
    HistoryStore(str(path)).save()
    assert not path.exists()


def test_corrupt_history_is_discarded(tmp_path, caplog):
    path = tmp_path / "history.json"
    path.write_text("{not json", encoding="utf-8")

    store = HistoryStore(str(path))
    with caplog.at_level("WARNING"):
        assert store.load() == []
    assert "Discarding unreadable history" in caplog.text


def test_wrong_shape_history_is_discarded(tmp_path):
    path = tmp_path / "history.json"
    path.write_text(json.dumps({"address": "0x1"}), encoding="utf-8")
    assert HistoryStore(str(path)).load() == []

    path.write_text(json.dumps([{"address": "0x1"}]), encoding="utf-8")
    assert HistoryStore(str(path)).load() == []


def test_clear_removes_file(tmp_path):
    path = tmp_path / "history.json"
    store = HistoryStore(str(path))
    store.record(_address(1), score_size(1024))
    store.save()
    assert path.exists()

    store.clear()
    assert store.entries() == []
    assert not path.exists()
