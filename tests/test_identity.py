import json

from identity import IdentityStore


def test_user_id_created_once(tmp_path):
    path = tmp_path / "nested" / "identity.json"
    first = IdentityStore(path).get_user_id()
    second = IdentityStore(path).get_user_id()

    assert first
    assert first == second
    assert json.loads(path.read_text())["sa_uid"] == first


def test_existing_keys_preserved(tmp_path):
    path = tmp_path / "identity.json"
    path.write_text(json.dumps({"other": "value"}))

    uid = IdentityStore(path).get_user_id()

    data = json.loads(path.read_text())
    assert data == {"other": "value", "sa_uid": uid}


def test_corrupt_store_regenerates(tmp_path):
    path = tmp_path / "identity.json"
    path.write_text("{not json")

    uid = IdentityStore(path).get_user_id()
    assert json.loads(path.read_text())["sa_uid"] == uid


def test_unwritable_store_still_returns_id(tmp_path, caplog):
    blocker = tmp_path / "file"
    blocker.write_text("not a directory")
    store = IdentityStore(blocker / "identity.json")

    with caplog.at_level("WARNING", logger="identity"):
        uid = store.get_user_id()

    assert uid
    assert "Could not save user id" in caplog.text
    assert blocker.read_text() == "not a directory"
