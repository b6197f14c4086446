import json

import pytest

from notes_vault.errors import CorruptStateError, StorageError
from notes_vault.metrics import entries_total, save_ms
from notes_vault.state.vault import Vault
from notes_vault.storage.file_store import VaultStorage


def _sample_vault() -> Vault:
    vault = Vault()
    vault.put_credential("Gmail", "me@x.com", " pw with spaces ", "")
    vault.put_credential("GitHub", "octo", "s3cret", "2fa on phone")
    vault.put_note("Wifi", "pass123")
    vault.put_note("Todo", "")
    return vault


def test_load_missing_file_returns_empty_vault(tmp_path):
    vault = VaultStorage(tmp_path / "vault-data.json").load()
    assert vault.all_credentials() == []
    assert vault.all_notes() == []


def test_save_then_load_round_trips(tmp_path):
    storage = VaultStorage(tmp_path / "vault-data.json")
    original = _sample_vault()
    storage.save(original)

    loaded = storage.load()
    assert loaded.credentials == original.credentials
    assert loaded.notes == original.notes
    assert loaded.credentials["gmail"].password == " pw with spaces "
    assert entries_total.value == 4
    assert save_ms.last_ms is not None


def test_empty_vault_round_trips(tmp_path):
    storage = VaultStorage(tmp_path / "vault-data.json")
    storage.save(Vault())
    loaded = storage.load()
    assert loaded.is_empty


def test_saved_file_is_tagged_versioned_json(tmp_path):
    path = tmp_path / "vault-data.json"
    VaultStorage(path).save(_sample_vault())
    document = json.loads(path.read_text(encoding="utf-8"))
    assert document["format"] == "notes-vault"
    assert document["version"] == 1
    assert {c["service"] for c in document["credentials"]} == {"Gmail", "GitHub"}
    assert document["notes"][0] == {"title": "Wifi", "content": "pass123"}


def test_save_overwrites_and_leaves_no_temp_files(tmp_path):
    path = tmp_path / "vault-data.json"
    storage = VaultStorage(path)
    storage.save(_sample_vault())
    storage.save(Vault())
    assert storage.load().is_empty
    assert [p.name for p in tmp_path.iterdir()] == ["vault-data.json"]


def test_save_creates_parent_directories(tmp_path):
    path = tmp_path / "nested" / "dir" / "vault.json"
    VaultStorage(path).save(_sample_vault())
    assert path.exists()


@pytest.mark.parametrize(
    "content",
    [
        "not json at all",
        "[]",
        '{"format": "something-else", "version": 1, "credentials": [], "notes": []}',
        '{"format": "notes-vault", "version": 99, "credentials": [], "notes": []}',
        '{"format": "notes-vault", "version": 1, "credentials": [{"username": "u"}], "notes": []}',
        '{"format": "notes-vault", "version": 1, "credentials": [], "notes": [{"title": "  "}]}',
        '{"format": "notes-vault", "version": 1, "credentials": ['
        '{"service": "Gmail"}, {"service": "gmail "}], "notes": []}',
    ],
)
def test_load_rejects_undecodable_content(tmp_path, content):
    path = tmp_path / "vault-data.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(CorruptStateError):
        VaultStorage(path).load()


def test_load_unreadable_path_raises_storage_error(tmp_path):
    # A directory exists but cannot be read as a file.
    with pytest.raises(StorageError):
        VaultStorage(tmp_path).load()


def test_save_failure_raises_storage_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")
    storage = VaultStorage(blocker / "vault-data.json")
    with pytest.raises(StorageError) as excinfo:
        storage.save(_sample_vault())
    assert isinstance(excinfo.value, OSError)
    assert blocker.read_text(encoding="utf-8") == "x"


def test_unencodable_text_raises_storage_error(tmp_path):
    # input() yields lone surrogates for undecodable bytes under a C locale.
    path = tmp_path / "vault-data.json"
    vault = Vault()
    vault.put_credential("Caf\udce9", "u", "p")
    with pytest.raises(StorageError):
        VaultStorage(path).save(vault)
    assert list(tmp_path.iterdir()) == []


def test_end_to_end_scenario_across_processes(tmp_path):
    path = tmp_path / "vault-data.json"
    vault = VaultStorage(path).load()
    vault.put_credential("Gmail", "me@x.com", "pw", "")
    vault.put_note("Wifi", "pass123")
    VaultStorage(path).save(vault)

    reloaded = VaultStorage(path).load()
    assert list(reloaded.credentials) == ["gmail"]
    assert reloaded.credentials["gmail"].username == "me@x.com"
    assert list(reloaded.notes) == ["wifi"]
    assert reloaded.notes["wifi"].content == "pass123"
