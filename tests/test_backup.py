import sqlite3

import pytest

from bizdesk.errors import BackupError
from bizdesk.models import ClientInput
from bizdesk.services import BackupService


@pytest.fixture
def backup_service(repository):
    return BackupService(repository)


def client_names(repository, business_id):
    return [c.name for c in repository.clients.list_by_business(business_id)]


def test_backup_then_restore(repository, business_id, client, backup_service, tmp_path):
    target = backup_service.backup(tmp_path / "backups" / "copy.sqlite")
    assert target.is_file()

    repository.clients.create(
        ClientInput.from_payload({"business_id": business_id, "name": "After Backup"})
    )
    assert "After Backup" in client_names(repository, business_id)

    assert backup_service.restore(target) == []
    assert repository.manager.is_open
    assert client_names(repository, business_id) == ["Acme Corp"]


def test_failed_restore_keeps_original(repository, business_id, client, backup_service, tmp_path):
    garbage = tmp_path / "garbage.sqlite"
    garbage.write_bytes(b"this is not a database" * 100)

    with pytest.raises(BackupError):
        backup_service.restore(garbage)

    assert repository.manager.is_open
    assert client_names(repository, business_id) == ["Acme Corp"]
    leftovers = list(repository.db_path.parent.glob("*.restoring"))
    assert leftovers == []


def test_restore_rejects_foreign_database(repository, backup_service, tmp_path):
    other = tmp_path / "other.sqlite"
    conn = sqlite3.connect(other)
    conn.execute("CREATE TABLE notes (id INTEGER PRIMARY KEY)")
    conn.commit()
    conn.close()

    with pytest.raises(BackupError):
        backup_service.restore(other)
    assert repository.businesses.get_first() is not None


def test_restore_missing_file(backup_service, tmp_path):
    with pytest.raises(BackupError):
        backup_service.restore(tmp_path / "nope.sqlite")


def test_restore_that_fails_migration_keeps_live_data(
    repository, business_id, backup_service, tmp_path
):
    repository.clients.create(
        ClientInput.from_payload({"business_id": business_id, "name": "Keep Me"})
    )
    # Passes the integrity check but cannot take the current indexes
    legacy = tmp_path / "legacy.sqlite"
    conn = sqlite3.connect(legacy)
    conn.execute("CREATE TABLE businesses (id INTEGER PRIMARY KEY, name TEXT)")
    conn.execute("CREATE TABLE transactions (id INTEGER PRIMARY KEY, amount REAL)")
    conn.commit()
    conn.close()

    with pytest.raises(BackupError):
        backup_service.restore(legacy)

    assert repository.manager.is_open
    assert client_names(repository, business_id) == ["Keep Me"]
    assert list(repository.db_path.parent.glob("*.restoring")) == []
