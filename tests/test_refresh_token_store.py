from datetime import timedelta
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import SQLAlchemyError

from models import storage
from models.base_model import as_utc
from models.refresh_token import RefreshToken
from models.refresh_token_store import RefreshTokenStore
from utils.exceptions import RecordNotFound, StoreFailure
from utils.security import make_refresh_token


@pytest.fixture
def store():
    return RefreshTokenStore(storage)


def test_create_and_find(store, make_user, clock):
    user = make_user()
    token = make_refresh_token()
    expires_at = clock() + timedelta(days=60)

    store.create(user.id, token, expires_at)
    storage.close()

    record = store.find_by_token(token)
    assert record.user_id == user.id
    assert as_utc(record.expires_at) == expires_at
    assert record.revoked_at is None


def test_find_unknown_token(store):
    with pytest.raises(RecordNotFound):
        store.find_by_token(make_refresh_token())


def test_revoke_is_idempotent(store, make_user, clock):
    user = make_user()
    token = make_refresh_token()
    store.create(user.id, token, clock() + timedelta(days=60))

    assert store.revoke(token, clock()) is True
    first_revoked_at = as_utc(store.find_by_token(token).revoked_at)
    assert first_revoked_at == clock()

    clock.advance(timedelta(minutes=5))
    assert store.revoke(token, clock()) is False
    storage.close()
    assert as_utc(store.find_by_token(token).revoked_at) == first_revoked_at


def test_revoke_unknown_token_is_not_an_error(store):
    assert store.revoke(make_refresh_token()) is False


def test_delete_all(store, make_user, clock):
    user = make_user()
    for _ in range(3):
        store.create(user.id, make_refresh_token(), clock() + timedelta(days=60))

    assert store.delete_all() == 3
    assert storage.count(RefreshToken) == 0


def test_deleting_user_removes_sessions(store, make_user, clock):
    user = make_user()
    store.create(user.id, make_refresh_token(), clock() + timedelta(days=60))

    storage.delete(user)
    storage.save()
    assert storage.count(RefreshToken) == 0


def test_store_errors_become_store_failure():
    broken = MagicMock()
    broken.save.side_effect = SQLAlchemyError("connection lost")
    store = RefreshTokenStore(broken)

    with pytest.raises(StoreFailure):
        store.create("c9e88594-f26f-496f-bb20-192ed5cc80ba", make_refresh_token(), None)
    broken.rollback.assert_called_once()
