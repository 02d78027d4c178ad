from types import SimpleNamespace

from partyrank.sessions import SessionStore, bearer_token


def _user():
    return SimpleNamespace(id='abc123', email='abc@example.com')


def test_create_get_revoke():
    store = SessionStore()
    token = store.create(_user())
    assert len(token) == 64
    assert store.get(token)['user_id'] == 'abc123'
    assert store.revoke(token) is True
    assert store.get(token) is None
    assert store.revoke(token) is False


def test_expired_sessions_are_dropped():
    now = [1000.0]
    store = SessionStore(ttl_sec=60, clock=lambda: now[0])
    token = store.create(_user())
    now[0] += 59
    assert store.get(token) is not None
    now[0] += 2
    assert store.get(token) is None
    assert len(store) == 0


def test_zero_ttl_never_expires():
    now = [1000.0]
    store = SessionStore(ttl_sec=0, clock=lambda: now[0])
    token = store.create(_user())
    now[0] += 10 ** 9
    assert store.get(token) is not None


def test_bearer_token_parsing():
    def req(value):
        return SimpleNamespace(headers={'Authorization': value} if value is not None else {})

    assert bearer_token(req('Bearer abc')) == 'abc'
    assert bearer_token(req('Basic abc')) is None
    assert bearer_token(req('Bearer ')) is None
    assert bearer_token(req(None)) is None
