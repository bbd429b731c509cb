import pytest
import requests

from steambox import gist
from tests.http_fakes import FakeResponse, FakeSession


def _use(monkeypatch, session: FakeSession) -> list:
    seen = []

    def _fake_session(token, user=None):
        seen.append((token, user))
        return session

    monkeypatch.setattr(gist, "_session", _fake_session)
    return seen


def _gist(files):
    return {"id": "abc", "files": files}


def test_get_document_uses_first_file_by_default(monkeypatch) -> None:
    session = FakeSession([
        FakeResponse(json_data=_gist({
            "🎮 Steam": {"filename": "🎮 Steam", "content": "héllo"},
            "other.md": {"filename": "other.md", "content": "no"},
        }))
    ])
    _use(monkeypatch, session)

    name, content = gist.get_document("abc", token="tok")

    assert name == "🎮 Steam"
    assert content == "héllo".encode("utf-8")
    assert session.calls[0][1] == "https://api.github.com/gists/abc"


def test_get_document_by_name(monkeypatch) -> None:
    session = FakeSession([
        FakeResponse(json_data=_gist({
            "a.md": {"filename": "a.md", "content": "A"},
            "b.md": {"filename": "b.md", "content": "B"},
        }))
    ])
    _use(monkeypatch, session)
    assert gist.get_document("abc", "b.md", token="tok") == ("b.md", b"B")


def test_missing_file_raises(monkeypatch) -> None:
    _use(monkeypatch, FakeSession([FakeResponse(json_data=_gist({"a.md": {"content": ""}}))]))
    with pytest.raises(gist.DocumentNotFound):
        gist.get_document("abc", "nope.md", token="tok")


def test_empty_gist_raises(monkeypatch) -> None:
    _use(monkeypatch, FakeSession([FakeResponse(json_data=_gist({}))]))
    with pytest.raises(gist.DocumentNotFound):
        gist.get_document("abc", token="tok")


def test_truncated_file_is_read_from_raw_url(monkeypatch) -> None:
    session = FakeSession([
        FakeResponse(json_data=_gist({
            "big.md": {"filename": "big.md", "content": "partial", "truncated": True,
                       "raw_url": "https://gist.githubusercontent.com/raw/big.md"},
        })),
        FakeResponse(raw_text="the whole file"),
    ])
    _use(monkeypatch, session)
    assert gist.get_document("abc", token="tok") == ("big.md", b"the whole file")
    assert session.calls[1][1] == "https://gist.githubusercontent.com/raw/big.md"


def test_put_document_patches_file(monkeypatch) -> None:
    session = FakeSession([FakeResponse()])
    seen = _use(monkeypatch, session)

    gist.put_document("abc", "box.md", "new ✓".encode("utf-8"), token="tok", user="me")

    method, url, kwargs = session.calls[0]
    assert method == "PATCH"
    assert url == "https://api.github.com/gists/abc"
    assert kwargs["json"] == {"files": {"box.md": {"content": "new ✓"}}}
    assert seen == [("tok", "me")]


def test_http_errors_propagate(monkeypatch) -> None:
    _use(monkeypatch, FakeSession([FakeResponse(status_code=404, reason="Not Found")]))
    with pytest.raises(requests.HTTPError):
        gist.get_document("abc", token="tok")


def test_session_auth_modes() -> None:
    bearer = gist._session(" tok ")
    assert bearer.headers["Authorization"] == "Bearer tok"
    assert bearer.auth is None

    basic = gist._session("tok", user="me")
    assert basic.auth == ("me", "tok")
    assert "Authorization" not in basic.headers


def test_first_file_name_falls_back_to_key(monkeypatch) -> None:
    _use(monkeypatch, FakeSession([FakeResponse(json_data=_gist({"box.md": {"content": "x"}}))]))
    assert gist.get_document("abc", token="tok") == ("box.md", b"x")


def test_sessions_are_closed(monkeypatch) -> None:
    session = FakeSession([
        FakeResponse(json_data=_gist({"a.md": {"filename": "a.md", "content": "A"}})),
        FakeResponse(),
    ])
    _use(monkeypatch, session)
    gist.get_document("abc", token="tok")
    assert session.closed
    session.closed = False
    gist.put_document("abc", "a.md", b"B", token="tok")
    assert session.closed
