import httpx
import pytest

from household_service.clients.user_directory import HttpUserDirectoryClient
from household_service.errors import DirectoryUnavailableError

BASE_URL = "http://users.test"


def make_directory(handler) -> HttpUserDirectoryClient:
    client = httpx.Client(base_url=BASE_URL, transport=httpx.MockTransport(handler))
    return HttpUserDirectoryClient(BASE_URL, client=client)


def test_get_user_found():
    requested = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(request.url.path)
        return httpx.Response(
            200,
            json={"id": 7, "first_name": "Jack", "last_name": "Meyer", "role": "admin"},
        )

    user = make_directory(handler).get_user("7")

    assert requested == ["/users/7"]
    assert user.id == "7"
    assert user.first_name == "Jack"
    assert user.last_name == "Meyer"


def test_get_user_not_found_returns_none():
    directory = make_directory(lambda request: httpx.Response(404))
    assert directory.get_user("ghost") is None


def test_get_user_rejected_id_returns_none():
    directory = make_directory(lambda request: httpx.Response(400, json={"detail": "bad id"}))
    assert directory.get_user("not valid") is None


def test_get_user_server_error_is_unavailable():
    directory = make_directory(lambda request: httpx.Response(502))
    with pytest.raises(DirectoryUnavailableError) as exc_info:
        directory.get_user("u1")
    assert exc_info.value.path == "/users/u1"


def test_get_user_timeout_is_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(DirectoryUnavailableError):
        make_directory(handler).get_user("u1")


def test_get_user_connection_error_is_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(DirectoryUnavailableError):
        make_directory(handler).get_user("u1")


def test_get_user_malformed_body_is_unavailable():
    directory = make_directory(lambda request: httpx.Response(200, text="<html>"))
    with pytest.raises(DirectoryUnavailableError):
        directory.get_user("u1")


def test_get_user_missing_id_is_unavailable():
    directory = make_directory(lambda request: httpx.Response(200, json={"first_name": "X"}))
    with pytest.raises(DirectoryUnavailableError):
        directory.get_user("u1")


def test_base_url_trailing_slash_is_stripped():
    directory = HttpUserDirectoryClient(f"{BASE_URL}/", timeout=1.0)
    try:
        assert directory.base_url == BASE_URL
        assert directory.client.timeout.read == 1.0
    finally:
        directory.close()


@pytest.mark.parametrize(
    "user_id, raw_path",
    [
        ("ghost/../u1", b"/users/ghost%2F..%2Fu1"),
        ("u1?x=1", b"/users/u1%3Fx%3D1"),
        ("u1#frag", b"/users/u1%23frag"),
        ("a b", b"/users/a%20b"),
    ],
)
def test_get_user_sends_id_as_one_path_segment(user_id, raw_path):
    requested = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(request.url.raw_path)
        return httpx.Response(404)

    assert make_directory(handler).get_user(user_id) is None
    assert requested == [raw_path]


@pytest.mark.parametrize("user_id", ["", ".", ".."])
def test_get_user_dot_segment_ids_not_requested(user_id):
    requested = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(request.url.raw_path)
        return httpx.Response(200, json={"id": "u1"})

    assert make_directory(handler).get_user(user_id) is None
    assert requested == []


def test_get_user_answer_for_another_id_returns_none():
    directory = make_directory(lambda request: httpx.Response(200, json={"id": "u1"}))
    assert directory.get_user("u2") is None
