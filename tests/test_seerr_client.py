from syncer.errors import ApiError, TransportError
from syncer.seerr_client import SeerrClient

from tests.conftest import make_users


def test_session_carries_api_key_and_json_headers(config, fake):
    SeerrClient(config, session=fake)
    assert fake.headers["X-Api-Key"] == "secret-key"
    assert fake.headers["Content-Type"] == "application/json"


def test_get_returns_json(client, fake):
    fake.users = make_users(3)
    result = client.call("/user?take=50&skip=0")
    assert result.ok and not result.simulated
    assert [u["id"] for u in result.data["results"]] == [1, 2, 3]
    assert fake.calls[0][1] == "http://seerr.test/api/v1/user?take=50&skip=0"


def test_dry_run_write_is_not_transmitted(client, fake):
    result = client.call("/user/1/settings/notifications", "POST", {"x": 1}, dry_run=True)
    assert result.ok and result.simulated
    assert result.data == {"success": True}
    assert fake.calls == []


def test_dry_run_still_transmits_reads(client, fake):
    result = client.call("/status", "GET", dry_run=True)
    assert result.ok
    assert len(fake.methods("GET")) == 1


def test_non_2xx_becomes_api_error(client, fake):
    fake.users = make_users(1)
    fake.fail_user_ids = {1}
    result = client.call("/user/1", "PUT", {"email": "a"})
    assert not result.ok
    assert isinstance(result.error, ApiError)
    assert result.error.status_code == 500
    assert result.error.method == "PUT"
    assert "update failed" in result.error.body


def test_transport_failure_becomes_transport_error(client, fake):
    fake.unreachable = True
    result = client.call("/status")
    assert not result.ok
    assert isinstance(result.error, TransportError)
    assert "connection refused" in str(result.error)


def test_body_is_json_encoded(client, fake):
    fake.users = make_users(1)
    client.call("/user/1/settings/notifications", "POST", {"notificationTypes": {"email": 22}})
    assert fake.calls[0][2] == {"notificationTypes": {"email": 22}}


def test_check_status(client, fake):
    assert client.check_status() == "1.33.2"
    fake.unreachable = True
    assert client.check_status() is None


def test_unsupported_method_is_reported_not_raised(client, fake):
    result = client.call("/user/1", "DELETE")
    assert not result.ok
    assert isinstance(result.error, ApiError)
    assert "unsupported method DELETE" in result.error.body
    assert fake.calls == []


def test_simulated_writes_are_logged_only_when_verbose(config, fake, capsys):
    SeerrClient(config, session=fake).call("/user/1", "PUT", {"email": "a"}, dry_run=True)
    assert "Would send" not in capsys.readouterr().out

    SeerrClient(config, session=fake, verbose=True).call("/user/1", "PUT", {"email": "a"}, dry_run=True)
    assert "Would send PUT /user/1" in capsys.readouterr().out
