import pytest

from syncer import notification_sync
from syncer.models import Outcome, RemoteUser
from syncer.seerr_client import SeerrClient

from tests.conftest import make_users


def remote_users(count):
    return [RemoteUser.from_api(u) for u in make_users(count)]


def test_settings_revision_payload():
    user = RemoteUser(id=7, email="a@example.com")
    method, endpoint, body = notification_sync.build_update(user, 22, "settings")
    assert method == "POST"
    assert endpoint == "/user/7/settings/notifications"
    assert body == {"emailEnabled": True, "notificationTypes": {"email": 22}}


def test_legacy_revision_payload():
    user = RemoteUser(id=7, email="a@example.com")
    method, endpoint, body = notification_sync.build_update(user, 192, "legacy")
    assert method == "PUT"
    assert endpoint == "/user/7"
    assert body == {"email": "a@example.com", "settings": {"notificationTypes": {"email": 192}}}


def test_unknown_revision():
    with pytest.raises(ValueError):
        notification_sync.build_update(RemoteUser(id=1, email=""), 0, "v3")


def test_failure_is_isolated_to_one_user(client, fake):
    fake.users = make_users(3)
    fake.fail_user_ids = {2}

    results = notification_sync.run(client, remote_users(3), 22, dry_run=False)

    assert [r.outcome for r in results] == [Outcome.OK, Outcome.FAIL, Outcome.OK]
    assert len(fake.methods("POST")) == 3
    assert "500" in results[1].error
    assert fake.users[2]["notificationTypes"] == {"email": 22}


def test_results_carry_mask_and_permission_count(client, fake):
    fake.users = make_users(2)
    results = notification_sync.run(client, remote_users(2), 22, dry_run=False, verbose=True)
    assert [(r.user_id, r.email) for r in results] == [(1, "user1@example.com"), (2, "user2@example.com")]
    assert all(r.target_mask == 22 and r.permission_count == 3 for r in results)


def test_rerun_gives_identical_outcomes(client, fake):
    fake.users = make_users(4)
    fake.fail_user_ids = {3}
    users = remote_users(4)

    first = notification_sync.run(client, users, 6, dry_run=False)
    state_after_first = [dict(u) for u in fake.users]
    second = notification_sync.run(client, users, 6, dry_run=False)

    assert first == second
    assert fake.users == state_after_first


def test_dry_run_sends_no_writes(client, fake):
    fake.users = make_users(5)
    results = notification_sync.run(client, remote_users(5), 22, dry_run=True, verbose=True)
    assert all(r.ok for r in results)
    assert fake.methods("POST") == [] and fake.methods("PUT") == []
    assert all("notificationTypes" not in u for u in fake.users)


def test_legacy_revision_uses_put(legacy_config, fake):
    fake.users = make_users(2)
    client = SeerrClient(legacy_config, session=fake)
    results = notification_sync.run(client, remote_users(2), 64, dry_run=False, revision="legacy")
    assert all(r.ok for r in results)
    assert [c[1] for c in fake.methods("PUT")] == [
        "http://seerr.test/api/v1/user/1",
        "http://seerr.test/api/v1/user/2",
    ]


def test_zero_mask_is_sent(client, fake):
    fake.users = make_users(1)
    results = notification_sync.run(client, remote_users(1), 0, dry_run=False)
    assert results[0].ok and results[0].permission_count == 0
    assert fake.users[0]["notificationTypes"] == {"email": 0}
