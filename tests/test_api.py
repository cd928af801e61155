from datetime import datetime, timedelta, timezone

import pytest

from axle_client import utils
from axle_client.constants import Granularity, HitType, Protocol
from axle_client.errors import DeletedResourceError, HTTPStatusError, MissingFieldError, NotFoundError
from axle_client.resources import Api, Key, LifecycleState

from conftest import TEST_API_ENDPOINT, TEST_API_NAME, TEST_KEY_NAME


@pytest.fixture
def api(client):
    return Api(client, TEST_API_NAME, endpoint=TEST_API_ENDPOINT).save()


def test_new_api_defaults(client):
    api = Api(client, TEST_API_NAME)
    assert api.state is LifecycleState.NEW
    assert api.protocol is Protocol.HTTP
    assert api.endpoint_timeout == 2
    assert api.endpoint_max_redirects == 2
    assert api.strict_ssl is True
    assert api.created is None


def test_get_nonexistent_api(client):
    with pytest.raises(NotFoundError):
        Api.get(client, TEST_API_NAME + ".non-existent")


def test_create_requires_endpoint(client, server):
    with pytest.raises(MissingFieldError):
        Api(client, TEST_API_NAME).save()
    assert server.calls == []


def test_create_api(client, server):
    api = Api(client, TEST_API_NAME, endpoint=TEST_API_ENDPOINT).save()

    assert api.state is LifecycleState.PERSISTED
    assert api.created_at > 0
    method, path, body, _ = server.calls[-1]
    assert (method, path) == ("POST", "api/axletestapi")
    assert body["endPoint"] == TEST_API_ENDPOINT
    assert "extractKeyRegex" not in body


def test_duplicate_create_fails(client, api):
    duplicate = Api(client, TEST_API_NAME, endpoint=TEST_API_ENDPOINT)
    with pytest.raises(HTTPStatusError) as exc:
        duplicate.save()
    assert exc.value.status_code == 400
    assert duplicate.state is LifecycleState.NEW


def test_round_trip(client, api):
    fetched = Api.get(client, TEST_API_NAME)
    assert fetched == api
    assert fetched.state is LifecycleState.PERSISTED


def test_update_api(client, server, api, monkeypatch):
    fetched = Api.get(client, TEST_API_NAME)
    original_updated = fetched.updated_at
    monkeypatch.setattr(utils, "now_ms", lambda: original_updated + 2000)

    fetched.endpoint_timeout += 10
    fetched.save()

    method, path, _, _ = server.calls[-1]
    assert (method, path) == ("PUT", "api/axletestapi")
    assert fetched.updated_at == original_updated + 2000
    assert Api.get(client, TEST_API_NAME).endpoint_timeout == 12


def test_delete_api(client, api):
    stale = Api.get(client, TEST_API_NAME)
    api.delete()
    assert api.state is LifecycleState.DELETED

    with pytest.raises(NotFoundError):
        Api.delete_by_id(client, TEST_API_NAME)
    with pytest.raises(DeletedResourceError):
        api.save()
    # a handle that never saw the delete is rejected by the server
    with pytest.raises(NotFoundError):
        stale.save()
    assert stale.state is LifecycleState.PERSISTED


def test_link_and_unlink_key(client, api):
    Key(client, TEST_KEY_NAME).save()

    key = api.link_key(TEST_KEY_NAME)
    assert isinstance(key, Key)
    assert key.for_apis == [TEST_API_NAME]
    assert key.state is LifecycleState.PERSISTED

    keys = api.keys(0, 10)
    assert list(keys) == [TEST_KEY_NAME]

    key = Api.unlink_key_from(client, TEST_API_NAME, TEST_KEY_NAME)
    assert key.for_apis == []
    assert api.keys() == {}


def test_link_missing_key_fails(api):
    with pytest.raises(NotFoundError):
        api.link_key("nobody")


def test_list_apis(client, server, api):
    Api(client, "second", endpoint="example.com").save()

    apis = Api.list(client, 0, 10)
    assert set(apis) == {TEST_API_NAME, "second"}
    assert apis["second"].endpoint == "example.com"
    assert all(a.state is LifecycleState.PERSISTED for a in apis.values())
    assert server.calls[-1][3] == {"resolve": "true", "from": 0, "to": 10}


def test_charts(client, server, api):
    assert api.key_charts(Granularity.MINUTES) == {"other": 3}
    assert server.calls[-1][3] == {"granularity": "minute"}
    assert Api.charts(client, "hour") == {"top": 12}
    assert server.calls[-1][1] == "apis/charts"


def test_stats(server, api):
    to = datetime(2023, 11, 15, tzinfo=timezone.utc)
    stats = api.stats(to - timedelta(hours=1), to, Granularity.DAYS, for_key=TEST_KEY_NAME)

    assert stats[HitType.UNCACHED][datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)][200] == 4
    _, path, _, params = server.calls[-1]
    assert path == "api/axletestapi/stats"
    assert params == {
        "from": int(to.timestamp()) - 3600,
        "to": int(to.timestamp()),
        "granularity": "day",
        "forkey": TEST_KEY_NAME,
    }


def test_str_includes_url(api):
    text = str(api)
    assert text.startswith("Api - http://axle.test:28902/v1/api/axletestapi: {")
    assert '"endPoint": "localhost:80"' in text


def test_identifier_is_escaped(client, server):
    Api(client, "with space/slash", endpoint=TEST_API_ENDPOINT).save()
    assert server.calls[-1][1] == "api/with%20space%2Fslash"
