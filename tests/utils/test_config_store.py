import httpx
import pytest

from osm_services.api.versions import ApiV06
from osm_services.constants import CONFIG_KEYS, DEFAULT_SETTINGS
from osm_services.errors import (
    CapabilityParseError,
    PasswordFileUnreadableError,
    ServerUnreachableError,
    TransportError,
    UnknownConfigKeyError,
    UnsupportedApiVersionError,
)
from osm_services.transport.http_transport import HttpTransport
from osm_services.utils.config_store import ConfigStore


SERVER = "https://osm.example.org"


@pytest.fixture
def store(fake_transport):
    return ConfigStore(transport=fake_transport)


# -- defaults & get_value -------------------------------------------------


def test_defaults(store):
    assert store.as_dict() == DEFAULT_SETTINGS
    assert set(store.get_value()) == CONFIG_KEYS
    assert store.api_version == "0.6"
    assert store.get_api() == ApiV06()


def test_defaults_do_not_touch_the_network(fake_transport):
    ConfigStore(transport=fake_transport)
    assert fake_transport.urls == []


def test_get_value_single_key(store):
    assert store.get_value("User-Agent") == "osm-services"


def test_get_value_unknown_key(store):
    with pytest.raises(UnknownConfigKeyError) as exc:
        store.get_value("colour")

    assert exc.value.key == "colour"
    assert "Unknown config parameter 'colour'" in str(exc.value)


@pytest.mark.parametrize("key", [["user"], {"user"}, ("user",), 1])
def test_non_string_key_is_unknown(store, key):
    before = store.as_dict()

    with pytest.raises(UnknownConfigKeyError) as exc:
        store.get_value(key)
    assert exc.value.key == key

    with pytest.raises(UnknownConfigKeyError):
        store.set_value(key, "fred")
    assert store.as_dict() == before


def test_unknown_key_error_is_a_key_error(store):
    with pytest.raises(KeyError):
        store.get_value("colour")


def test_get_value_without_name_matches_as_dict(store):
    assert store.get_value() == store.as_dict()


def test_snapshot_is_a_copy(store):
    snapshot = store.get_value()
    snapshot["user"] = "mallory"
    store.as_dict()["password"] = "leaked"

    assert store.get_value("user") is None
    assert store.get_value("password") is None


def test_capabilities_unset_before_negotiation(store):
    assert store.capabilities is None
    assert store.get_min_version() is None
    assert store.get_max_version() is None
    assert store.get_timeout() is None
    assert store.get_max_elements() is None
    assert store.get_max_nodes() is None
    assert store.get_tracepoints_per_page() is None
    assert store.get_max_area() is None


# -- set_value --------------------------------------------------------------


@pytest.mark.parametrize(
    "key, value",
    [
        ("adapter", "httpx"),
        ("api_version", "0.6"),
        ("password", "Simples"),
        ("User-Agent", "my-editor/1.0"),
        ("user", "fred@example.com"),
        ("verbose", True),
        ("server", SERVER),
    ],
)
def test_set_then_get_returns_value(store, key, value):
    assert store.set_value(key, value).get_value(key) == value


def test_set_then_get_passwordfile(store, password_file):
    path = password_file("alice:secret")
    assert store.set_value("passwordfile", path).get_value("passwordfile") == path


def test_set_value_is_chainable(store):
    result = store.set_value("user", "f@example.com").set_value("password", "Sis")

    assert result is store
    assert store.get_value("user") == "f@example.com"
    assert store.get_value("password") == "Sis"


def test_set_value_unknown_key_does_not_mutate(store):
    before = store.as_dict()

    with pytest.raises(UnknownConfigKeyError):
        store.set_value("colour", "red")

    assert store.as_dict() == before


def test_bulk_unknown_key_does_not_mutate(store):
    before = store.as_dict()

    with pytest.raises(UnknownConfigKeyError):
        store.set_value({"user": "fred", "colour": "red"})

    assert store.as_dict() == before


def test_bulk_sets_plain_keys(store):
    store.set_value({"user": "fred@example.com", "password": "Simples", "verbose": True})

    assert store.get_value("user") == "fred@example.com"
    assert store.get_value("password") == "Simples"
    assert store.get_value("verbose") is True


def test_bulk_applies_adapter_before_server(store, mocker):
    order = []
    original_apply = store._apply

    def record(key, value):
        order.append(key)
        original_apply(key, value)

    mocker.patch.object(store, "_apply", side_effect=record)

    store.set_value({"server": SERVER, "user": "fred", "adapter": "httpx"})

    assert order == ["adapter", "server", "user"]


def test_bulk_server_is_fetched_through_new_adapter(capabilities_xml):
    seen = []

    def handler(request):
        seen.append(str(request.url))
        return httpx.Response(200, text=capabilities_xml())

    store = ConfigStore()
    store.set_value({"server": SERVER, "adapter": httpx.MockTransport(handler)})

    assert seen == [f"{SERVER}/api/capabilities"]
    assert store.server == SERVER
    assert store.get_max_version() == 0.7


def test_bulk_aborts_on_first_failure(store, fake_transport):
    fake_transport.error = ConnectionError("down")

    with pytest.raises(ServerUnreachableError):
        store.set_value({"user": "fred", "server": SERVER, "password": "later"})

    assert store.get_value("user") == "fred"
    assert store.get_value("password") is None
    assert store.get_value("server") == DEFAULT_SETTINGS["server"]


def test_constructor_applies_settings(fake_transport):
    store = ConfigStore({"user": "fred", "server": SERVER}, transport=fake_transport)

    assert store.get_value("user") == "fred"
    assert store.server == SERVER
    assert fake_transport.urls == [f"{SERVER}/api/capabilities"]


# -- api_version ------------------------------------------------------------


def test_api_version_selects_variant(store):
    store.set_value({"api_version": "0.6"})

    assert isinstance(store.get_api(), ApiV06)
    assert store.get_api().base_path == "/api/0.6"


def test_get_api_url_follows_server_and_version(store):
    store.set_server(SERVER + "/")

    assert store.get_api_url() == f"{SERVER}/api/0.6"
    assert store.get_api_url("node/1") == f"{SERVER}/api/0.6/node/1"


@pytest.mark.parametrize("form", ["single", "bulk"])
def test_unsupported_api_version_is_rejected(store, form):
    with pytest.raises(UnsupportedApiVersionError) as exc:
        if form == "single":
            store.set_value("api_version", "0.5")
        else:
            store.set_value({"api_version": "0.5"})

    assert exc.value.api_version == "0.5"
    assert store.api_version == "0.6"
    assert isinstance(store.get_api(), ApiV06)


# -- set_server -------------------------------------------------------------


def test_set_server_negotiates_capabilities(store, fake_transport):
    store.set_server(SERVER)

    assert fake_transport.urls == [f"{SERVER}/api/capabilities"]
    assert store.get_value("server") == SERVER
    assert store.get_min_version() == 0.5
    assert store.get_max_version() == 0.7
    assert store.get_timeout() == 300
    assert store.get_max_elements() == 10000
    assert store.get_max_nodes() == 2000
    assert store.get_tracepoints_per_page() == 5000
    assert store.get_max_area() == 0.25


def test_set_server_strips_trailing_slash(store, fake_transport):
    store.set_server(SERVER + "/")
    assert fake_transport.urls == [f"{SERVER}/api/capabilities"]


def test_single_key_server_negotiates(store, fake_transport):
    store.set_value("server", SERVER)

    assert fake_transport.urls == [f"{SERVER}/api/capabilities"]
    assert store.get_max_version() == 0.7


def test_set_server_unsupported_version_keeps_previous_server(
    make_transport, capabilities_xml
):
    transport = make_transport(body=capabilities_xml(minimum="0.5", maximum="0.7"))
    store = ConfigStore(transport=transport)
    store.set_server(SERVER)

    transport.body = capabilities_xml(minimum="0.9", maximum="1.0")
    with pytest.raises(UnsupportedApiVersionError) as exc:
        store.set_server("https://other.example.org")

    assert exc.value.min_version == 0.9
    assert exc.value.max_version == 1.0
    assert store.get_value("server") == SERVER
    assert store.server == SERVER
    assert store.get_max_version() == 0.7


def test_configured_version_outside_range(make_transport, capabilities_xml, mocker):
    mocker.patch.dict("osm_services.api.versions.API_VERSIONS", {"0.9": ApiV06})
    store = ConfigStore(
        {"api_version": "0.9"},
        transport=make_transport(body=capabilities_xml("0.5", "0.7")),
    )

    with pytest.raises(UnsupportedApiVersionError):
        store.set_server(SERVER)

    assert store.get_value("server") == DEFAULT_SETTINGS["server"]
    assert store.capabilities is None


def test_set_server_transport_error(store, fake_transport):
    cause = TransportError("Request failed: boom", url=f"{SERVER}/api/capabilities")
    fake_transport.error = cause

    with pytest.raises(ServerUnreachableError) as exc:
        store.set_server(SERVER)

    assert exc.value.__cause__ is cause
    assert exc.value.server == SERVER
    assert store.server == DEFAULT_SETTINGS["server"]


def test_set_server_non_success_status(store, fake_transport):
    fake_transport.status_code = 503

    with pytest.raises(ServerUnreachableError) as exc:
        store.set_server(SERVER)

    assert exc.value.reason == "HTTP 503"
    assert store.capabilities is None


def test_set_server_malformed_xml(store, fake_transport):
    store.set_server(SERVER)
    before = store.capabilities
    fake_transport.body = "<osm><api><version minimum="

    with pytest.raises(CapabilityParseError):
        store.set_server("https://other.example.org")

    assert store.capabilities is before
    assert store.server == SERVER


def test_set_server_missing_version_element(store, fake_transport):
    fake_transport.body = "<osm><api><timeout seconds='300'/></api></osm>"

    with pytest.raises(UnsupportedApiVersionError):
        store.set_server(SERVER)

    assert store.get_timeout() is None


def test_renegotiation_replaces_all_capabilities(store, fake_transport):
    store.set_server(SERVER)
    fake_transport.body = (
        "<osm><api><version minimum='0.6' maximum='0.6'/></api></osm>"
    )

    store.set_server("https://other.example.org")

    assert store.get_min_version() == 0.6
    assert store.get_max_version() == 0.6
    assert store.get_timeout() is None
    assert store.get_max_nodes() is None


def test_set_server_logs_transaction(store, mocker):
    log = mocker.patch("osm_services.utils.config_store.log_transaction")

    store.set_server(SERVER)

    log.assert_called_once()
    operation, details = log.call_args[0]
    assert operation == "capabilities negotiated"
    assert details["server"] == SERVER
    assert details["max_version"] == 0.7


# -- transport --------------------------------------------------------------


def test_default_transport_is_http():
    store = ConfigStore()
    transport = store.get_transport()

    assert isinstance(transport, HttpTransport)
    assert transport.config is store
    assert store.get_transport() is transport


def test_set_transport_rejects_non_transport(store):
    with pytest.raises(TypeError):
        store.set_transport(object())


def test_set_transport_is_chainable(store, make_transport):
    other = make_transport()
    assert store.set_transport(other) is store
    assert store.get_transport() is other


# -- password files -----------------------------------------------------------


def test_password_file_single_line(store, password_file):
    store.set_value("passwordfile", password_file("alice:secret"))

    assert store.get_value("user") == "alice"
    assert store.get_value("password") == "secret"


def test_password_file_single_comment_line(store, password_file):
    path = password_file("# nobody here")
    store.set_value("passwordfile", path)

    assert store.get_value("user") is None
    assert store.get_value("password") is None
    assert store.get_value("passwordfile") == path


def test_password_file_comment_then_credentials(store, password_file):
    store.set_value({"passwordfile": password_file("# comment", "bob:pw2")})

    assert store.get_value("user") == "bob"
    assert store.get_value("password") == "pw2"


def test_password_file_two_data_lines_extract_nothing(store, password_file):
    path = password_file("alice:secret", "bob:pw2")
    store.set_value("passwordfile", path)

    assert store.get_value("user") is None
    assert store.get_value("password") is None
    assert store.get_value("passwordfile") == path


def test_password_file_multiple_lines_match_current_user(store, password_file):
    path = password_file(
        "# Example password file.",
        "alice:secret",
        "carol:c4rol",
        "bob:pw2",
    )
    store.set_value("user", "carol")
    store.set_value("passwordfile", path)

    assert store.get_value("user") == "carol"
    assert store.get_value("password") == "c4rol"


def test_password_file_multiple_lines_without_match(store, password_file):
    path = password_file("alice:secret", "bob:pw2", "dave:pw3")
    store.set_value({"user": "carol", "password": "kept"})
    store.set_value("passwordfile", path)

    assert store.get_value("user") == "carol"
    assert store.get_value("password") == "kept"


def test_password_file_user_set_earlier_in_same_batch(store, password_file):
    path = password_file("alice:secret", "carol:c4rol", "bob:pw2")
    store.set_value({"user": "carol", "passwordfile": path})

    assert store.get_value("password") == "c4rol"


def test_password_file_unreadable(store, tmp_path):
    missing = str(tmp_path / "missing")

    with pytest.raises(PasswordFileUnreadableError) as exc:
        store.set_value("passwordfile", missing)

    assert exc.value.path == missing
    assert store.get_value("passwordfile") is None


@pytest.mark.parametrize("empty", [None, ""])
def test_password_file_empty_path_keeps_credentials(store, password_file, empty):
    store.set_value("passwordfile", password_file("alice:secret"))

    store.set_password_file(empty)

    assert store.get_value("passwordfile") == empty
    assert store.get_value("user") == "alice"
    assert store.get_value("password") == "secret"


def test_password_file_logs_authentication_event(store, password_file, mocker):
    log = mocker.patch("osm_services.utils.config_store.log_authentication_event")

    store.set_password_file(password_file("alice:secret"))

    log.assert_called_once()
    auth_type, success, details = log.call_args[0]
    assert auth_type == "password-file"
    assert success is True
    assert details["user"] == "alice"
    assert "password" not in details


def test_repr_hides_credentials(store):
    store.set_value({"user": "fred", "password": "Simples"})
    assert "Simples" not in repr(store)
