import pytest
import typer

from osm_services.commands.config import show_config
from osm_services.commands.shared import collect_settings, masked_settings
from osm_services.errors import PasswordFileUnreadableError
from osm_services.utils.config_store import ConfigStore


def _show(**overrides):
    options = dict(
        server=None, api_version=None, user=None, passwordfile=None, user_agent=None
    )
    options.update(overrides)
    show_config(**options)


def test_collect_settings_drops_missing_options():
    assert collect_settings(server=None, user="fred", user_agent="ua/1") == {
        "user": "fred",
        "User-Agent": "ua/1",
    }


def test_collect_settings_orders_server_last():
    settings = collect_settings(server="https://h", passwordfile="/pw", api_version="0.6")
    assert list(settings) == ["api_version", "passwordfile", "server"]


def test_masked_settings_hides_password():
    config = ConfigStore({"user": "fred", "password": "Simples"})

    masked = masked_settings(config)

    assert masked["user"] == "fred"
    assert masked["password"] == "***"
    assert config.get_value("password") == "Simples"


def test_show_config_displays_masked_settings(mocker, password_file):
    display = mocker.patch("osm_services.commands.config.display_mapping")

    _show(passwordfile=password_file("alice:secret"))

    settings, title = display.call_args[0]
    assert title == "Configuration"
    assert settings["user"] == "alice"
    assert settings["password"] == "***"


def test_show_config_error_exits(mocker):
    mocker.patch(
        "osm_services.commands.config.build_config",
        side_effect=PasswordFileUnreadableError("/missing"),
    )
    error = mocker.patch("osm_services.commands.config.error")

    with pytest.raises(typer.Exit) as exc:
        _show(passwordfile="/missing")

    assert exc.value.exit_code == 1
    error.assert_called_once()
