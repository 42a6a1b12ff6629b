import pytest

from citydelivery.viewmodels.settings_vm import DEFAULT_ENDPOINT_URL, SettingsVM


def test_defaults(monkeypatch):
    monkeypatch.delenv("CITYDELIVERY_LOG_LEVEL", raising=False)
    monkeypatch.delenv("CITYDELIVERY_DEBUG", raising=False)

    payload = SettingsVM().to_dict()

    assert payload == {
        "endpoint_url": DEFAULT_ENDPOINT_URL,
        "request_timeout_s": 10,
        "discard_stale_responses": False,
        "debug_logging": False,
    }


def test_debug_env_flag_enables_debug_logging(monkeypatch):
    monkeypatch.delenv("CITYDELIVERY_LOG_LEVEL", raising=False)
    monkeypatch.setenv("CITYDELIVERY_DEBUG", "yes")

    assert SettingsVM().debug_logging is True


def test_apply_dict_coerces_values():
    vm = SettingsVM()

    vm.apply_dict(
        {
            "endpoint_url": "  http://localhost:8000/fetch_deliveries.php ",
            "request_timeout_s": "15",
            "discard_stale_responses": "on",
            "debug_logging": 0,
        }
    )

    assert vm.endpoint_url == "http://localhost:8000/fetch_deliveries.php"
    assert vm.request_timeout_s == 15
    assert vm.discard_stale_responses is True
    assert vm.debug_logging is False


def test_apply_dict_rejects_unknown_keys():
    vm = SettingsVM()

    with pytest.raises(ValueError, match="Unsupported settings keys: api_key"):
        vm.apply_dict({"api_key": "secret"})


@pytest.mark.parametrize(
    "payload",
    [
        {"endpoint_url": "ftp://example"},
        {"endpoint_url": 42},
        {"request_timeout_s": 0},
        {"request_timeout_s": "soon"},
        {"request_timeout_s": True},
    ],
)
def test_apply_dict_rejects_bad_values(payload):
    vm = SettingsVM()

    with pytest.raises(ValueError):
        vm.apply_dict(payload)


def test_apply_dict_requires_mapping():
    with pytest.raises(ValueError):
        SettingsVM().apply_dict(["endpoint_url"])  # type: ignore[arg-type]


def test_property_setters_validate():
    vm = SettingsVM()

    vm.endpoint_url = "https://api.example/deliveries"
    vm.request_timeout_s = 3.0

    assert vm.to_dict()["endpoint_url"] == "https://api.example/deliveries"
    assert vm.request_timeout_s == 3
    with pytest.raises(ValueError):
        vm.request_timeout_s = -1
