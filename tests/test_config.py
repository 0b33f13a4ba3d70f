import pytest

from powerstore_exporter.config import DEFAULT_API_LIMIT, DEFAULT_PORT, DEFAULT_REQ_LIMIT, load_settings
from powerstore_exporter.errors import ConfigError

VALID = """
exporter:
  port: 9100
  reqLimit: 8
storageList:
  - ip: 10.0.0.1
    user: admin
    password: secret
    apiVersion: v3
    apiLimit: 100
  - ip: 10.0.0.2
    user: admin
    password: secret
    apiVersion: v2
log:
  type: json
  level: debug
"""


def write(tmp_path, text):
    path = tmp_path / "config.yml"
    path.write_text(text)
    return str(path)


def test_load_valid_config(tmp_path):
    settings = load_settings(write(tmp_path, VALID))

    assert settings.exporter.port == 9100
    assert settings.exporter.req_limit == 8
    assert [s.ip for s in settings.storage_list] == ["10.0.0.1", "10.0.0.2"]
    assert settings.storage_list[0].api_limit == 100
    assert settings.storage_list[1].api_limit == DEFAULT_API_LIMIT
    assert settings.storage_list[1].tls_validation == "none"
    assert settings.log.type == "json"
    assert settings.log.level == "debug"


def test_defaults_for_missing_sections(tmp_path):
    settings = load_settings(write(tmp_path, "storageList: []\n"))

    assert settings.exporter.port == DEFAULT_PORT
    assert settings.exporter.req_limit == DEFAULT_REQ_LIMIT
    assert settings.log.type == "logfmt"
    assert settings.log.path is None


def test_environment_fills_unset_values(tmp_path, monkeypatch):
    monkeypatch.setenv("POWERSTORE_EXPORTER__PORT", "9200")
    settings = load_settings(write(tmp_path, "storageList: []\n"))
    assert settings.exporter.port == 9200


def test_missing_file_is_config_error(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_settings(str(tmp_path / "absent.yml"))


def test_yaml_syntax_error_is_config_error(tmp_path):
    with pytest.raises(ConfigError):
        load_settings(write(tmp_path, "storageList: [\n  - ip: 1\n"))


def test_non_mapping_is_config_error(tmp_path):
    with pytest.raises(ConfigError, match="mapping"):
        load_settings(write(tmp_path, "- just\n- a list\n"))


@pytest.mark.parametrize("entry", [
    "{ip: 10.0.0.1, user: admin, password: secret, apiVersion: v3, apiLimit: 0}",
    "{ip: '', user: admin, password: secret, apiVersion: v3}",
    "{ip: 10.0.0.1, user: admin, apiVersion: v3}",
    "{ip: 10.0.0.1, user: admin, password: secret, apiVersion: v3, tlsValidation: sometimes}",
])
def test_invalid_storage_entry(tmp_path, entry):
    with pytest.raises(ConfigError, match="Invalid configuration"):
        load_settings(write(tmp_path, f"storageList:\n  - {entry}\n"))


def test_duplicate_array_rejected(tmp_path):
    text = ("storageList:\n"
            "  - {ip: 10.0.0.1, user: a, password: b, apiVersion: v3}\n"
            "  - {ip: 10.0.0.1, user: c, password: d, apiVersion: v3}\n")
    with pytest.raises(ConfigError, match="duplicate"):
        load_settings(write(tmp_path, text))
