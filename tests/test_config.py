import json

import pytest

from storjsync.config import StorageConfig, load_config
from storjsync.error import ConfigurationException

ACCESS_FILE = {
    "region": "eu1",
    "version": "latest",
    "endpoint": "https://gateway.storjshare.io",
    "use_path_style_endpoint": True,
    "credentials": {"key": "access", "secret": "secret"},
}


def test_from_mapping_reads_access_file_layout():
    config = StorageConfig.from_mapping(ACCESS_FILE)

    assert config.region == "eu1"
    assert config.version == "latest"
    assert config.endpoint == "https://gateway.storjshare.io"
    assert config.use_path_style_endpoint is True
    assert config.credentials.key == "access"


def test_unknown_keys_are_kept_aside():
    config = StorageConfig.from_mapping({**ACCESS_FILE, "signature_version": "v4"})
    assert config.extra == {"signature_version": "v4"}


def test_secret_is_not_in_repr():
    config = StorageConfig.from_mapping(
        {**ACCESS_FILE, "credentials": {"key": "access", "secret": "s3cr3t-value"}}
    )
    assert "s3cr3t-value" not in repr(config)


@pytest.mark.parametrize(
    "override, field",
    [
        ({"credentials": {"key": "", "secret": "s"}}, "credentials.key"),
        ({"credentials": {"key": "k", "secret": ""}}, "credentials.secret"),
        ({"region": ""}, "region"),
        ({"version": ""}, "version"),
        ({"endpoint": "gateway.storjshare.io"}, "endpoint"),
        ({"endpoint": "ftp://gateway.storjshare.io"}, "endpoint"),
        ({"use_path_style_endpoint": "maybe"}, "use_path_style_endpoint"),
        ({"timeout": 0}, "timeout"),
    ],
)
def test_invalid_values_raise(override, field):
    with pytest.raises(ConfigurationException) as info:
        StorageConfig.from_mapping({**ACCESS_FILE, **override})
    assert info.value.field == field


def test_missing_credentials_raise():
    data = dict(ACCESS_FILE)
    del data["credentials"]
    with pytest.raises(ConfigurationException, match="credentials"):
        StorageConfig.from_mapping(data)


def test_load_config_from_json(tmp_path):
    path = tmp_path / "storj.json"
    path.write_text(json.dumps(ACCESS_FILE), encoding="utf-8")

    assert load_config(path).credentials.secret == "secret"


def test_load_config_missing_file(tmp_path):
    with pytest.raises(ConfigurationException, match="Cannot read"):
        load_config(tmp_path / "absent.json")


def test_load_config_bad_json(tmp_path):
    path = tmp_path / "storj.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ConfigurationException, match="not valid JSON"):
        load_config(path)


def test_from_env():
    env = {
        "STORJ_ACCESS_KEY": "access",
        "STORJ_SECRET_KEY": "secret",
        "STORJ_REGION": "ap1",
        "STORJ_USE_PATH_STYLE_ENDPOINT": "false",
        "STORJ_TIMEOUT": "5",
    }

    config = StorageConfig.from_env(environ=env)

    assert config.region == "ap1"
    assert config.use_path_style_endpoint is False
    assert config.timeout == 5.0
    assert config.endpoint == "https://gateway.storjshare.io"


def test_from_env_without_keys_fails():
    with pytest.raises(ConfigurationException):
        StorageConfig.from_env(environ={})


def test_retry_settings_are_not_a_config_field():
    config = StorageConfig.from_mapping({**ACCESS_FILE, "max_retries": 5})

    assert not hasattr(config, "max_retries")
    assert config.extra == {"max_retries": 5}
