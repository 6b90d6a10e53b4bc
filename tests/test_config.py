import pytest

from getmailer_config import DEFAULT_API_URL, ConfigurationError, Settings


def test_defaults_when_environment_is_empty():
    settings = Settings.from_env({})
    assert settings.api_url == DEFAULT_API_URL
    assert settings.api_key is None
    assert settings.signup_enabled is True
    assert settings.timeout is None
    assert settings.log_level == "INFO"


def test_reads_all_variables():
    settings = Settings.from_env({
        "GETMAILER_API_KEY": "gm_abc",
        "GETMAILER_API_URL": "https://staging.getmailer.app/",
        "GETMAILER_SIGNUP_ENABLED": "false",
        "GETMAILER_TIMEOUT_SECONDS": "12.5",
        "GETMAILER_LOG_LEVEL": "debug",
    })
    assert settings.api_key == "gm_abc"
    assert settings.api_url == "https://staging.getmailer.app"
    assert settings.signup_enabled is False
    assert settings.timeout == 12.5
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("raw", ["1", "true", "YES", "on"])
def test_signup_enabled_truthy_values(raw):
    assert Settings.from_env({"GETMAILER_SIGNUP_ENABLED": raw}).signup_enabled is True


def test_empty_api_key_counts_as_missing():
    settings = Settings.from_env({"GETMAILER_API_KEY": ""})
    assert settings.api_key is None
    assert not settings.has_api_key


def test_invalid_timeout_is_a_configuration_error():
    with pytest.raises(ConfigurationError, match="GETMAILER_TIMEOUT_SECONDS"):
        Settings.from_env({"GETMAILER_TIMEOUT_SECONDS": "soon"})


def test_startup_key_required_only_without_signup():
    Settings(api_key=None, signup_enabled=True).require_startup_key()
    Settings(api_key="gm_abc", signup_enabled=False).require_startup_key()

    with pytest.raises(ConfigurationError, match="GETMAILER_API_KEY"):
        Settings(api_key=None, signup_enabled=False).require_startup_key()


def test_repr_hides_api_key():
    assert "gm_secret" not in repr(Settings(api_key="gm_secret"))
