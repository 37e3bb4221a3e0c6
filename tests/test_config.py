import pytest

from MCE.API.config import ServerConfig, DEV_SECRET


def test_defaults():
    cfg = ServerConfig.from_env({})
    assert cfg.port == 3000
    assert cfg.delivery == "audio"
    assert cfg.reuse_pending is True
    assert cfg.production is False
    assert cfg.session_secret == DEV_SECRET


def test_environment_overrides():
    cfg = ServerConfig.from_env({
        "PORT": "8080",
        "HOST": "0.0.0.0",
        "SESSION_SECRET": "s3cret",
        "MCE_ENV": "production",
        "MCE_DELIVERY": "notes",
        "MCE_REUSE_PENDING": "no",
        "MCE_CHALLENGE_TTL": "30",
        "MCE_TRUST_PROXY": "false",
        "MCE_LOG_LEVEL": "debug",
    })
    assert cfg.port == 8080
    assert cfg.host == "0.0.0.0"
    assert cfg.production is True
    assert cfg.delivery == "notes"
    assert cfg.reuse_pending is False
    assert cfg.challenge_ttl == 30.0
    assert cfg.trust_proxy is False
    assert cfg.log_level == "DEBUG"


def test_zero_ttl_disables_expiry():
    assert ServerConfig.from_env({"MCE_CHALLENGE_TTL": "0"}).challenge_ttl is None


def test_production_requires_a_real_secret():
    with pytest.raises(ValueError):
        ServerConfig.from_env({"MCE_ENV": "production"})


@pytest.mark.parametrize("env", [
    {"MCE_DELIVERY": "midi"},
    {"MCE_REUSE_PENDING": "maybe"},
    {"MCE_CHALLENGE_TTL": "-30"},
    {"MCE_CHALLENGE_TTL": "nan"},
    {"MCE_CHALLENGE_TTL": "inf"},
    {"MCE_LOG_LEVEL": "loud"},
])
def test_invalid_values_rejected(env):
    with pytest.raises(ValueError):
        ServerConfig.from_env(env)


def test_invalid_length_rejected():
    with pytest.raises(ValueError):
        ServerConfig(challenge_length=0)


def test_log_level_is_normalised():
    assert ServerConfig(log_level="warning").log_level == "WARNING"


@pytest.mark.parametrize("ttl", [-1.0, float("nan")])
def test_invalid_ttl_rejected_at_construction(ttl):
    with pytest.raises(ValueError):
        ServerConfig(challenge_ttl=ttl)
