import pytest

from formloom.settings import Settings


@pytest.mark.unit
def test_settings_namespace_defaults() -> None:
    settings = Settings.load()
    config = settings.to_flask_config()

    assert config["NAMESPACE_PROVISIONING_ENABLED"] is True
    assert config["NAMESPACE_TABLE_PREFIX"] == "ns_"
    assert config["SUBMISSION_LIST_LIMIT"] == 100


@pytest.mark.unit
def test_settings_table_prefix_is_lowercased(monkeypatch) -> None:
    monkeypatch.setenv("NAMESPACE_TABLE_PREFIX", "Data_")

    assert Settings.load().namespace_table_prefix == "data_"


@pytest.mark.unit
@pytest.mark.parametrize("prefix", ["1ns_", "ns-", "a_prefix_that_is_too_long"])
def test_settings_rejects_invalid_table_prefix(monkeypatch, prefix: str) -> None:
    monkeypatch.setenv("NAMESPACE_TABLE_PREFIX", prefix)

    with pytest.raises(ValueError, match="NAMESPACE_TABLE_PREFIX"):
        Settings.load()


@pytest.mark.unit
def test_settings_rejects_non_positive_submission_limit(monkeypatch) -> None:
    monkeypatch.setenv("SUBMISSION_LIST_LIMIT", "0")

    with pytest.raises(ValueError, match="SUBMISSION_LIST_LIMIT"):
        Settings.load()


@pytest.mark.unit
def test_settings_namespace_provisioning_flag(monkeypatch) -> None:
    monkeypatch.setenv("NAMESPACE_PROVISIONING_ENABLED", "false")

    assert Settings.load().to_flask_config()["NAMESPACE_PROVISIONING_ENABLED"] is False
