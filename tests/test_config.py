"""Tests for configuration loading and validation."""

import datetime

import pytest

from harvest_blame.config import load_config
from harvest_blame.errors import CONFIG_HINT, ConfigError


class TestLoadConfig:

    def test_valid_config(self, config_env):
        config = load_config(config_env)

        assert config.harvest.user == "reports@example.com"
        assert config.harvest.base_url == "https://acme.harvestapp.com"
        assert config.date_range.start == datetime.date(2024, 1, 1)
        assert config.date_range.end == datetime.date(2024, 1, 3)
        assert config.user_ids == ("alice", "bob")
        assert config.email.to_address == "leads@example.com"
        assert config.email.cc == ("pm@example.com",)
        assert config.email.cc_users is False

    def test_smtp_defaults(self, config_env):
        smtp = load_config(config_env).email.smtp
        assert smtp.host == "localhost"
        assert smtp.port == 25
        assert smtp.user == ""
        assert smtp.use_ssl is False

    def test_ssl_off_uses_http(self, config_env):
        config_env["HARVEST_USE_SSL"] = "0"
        assert load_config(config_env).harvest.base_url == "http://acme.harvestapp.com"

    def test_proxy_needs_host_and_port(self, config_env):
        config_env["HARVEST_HTTP_PROXY"] = "proxy.local"
        assert load_config(config_env).harvest.proxy_url is None

        config_env["HARVEST_HTTP_PROXY_PORT"] = "3128"
        assert load_config(config_env).harvest.proxy_url == "http://proxy.local:3128"

    def test_relative_dates_use_reference_day(self, config_env):
        config_env["BLAME_START"] = "-7 days"
        config_env["BLAME_END"] = "yesterday"

        config = load_config(config_env, today=datetime.date(2024, 1, 8))

        assert config.date_range.start == datetime.date(2024, 1, 1)
        assert config.date_range.end == datetime.date(2024, 1, 7)

    def test_timezone_resolves_today(self, config_env):
        config_env["BLAME_TIMEZONE"] = "Pacific/Auckland"
        config_env["BLAME_START"] = "today"
        config_env["BLAME_END"] = "today"

        config = load_config(config_env)

        assert config.timezone == "Pacific/Auckland"
        assert len(config.date_range) == 1

    def test_cc_users_flag(self, config_env):
        config_env["EMAIL_CC_USERS"] = "Yes"
        assert load_config(config_env).email.cc_users is True

    def test_empty_manual_cc(self, config_env):
        del config_env["EMAIL_CC"]
        assert load_config(config_env).email.cc == ()


class TestConfigErrors:

    @pytest.mark.parametrize("key, message", [
        ("HARVEST_USER", "No Harvest User"),
        ("HARVEST_PASSWORD", "No Harvest Password"),
        ("HARVEST_ACCOUNT", "No Harvest API Account"),
        ("HARVEST_USE_SSL", "SSL configuration"),
        ("BLAME_START", "No start time"),
        ("BLAME_END", "No end time"),
        ("BLAME_USERS", "No users have been configured"),
        ("EMAIL_FROM", "send mail from"),
        ("EMAIL_TO", "send mail to"),
        ("EMAIL_CC_USERS", "whether to cc the users"),
    ])
    def test_missing_required_key(self, config_env, key, message):
        del config_env[key]

        with pytest.raises(ConfigError) as excinfo:
            load_config(config_env)

        assert excinfo.value.key == key
        assert message in str(excinfo.value)
        assert CONFIG_HINT in str(excinfo.value)

    def test_blank_value_counts_as_missing(self, config_env):
        config_env["HARVEST_ACCOUNT"] = "   "
        with pytest.raises(ConfigError) as excinfo:
            load_config(config_env)
        assert excinfo.value.key == "HARVEST_ACCOUNT"

    def test_user_list_of_only_commas(self, config_env):
        config_env["BLAME_USERS"] = " , ,"
        with pytest.raises(ConfigError) as excinfo:
            load_config(config_env)
        assert excinfo.value.key == "BLAME_USERS"

    def test_bad_boolean(self, config_env):
        config_env["EMAIL_CC_USERS"] = "sometimes"
        with pytest.raises(ConfigError, match="EMAIL_CC_USERS"):
            load_config(config_env)

    def test_bad_port(self, config_env):
        config_env["SMTP_PORT"] = "twenty-five"
        with pytest.raises(ConfigError, match="SMTP_PORT"):
            load_config(config_env)

    def test_unparseable_date(self, config_env):
        config_env["BLAME_END"] = "whenever"
        with pytest.raises(ConfigError) as excinfo:
            load_config(config_env)
        assert excinfo.value.key == "BLAME_END"

    def test_start_after_end(self, config_env):
        config_env["BLAME_START"] = "2024-01-05"
        with pytest.raises(ConfigError, match="after end date"):
            load_config(config_env)

    def test_unknown_timezone(self, config_env):
        config_env["BLAME_TIMEZONE"] = "Mars/Olympus_Mons"
        with pytest.raises(ConfigError) as excinfo:
            load_config(config_env)
        assert excinfo.value.key == "BLAME_TIMEZONE"

    def test_reads_os_environ_by_default(self, clean_env, config_env):
        for name, value in config_env.items():
            clean_env.setenv(name, value)

        assert load_config().user_ids == ("alice", "bob")
