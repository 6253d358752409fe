"""Tests for config loading, validation, repository overrides, and env var overrides."""

from pathlib import Path

import pytest

from commitguard.auth import UserType, resolve_user
from commitguard.config.loader import load_config
from commitguard.config.schema import CheckSettings, ConfigError, UserConfig
from commitguard.config.settings import Settings


class TestSettings:
    def test_boolean_default(self):
        assert Settings().get_boolean("requireJiraIssue", False) is False
        assert Settings().get_boolean("requireJiraIssue", True) is True

    @pytest.mark.parametrize("raw,expected", [(True, True), ("yes", True), ("0", False), ("Off", False)])
    def test_boolean_strings(self, raw, expected):
        assert Settings({"x": raw}).get_boolean("x") is expected

    def test_boolean_invalid(self):
        with pytest.raises(ValueError):
            Settings({"x": "maybe"}).get_boolean("x")

    def test_blank_string_is_unset(self):
        assert Settings({"commitMessageRegex": "  "}).get_string("commitMessageRegex") is None

    def test_list_joined(self):
        assert Settings({"excludeUsers": ["a", "b"]}).get_string("excludeUsers") == "a,b"

    def test_merged(self):
        merged = Settings({"a": 1, "b": 2}).merged({"b": 3})
        assert dict(merged) == {"a": 1, "b": 3}


class TestCheckSettings:
    def test_defaults_disable_everything(self):
        checks = CheckSettings.from_settings(Settings())
        assert checks == CheckSettings()

    def test_regexes_compiled(self):
        checks = CheckSettings.from_settings(Settings({"commitMessageRegex": "[a-z ]+"}))
        assert checks.commit_message_regex is not None
        assert checks.commit_message_regex.pattern == "[a-z ]+"

    def test_invalid_regex_names_option(self):
        with pytest.raises(ConfigError, match="branchNameRegex"):
            CheckSettings.from_settings(Settings({"branchNameRegex": "[unclosed"}))

    def test_invalid_boolean(self):
        with pytest.raises(ConfigError):
            CheckSettings.from_settings(Settings({"excludeMergeCommits": "sometimes"}))

    def test_exclude_users_split(self):
        checks = CheckSettings.from_settings(Settings({"excludeUsers": "a, b ,,c"}))
        assert checks.exclude_users == ("a", "b", "c")

    def test_unknown_option_warns(self, caplog):
        CheckSettings.from_settings(Settings({"requireJiraIssues": True}))
        assert "requireJiraIssues" in caplog.text


class TestConfigLoading:
    def test_default_config(self, tmp_path: Path, clean_env):
        cfg = load_config(tmp_path)
        assert cfg.checks == CheckSettings()
        assert cfg.output.format == "terminal"
        assert cfg.jira.url is None

    def test_custom_toml(self, tmp_path: Path, clean_env):
        (tmp_path / ".commitguard.toml").write_text(
            'version = "1.0"\n'
            "[checks]\n"
            "requireJiraIssue = true\n"
            'commitMessageRegex = "[A-Z]+-[0-9]+: .*"\n'
            "[jira]\n"
            'url = "https://jira.example.com"\n'
            'issue_jql = "status != Closed"\n'
        )
        cfg = load_config(tmp_path)
        assert cfg.checks.require_jira_issue is True
        assert cfg.checks.commit_message_regex.pattern == "[A-Z]+-[0-9]+: .*"
        assert cfg.jira.url == "https://jira.example.com"
        assert cfg.jira.issue_jql == "status != Closed"

    def test_config_override_path(self, tmp_path: Path, clean_env):
        custom = tmp_path / "custom.toml"
        custom.write_text("[checks]\nexcludeMergeCommits = true\n")
        cfg = load_config(tmp_path, config_override=str(custom))
        assert cfg.checks.exclude_merge_commits is True

    def test_env_config_path(self, tmp_path: Path, clean_env, monkeypatch):
        custom = tmp_path / "server.toml"
        custom.write_text("[checks]\nrequireMatchingAuthorEmail = true\n")
        monkeypatch.setenv("COMMITGUARD_CONFIG", str(custom))
        assert load_config(tmp_path).checks.require_matching_author_email is True

    def test_missing_override_raises(self, tmp_path: Path, clean_env):
        with pytest.raises(ConfigError):
            load_config(tmp_path, config_override="/nonexistent/config.toml")

    def test_invalid_toml_raises(self, tmp_path: Path, clean_env):
        (tmp_path / ".commitguard.toml").write_text("this is not valid [toml")
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_invalid_regex_raises(self, tmp_path: Path, clean_env):
        (tmp_path / ".commitguard.toml").write_text('[checks]\nexcludeByRegex = "("\n')
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_invalid_format_raises(self, tmp_path: Path, clean_env):
        (tmp_path / ".commitguard.toml").write_text('[output]\nformat = "sarif"\n')
        with pytest.raises(ConfigError):
            load_config(tmp_path)


class TestRepositorySettings:
    def test_yaml_overrides_toml(self, tmp_path: Path, clean_env):
        git_dir = tmp_path / ".git"
        git_dir.mkdir()
        (tmp_path / ".commitguard.toml").write_text(
            '[checks]\ncommitMessageRegex = "global"\nexcludeMergeCommits = true\n'
        )
        (git_dir / "commitguard.yaml").write_text("commitMessageRegex: 'repo-.*'\n")
        cfg = load_config(tmp_path, git_dir=git_dir)
        assert cfg.checks.commit_message_regex.pattern == "repo-.*"
        assert cfg.checks.exclude_merge_commits is True

    def test_empty_yaml(self, tmp_path: Path, clean_env):
        (tmp_path / "commitguard.yaml").write_text("")
        assert load_config(tmp_path, git_dir=tmp_path).checks == CheckSettings()

    def test_non_mapping_yaml_raises(self, tmp_path: Path, clean_env):
        (tmp_path / "commitguard.yaml").write_text("- just\n- a list\n")
        with pytest.raises(ConfigError):
            load_config(tmp_path, git_dir=tmp_path)


class TestEnvVarOverrides:
    def test_format_override(self, tmp_path: Path, clean_env, monkeypatch):
        monkeypatch.setenv("CI_COMMITGUARD_FORMAT", "json")
        assert load_config(tmp_path).output.format == "json"

    def test_invalid_format_ignored(self, tmp_path: Path, clean_env, monkeypatch):
        monkeypatch.setenv("CI_COMMITGUARD_FORMAT", "xml")
        assert load_config(tmp_path).output.format == "terminal"

    def test_exclude_users_appended(self, tmp_path: Path, clean_env, monkeypatch):
        (tmp_path / ".commitguard.toml").write_text('[checks]\nexcludeUsers = "alice"\n')
        monkeypatch.setenv("CI_COMMITGUARD_EXCLUDE_USERS", "bob")
        assert load_config(tmp_path).checks.exclude_users == ("alice", "bob")

    def test_jira_url(self, tmp_path: Path, clean_env, monkeypatch):
        monkeypatch.setenv("CI_COMMITGUARD_JIRA_URL", "https://jira.test")
        assert load_config(tmp_path).jira.url == "https://jira.test"


class TestResolveUser:
    def test_from_config(self, clean_env):
        user = resolve_user(UserConfig(name="jsmith", display_name="John Smith", type="service"))
        assert user.name == "jsmith"
        assert user.display_name == "John Smith"
        assert user.type == UserType.SERVICE

    def test_env_takes_precedence(self, clean_env, monkeypatch):
        monkeypatch.setenv("GL_USERNAME", "gitlab-user")
        monkeypatch.setenv("COMMITGUARD_USER_EMAIL", "env@example.com")
        user = resolve_user(UserConfig(name="jsmith", email="cfg@example.com"))
        assert user.name == "gitlab-user"
        assert user.email == "env@example.com"

    def test_commitguard_user_wins_over_gl_username(self, clean_env, monkeypatch):
        monkeypatch.setenv("GL_USERNAME", "gitlab-user")
        monkeypatch.setenv("COMMITGUARD_USER", "explicit")
        assert resolve_user().name == "explicit"

    def test_unknown_type_raises(self, clean_env, monkeypatch):
        monkeypatch.setenv("COMMITGUARD_USER_TYPE", "robot")
        with pytest.raises(ConfigError):
            resolve_user()
