import logging
from unittest.mock import MagicMock, patch

import pytest

from clan_rewards import __main__ as main
from clan_rewards.exceptions import AmbiguousIdentityError


def test_flags_are_parsed():
    args = main.parse_args(["--apikey", "key", "--user", "alpha", "--verbose"])

    assert args.apikey == "key"
    assert args.user == "alpha"
    assert args.verbose


def test_missing_api_key_is_a_usage_error(monkeypatch):
    monkeypatch.setattr(main.settings, "BUNGIE_API_KEY", None)
    with pytest.raises(SystemExit) as excinfo:
        main.parse_args(["--user", "alpha"])

    assert excinfo.value.code == 2


def test_run_prints_report(capsys):
    report = MagicMock()
    report.render.return_value = "Clan Engrams\n ✓ Raid\n"
    with patch.object(main, "ClanRewardsReport", return_value=report) as report_cls:
        main.run(["--apikey", "key", "--user", "alpha"])

    run_settings = report_cls.call_args.args[0]
    assert run_settings.BUNGIE_API_KEY == "key"
    report.render.assert_called_once_with("alpha")
    assert "Clan Engrams" in capsys.readouterr().out


def test_run_exits_non_zero_on_error():
    report = MagicMock()
    report.render.side_effect = AmbiguousIdentityError("found 2 destiny users named 'alpha'")
    with patch.object(main, "ClanRewardsReport", return_value=report):
        with pytest.raises(SystemExit) as excinfo:
            main.run(["--apikey", "key", "--user", "alpha"])

    assert excinfo.value.code == 1


def test_missing_user_is_a_usage_error(monkeypatch):
    monkeypatch.setattr(main.settings, "BUNGIE_USERNAME", None)
    with pytest.raises(SystemExit) as excinfo:
        main.parse_args(["--apikey", "key"])

    assert excinfo.value.code == 2


def test_logged_configuration_leaves_out_api_key(caplog):
    caplog.set_level(logging.INFO)
    report = MagicMock()
    report.render.return_value = ""
    with patch.object(main, "ClanRewardsReport", return_value=report):
        main.run(["--apikey", "secret-key-123", "--user", "alpha", "--verbose"])

    assert "BUNGIE_USERNAME" in caplog.text
    assert "BUNGIE_API_KEY" not in caplog.text
    assert "secret-key-123" not in caplog.text
