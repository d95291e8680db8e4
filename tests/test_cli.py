"""Tests for the command-line interface."""

import json

import pytest

from run_conditions.cli import EXIT_INVALID_INPUT, build_parser, main, profile_from_args
from run_conditions.config import Settings
from run_conditions.models.profile import ActivityKind, Gender


def run(capsys, *argv: str) -> dict:
    assert main(list(argv)) == 0
    return json.loads(capsys.readouterr().out)


class TestParser:
    def test_subcommands(self):
        parser = build_parser()
        for command in ("dewpoint", "heat", "score", "outfit", "road", "tips", "all"):
            args = parser.parse_args([command, "--temp", "60"])
            assert args.command == command

    def test_temp_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["score"])

    def test_unknown_activity_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["score", "--temp", "60", "--activity", "sprint"])

    def test_boldness_range(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["tips", "--temp", "60", "--boldness", "3"])


class TestProfileFromArgs:
    def test_settings_fill_missing_flags(self):
        settings = Settings(
            _env_file=None, activity=ActivityKind.LONG_RUN, cold_hands=True
        )
        args = build_parser().parse_args(["outfit", "--temp", "40", "--gender", "male"])
        profile = profile_from_args(args, settings)
        assert profile.activity == ActivityKind.LONG_RUN
        assert profile.gender == Gender.MALE
        assert profile.cold_hands is True

    def test_flags_override_settings(self):
        settings = Settings(_env_file=None, cold_hands=True)
        args = build_parser().parse_args(
            ["outfit", "--temp", "40", "--activity", "workout", "--no-cold-hands"]
        )
        profile = profile_from_args(args, settings)
        assert profile.activity == ActivityKind.WORKOUT
        assert profile.cold_hands is False

    def test_boldness_from_settings_and_flag(self):
        settings = Settings(_env_file=None, boldness=-1)
        parser = build_parser()
        assert profile_from_args(parser.parse_args(["tips", "--temp", "40"]), settings).boldness == -1
        args = parser.parse_args(["tips", "--temp", "40", "--boldness", "2"])
        assert profile_from_args(args, settings).boldness == 2


class TestMain:
    """Tests for main()."""

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out

    def test_dewpoint(self, capsys):
        result = run(capsys, "dewpoint", "--temp", "75", "--humidity", "60")
        assert result["dew_point_f"] == pytest.approx(60.3, abs=0.2)
        assert result["comfort"]["level"] == "moderate"

    def test_heat(self, capsys):
        result = run(
            capsys, "heat", "--temp", "85", "--humidity", "70", "--activity", "workout"
        )
        assert result["risk"]["flag"] == "black"
        assert result["risk"]["tier"] == "danger"

    def test_score(self, capsys):
        result = run(capsys, "score", "--temp", "50", "--humidity", "40")
        assert result["score"] == 100
        assert len(result["breakdown"]) == 8

    def test_outfit(self, capsys):
        result = run(
            capsys, "outfit", "--temp", "22", "--apparent", "20", "--wind", "15"
        )
        keys = [item["key"] for item in result["performance"]]
        assert "neck_gaiter" in keys
        assert result["sock_tier"] == "double_socks"

    def test_road(self, capsys):
        result = run(capsys, "road", "--temp", "30", "--precip-prob", "50")
        assert result["severity"] == "danger"

    def test_all(self, capsys):
        result = run(capsys, "all", "--temp", "72", "--humidity", "60", "--uv", "7")
        assert set(result) == {
            "dew_point", "heat_stress", "score", "outfit", "road", "condition", "approach",
        }

    def test_tips(self, capsys):
        result = run(capsys, "tips", "--temp", "50", "--humidity", "40")
        assert result["tips"] == ["Perfect running weather. Get after it!"]
        assert result["pace"].startswith("Run your normal pace.")

    def test_outfit_with_forecast(self, capsys, tmp_path):
        forecast = tmp_path / "next_hours.json"
        forecast.write_text(json.dumps([{"temp_f": 70, "apparent_f": 70, "precip_prob": 90}]))
        argv = ["outfit", "--temp", "60", "--humidity", "40", "--activity", "long_run"]

        without = run(capsys, *argv)
        assert "rain_shell" not in [item["key"] for item in without["performance"]]

        result = run(capsys, *argv, "--forecast", str(forecast))
        assert result["adjusted_temp_f"] == pytest.approx(65)
        assert "rain_shell" in [item["key"] for item in result["performance"]]

    def test_unreadable_look_ahead_file(self, capsys, tmp_path):
        argv = ["all", "--temp", "60", "--forecast", str(tmp_path / "missing.json")]
        assert main(argv) == EXIT_INVALID_INPUT
        assert "Cannot read forecast file" in capsys.readouterr().err

    def test_best_time(self, capsys, tmp_path, hourly_samples):
        forecast = tmp_path / "hourly.json"
        forecast.write_text(
            json.dumps([sample.model_dump(mode="json") for sample in hourly_samples])
        )
        result = run(capsys, "best-time", str(forecast))
        assert list(result["by_day"]) == ["2024-06-15", "2024-06-16"]
        assert result["by_day"]["2024-06-15"]["score"] == 100

    def test_best_time_uses_settings_window(self, capsys, tmp_path, hourly_samples, monkeypatch):
        monkeypatch.setenv("RUN_CONDITIONS_RUN_HOURS_START", "12")
        monkeypatch.setenv("RUN_CONDITIONS_RUN_HOURS_END", "14")
        forecast = tmp_path / "hourly.json"
        forecast.write_text(
            json.dumps([sample.model_dump(mode="json") for sample in hourly_samples])
        )
        result = run(capsys, "best-time", str(forecast))
        assert len(result["ranked"]) == 4

    def test_missing_forecast_file(self, capsys, tmp_path):
        assert main(["best-time", str(tmp_path / "missing.json")]) == EXIT_INVALID_INPUT
        assert "Cannot read forecast file" in capsys.readouterr().err

    def test_invalid_forecast_content(self, capsys, tmp_path):
        forecast = tmp_path / "bad.json"
        forecast.write_text('[{"temp_f": "warm"}]')
        assert main(["best-time", str(forecast)]) == EXIT_INVALID_INPUT
        assert "Invalid input" in capsys.readouterr().err

    def test_invalid_settings(self, capsys, monkeypatch):
        monkeypatch.setenv("RUN_CONDITIONS_RUN_HOURS_START", "22")
        monkeypatch.setenv("RUN_CONDITIONS_RUN_HOURS_END", "5")
        assert main(["score", "--temp", "50"]) == EXIT_INVALID_INPUT
        assert "Invalid configuration" in capsys.readouterr().err
