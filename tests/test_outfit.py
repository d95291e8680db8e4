"""Tests for the outfit selector."""

import itertools
import math

import pytest

from run_conditions.models.profile import ActivityKind, Gender, RunProfile
from run_conditions.models.recommendation import SockTier
from run_conditions.models.weather import ForecastPoint, WeatherSample
from run_conditions.recommendations.catalog import (
    EXCLUSIVE_GROUPS,
    ExclusiveGroup,
    resolve_conflicts,
    sort_keys,
)
from run_conditions.recommendations.layers import (
    COLD_HANDS_GLOVES,
    STANDARD_GLOVES,
    base_layers_for_temp,
    calculate_effective_temp,
    choose_socks,
    hands_label,
    hands_level_from_gear,
    required_glove_keys,
)
from run_conditions.recommendations.outfit import (
    LookAhead,
    OutfitContext,
    OutfitSelector,
    face_and_head,
    outfit_for,
    rain_protection,
    windbreaker,
)


def sample(apparent: float, temp: float | None = None, **kwargs) -> WeatherSample:
    kwargs.setdefault("humidity", 50)
    return WeatherSample(
        temp_f=apparent if temp is None else temp,
        apparent_f=apparent,
        **kwargs,
    )


def context(weather: WeatherSample, profile: RunProfile | None = None) -> OutfitContext:
    return OutfitContext.build(weather, profile or RunProfile())


class TestEffectiveTemp:
    """Tests for the outfit temperature model."""

    def test_passthrough(self):
        assert calculate_effective_temp(sample(50)) == 50

    def test_sensitivity(self):
        assert calculate_effective_temp(sample(50), temp_sensitivity=-1) == 45
        assert calculate_effective_temp(sample(50), temp_sensitivity=2) == 60

    def test_wind_cooling_capped(self):
        assert calculate_effective_temp(sample(40, wind_mph=20)) == pytest.approx(37)
        assert calculate_effective_temp(sample(40, wind_mph=40)) == pytest.approx(35)

    def test_humidity_warming(self):
        assert calculate_effective_temp(sample(70, humidity=80)) == pytest.approx(74)

    def test_sun_only_in_daylight(self):
        assert calculate_effective_temp(sample(60, uv_index=9)) == pytest.approx(66)
        assert calculate_effective_temp(sample(60, uv_index=9, is_day=False)) == 60

    def test_rain_cooling(self):
        assert calculate_effective_temp(sample(50, precip_prob=80)) == 47
        assert calculate_effective_temp(sample(65, precip_prob=80)) == 65


class TestBaseLayers:
    """Tests for temperature-band base garments."""

    def test_male_mild(self):
        assert base_layers_for_temp(65, Gender.MALE) == {"shorts", "short_sleeve"}

    def test_female_mild(self):
        assert base_layers_for_temp(65, Gender.FEMALE) == {
            "shorts",
            "tank_top",
            "sports_bra",
        }

    def test_hot(self):
        assert base_layers_for_temp(75, Gender.MALE) == {"split_shorts", "cap"}
        assert "tank_top" in base_layers_for_temp(75, Gender.FEMALE)

    def test_extreme_cold(self):
        gear = base_layers_for_temp(-5, Gender.FEMALE)
        assert {"balaclava", "mittens", "mittens_liner", "insulated_jacket"} <= gear
        assert "sports_bra" in gear

    def test_band_edges_exclusive(self):
        assert "tights" in base_layers_for_temp(51.9, Gender.MALE)
        assert "shorts" in base_layers_for_temp(52, Gender.MALE)


class TestGloves:
    """Tests for the glove tier tables."""

    @pytest.mark.parametrize(
        "glove_temp,wind,expected",
        [
            (65, 30, set()),
            (56, 0, set()),
            (50, 0, {"light_gloves"}),
            (56, 8, {"light_gloves"}),
            (40, 0, {"medium_gloves"}),
            (50, 12, {"medium_gloves"}),
            (25, 0, {"mittens"}),
            (50, 15, {"mittens"}),
            (10, 0, {"mittens", "mittens_liner"}),
        ],
    )
    def test_standard_tiers(self, glove_temp, wind, expected):
        assert required_glove_keys(glove_temp, wind, STANDARD_GLOVES) == expected

    def test_cold_hands_table_is_warmer(self):
        assert required_glove_keys(58, 0, STANDARD_GLOVES) == set()
        assert required_glove_keys(58, 0, COLD_HANDS_GLOVES) == {"light_gloves"}
        assert required_glove_keys(16, 0, COLD_HANDS_GLOVES) == {"mittens", "mittens_liner"}

    def test_nan_needs_no_gloves(self):
        assert required_glove_keys(float("nan"), 0, STANDARD_GLOVES) == set()

    def test_hands_level(self):
        assert hands_level_from_gear([]) == 0
        assert hands_level_from_gear(["light_gloves"]) == 1
        assert hands_level_from_gear(["medium_gloves"]) == 2
        assert hands_level_from_gear(["mittens"]) == 3
        assert hands_level_from_gear(["mittens", "mittens_liner"]) == 4

    def test_hands_label(self):
        assert hands_label(4) == "Mittens + liner"
        assert hands_label(9) == "None"

    @pytest.mark.parametrize("wind", [0, 5, 12, 20, 30])
    @pytest.mark.parametrize("gender", list(Gender))
    @pytest.mark.parametrize("cold_hands", [False, True])
    @pytest.mark.parametrize("activity", list(ActivityKind))
    def test_hands_level_rises_as_it_gets_colder(self, activity, cold_hands, gender, wind):
        """Hand protection never drops as the temperature falls."""
        profile = RunProfile(activity=activity, gender=gender, cold_hands=cold_hands)
        levels = [
            outfit_for(sample(apparent, wind_mph=wind), profile).hands_level
            for apparent in range(80, -31, -1)
        ]
        assert levels == sorted(levels)
        assert levels[0] == 0
        assert levels[-1] == 4


class TestSocks:
    """Tests for the sock tier."""

    @pytest.mark.parametrize(
        "weather,tier",
        [
            (sample(65), SockTier.LIGHT),
            (sample(50), SockTier.HEAVY),
            (sample(20), SockTier.DOUBLE),
            (sample(32, precip_in=0.1), SockTier.DOUBLE),
            (sample(32, precip_prob=60), SockTier.DOUBLE),
            (sample(30, wind_mph=15), SockTier.DOUBLE),
            (sample(30, wind_mph=14), SockTier.HEAVY),
            (sample(72), SockTier.LIGHT),
            (sample(62, humidity=80), SockTier.LIGHT),
        ],
    )
    def test_tiers(self, weather, tier):
        assert choose_socks(weather) == tier


class TestExclusiveGroups:
    def test_first_key_wins(self):
        group = ExclusiveGroup("headwear", ("brim_cap", "cap"))
        assert group.resolve(frozenset({"cap", "brim_cap", "sunglasses"})) == {
            "brim_cap",
            "sunglasses",
        }

    def test_jacket_resolved_before_core(self):
        """An insulated jacket drops the light jacket, which keeps the vest."""
        gear = frozenset({"insulated_jacket", "light_jacket", "vest"})
        assert resolve_conflicts(gear) == {"insulated_jacket", "vest"}

    def test_sort_keys_puts_unranked_last(self):
        assert sort_keys(frozenset({"zzz", "cap", "aaa"}), ("cap",)) == ["cap", "aaa", "zzz"]


class TestStages:
    """Tests for individual pipeline stages."""

    def test_rain_adds_shell_and_brim_cap(self):
        ctx = context(sample(55, precip_prob=60))
        assert rain_protection(frozenset(), ctx) == {"rain_shell", "brim_cap"}

    def test_no_windbreaker_when_warm(self):
        ctx = context(sample(62, wind_mph=25))
        assert "windbreaker" not in windbreaker(frozenset(), ctx)

    def test_windbreaker_when_cool_and_breezy(self):
        ctx = context(sample(52, wind_mph=12))
        assert "windbreaker" in windbreaker(frozenset(), ctx)

    def test_windbreaker_skipped_when_raining(self):
        ctx = context(sample(52, wind_mph=12))
        assert "windbreaker" not in windbreaker(frozenset({"rain_shell"}), ctx)

    def test_workout_swaps_beanie_for_headband(self):
        ctx = context(sample(25, wind_mph=5), RunProfile(activity=ActivityKind.WORKOUT))
        gear = face_and_head(frozenset({"beanie"}), ctx)
        assert "headband" in gear
        assert "beanie" not in gear

    def test_extreme_cold_face_cover(self):
        ctx = context(sample(-5))
        assert {"balaclava", "neck_gaiter", "beanie"} <= face_and_head(frozenset(), ctx)


class TestOutfitSelector:
    """End-to-end outfit scenarios."""

    def test_hot_sunny_day(self, hot_sunny_sample, easy_profile):
        result = outfit_for(hot_sunny_sample, easy_profile)
        assert result.performance_keys() == [
            "sports_bra",
            "tank_top",
            "split_shorts",
            "cap",
            "arm_sleeves",
            "sunglasses",
            "sunscreen",
            "light_socks",
        ]
        assert result.hands_level == 0
        assert result.sock_tier == SockTier.LIGHT

    def test_rainy_day(self, rainy_sample, easy_profile):
        result = outfit_for(rainy_sample, easy_profile)
        assert result.performance_keys() == [
            "sports_bra",
            "short_sleeve",
            "shorts",
            "brim_cap",
            "arm_sleeves_optional",
            "rain_shell",
            "light_socks",
        ]
        assert result.comfort_keys() == [
            "sports_bra",
            "short_sleeve",
            "shorts",
            "brim_cap",
            "arm_sleeves_optional",
            "light_gloves",
            "light_socks",
            "rain_shell",
        ]
        assert result.hands_level == 1
        assert result.effective_temp_f == 52

    def test_cold_windy_easy_run(self, cold_windy_sample, easy_profile):
        result = outfit_for(cold_windy_sample, easy_profile)
        assert result.effective_temp_f == pytest.approx(18.5)
        assert result.performance_keys() == [
            "sports_bra",
            "long_sleeve",
            "light_jacket",
            "thermal_tights",
            "beanie",
            "arm_sleeves",
            "mittens",
            "double_socks",
            "neck_gaiter",
        ]
        assert result.comfort_keys() == [
            "sports_bra",
            "long_sleeve",
            "insulated_jacket",
            "vest",
            "thermal_tights",
            "beanie",
            "arm_sleeves",
            "mittens",
            "double_socks",
            "neck_gaiter",
        ]
        assert result.hands_level == 3

    def test_extreme_cold(self, easy_profile):
        result = outfit_for(sample(-5, temp=0, wind_mph=5), easy_profile)
        assert "mittens_liner" not in result.performance_keys()
        assert "mittens_liner" in result.comfort_keys()
        assert "insulated_jacket" in result.performance_keys()
        assert result.performance_keys()[-1] == "balaclava"
        assert result.hands_level == 4

    def test_male_profile_has_no_sports_bra(self, male_profile):
        result = outfit_for(sample(65), male_profile)
        assert "sports_bra" not in result.performance_keys()
        assert "sports_bra" not in result.comfort_keys()

    def test_female_profile_always_has_sports_bra(self, easy_profile):
        for apparent in (-10, 30, 50, 90):
            result = outfit_for(sample(apparent), easy_profile)
            assert "sports_bra" in result.performance_keys()
            assert "sports_bra" in result.comfort_keys()

    def test_workout_headband(self, workout_profile):
        result = outfit_for(sample(21, wind_mph=5), workout_profile)
        for keys in (result.performance_keys(), result.comfort_keys()):
            assert "headband" in keys
            assert "beanie" not in keys

    def test_cold_hands(self):
        weather = sample(53)
        normal = outfit_for(weather, RunProfile())
        sensitive = outfit_for(weather, RunProfile(cold_hands=True))

        assert "light_gloves" not in normal.performance_keys()
        gloves = [item for item in sensitive.performance if item.key == "light_gloves"]
        assert len(gloves) == 1
        assert gloves[0].cold_hands is True

        normal_gloves = [item for item in normal.comfort if item.key == "light_gloves"]
        assert normal_gloves[0].cold_hands is False

    def test_labels(self, hot_sunny_sample, easy_profile):
        result = outfit_for(hot_sunny_sample, easy_profile)
        labels = {item.key: item.label for item in result.performance}
        assert labels["split_shorts"] == "Split shorts"
        assert labels["light_socks"] == "Light socks"

    def test_same_inputs_same_outfit(self, cold_windy_sample, long_run_profile):
        selector = OutfitSelector()
        first = selector.select(cold_windy_sample, long_run_profile)
        second = selector.select(cold_windy_sample, long_run_profile)
        assert first == second

    def test_nan_wind_does_not_raise(self, easy_profile):
        result = outfit_for(sample(40, wind_mph=float("nan")), easy_profile)
        assert result.performance
        assert not math.isnan(result.effective_temp_f)


class TestLongRunLookAhead:
    """Tests for long-run forecast look-ahead."""

    @pytest.fixture
    def warming_wet_forecast(self) -> list[ForecastPoint]:
        return [
            ForecastPoint(apparent_f=70, precip_prob=70, uv_index=7),
            ForecastPoint(apparent_f=74, precip_prob=40, uv_index=5),
            ForecastPoint(apparent_f=90, precip_prob=100, uv_index=11),
        ]

    def test_scan_uses_next_two_points(self, warming_wet_forecast):
        look_ahead = LookAhead.scan(sample(60, precip_prob=10, uv_index=2), warming_wet_forecast)
        assert look_ahead.temp_change == 14
        assert look_ahead.max_precip_prob == 70
        assert look_ahead.max_uv == 7
        assert look_ahead.will_rain is True

    def test_scan_skips_missing_fields(self):
        look_ahead = LookAhead.scan(sample(60), [ForecastPoint(), ForecastPoint(uv_index=3)])
        assert look_ahead.temp_change == 0
        assert look_ahead.max_uv == 3
        assert look_ahead.will_rain is False

    def test_temp_change_never_negative(self):
        look_ahead = LookAhead.scan(sample(60), [ForecastPoint(apparent_f=40)])
        assert look_ahead.temp_change == 0

    def test_nan_forecast_temperature_propagates(self):
        """A NaN reading is not dropped, even when a later point is finite."""
        forecast = [ForecastPoint(apparent_f=float("nan")), ForecastPoint(apparent_f=75)]
        look_ahead = LookAhead.scan(sample(60), forecast)
        assert math.isnan(look_ahead.temp_change)
        assert math.isnan(LookAhead.scan(sample(float("nan")), [ForecastPoint(apparent_f=75)]).temp_change)

    def test_nan_forecast_does_not_raise(self, long_run_profile):
        result = outfit_for(sample(60), long_run_profile, [ForecastPoint(apparent_f=float("nan"))])
        assert math.isnan(result.adjusted_temp_f)
        assert result.performance

    def test_long_run_packs_for_what_is_coming(self, warming_wet_forecast, long_run_profile):
        weather = sample(60, wind_mph=3, precip_prob=10, uv_index=2)
        result = outfit_for(weather, long_run_profile, warming_wet_forecast)
        keys = result.performance_keys()

        assert result.adjusted_temp_f == pytest.approx(65)
        for key in ("rain_shell", "brim_cap", "sunglasses", "hydration", "energy_nutrition",
                    "anti_chafe", "arm_sleeves"):
            assert key in keys
        assert "cap" not in keys

    def test_other_runs_ignore_forecast(self, warming_wet_forecast, easy_profile):
        weather = sample(60, wind_mph=3, precip_prob=10, uv_index=2)
        result = outfit_for(weather, easy_profile, warming_wet_forecast)
        assert "rain_shell" not in result.performance_keys()
        assert result.adjusted_temp_f == 60

    def test_third_point_ignored(self, long_run_profile):
        forecast = [
            ForecastPoint(apparent_f=60, precip_prob=10),
            ForecastPoint(apparent_f=60, precip_prob=10),
            ForecastPoint(apparent_f=60, precip_prob=100),
        ]
        result = outfit_for(sample(60, precip_prob=10), long_run_profile, forecast)
        assert "rain_shell" not in result.performance_keys()


class TestOutfitInvariants:
    """Properties that hold across a grid of conditions and profiles."""

    @pytest.fixture(scope="class")
    def outfits(self):
        results = []
        profiles = [
            RunProfile(activity=activity, gender=gender, cold_hands=cold_hands)
            for activity, gender, cold_hands in itertools.product(
                ActivityKind, Gender, (False, True)
            )
        ]
        for apparent in range(-20, 101, 7):
            for wind in (0, 9, 16, 25):
                for precip_prob in (0, 65):
                    weather = sample(
                        apparent,
                        wind_mph=wind,
                        precip_prob=precip_prob,
                        uv_index=8 if apparent > 60 else 1,
                    )
                    for profile in profiles:
                        results.append(outfit_for(weather, profile))
        return results

    def test_no_exclusive_pairs(self, outfits):
        for result in outfits:
            for keys in (result.performance_keys(), result.comfort_keys()):
                for group in EXCLUSIVE_GROUPS:
                    assert len(set(group.keys) & set(keys)) <= 1, (group.name, keys)

    def test_exactly_one_sock_tier(self, outfits):
        for result in outfits:
            for keys in (result.performance_keys(), result.comfort_keys()):
                socks = [key for key in keys if key.endswith("_socks")]
                assert socks == [result.sock_tier.value]

    def test_liner_only_with_mittens(self, outfits):
        for result in outfits:
            assert "mittens_liner" not in result.performance_keys()
            comfort = result.comfort_keys()
            if "mittens_liner" in comfort:
                assert "mittens" in comfort

    def test_no_duplicates(self, outfits):
        for result in outfits:
            for keys in (result.performance_keys(), result.comfort_keys()):
                assert len(keys) == len(set(keys))
