import pytest

from concentration.components.difficulty import DIFFICULTY_TABLE, Difficulty
from concentration.config import GameSettings
from concentration.constants import SYMBOLS
from concentration.errors import ConcentrationError, InvalidConfiguration


@pytest.mark.parametrize(
    "difficulty, pairs, preview, cols, rows, multiplier",
    [
        (Difficulty.EASY, 6, 5, 4, 3, 1),
        (Difficulty.MEDIUM, 8, 4, 4, 4, 2),
        (Difficulty.HARD, 12, 3, 4, 6, 3),
    ],
)
def test_difficulty_table(difficulty, pairs, preview, cols, rows, multiplier):
    config = difficulty.config
    assert config.pair_count == pairs
    assert config.preview_seconds == preview
    assert (config.grid_cols, config.grid_rows) == (cols, rows)
    assert config.score_multiplier == multiplier
    assert config.tile_count == cols * rows


def test_difficulty_table_is_read_only():
    with pytest.raises(TypeError):
        DIFFICULTY_TABLE[Difficulty.EASY] = DIFFICULTY_TABLE[Difficulty.HARD]


def test_default_alphabet_covers_hardest_difficulty():
    assert len(SYMBOLS) >= max(config.pair_count for config in DIFFICULTY_TABLE.values())


@pytest.mark.parametrize("raw", ["hard", "HARD", " Hard ", Difficulty.HARD])
def test_parse_accepts_names_and_members(raw):
    assert Difficulty.parse(raw) is Difficulty.HARD


@pytest.mark.parametrize("raw", ["", "expert", None, 3])
def test_parse_rejects_unknown_values(raw):
    with pytest.raises(InvalidConfiguration):
        Difficulty.parse(raw)


def test_invalid_configuration_is_a_value_error():
    assert issubclass(InvalidConfiguration, ValueError)
    assert issubclass(InvalidConfiguration, ConcentrationError)


def test_labels():
    assert [level.label for level in Difficulty] == ["Easy", "Medium", "Hard"]


def test_settings_from_empty_env_uses_defaults():
    assert GameSettings.from_env({}) == GameSettings()


def test_settings_from_env_overrides():
    settings = GameSettings.from_env({
        "CONCENTRATION_MATCH_DELAY": "0",
        "CONCENTRATION_MISMATCH_DELAY": "0.25",
        "CONCENTRATION_COUNTDOWN_INTERVAL": "",
    })
    assert settings.match_delay == 0.0
    assert settings.mismatch_delay == 0.25
    assert settings.countdown_interval == GameSettings().countdown_interval


def test_settings_from_env_rejects_garbage():
    with pytest.raises(InvalidConfiguration):
        GameSettings.from_env({"CONCENTRATION_MATCH_DELAY": "soon"})


def test_settings_reject_non_positive_intervals():
    with pytest.raises(InvalidConfiguration):
        GameSettings(countdown_interval=0)
    with pytest.raises(InvalidConfiguration):
        GameSettings.from_env({"CONCENTRATION_TIMER_SAMPLE_INTERVAL": "-1"})


def test_settings_reject_duplicate_symbols():
    with pytest.raises(InvalidConfiguration):
        GameSettings(symbols=("A", "B", "A"))
