"""Unit tests for the playback engine: cursor navigation and timing.

WHY: The engine is the state every host UI drives. An off-by-one in the
cursor or a mistimed factor shows up on every word the user reads.

HOW: Tests are organized by concern:
  - TestDisplayTime: the duration formula and its tables, both modes
  - TestLoading: load_text, word counts, cursor reset
  - TestNavigation: advance/go_back/seek_to/reset at and away from bounds
  - TestProgress: progress fraction and time-remaining estimate
  - TestReadingHelpers: replay, rewind, sentences, context, scrubbing

RULES:
- Timing tests use 300 WPM so the base duration is exactly 200 ms.
- SENTENCES_TEXT word indices are listed in conftest.py.
"""

import pytest

from speed_reader.core.engine import PlaybackEngine, compute_display_time_ms
from speed_reader.core.ir import PlaybackConfig, TokenizerMode, Word
from speed_reader.core.tokenizer import tokenize


def _time(token, config, mode=TokenizerMode.RICH):
    (word,) = tokenize(token, mode)
    return compute_display_time_ms(word, config, mode)


class TestDisplayTime:
    """display_time_ms = floor(base * length * punctuation * complexity)."""

    def test_base_duration(self, reference_config):
        assert _time("cat", reference_config) == 200

    def test_reference_numeral_with_period(self, reference_config):
        # 9 chars, numeral, period: 200 * 1.3 * 2.0 * 1.4
        assert _time("12345678.", reference_config) == 728

    def test_medium_length_factor(self, reference_config):
        assert _time("planet", reference_config) == 230

    def test_long_length_factor(self, reference_config):
        assert _time("wonderful", reference_config) == 260

    def test_length_counts_punctuation(self, reference_config):
        # "house," is 6 chars → 1.15, comma → 1.5
        assert _time("house,", reference_config) == 345

    @pytest.mark.parametrize("token,expected", [
        ("end.", 400),
        ("why?", 440),
        ("wow!", 440),
        ("so,", 300),
        ("hmm...", 575),
    ])
    def test_punctuation_table(self, reference_config, token, expected):
        assert _time(token, reference_config) == expected

    @pytest.mark.parametrize("token,expected", [
        ("42", 280),
        ("ABC", 250),
        ("e-mail", 299),
        ("A4", 270),
    ])
    def test_complexity_table(self, reference_config, token, expected):
        assert _time(token, reference_config) == expected

    def test_multiplier_scales_punctuation(self):
        config = PlaybackConfig(wpm=400, pause_on_punctuation=True, punctuation_multiplier=1.5)
        # 150 * 2.0 * 1.5
        assert _time("end.", config) == 450

    def test_pauses_off_ignores_punctuation(self):
        config = PlaybackConfig(wpm=300, pause_on_punctuation=False, punctuation_multiplier=3.0)
        assert _time("end.", config) == 200

    def test_pauses_off_keeps_complexity(self):
        config = PlaybackConfig(wpm=300, pause_on_punctuation=False)
        assert _time("42.", config) == 280

    def test_huge_wpm_gives_zero(self, reference_config):
        config = PlaybackConfig(wpm=10_000_000)
        assert _time("cat", config) == 0

    def test_zero_wpm_is_treated_as_one(self):
        assert _time("cat", PlaybackConfig(wpm=0, pause_on_punctuation=False)) == 60000

    def test_never_negative(self):
        config = PlaybackConfig(wpm=300, pause_on_punctuation=True, punctuation_multiplier=-2.0)
        assert _time("end.", config) == 0

    def test_simple_mode_flat_multiplier(self):
        config = PlaybackConfig(wpm=300, pause_on_punctuation=True, punctuation_multiplier=1.5)
        assert _time("end.", config, TokenizerMode.SIMPLE) == 300
        assert _time("why?", config, TokenizerMode.SIMPLE) == 300
        assert _time("plain", config, TokenizerMode.SIMPLE) == 200

    def test_simple_mode_has_no_complexity(self):
        config = PlaybackConfig(wpm=300, pause_on_punctuation=True, punctuation_multiplier=1.5)
        assert _time("ABC", config, TokenizerMode.SIMPLE) == 200
        assert _time("COVID19,", config, TokenizerMode.SIMPLE) == 345

    def test_simple_mode_pauses_off(self):
        config = PlaybackConfig(wpm=300, pause_on_punctuation=False, punctuation_multiplier=1.5)
        assert _time("end.", config, TokenizerMode.SIMPLE) == 200

    def test_handmade_word(self, reference_config):
        word = Word(text="x", char_count=12)
        assert compute_display_time_ms(word, reference_config) == 260


class TestLoading:
    """load_text replaces the words and resets the cursor."""

    def test_word_count(self):
        engine = PlaybackEngine()
        engine.load_text("a  b\t c\n")
        assert engine.get_word_count() == 3

    def test_empty_text_loads(self):
        engine = PlaybackEngine()
        engine.load_text("   ")
        assert engine.get_word_count() == 0
        assert engine.get_current_word() is None

    def test_reload_resets_cursor(self, sentences_engine):
        sentences_engine.seek_to(7)
        sentences_engine.load_text("fresh start here")
        assert sentences_engine.get_current_index() == 0
        assert sentences_engine.get_word_count() == 3
        assert sentences_engine.get_current_word().text == "fresh"

    def test_default_config(self):
        config = PlaybackEngine().get_config()
        assert config.wpm == 400
        assert config.pause_on_punctuation is True
        assert config.punctuation_multiplier == 1.0

    def test_set_config_applies_to_next_token(self, sentences_engine):
        assert sentences_engine.get_current_word().display_time_ms == 200
        sentences_engine.set_config(PlaybackConfig(wpm=600))
        assert sentences_engine.get_current_word().display_time_ms == 100

    def test_mode_is_fixed(self):
        engine = PlaybackEngine(mode="simple")
        assert engine.mode is TokenizerMode.SIMPLE


class TestNavigation:
    """Cursor moves only within [0, len - 1]; boundaries return None."""

    def test_current_word_token(self, sentences_engine):
        token = sentences_engine.get_current_word()
        assert token.text == "The"
        assert token.index == 0
        assert token.total == 12

    def test_advance_and_go_back(self, sentences_engine):
        assert sentences_engine.advance().text == "cat"
        assert sentences_engine.advance().text == "sat."
        assert sentences_engine.go_back().text == "cat"
        assert sentences_engine.get_current_index() == 1

    def test_advance_stops_at_end(self, sentences_engine):
        steps = 0
        while sentences_engine.advance() is not None:
            steps += 1
        assert steps == 11
        assert sentences_engine.get_current_index() == 11
        for _ in range(3):
            assert sentences_engine.advance() is None
        assert sentences_engine.get_current_index() == 11
        assert sentences_engine.is_at_end()

    def test_go_back_at_start(self, sentences_engine):
        assert sentences_engine.go_back() is None
        assert sentences_engine.get_current_index() == 0
        assert sentences_engine.is_at_start()

    def test_seek_in_range(self, sentences_engine):
        token = sentences_engine.seek_to(5)
        assert token.text == "warm!"
        assert token.index == 5
        assert token.display_time_ms == 440

    @pytest.mark.parametrize("index", [12, 100, -1])
    def test_seek_out_of_range_is_rejected(self, sentences_engine, index):
        sentences_engine.seek_to(4)
        before = sentences_engine.get_current_word()
        assert sentences_engine.seek_to(index) is None
        assert sentences_engine.get_current_word() == before

    def test_reset(self, sentences_engine):
        sentences_engine.seek_to(9)
        sentences_engine.reset()
        assert sentences_engine.get_current_index() == 0

    def test_reset_on_empty(self):
        engine = PlaybackEngine()
        engine.reset()
        assert engine.get_current_index() == 0
        assert engine.get_current_word() is None

    def test_empty_engine_boundaries(self):
        engine = PlaybackEngine()
        assert engine.advance() is None
        assert engine.go_back() is None
        assert engine.seek_to(0) is None
        assert engine.is_at_start()
        assert engine.is_at_end()

    def test_single_word(self):
        engine = PlaybackEngine()
        engine.load_text("solo")
        assert engine.is_at_start()
        assert engine.is_at_end()
        assert engine.advance() is None
        assert engine.get_current_word().text == "solo"

    def test_total_tracks_current_load(self, sentences_engine):
        sentences_engine.load_text("one two")
        assert sentences_engine.advance().total == 2


class TestProgress:
    """Progress is index / max(len - 1, 1), 0.0 when empty."""

    def test_empty(self):
        assert PlaybackEngine().get_progress_percent() == 0.0

    def test_single_word(self):
        engine = PlaybackEngine()
        engine.load_text("solo")
        assert engine.get_progress_percent() == 0.0

    def test_endpoints(self, sentences_engine):
        assert sentences_engine.get_progress_percent() == 0.0
        sentences_engine.jump_to_end()
        assert sentences_engine.get_progress_percent() == 1.0

    def test_strictly_increasing(self, sentences_engine):
        values = [sentences_engine.get_progress_percent()]
        while sentences_engine.advance() is not None:
            values.append(sentences_engine.get_progress_percent())
        assert all(a < b for a, b in zip(values, values[1:]))

    def test_two_words(self):
        engine = PlaybackEngine()
        engine.load_text("one two")
        engine.advance()
        assert engine.get_progress_percent() == 1.0

    def test_remaining_words(self, sentences_engine):
        assert sentences_engine.get_remaining_words() == 12
        sentences_engine.seek_to(10)
        assert sentences_engine.get_remaining_words() == 2

    def test_time_remaining_short(self, sentences_engine):
        assert sentences_engine.estimate_time_remaining() == "< 1 min left"

    def test_time_remaining_rounds_up(self):
        engine = PlaybackEngine(config=PlaybackConfig(wpm=300))
        engine.load_text(" ".join(["word"] * 700))
        assert engine.estimate_time_remaining() == "3 min left"

    def test_time_remaining_empty(self):
        assert PlaybackEngine().estimate_time_remaining() == ""


class TestReadingHelpers:
    """Replay, rewind, sentence navigation, context words and scrubbing."""

    def test_jump_to_end(self, sentences_engine):
        assert sentences_engine.jump_to_end().text == "slept."

    def test_jump_to_end_empty(self):
        assert PlaybackEngine().jump_to_end() is None

    def test_replay_last_words(self, sentences_engine):
        sentences_engine.seek_to(7)
        assert sentences_engine.replay_last_words(5).index == 2

    def test_replay_clamps_to_start(self, sentences_engine):
        sentences_engine.seek_to(3)
        assert sentences_engine.replay_last_words(5).index == 0

    def test_replay_at_start(self, sentences_engine):
        assert sentences_engine.replay_last_words() is None

    def test_rewind_seconds(self, sentences_engine):
        # 300 WPM = 5 words per second
        sentences_engine.seek_to(11)
        assert sentences_engine.rewind_seconds(2).index == 1

    def test_rewind_minimum_five_words(self, sentences_engine):
        sentences_engine.seek_to(11)
        assert sentences_engine.rewind_seconds(0.1).index == 6

    def test_sentence_start_index(self, sentences_engine):
        sentences_engine.seek_to(4)
        assert sentences_engine.sentence_start_index() == 3
        sentences_engine.seek_to(2)
        assert sentences_engine.sentence_start_index() == 0

    def test_previous_sentence_mid_sentence(self, sentences_engine):
        sentences_engine.seek_to(4)
        assert sentences_engine.previous_sentence().index == 3

    def test_previous_sentence_from_sentence_start(self, sentences_engine):
        sentences_engine.seek_to(6)
        assert sentences_engine.previous_sentence().index == 3

    def test_previous_sentence_at_start(self, sentences_engine):
        assert sentences_engine.previous_sentence().index == 0

    def test_next_sentence(self, sentences_engine):
        assert sentences_engine.next_sentence().index == 3
        assert sentences_engine.next_sentence().index == 6
        assert sentences_engine.next_sentence().index == 9

    def test_next_sentence_falls_back_to_last_word(self, sentences_engine):
        sentences_engine.seek_to(9)
        assert sentences_engine.next_sentence().index == 11
        assert sentences_engine.next_sentence().index == 11

    def test_sentence_navigation_empty(self):
        engine = PlaybackEngine()
        assert engine.next_sentence() is None
        assert engine.previous_sentence() is None

    def test_context_words(self, sentences_engine):
        sentences_engine.seek_to(5)
        assert sentences_engine.get_context_words(3) == ["sat.", "It", "was"]
        assert sentences_engine.get_current_index() == 5

    def test_context_words_at_start(self, sentences_engine):
        assert sentences_engine.get_context_words() == []

    @pytest.mark.parametrize("progress,expected", [
        (0.0, 0),
        (0.5, 5),
        (1.0, 11),
        (2.0, 11),
        (-1.0, 0),
    ])
    def test_scrub_to(self, sentences_engine, progress, expected):
        assert sentences_engine.scrub_to(progress).index == expected

    def test_scrub_empty(self):
        assert PlaybackEngine().scrub_to(0.5) is None

    def test_scrub_nan_goes_to_start(self, sentences_engine):
        sentences_engine.seek_to(7)
        token = sentences_engine.scrub_to(float("nan"))
        assert token.index == 0
        assert sentences_engine.get_current_index() == 0
