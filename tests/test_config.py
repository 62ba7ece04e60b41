"""Tests for configuration defaults and lexicon file loading.

WHY: A custom lexicon is the main tuning knob operators touch. A file
that silently loads as empty, or with a phrase in both categories,
would quietly change every score.

HOW: Lexicon files are written to tmp_path and loaded through
config.load_lexicon(); errors are checked for a readable ValueError.
"""

import json

import pytest

from speech_metrics import config
from speech_metrics.core.disfluency import DEFAULT_LEXICON
from speech_metrics.core.ir import DisfluencyCategory


def _write(tmp_path, data):
    path = tmp_path / "lexicon.json"
    path.write_text(json.dumps(data) if not isinstance(data, str) else data, encoding="utf-8")
    return path


class TestDefaults:

    def test_pause_thresholds(self):
        assert config.SHORT_PAUSE_THRESHOLD_S == 0.5
        assert config.LONG_PAUSE_THRESHOLD_S == 2.0

    def test_default_phrase_lists_disjoint(self):
        filler = set(config.DEFAULT_LEXICON_PHRASES["filler"])
        hedge = set(config.DEFAULT_LEXICON_PHRASES["hedge"])
        assert filler
        assert hedge
        assert not filler & hedge

    def test_default_lexicon_without_env_file(self, monkeypatch):
        monkeypatch.setattr(config, "LEXICON_PATH", None)
        config.default_lexicon.cache_clear()
        try:
            assert config.default_lexicon() is DEFAULT_LEXICON
        finally:
            config.default_lexicon.cache_clear()

    def test_default_lexicon_from_env_file(self, tmp_path, monkeypatch):
        path = _write(tmp_path, {"filler": ["euh"], "hedge": ["genre"]})
        monkeypatch.setattr(config, "LEXICON_PATH", str(path))
        config.default_lexicon.cache_clear()
        try:
            lexicon = config.default_lexicon()
            assert lexicon[DisfluencyCategory.FILLER] == frozenset({"euh"})
        finally:
            config.default_lexicon.cache_clear()


class TestLoadLexicon:

    def test_valid_file(self, tmp_path):
        lexicon = config.load_lexicon(_write(tmp_path, {"filler": ["Um", "uh"], "hedge": ["like"]}))
        assert lexicon[DisfluencyCategory.FILLER] == frozenset({"um", "uh"})
        assert lexicon[DisfluencyCategory.HEDGE] == frozenset({"like"})

    def test_partial_file(self, tmp_path):
        lexicon = config.load_lexicon(_write(tmp_path, {"filler": ["um"]}))
        assert lexicon[DisfluencyCategory.HEDGE] == frozenset()

    def test_accepts_str_path(self, tmp_path):
        lexicon = config.load_lexicon(str(_write(tmp_path, {"hedge": ["so"]})))
        assert "so" in lexicon[DisfluencyCategory.HEDGE]

    def test_unknown_key(self, tmp_path):
        with pytest.raises(ValueError, match="Invalid lexicon file"):
            config.load_lexicon(_write(tmp_path, {"repetition": ["the the"]}))

    def test_wrong_type(self, tmp_path):
        with pytest.raises(ValueError, match="Invalid lexicon file"):
            config.load_lexicon(_write(tmp_path, {"filler": "um"}))

    def test_empty_phrase(self, tmp_path):
        with pytest.raises(ValueError, match="Invalid lexicon file"):
            config.load_lexicon(_write(tmp_path, {"filler": [""]}))

    def test_overlap(self, tmp_path):
        with pytest.raises(ValueError, match="both filler and hedge"):
            config.load_lexicon(_write(tmp_path, {"filler": ["like"], "hedge": ["like"]}))

    def test_not_json(self, tmp_path):
        with pytest.raises(ValueError, match="Cannot read lexicon file"):
            config.load_lexicon(_write(tmp_path, "filler: [um]"))

    def test_missing_file(self, tmp_path):
        with pytest.raises(ValueError, match="Cannot read lexicon file"):
            config.load_lexicon(tmp_path / "nope.json")
