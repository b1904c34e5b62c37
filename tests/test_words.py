"""Tests for word sources."""

import random
from unittest import mock

import pytest
import requests

from codenames_engine import (
    ConfigurationError,
    RemoteWordSource,
    WordListSource,
    WordSourceError,
    default_word_source,
    load_wordlist,
)
from codenames_engine import words as words_module


class TestLoadWordlist:
    def test_skips_comments_blanks_and_phrases(self, tmp_path):
        path = tmp_path / "words.txt"
        path.write_text("# header\nAPPLE\n\n  BERLIN  \nICE CREAM\nAPPLE\nCAT\n")
        assert load_wordlist(path) == ["APPLE", "BERLIN", "CAT"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_wordlist(tmp_path / "nope.txt")


class TestWordListSource:
    def test_draw_distinct(self):
        source = WordListSource([f"W{i}" for i in range(50)], rng=random.Random(0))
        drawn = source.draw(25)
        assert len(drawn) == 25
        assert len(set(drawn)) == 25

    def test_dedups_input(self):
        source = WordListSource(["A", "B", "A"])
        assert source.words == ["A", "B"]

    def test_short_list_returns_what_it_has(self):
        source = WordListSource(["A", "B", "C"], rng=random.Random(0))
        assert sorted(source.draw(5)) == ["A", "B", "C"]

    def test_seeded_draws_repeat(self):
        words = [f"W{i}" for i in range(50)]
        assert WordListSource(words, random.Random(9)).draw(5) == WordListSource(words, random.Random(9)).draw(5)

    def test_default_source_is_large_enough(self):
        source = default_word_source(random.Random(0))
        assert len(source.words) >= 25
        assert len(set(source.draw(25))) == 25


def _response(status_code=200, payload=None):
    resp = mock.Mock()
    resp.status_code = status_code
    resp.json.return_value = payload
    if status_code >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status_code}")
    return resp


class TestRemoteWordSource:
    @pytest.fixture(autouse=True)
    def no_sleep(self, monkeypatch):
        monkeypatch.setattr(words_module.time, "sleep", lambda s: None)

    def test_draw_list_payload(self):
        with mock.patch.object(words_module.requests, "get", return_value=_response(payload=["A", "B", "C"])) as get:
            words = RemoteWordSource("http://words.local/nouns").draw(3)
        assert words == ["A", "B", "C"]
        get.assert_called_once_with("http://words.local/nouns", params={"count": 3}, timeout=10.0)

    def test_draw_object_payload(self):
        with mock.patch.object(words_module.requests, "get", return_value=_response(payload={"words": ["A", "B"]})):
            assert RemoteWordSource("http://words.local").draw(2) == ["A", "B"]

    def test_retries_server_errors(self):
        responses = [_response(503), _response(429), _response(payload=["A"])]
        with mock.patch.object(words_module.requests, "get", side_effect=responses) as get:
            assert RemoteWordSource("http://words.local", retries=3).draw(1) == ["A"]
        assert get.call_count == 3

    def test_gives_up_after_retries(self):
        with mock.patch.object(words_module.requests, "get", side_effect=requests.ConnectionError("down")):
            with pytest.raises(WordSourceError, match="after 2 retries"):
                RemoteWordSource("http://words.local", retries=2).draw(1)

    def test_no_sleep_after_last_attempt(self, monkeypatch):
        sleeps = []
        monkeypatch.setattr(words_module.time, "sleep", sleeps.append)
        with mock.patch.object(words_module.requests, "get", side_effect=requests.ConnectionError("down")):
            with pytest.raises(WordSourceError):
                RemoteWordSource("http://words.local", retries=3, backoff_s=0.5).draw(1)
        assert sleeps == [0.5, 1.0]

        sleeps.clear()
        with mock.patch.object(words_module.requests, "get", return_value=_response(503)):
            with pytest.raises(WordSourceError):
                RemoteWordSource("http://words.local", retries=2, backoff_s=0.5).draw(1)
        assert sleeps == [0.5]

    def test_client_error_is_not_retried_forever(self):
        with mock.patch.object(words_module.requests, "get", return_value=_response(404)) as get:
            with pytest.raises(WordSourceError):
                RemoteWordSource("http://words.local", retries=2).draw(1)
        assert get.call_count == 2

    def test_unexpected_payload(self):
        with mock.patch.object(words_module.requests, "get", return_value=_response(payload={"nouns": []})):
            with pytest.raises(WordSourceError, match="unexpected payload"):
                RemoteWordSource("http://words.local").draw(1)
