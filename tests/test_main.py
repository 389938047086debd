import pytest
import requests

from distribution_ga import sources
from distribution_ga.main import build_parser, main, settings_from_args


def test_settings_from_args():
    args = build_parser().parse_args(["t", "d", "o", "en_GB", "--iterations", "5", "--seed", "3", "--plot"])
    settings = settings_from_args(args)
    assert settings.iterations == 5
    assert settings.random_seed == 3
    assert settings.plot is True
    assert settings.population_size == 20
    assert settings.separate_runs == 5


def test_main_writes_one_file_per_run(language, input_dirs):
    trie_dir, dictionary_dir, output_dir = input_dirs
    main([
        str(trie_dir), str(dictionary_dir), str(output_dir), language.code,
        "--runs", "2", "--iterations", "2", "--population", "4",
        "--trials", "3", "--workers", "1", "--seed", "11", "--plot",
    ])
    written = sorted(p.name for p in output_dir.iterdir())
    assert len(written) == 3
    assert written[0] == "test fitness.png"
    assert all(name.startswith("test run ") for name in written[1:])


class FakeResponse:
    def __init__(self, content, status=200):
        self.content = content
        self.status = status

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.HTTPError(f"{self.status} error")


def test_remote_source(monkeypatch):
    seen = []

    def fake_get(url, timeout):
        seen.append(url)
        return FakeResponse(b"cat\ndog\n")

    monkeypatch.setattr(sources.requests, "get", fake_get)
    assert sources.read_source_lines("https://example.org/dicts/", "dictionary.en_GB.txt") == ["cat", "dog"]
    assert seen == ["https://example.org/dicts/dictionary.en_GB.txt"]


def test_remote_failure_is_fatal(monkeypatch):
    monkeypatch.setattr(sources.requests, "get", lambda url, timeout: FakeResponse(b"", status=404))
    with pytest.raises(requests.HTTPError):
        sources.read_source_bytes("http://example.org", "words_en_GB.bin")
