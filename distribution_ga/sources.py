#!/usr/bin/env python3
from pathlib import Path

import requests

from distribution_ga.config import CONFIG

# =========================
# Dictionary / trie sources
# =========================

# A location is either a local directory or an http(s) base URL that the
# per-language file names are appended to.


def is_remote(location) -> bool:
    return str(location).startswith(("http://", "https://"))


def read_source_bytes(location, file_name: str, timeout=None) -> bytes:
    """
    Read `file_name` from `location` in full.
    Missing files and failed downloads raise (FileNotFoundError / requests errors).
    """
    if is_remote(location):
        url = str(location).rstrip("/") + "/" + file_name
        print(f"Downloading {url} ...")
        resp = requests.get(url, timeout=timeout or CONFIG["request_timeout"])
        resp.raise_for_status()
        return resp.content

    return (Path(location) / file_name).read_bytes()


def read_source_lines(location, file_name: str, timeout=None):
    """UTF-8 lines of a newline-delimited text source, without line endings."""
    data = read_source_bytes(location, file_name, timeout=timeout)
    return data.decode("utf-8").splitlines()
