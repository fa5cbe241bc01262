"""Tests for vocabulary providers and their registry."""

import os

import pytest
from fileshell.config import CompletionConfig
from fileshell.providers.base import KeywordProvider, MatchMode
from fileshell.providers.colorscheme import ColorSchemeProvider
from fileshell.providers.environment import EnvironmentProvider
from fileshell.providers.filetype import FileTypeProvider, escape_chars
from fileshell.providers.help import HelpTagsProvider
from fileshell.providers.accounts import UserProvider
from fileshell.providers.registry import VocabularyRegistry


def test_provider_registration():
    """Test provider registration."""
    registry = VocabularyRegistry()
    registry.register(KeywordProvider("letters", "Letters", ["a", "b"]))

    assert registry.get_provider("letters") is not None
    assert registry.get_provider("missing") is None
    assert len(registry.get_all_providers()) == 1


def test_auto_discovery():
    """Test auto-discovery registers keyword and dynamic vocabularies."""
    registry = VocabularyRegistry()
    registry.auto_discover(CompletionConfig())

    names = {p.name for p in registry.get_all_providers()}
    for expected in ("history", "invert", "winrun", "colors", "styles", "users",
                     "groups", "environment", "filetypes", "colorschemes",
                     "options", "variables", "functions", "help"):
        assert expected in names


def test_keyword_provider_defaults():
    """Test keyword tables ignore case unless told otherwise."""
    assert KeywordProvider("k", "K", []).match_mode is MatchMode.IGNORE_CASE
    provider = KeywordProvider("k", "K", [], MatchMode.SUBSTRING)
    assert provider.match_mode is MatchMode.SUBSTRING


def test_environment_provider(monkeypatch):
    """Test environment names are read live."""
    monkeypatch.setenv("FILESHELL_PROVIDER_VAR", "1")
    assert "FILESHELL_PROVIDER_VAR" in EnvironmentProvider().get_words()


@pytest.mark.skipif(os.name == "nt", reason="no account database")
def test_user_provider():
    """Test the current account is listed."""
    import pwd
    name = pwd.getpwuid(os.getuid()).pw_name
    assert name in UserProvider().get_words()


def test_colorscheme_provider(tmp_path):
    """Test scheme names drop the extension and skip dotfiles."""
    (tmp_path / "dark.vifm").write_text("")
    (tmp_path / "plain").write_text("")
    (tmp_path / ".swap").write_text("")
    (tmp_path / "subdir").mkdir()

    words = ColorSchemeProvider(str(tmp_path)).get_words()
    assert sorted(words) == ["dark", "plain"]


def test_colorscheme_provider_missing_dir(tmp_path):
    """Test a missing directory yields no schemes."""
    assert ColorSchemeProvider(str(tmp_path / "missing")).get_words() == []
    assert ColorSchemeProvider(None).get_words() == []


def test_filetype_patterns():
    """Test comma separated patterns and program name extraction."""
    provider = FileTypeProvider({
        "*.jpg,*.png": ["feh -F", '"image viewer" %f'],
        "*.txt": ["vim"],
    })

    assert provider.get_words({"current_file": "photo.png"}) == ["feh", "image viewer"]
    assert provider.get_words({"current_file": "notes.txt"}) == ["vim"]
    assert provider.get_words({"current_file": "archive.zip"}) == []


def test_filetype_mime_handlers():
    """Test MIME wildcards select content handlers."""
    provider = FileTypeProvider(mime_handlers={"image/*": ["sxiv"], "text/plain": ["less"]})

    assert provider.get_words({"current_file": "photo.png"}) == ["sxiv"]
    assert provider.get_words({"current_file": ""}) == []


def test_escape_chars():
    """Test pipe characters in program names are escaped."""
    assert escape_chars("a|b", "|") == "a\\|b"


def test_help_tags(tmp_path):
    """Test tags are read once from the first column."""
    tags = tmp_path / "tags"
    tags.write_text("!_TAG_FILE_FORMAT\t2\t//\nvifm-app.txt\tvifm-app.txt\t1\n")

    provider = HelpTagsProvider(tags)
    assert provider.get_words() == ["vifm-app.txt"]

    tags.write_text("")
    assert provider.get_words() == ["vifm-app.txt"]


def test_help_tags_missing_file(tmp_path):
    """Test an unreadable tags file gives no topics."""
    assert HelpTagsProvider(tmp_path / "missing").get_words() == []


def test_help_tags_bad_encoding(tmp_path):
    """Test a tags file that is not UTF-8 gives no topics."""
    tags = tmp_path / "tags"
    tags.write_bytes(b"caf\xe9\tvifm-app.txt\t1\noptions\tvifm-app.txt\t2\n")

    assert HelpTagsProvider(tags).get_words() == []
