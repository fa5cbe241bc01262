"""Tests for the lexical path algebra."""

import os
import shlex

import pytest
from fileshell.paths import (
    canonicalize,
    relative,
    expand_tilde,
    escape_for_shell,
    split_extension,
    path_starts_with,
    replace_home_part,
    get_last_path_component,
    remove_last_path_component,
    is_path_absolute,
    is_root_dir,
    is_unc_path,
    chosp,
    ends_with_slash,
    contains_slash,
    paths_are_equal,
    get_extension,
    is_parent_dir,
    is_builtin_dir,
    get_tmpdir,
)

CANONICAL_SAMPLES = [
    "/usr/./local/../bin/",
    "/a//b///c",
    "",
    "/",
    "/..",
    "a/..",
    "a/../..",
    "../../x",
    "./a/./b/",
    "/x/y/../../z",
    "rel/dir/../file",
]


def test_canonicalize_example():
    """Test the documented canonicalization example."""
    assert canonicalize("/usr/./local/../bin/") == "/usr/bin/"


def test_canonicalize_collapses_separators():
    """Test repeated separators collapse."""
    assert canonicalize("/a//b///c") == "/a/b/c/"


def test_canonicalize_root_and_empty():
    """Test root and empty input end with a single separator."""
    assert canonicalize("/") == "/"
    assert canonicalize("") == "/"
    assert canonicalize("/..") == "/"


def test_canonicalize_keeps_unresolved_parents():
    """Test leading .. components are kept verbatim."""
    assert canonicalize("../../x") == "../../x/"
    assert canonicalize("a/../..") == "../"
    assert canonicalize("../a/../b") == "../b/"


def test_canonicalize_relative_anchor():
    """Test a leading ./ stays and an emptied relative path becomes ./"""
    assert canonicalize("./a/./b/") == "./a/b/"
    assert canonicalize("a/..") == "./"


def test_canonicalize_truncates():
    """Test output is bounded by capacity."""
    result = canonicalize("/abcdef", capacity=5)
    assert len(result) <= 4
    assert result.endswith("/")


def test_canonicalize_truncates_whole_components():
    """Test truncation never leaves a partial component behind."""
    assert canonicalize("../../", capacity=6) == "../"
    assert canonicalize("/usr/local/bin", capacity=12) == "/usr/local/"

    result = canonicalize("../../../x", capacity=8)
    assert canonicalize(result) == result


@pytest.mark.parametrize("path", CANONICAL_SAMPLES)
def test_canonicalize_idempotent(path):
    """Test canonicalizing twice changes nothing."""
    once = canonicalize(path)
    assert canonicalize(once) == once


@pytest.mark.parametrize("path", CANONICAL_SAMPLES)
def test_canonicalize_shape(path):
    """Test output has one trailing separator and no doubled ones."""
    result = canonicalize(path)
    assert result.endswith("/")
    assert not result.endswith("//")
    assert "//" not in result


def test_relative_example():
    """Test the documented relative path example."""
    assert relative("/a/b/d/e", "/a/b/c") == "../d/e"


def test_relative_same_path():
    """Test equal paths give '.'"""
    assert relative("/a/b", "/a/b/") == "."


def test_relative_component_boundary():
    """Test a shared string prefix that is not a whole component."""
    assert relative("/usr/lib", "/usr/li") == "../lib"


@pytest.mark.parametrize("path,base", [
    ("/a/b/d/e", "/a/b/c"),
    ("/", "/x/y"),
    ("/x/y", "/"),
    ("/usr/lib", "/usr/li"),
    ("/a/./b//c", "/a/x/../y"),
    ("/same", "/same"),
])
def test_relative_resolves_back(path, base):
    """Test joining base and the relative path gives the original path."""
    rel = relative(path, base)
    assert not is_path_absolute(rel)
    assert canonicalize(base + "/" + rel) == canonicalize(path)


def test_expand_tilde_home():
    """Test bare tilde expansion uses the given home directory."""
    assert expand_tilde("~/x", "/home/me") == "/home/me/x"
    assert expand_tilde("~", "/home/me") == "/home/me"
    assert expand_tilde("plain/~", "/home/me") == "plain/~"


def test_expand_tilde_unknown_user():
    """Test unknown account names leave the input unchanged."""
    assert expand_tilde("~nonexistentuser/x") == "~nonexistentuser/x"


@pytest.mark.skipif(os.name == "nt", reason="no account database")
def test_expand_tilde_named_user():
    """Test ~name expands to that account's home."""
    import pwd
    account = pwd.getpwuid(os.getuid())
    expanded = expand_tilde(f"~{account.pw_name}/x")
    assert expanded == account.pw_dir.rstrip("/") + "/x"


def test_escape_for_shell_examples():
    """Test the documented escaping examples."""
    assert escape_for_shell("it's a test") == "it\\'s\\ a\\ test"
    assert escape_for_shell("-rf") == "./-rf"


def test_escape_percent():
    """Test percent signs are doubled only on request."""
    assert escape_for_shell("a%b") == "a%b"
    assert escape_for_shell("a%b", quote_percent=True) == "a%%b"


def test_escape_leading_tilde():
    """Test only a leading tilde is escaped."""
    assert escape_for_shell("~foo") == "\\~foo"
    assert escape_for_shell("a~b") == "a~b"


@pytest.mark.parametrize("name", [
    "it's a test",
    "plain",
    "semi;colon",
    "$HOME",
    "back\\slash",
    'q"uote',
    "a&b|c",
    "(paren)",
    "*glob?",
    "#hash",
    "tab\there",
    "~tilde",
    "braces{}[]",
    "redirect<>",
    "bang!",
])
def test_escape_round_trip(name):
    """Test escaped names parse back to the original under shell rules."""
    assert shlex.split(escape_for_shell(name)) == [name]


def test_split_extension():
    """Test extension splitting."""
    assert split_extension("x.txt") == ("x", "txt")
    assert split_extension("a.tar.gz") == ("a", "tar.gz")
    assert split_extension(".bashrc") == (".bashrc", "")
    assert split_extension("dir.d/file") == ("dir.d/file", "")


def test_path_starts_with():
    """Test prefix checks stop at separators."""
    assert path_starts_with("/usr/lib", "/usr")
    assert path_starts_with("/usr", "/usr/")
    assert not path_starts_with("/usr/lib", "/usr/li")


def test_replace_home_part():
    """Test home prefix is shown as a tilde."""
    assert replace_home_part("/home/me/docs", "/home/me") == "~/docs"
    assert replace_home_part("/home/me", "/home/me") == "~"
    assert replace_home_part("/srv/data/", "/home/me") == "/srv/data"


def test_last_path_component():
    """Test splitting off the last component."""
    assert get_last_path_component("/a/b/") == "b/"
    assert get_last_path_component("/a/b") == "b"
    assert remove_last_path_component("/a/b/") == "/a"
    assert remove_last_path_component("/a") == "/"


def test_small_helpers(monkeypatch):
    """Test the separator and name helpers."""
    assert chosp("/a/") == "/a"
    assert chosp("/a") == "/a"
    assert ends_with_slash("a/")
    assert contains_slash("a/b")
    assert not contains_slash("ab")
    assert paths_are_equal("/a/./b", "/a/b/")
    assert not paths_are_equal("/a/b", "/a/c")
    assert get_extension("photo.JPG") == "JPG"
    assert is_parent_dir("../")
    assert is_builtin_dir(".")
    assert not is_builtin_dir("...")

    monkeypatch.setenv("TMPDIR", "/var/tmp/x")
    assert get_tmpdir() == "/var/tmp/x"


@pytest.mark.skipif(os.name == "nt", reason="POSIX root only")
def test_root_checks():
    """Test root and UNC detection on POSIX."""
    assert is_root_dir("/")
    assert not is_root_dir("/a")
    assert not is_unc_path("//host/share")
