"""Tests for command lookup and argument tokenizing."""

from fileshell.commands import (
    CommandId,
    PreProcessing,
    cmd_ends_with_space,
    command_accepts_expr,
    expand_dquotes_escaping,
    expand_squotes_escaping,
    extract_cmd_name,
    lookup_command,
    parse_command_line,
    tokenize_args,
)


def test_lookup_full_names():
    """Test full command names."""
    assert lookup_command("set") is CommandId.SET
    assert lookup_command("execute") is CommandId.EXPR_EXECUTE
    assert lookup_command("!") is CommandId.SHELL


def test_lookup_abbreviations():
    """Test unique prefixes resolve and ambiguous ones do not."""
    assert lookup_command("hig") is CommandId.HIGHLIGHT
    assert lookup_command("colo") is CommandId.COLORSCHEME
    assert lookup_command("hi") is CommandId.DEFAULT
    assert lookup_command("co") is CommandId.DEFAULT
    assert lookup_command("nosuchcommand") is CommandId.DEFAULT
    assert lookup_command("") is CommandId.DEFAULT


def test_expression_commands():
    """Test which commands take expressions."""
    assert command_accepts_expr(CommandId.LET)
    assert command_accepts_expr(CommandId.EXPR_EXECUTE)
    assert not command_accepts_expr(CommandId.SHELL)
    assert not command_accepts_expr(CommandId.SET)


def test_cmd_ends_with_space():
    """Test escaped spaces do not count as separators."""
    assert cmd_ends_with_space("a ")
    assert not cmd_ends_with_space("a\\ ")
    assert cmd_ends_with_space("a\\\\ ")
    assert not cmd_ends_with_space("")
    assert not cmd_ends_with_space("abc")


def test_extract_cmd_name():
    """Test splitting program name from arguments."""
    assert extract_cmd_name('vim -p "%f"') == ("vim", '-p "%f"')
    assert extract_cmd_name('"my app" --x') == ("my app", "--x")
    assert extract_cmd_name("ls") == ("ls", "")


def test_unescaping():
    """Test quote escaping is undone."""
    assert expand_squotes_escaping("it''s") == "it's"
    assert expand_dquotes_escaping('a\\"b\\tc') == 'a"b\tc'


def test_tokenize_args():
    """Test quoting and escapes while tokenizing."""
    argv, starts, quote = tokenize_args('a "b c" d\\ e')
    assert argv == ["a", "b c", "d e"]
    assert starts == [0, 2, 8]
    assert quote is None


def test_tokenize_open_quote():
    """Test an unterminated quote is reported."""
    argv, _, quote = tokenize_args("'it''s")
    assert argv == ["it's"]
    assert quote == "'"


def test_parse_command_line():
    """Test building a request from a typed line."""
    name, request = parse_command_line(":cd foo/ba")
    assert name == "cd"
    assert request.command is CommandId.CD
    assert request.line == "foo/ba"
    assert request.arg_pos == 0
    assert request.argc == 1


def test_parse_trailing_space():
    """Test a trailing space starts a new empty argument."""
    _, request = parse_command_line("copy a ")
    assert request.arg_pos == 2
    assert request.argv == ["a"]


def test_parse_special_command():
    """Test single character command names."""
    name, request = parse_command_line("!ls -l")
    assert name == "!"
    assert request.command is CommandId.SHELL
    assert request.line == "ls -l"
    assert request.arg_pos == 3


def test_parse_quoted_argument():
    """Test the pre-processing mode follows the opening quote."""
    _, request = parse_command_line("cd 'x")
    assert request.preprocessing is PreProcessing.SQUOTES_UNESCAPE

    _, request = parse_command_line('cd "x')
    assert request.preprocessing is PreProcessing.DQUOTES_UNESCAPE

    _, request = parse_command_line("cd x")
    assert request.preprocessing is PreProcessing.NONE
