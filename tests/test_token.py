import pytest

from sshconfig.position import Position
from sshconfig.token import (
    Token,
    TokenType,
    is_key_char,
    is_key_start_char,
    is_space,
)


def _tok(kind, value):
    return Token(kind, value, Position(1, 1))


def test_eof_token_prints_eof():
    assert str(_tok(TokenType.EOF, "anything")) == "EOF"


def test_plain_value_is_quoted():
    value = "example.com"
    text = str(_tok(TokenType.STRING, value))
    assert text[0] == '"' and text[-1] == '"'
    assert text[1:-1] == value


def test_newline_is_escaped():
    assert str(_tok(TokenType.STRING, "a\nb")) == '"a\\nb"'


def test_quote_and_backslash_escaped():
    assert str(_tok(TokenType.KEY, 'say "hi"')) == '"say \\"hi\\""'


def test_control_char_hex_escaped():
    assert str(_tok(TokenType.COMMENT, "\x01")) == '"\\x01"'


def test_non_ascii_printable_kept():
    value = "héllo"
    assert str(_tok(TokenType.STRING, value))[1:-1] == value


@pytest.mark.parametrize("ch", [" ", "\t"])
def test_is_space_true(ch):
    assert is_space(ch)


@pytest.mark.parametrize("ch", ["a", "\n", "\r", "=", None])
def test_is_space_false(ch):
    assert not is_space(ch)


@pytest.mark.parametrize("ch", ["H", "#", "=", "1"])
def test_key_start_char_true(ch):
    assert is_key_start_char(ch)


@pytest.mark.parametrize("ch", [" ", "\t", "\r", "\n", None])
def test_key_start_char_false(ch):
    assert not is_key_start_char(ch)


@pytest.mark.parametrize("ch", ["a", " ", "\t", "#"])
def test_key_char_true(ch):
    assert is_key_char(ch)


@pytest.mark.parametrize("ch", ["\r", "\n", "=", None])
def test_key_char_false(ch):
    assert not is_key_char(ch)