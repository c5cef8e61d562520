import pytest

from sshconfig.nodes import (
    KV,
    Config,
    Empty,
    Host,
    Pattern,
    homedir,
    new_config,
)
from sshconfig.position import Position
from sshconfig.validators import SSHConfigError


MATCH_CASES = [
    (["*"], "any.test", True),
    (["a", "b", "*", "c"], "any.test", True),
    (["a", "b", "c"], "any.test", False),
    (["any.test"], "any1test", False),
    (["192.168.0.?"], "192.168.0.1", True),
    (["192.168.0.?"], "192.168.0.10", False),
    (["*.co.uk"], "bbc.co.uk", True),
    (["*.co.uk"], "subdomain.bbc.co.uk", True),
    (["*.*.co.uk"], "bbc.co.uk", False),
    (["*.*.co.uk"], "subdomain.bbc.co.uk", True),
    (
        ["*.example.com", "!*.dialup.example.com", "foo.dialup.example.com"],
        "foo.dialup.example.com",
        False,
    ),
    (["test.*", "!test.host"], "test.host", False),
]


@pytest.mark.parametrize("patterns, alias, want", MATCH_CASES)
def test_matches(patterns, alias, want):
    host = Host(patterns=[Pattern(p) for p in patterns])
    assert host.matches(alias) is want


def test_example_host_matches():
    host = Host(patterns=[Pattern("test.*.example.com")])
    assert host.matches("test.stage.example.com") is True
    assert host.matches("othersubdomain.example.com") is False


def test_example_pattern_star():
    host = Host(patterns=[Pattern("*")])
    assert host.matches("test.stage.example.com") is True
    assert host.matches("othersubdomain.any.any") is True


def test_empty_pattern_raises():
    with pytest.raises(SSHConfigError, match="empty pattern"):
        Pattern("")


def test_pattern_str_drops_negation():
    pat = Pattern("!foo.*")
    assert str(pat) == "foo.*"
    assert pat.negated is True


def test_pattern_does_not_match_trailing_newline():
    assert Host(patterns=[Pattern("abc")]).matches("abc\n") is False


def test_pattern_regex_chars_are_literal():
    host = Host(patterns=[Pattern("a+b")])
    assert host.matches("a+b") is True
    assert host.matches("aab") is False


def _wap_host():
    return Host(
        patterns=[Pattern("wap")],
        nodes=[
            KV("HostName", "wap.example.org"),
            KV("Port", "22"),
            KV("User", "root"),
            KV("KexAlgorithms", "diffie-hellman-group1-sha1"),
        ],
    )


@pytest.mark.parametrize(
    "text, expected",
    [
        ("hi", "hi"),
        ("%Z", "%!Z"),
        ("%", "%!(NOVERB)"),
        ("100%%", "100%"),
        ("%n-x", "wap-x"),
    ],
)
def test_percent_fixed(text, expected):
    assert _wap_host().percent("wap", text) == expected


def test_percent_home_and_user(monkeypatch):
    monkeypatch.setenv("USER", "alice")
    host = _wap_host()
    home = homedir()
    assert host.percent("wap", "%dhi") == home + "hi"
    assert host.percent("wap", "%uhi") == "alicehi"
    assert host.percent("wap", "%h.%n.%p.%r.%u") == "wap.example.org.wap.22.root.alice"
    assert host.percent("wap", "%d%") == home + "%!(NOVERB)"


def test_kv_str():
    kv = KV("Port", "22", space_after_value="  ", comment=" c", has_equals=True, leading_space=4)
    assert str(kv) == "    Port = 22  # c"
    assert str(KV("User", "root")) == "User root"


def test_empty_str():
    assert str(Empty()) == ""
    assert str(Empty(comment=" note", leading_space=2)) == "  # note"


def test_host_str():
    host = Host(
        patterns=[Pattern("a"), Pattern("!b")],
        nodes=[KV("Port", "22", leading_space=2), Empty()],
        eol_comment=" hi",
        space_before_comment=" ",
        has_equals=True,
    )
    assert str(host) == "Host = a b # hi\n  Port 22\n\n"


def test_new_config_is_implicit_star():
    cfg = new_config()
    assert len(cfg.hosts) == 1
    assert cfg.hosts[0].implicit is True
    assert cfg.hosts[0].matches("anything") is True
    assert str(cfg) == ""


def _config():
    cfg = new_config()
    cfg.hosts[0].nodes.append(KV("IdentityFile", "global"))
    cfg.hosts.append(
        Host(
            patterns=[Pattern("*.example.com")],
            nodes=[KV("Compression", "yes"), KV("IdentityFile", "f1"), KV("IdentityFile", "f2")],
        )
    )
    return cfg


def test_config_get_case_insensitive():
    cfg = _config()
    assert cfg.get("test.example.com", "Compression") == "yes"
    assert cfg.get("test.example.com", "cOMPRESSION") == "yes"
    assert cfg.get("other.org", "Compression") == ""


def test_config_get_first_and_all():
    cfg = _config()
    assert cfg.get("test.example.com", "IdentityFile") == "global"
    assert cfg.get_all("test.example.com", "IdentityFile") == ["global", "f1", "f2"]
    assert cfg.get_all("other.org", "Compression") == []


def test_config_tilde_substitution():
    cfg = new_config()
    cfg.hosts[0].nodes.append(KV("IdentityAgent", "~/agent.sock"))
    value = cfg.get("anyhost", "IdentityAgent")
    assert value == homedir() + "/agent.sock"
    assert "~/" not in value


def test_config_match_key_raises():
    cfg = new_config()
    cfg.hosts[0].nodes.append(KV("Match", "all"))
    with pytest.raises(SSHConfigError, match="Match"):
        cfg.get("x", "Port")


class _Lookup:
    position = Position(1, 1)

    def __init__(self, values):
        self.values = values

    def get(self, alias, key):
        return self.values.get(key, "")

    def __str__(self):
        return "Include other"


def test_config_consults_lookup_nodes():
    cfg = new_config()
    cfg.hosts[0].nodes.append(_Lookup({"Port": "4567"}))
    assert cfg.get("x", "Port") == "4567"
    assert cfg.get("x", "User") == ""
    assert str(cfg) == "Include other\n"


def test_config_str_roundtrip_shape():
    cfg = Config(hosts=[Host(patterns=[Pattern("*")], implicit=True, nodes=[Empty(comment=" top")])])
    cfg.hosts.append(Host(patterns=[Pattern("wap")], nodes=[KV("User", "root", leading_space=2)]))
    assert str(cfg) == "# top\nHost wap\n  User root\n"
    assert bytes(cfg) == b"# top\nHost wap\n  User root\n"