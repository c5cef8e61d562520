"""Default values and value checks for SSH config keywords."""

from __future__ import annotations

from .token import _quote


class SSHConfigError(Exception):
    """Raised when an SSH config file or value is invalid."""


class DepthExceededError(SSHConfigError):
    """Raised when Include directives nest too deeply."""

    def __init__(self, message: str = "ssh_config: max recurse depth exceeded") -> None:
        super().__init__(message)


_YES_NO_KEYS = frozenset(
    key.lower()
    for key in (
        "BatchMode",
        "CanonicalizeFallbackLocal",
        "ChallengeResponseAuthentication",
        "CheckHostIP",
        "ClearAllForwardings",
        "Compression",
        "EnableSSHKeysign",
        "ExitOnForwardFailure",
        "ForwardAgent",
        "ForwardX11",
        "ForwardX11Trusted",
        "GatewayPorts",
        "GSSAPIAuthentication",
        "GSSAPIDelegateCredentials",
        "HostbasedAuthentication",
        "IdentitiesOnly",
        "KbdInteractiveAuthentication",
        "NoHostAuthenticationForLocalhost",
        "PasswordAuthentication",
        "PermitLocalCommand",
        "PubkeyAuthentication",
        "RhostsRSAAuthentication",
        "RSAAuthentication",
        "StreamLocalBindUnlink",
        "TCPKeepAlive",
        "UseKeychain",
        "UsePrivilegedPort",
        "VisualHostKey",
    )
)

_UINT_KEYS = frozenset(
    key.lower()
    for key in (
        "CanonicalizeMaxDots",
        "CompressionLevel",
        "ConnectionAttempts",
        "ConnectTimeout",
        "NumberOfPasswordPrompts",
        "Port",
        "ServerAliveCountMax",
        "ServerAliveInterval",
    )
)

_UINT64_MAX = 2**64 - 1
_DIGITS = frozenset("0123456789")

# One keyword per line, followed by its default value (which may contain spaces).
_DEFAULTS_TABLE = """
AddKeysToAgent no
AddressFamily any
BatchMode no
CanonicalizeFallbackLocal yes
CanonicalizeHostname no
CanonicalizeMaxDots 1
ChallengeResponseAuthentication yes
CheckHostIP yes
Cipher 3des
Ciphers [email],aes128-ctr,aes192-ctr,aes256-ctr,[email],[email],aes128-cbc,aes192-cbc,aes256-cbc
ClearAllForwardings no
Compression no
CompressionLevel 6
ConnectionAttempts 1
ControlMaster no
EnableSSHKeysign no
EscapeChar ~
ExitOnForwardFailure no
FingerprintHash sha256
ForwardAgent no
ForwardX11 no
ForwardX11Timeout 20m
ForwardX11Trusted no
GatewayPorts no
GlobalKnownHostsFile /etc/ssh/ssh_known_hosts /etc/ssh/ssh_known_hosts2
GSSAPIAuthentication no
GSSAPIDelegateCredentials no
HashKnownHosts no
HostbasedAuthentication no
HostbasedKeyTypes [email],[email],[email],[email],[email],ecdsa-sha2-nistp256,ecdsa-sha2-nistp384,ecdsa-sha2-nistp521,ssh-ed25519,ssh-rsa
HostKeyAlgorithms [email],[email],[email],[email],[email],ecdsa-sha2-nistp256,ecdsa-sha2-nistp384,ecdsa-sha2-nistp521,ssh-ed25519,ssh-rsa
IdentitiesOnly no
IdentityFile ~/.ssh/identity
KbdInteractiveAuthentication yes
KexAlgorithms curve25519-sha256,[email],ecdh-sha2-nistp256,ecdh-sha2-nistp384,ecdh-sha2-nistp521,diffie-hellman-group-exchange-sha256,diffie-hellman-group-exchange-sha1,diffie-hellman-group14-sha1
LogLevel INFO
MACs [email],[email],[email],[email],[email],[email],[email],hmac-sha2-256,hmac-sha2-512,hmac-sha1
NoHostAuthenticationForLocalhost no
NumberOfPasswordPrompts 3
PasswordAuthentication yes
PermitLocalCommand no
Port 22
PreferredAuthentications gssapi-with-mic,hostbased,publickey,keyboard-interactive,password
Protocol 2
ProxyUseFdpass no
PubkeyAcceptedKeyTypes [email],[email],[email],[email],[email],ecdsa-sha2-nistp256,ecdsa-sha2-nistp384,ecdsa-sha2-nistp521,ssh-ed25519,ssh-rsa
PubkeyAuthentication yes
RekeyLimit default none
RhostsRSAAuthentication no
RSAAuthentication yes
ServerAliveCountMax 3
ServerAliveInterval 0
StreamLocalBindMask 0177
StreamLocalBindUnlink no
StrictHostKeyChecking ask
TCPKeepAlive yes
Tunnel no
TunnelDevice any:any
UpdateHostKeys no
UseKeychain no
UsePrivilegedPort no
UserKnownHostsFile ~/.ssh/known_hosts ~/.ssh/known_hosts2
VerifyHostKeyDNS no
VisualHostKey no
XAuthLocation /usr/X11R6/bin/xauth
"""


def _parse_defaults(table: str) -> dict[str, str]:
    entries = (line.split(None, 1) for line in table.splitlines() if line.strip())
    return {keyword.lower(): value for keyword, value in entries}


_DEFAULTS = _parse_defaults(_DEFAULTS_TABLE)

# Identities used for SSH protocol 2.
DEFAULT_PROTOCOL2_IDENTITIES = (
    "~/.ssh/id_dsa",
    "~/.ssh/id_ecdsa",
    "~/.ssh/id_ed25519",
    "~/.ssh/id_rsa",
)

# Directives that may be given more than once. Lookups are lower-cased
# while these names keep their mixed case.
_PLURAL_DIRECTIVES = frozenset(
    {
        "CertificateFile",
        "IdentityFile",
        "DynamicForward",
        "RemoteForward",
        "SendEnv",
        "SetEnv",
    }
)


def default(keyword: str) -> str:
    """Return the default value for keyword, or "" if it has none."""
    return _DEFAULTS.get(keyword.lower(), "")


def _check_uint(value: str) -> None:
    if not value or not set(value) <= _DIGITS:
        raise SSHConfigError(
            f"ssh_config: strconv.ParseUint: parsing {_quote(value)}: invalid syntax"
        )
    if int(value) > _UINT64_MAX:
        raise SSHConfigError(
            f"ssh_config: strconv.ParseUint: parsing {_quote(value)}: value out of range"
        )


def validate(key: str, value: str) -> None:
    """Raise SSHConfigError if value is not acceptable for key."""
    lkey = key.lower()
    if lkey in _YES_NO_KEYS and value not in ("yes", "no"):
        raise SSHConfigError(
            f"ssh_config: value for key {_quote(key)} must be 'yes' or 'no', "
            f"got {_quote(value)}"
        )
    if lkey in _UINT_KEYS:
        _check_uint(value)


def supports_multiple(key: str) -> bool:
    """Report whether a directive can be specified multiple times."""
    return key.lower() in _PLURAL_DIRECTIVES