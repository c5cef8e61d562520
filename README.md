# sshconfig

Read values from OpenSSH client configuration files (`~/.ssh/config` and
`/etc/ssh/ssh_config`), with host pattern matching, `Include` directives,
`%` token expansion and a table of OpenSSH defaults. A parsed file can be
printed back out with its comments and spacing preserved.

The package has no dependencies beyond the standard library.

## Looking up a value

```python
from sshconfig.settings import get, get_all, get_strict, get_all_strict

port = get("myhost", "Port")                    # "22" if nothing is set
identities = get_all("myhost", "IdentityFile")  # every matching directive
user = get_strict("myhost", "User")             # raises on a bad config file
```

These functions use `sshconfig.settings.DEFAULT_USER_SETTINGS`. The user's
file is searched first, then the system file, then the built-in default.
A missing user or system file is skipped. Key names are matched without
regard to case.

`get_strict` raises `SSHConfigError` (from `sshconfig.validators`) when a
file cannot be parsed, and also when the value found is invalid for its
key: yes/no options such as `Compression` must be exactly `yes` or `no`,
and numeric options such as `Port` must be an unsigned integer.
`get_all_strict` raises on parse errors but does not check values.
`get` and `get_all` return `""` and `[]` where the strict versions would
raise.

`get_all_strict` returns the values from the first file that has any; if
none does, it returns the key's default as a one-item list, or an empty
list when the key has no default.

## Custom settings

```python
from sshconfig.settings import UserSettings

settings = UserSettings()
settings.config_finder(lambda: "/path/to/my_ssh_config")
print(settings.get("example.com", "HostName"))
```

A finder set with `config_finder` replaces both the user and the system
file; if the file it names does not exist, strict lookups raise. The
constructor also accepts `ignore_errors`, `user_config_finder` and
`system_config_finder`. With `ignore_errors=True`, a file that fails to
parse no longer makes strict lookups raise. Files are read once, on the
first lookup, and then cached.

## Working with a parsed file

```python
import io
from sshconfig.parser import decode

cfg = decode(io.StringIO("""
Host *.example.com
  Compression yes
"""))
print(cfg.get("test.example.com", "Compression"))  # yes
print(str(cfg))                                    # the original text
```

`decode` reads any object with a `read()` method. `decode_bytes` parses a
`bytes` or `str` value, and `parse_file` reads a path from disk.
`Config.get` returns the first matching value or `""`. `Config.get_all`
returns every match in file order.

Host patterns (`sshconfig.nodes.Pattern`) support `*`, `?` and a leading
`!` for negation. `Host.matches(alias)` tells whether a block applies. The
first `~` in a value is replaced with the home directory. Tokens such as
`%h`, `%p`, `%r`, `%n`, `%d`, `%u`, `%i`, `%L` and `%%` are expanded;
an unknown token `%Z` becomes `%!Z`, and a trailing `%` becomes
`%!(NOVERB)`.

## Defaults and validation

```python
from sshconfig.validators import default, supports_multiple, validate

default("Port")                    # "22"
default("UnknownVar")              # ""
supports_multiple("IdentityFile")  # whether the key can repeat
validate("Port", "yes")            # raises SSHConfigError
```

## Limitations

- `Match` blocks are not supported. A file that contains one fails to
  parse with `SSHConfigError`.
- `Include` nesting is limited to five levels. Deeper nesting, such as a
  file that includes itself, raises `DepthExceededError`.
- The package only reads and prints configuration. It does not edit files
  in place and has no command-line tool.