"""Parse, query and print OpenSSH client configuration files."""

__version__ = "1.3.0"