"""cpdeploy — CloudPanel site deployment CLI."""

__version__ = "1.2.1"
