"""cartridge — back up and restore game saves from a TOML configuration."""

__version__ = "0.1.0"
