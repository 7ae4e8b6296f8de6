"""Core support: configuration, diagnostics logging, exceptions, environment."""
