"""Configuration: settings and repository initialization."""
