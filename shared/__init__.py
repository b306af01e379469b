"""Process-wide helpers shared by every reflector package: component loggers and log setup."""
