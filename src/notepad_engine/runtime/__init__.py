"""Process-wide services: telemetry and startup configuration."""
