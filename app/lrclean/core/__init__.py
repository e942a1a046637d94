"""Core services: paths, settings, history and cleanup orchestration."""
