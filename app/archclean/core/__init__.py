"""Core cleanup orchestration, configuration and theming."""
