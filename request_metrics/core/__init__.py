"""Core configuration, logging, errors and protocols."""
