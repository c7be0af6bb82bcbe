"""Configuration, logging and file storage helpers for gtask."""
