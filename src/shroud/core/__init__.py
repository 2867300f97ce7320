"""Core building blocks: cipher, codec, errors, settings and logging helpers."""
