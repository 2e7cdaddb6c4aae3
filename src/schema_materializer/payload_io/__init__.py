"""Payload file exports."""

from .payload_files import PayloadError, load_payload, render_payload, write_payload

__all__ = [
    "PayloadError",
    "load_payload",
    "render_payload",
    "write_payload",
]
