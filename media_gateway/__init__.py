"""Media access gateway: presigned upload and read capabilities for per-family media."""

__version__ = "1.0.0"
