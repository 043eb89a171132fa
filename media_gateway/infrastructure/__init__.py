"""Adapters for the external collaborators: Firebase and S3-compatible storage."""
