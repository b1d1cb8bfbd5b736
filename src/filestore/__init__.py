"""filestore — a small token-gated HTTP file storage service."""
