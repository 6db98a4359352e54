"""Infrastructure: logging, metrics, session signing and the upstream client."""
