"""plann.er trip service."""
