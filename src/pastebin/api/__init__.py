"""HTTP surface over the paste service."""
