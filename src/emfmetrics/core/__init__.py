"""Core domain: models, ports and the metrics logger."""
