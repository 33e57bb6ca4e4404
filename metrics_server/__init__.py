"""Prometheus metrics sidecar exposing health and scrape endpoints."""

__version__ = "1.0.0"
