"""Scheduled cleanup of stale DigitalOcean droplets."""

from .handler import run_sweep, process_droplet

__all__ = ["run_sweep", "process_droplet"]
