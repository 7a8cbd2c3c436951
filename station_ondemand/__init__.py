"""Station on-demand catalog service."""
