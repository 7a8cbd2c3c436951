"""Shared infrastructure for the on-demand catalog service."""
