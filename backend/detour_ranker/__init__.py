"""Shared-ride trip detour ranking service."""
