"""Kernel – errors, time and security primitives shared by every layer."""
