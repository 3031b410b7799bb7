"""Wikistage - a minimal file-backed wiki served over HTTP."""
