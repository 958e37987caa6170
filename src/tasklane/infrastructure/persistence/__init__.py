"""Persistence layer for the role/permission/user graph."""
