"""Collaborator contracts and implementations."""
