"""Collaborator interfaces implemented by the host application."""

from rbaca.interfaces.provider import Provider, RoleTree

__all__ = ["Provider", "RoleTree"]
