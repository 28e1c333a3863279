"""customtkinter shell for the profile screen."""
from .app import ProfileApp

__all__ = ["ProfileApp"]
