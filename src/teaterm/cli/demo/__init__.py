"""Example application built on the runtime."""

from teaterm.cli.demo.menu import MainMenu

__all__ = ["MainMenu"]
