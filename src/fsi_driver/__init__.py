"""Abaqus / Star-CCM+ fluid-structure interaction study driver."""

__version__ = "0.1.0"
