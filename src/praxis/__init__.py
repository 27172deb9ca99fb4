"""
praxis - compile role manifests into agent profiles and verify documents.

Sub-packages:
    praxis.core       errors, logging, Result, configuration
    praxis.compiler   role compilation and output plugins
    praxis.validator  document verification and its cache
    praxis.cli        the ``praxis`` command
"""

__version__ = "0.1.0"
