"""
CLI support modules: output helpers, CLI configuration and index loading.
"""

from rubynav.cli import common, config, output

__all__ = ['common', 'config', 'output']
