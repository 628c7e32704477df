"""Configuration and logging setup."""

from genealogy.config.logging import configure_from_settings, configure_logging
from genealogy.config.settings import GenealogySettings

__all__ = ['GenealogySettings', 'configure_logging', 'configure_from_settings']
