"""
Configuration for the Content Grammar Audit.
"""

import os
import logging
from pathlib import Path
from dotenv import load_dotenv
from typing import Dict, Any

from lexicon.types import Definiteness

# Load environment variables (optional - only if .env file exists)
load_dotenv()

BASE_DIR = Path(__file__).resolve().parent


def _definiteness_from_env(default: str = 'indefinite') -> Definiteness:
    raw = os.environ.get('AUDIT_DEFAULT_DEFINITENESS', default).strip().lower()
    try:
        return Definiteness(raw)
    except ValueError:
        logging.warning(f"Unknown AUDIT_DEFAULT_DEFINITENESS '{raw}', using '{default}'")
        return Definiteness(default)


class Config:
    """Audit configuration."""

    TESTING = False

    # Logging Configuration
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Dictionary data (nouns.yaml / adjectives.yaml)
    LEXICON_DIR = os.environ.get('LEXICON_DIR') or str(BASE_DIR / 'lexicon' / 'config')

    # Rule suppression file
    AUDIT_EXCEPTIONS_FILE = os.environ.get('AUDIT_EXCEPTIONS_FILE') or str(BASE_DIR / 'config' / 'audit_exceptions.yaml')

    # Definiteness assumed when content declares none and the head noun is not a definite form
    AUDIT_DEFAULT_DEFINITENESS = _definiteness_from_env()

    # Worker threads for per-unit checks (1 = sequential)
    AUDIT_MAX_WORKERS = int(os.environ.get('AUDIT_MAX_WORKERS', 1))

    # Report output
    REPORTS_DIR = os.environ.get('REPORTS_DIR') or str(Path(os.getcwd()) / 'docs' / 'qa-reports')

    @classmethod
    def get_audit_config(cls) -> Dict[str, Any]:
        """Get audit configuration."""
        return {
            'lexicon_dir': cls.LEXICON_DIR,
            'exceptions_file': cls.AUDIT_EXCEPTIONS_FILE,
            'default_definiteness': cls.AUDIT_DEFAULT_DEFINITENESS,
            'max_workers': cls.AUDIT_MAX_WORKERS,
        }

    @classmethod
    def get_report_config(cls) -> Dict[str, Any]:
        """Get report output configuration."""
        return {
            'reports_dir': cls.REPORTS_DIR,
        }


# For testing only
class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    LOG_LEVEL = 'DEBUG'
    AUDIT_EXCEPTIONS_FILE = ''
    AUDIT_DEFAULT_DEFINITENESS = Definiteness.INDEFINITE
    AUDIT_MAX_WORKERS = 1
