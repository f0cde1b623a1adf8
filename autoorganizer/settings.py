"""
Configuration Management for File Autoorganizer
Centralized configuration handling with environment-specific settings
"""

import os
from pathlib import Path
from typing import List, Dict, Any, Set


class Config:
    """Base configuration class with default values"""

    # Default values (fallbacks)
    DEFAULT_SOURCE_DIR = './inbox'
    DEFAULT_DESTINATION_ROOT = './sorted'
    DEFAULT_MATCH_THRESHOLD = 0.35
    DEFAULT_MAX_PAGES = 3
    DEFAULT_DATE_PAGES = 1
    DEFAULT_TRACKED_EXTENSIONS = ('pdf',)
    DEFAULT_LOG_DIR = 'logs'
    DEFAULT_DEBUG_MODE = False
    DEFAULT_PORT = 5000
    DEFAULT_HOST = '127.0.0.1'

    # Global blacklist directories (system-wide)
    GLOBAL_BLACKLIST_DIRS = [
        '.SynologyWorkingDirectory',
        '#SynoRecycle',
        '.DS_Store',
        '__pycache__',
        '.git',
        'node_modules',
        '.localized',
    ]

    def __init__(self):
        """Load configuration from config_secret.py, then the environment, then validate"""
        self._load_configuration()
        self._apply_environment()
        self._setup_paths()
        self._validate_configuration()

    def _load_configuration(self):
        """Load configuration from config_secret.py or use defaults"""
        self.source_dir = self.DEFAULT_SOURCE_DIR
        self.destination_root = self.DEFAULT_DESTINATION_ROOT
        self.match_threshold = self.DEFAULT_MATCH_THRESHOLD
        self.max_pages = self.DEFAULT_MAX_PAGES
        self.date_pages = self.DEFAULT_DATE_PAGES
        self.tracked_extensions = set(self.DEFAULT_TRACKED_EXTENSIONS)
        self.log_dir = self.DEFAULT_LOG_DIR
        self.debug_mode = self.DEFAULT_DEBUG_MODE
        self.port = self.DEFAULT_PORT
        self.host = self.DEFAULT_HOST
        self.personal_blacklist_dirs = []
        self._config_source = "defaults"

        try:
            import config_secret
        except ImportError:
            return

        self.source_dir = getattr(config_secret, 'SOURCE_DIR', self.source_dir)
        self.destination_root = getattr(config_secret, 'DESTINATION_ROOT', self.destination_root)
        self.match_threshold = getattr(config_secret, 'MATCH_THRESHOLD', self.match_threshold)
        self.max_pages = getattr(config_secret, 'MAX_PAGES', self.max_pages)
        self.log_dir = getattr(config_secret, 'LOG_DIR', self.log_dir)
        self.debug_mode = getattr(config_secret, 'DEBUG_MODE', self.debug_mode)
        self.port = getattr(config_secret, 'PORT', self.port)
        self.host = getattr(config_secret, 'HOST', self.host)
        self.personal_blacklist_dirs = list(getattr(config_secret, 'PERSONAL_BLACKLIST_DIRS', []))
        extensions = getattr(config_secret, 'TRACKED_EXTENSIONS', None)
        if extensions:
            self.tracked_extensions = normalize_extensions(extensions)
        self._config_source = "config_secret.py"

    def _apply_environment(self):
        """Environment variables override file-based settings"""
        env = os.environ
        if env.get('SOURCE_DIR'):
            self.source_dir = env['SOURCE_DIR']
        if env.get('DESTINATION_ROOT'):
            self.destination_root = env['DESTINATION_ROOT']
        if env.get('MATCH_THRESHOLD'):
            self.match_threshold = float(env['MATCH_THRESHOLD'])
        if env.get('MAX_PAGES'):
            self.max_pages = int(env['MAX_PAGES'])
        if env.get('TRACKED_EXTENSIONS'):
            self.tracked_extensions = normalize_extensions(env['TRACKED_EXTENSIONS'].split(','))
        if env.get('LOG_DIR'):
            self.log_dir = env['LOG_DIR']
        if env.get('DEBUG_MODE'):
            self.debug_mode = env['DEBUG_MODE'].lower() in ('1', 'true', 'yes')
        if env.get('HOST'):
            self.host = env['HOST']
        if env.get('PORT'):
            self.port = int(env['PORT'])

    def _setup_paths(self):
        """Setup and normalize paths"""
        self.source_path = Path(self.source_dir)
        self.destination_path = Path(self.destination_root)

    def _validate_configuration(self):
        """Validate configuration values"""
        if not isinstance(self.port, int) or not (1 <= self.port <= 65535):
            raise ValueError(f"Invalid port: {self.port}")

        if self.match_threshold < 0:
            raise ValueError(f"Invalid match threshold: {self.match_threshold}")

        if self.max_pages < 1:
            raise ValueError(f"Invalid max pages: {self.max_pages}")

        if not self.tracked_extensions:
            raise ValueError("At least one tracked extension is required")

    @property
    def blacklist_dirs(self) -> List[str]:
        """Get combined blacklist directories (global + personal)"""
        return self.GLOBAL_BLACKLIST_DIRS + self.personal_blacklist_dirs

    @property
    def config_dict(self) -> Dict[str, Any]:
        """Get configuration as dictionary"""
        return {
            'SOURCE_DIR': self.source_dir,
            'DESTINATION_ROOT': self.destination_root,
            'MATCH_THRESHOLD': self.match_threshold,
            'MAX_PAGES': self.max_pages,
            'TRACKED_EXTENSIONS': sorted(self.tracked_extensions),
            'BLACKLIST_DIRS': self.blacklist_dirs,
            'LOG_DIR': self.log_dir,
            'DEBUG_MODE': self.debug_mode,
            'PORT': self.port,
            'HOST': self.host
        }

    def get_summary(self) -> Dict[str, Any]:
        """Get configuration summary for logging"""
        return {
            'config_source': self._config_source,
            'source_dir': self.source_dir,
            'destination_root': self.destination_root,
            'match_threshold': self.match_threshold,
            'max_pages': self.max_pages,
            'tracked_extensions': sorted(self.tracked_extensions),
            'debug_mode': self.debug_mode,
            'blacklist_count': len(self.blacklist_dirs),
            'paths_exist': {
                'source_dir': self.source_path.exists(),
                'destination_root': self.destination_path.exists()
            }
        }


def normalize_extensions(extensions) -> Set[str]:
    """Lowercase extensions and strip leading dots ('.PDF' -> 'pdf')"""
    return {ext.strip().lower().lstrip('.') for ext in extensions if ext and ext.strip()}


# Global configuration instance
config = Config()

CONFIG = config.config_dict
