"""Configuration of setup_check.

Settings are read, in increasing priority, from built-in defaults, the site
configuration file, the user configuration file and the command line. The
configuration files are INI files named setup_check.conf with a
[setup_check] section, found in the directories appdirs reports for the
application.
"""

import configparser
import os

import appdirs

from setup_check.utils import cmd as cmd_utils

APP_NAME = 'setup_check'
CONFIG_FILE_NAME = 'setup_check.conf'
CONFIG_SECTION = 'setup_check'

DEFAULTS = {
    'root': '/',
    'gzip': cmd_utils.DEFAULT_GZIP,
}


class ConfigError(Exception):
    """Raised when a configuration file cannot be parsed.

    Attributes:
        path: Path to the offending file.
    """

    def __init__(self, path, reason):
        super().__init__('Invalid configuration file {}: {}'.format(path, reason))
        self.path = path


def config_paths():
    """Returns the configuration file paths to read, lowest priority first."""
    return [
        os.path.join(appdirs.site_config_dir(APP_NAME), CONFIG_FILE_NAME),
        os.path.join(appdirs.user_config_dir(APP_NAME), CONFIG_FILE_NAME),
    ]


def load_config(paths=None):
    """Returns a dict of settings merged from DEFAULTS and the given files.

    Missing files are skipped. Unknown keys are ignored.

    Raises:
        ConfigError: A file exists but is not valid INI.
    """
    if paths is None:
        paths = config_paths()

    settings = dict(DEFAULTS)
    for path in paths:
        if not os.path.isfile(path):
            continue

        parser = configparser.ConfigParser()
        try:
            parser.read(path)
        except configparser.Error as exc:
            raise ConfigError(path, exc)

        if not parser.has_section(CONFIG_SECTION):
            continue

        for key in DEFAULTS:
            value = parser.get(CONFIG_SECTION, key, raw=True, fallback=None)
            if value:
                settings[key] = value

    return settings
