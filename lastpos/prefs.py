import os
import sys
import json
import logging
from os.path import join, dirname, exists, expanduser

from .capture import CAPTURE_TIMEOUT

log = logging.getLogger(__name__)

def join_to_settings_dir(*args):
    config_dir = os.getenv('XDG_CONFIG_HOME', expanduser('~/.config'))
    return join(config_dir, *args)

def make_missing_dirs(filename):
    path = dirname(filename)
    if path and not exists(path):
        os.makedirs(path, mode=0o755)

def get_settings_path(*name):
    return join_to_settings_dir('lastpos', *name)


options = {}
def add_option(name, default, desc=''):
    options[name] = (default, desc)

add_option('dbFileName', lambda: get_settings_path('cursor-positions.json'),
    'Path of json file with remembered positions')
add_option('saveTimer', 5000, 'Interval (ms) between position db flushes')
add_option('deleteAfterDays', 90,
    'Remove positions of files not opened in X days. 0 keeps positions forever')
add_option('promptDuration', 10000, 'How long (ms) jump prompt stays visible')
add_option('captureTimeout', CAPTURE_TIMEOUT,
    'Minimal interval (ms) between position captures')


class Settings(object):
    def __init__(self, options=options, filename=None):
        self.options = options
        self.filename = filename or get_settings_path('settings.json')
        self.data = {}

    def __getitem__(self, name):
        try:
            return self.data[name]
        except KeyError:
            pass

        value = self.options[name][0]
        if callable(value):
            value = value()

        self.data[name] = value
        return value

    def __setitem__(self, name, value):
        self.data[name] = value

    def __contains__(self, name):
        return name in self.options

    def update(self, name, text):
        """Sets integer option from user input, ignores garbage"""
        try:
            self[name] = int(text)
        except ValueError:
            return False

        return True

    def load(self, filename=None):
        if filename:
            self.filename = filename

        self.data.clear()
        try:
            with open(self.filename) as f:
                data = json.load(f)
        except IOError:
            return self
        except ValueError as e:
            log.error('Error on loading settings %s: %s', self.filename, e)
            return self

        if isinstance(data, dict):
            for name, value in data.items():
                self.set_loaded(name, value)

        return self

    def set_loaded(self, name, value):
        default = self.options.get(name, (None, ''))[0]
        if isinstance(default, int) and not isinstance(default, bool):
            try:
                value = int(value)
            except (TypeError, ValueError):
                log.error('Bad value of %s in %s: %r', name, self.filename, value)
                return

        self.data[name] = value

    def save(self):
        make_missing_dirs(self.filename)
        with open(self.filename, 'w') as f:
            json.dump(self.data, f, sort_keys=True, indent=4)


def enable_debug_log():
    logger = logging.getLogger('lastpos')
    logger.setLevel(logging.DEBUG)

    if not any(isinstance(h, logging.StreamHandler) and h.stream is sys.stderr
               for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s %(name)s: %(message)s', datefmt='%H:%M:%S'))
        logger.addHandler(handler)
