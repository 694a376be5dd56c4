"""Plugin context

PositionMemory is created by host on plugin load and torn down on unload.
Host forwards its document events to ``on_*`` methods.
"""
import time
import logging

from . import identity
from .store import PositionStore
from .storage import FileStorage, StorageError, load_positions
from .flush import Flusher
from .sweep import sweep
from .capture import capture, restore, Debounce
from .prompt import Prompt

log = logging.getLogger(__name__)

def now_ms():
    return int(time.time() * 1000)


class PositionMemory(object):
    def __init__(self, host, conf, timers, storage=None, now=now_ms):
        self.host = host
        self.conf = conf
        self.timers = timers
        self.storage = storage or FileStorage()
        self.now = now

        self.store = PositionStore()
        self.flusher = None
        self.unloaded = False
        self.prompt = Prompt(timers, conf['promptDuration'], host.create_prompt)

        timeout = conf['captureTimeout']
        self.capture_on_change = Debounce(timers, timeout, self.remember)
        self.capture_on_scroll = Debounce(timers, timeout, self.remember)

    @property
    def path(self):
        return self.conf['dbFileName']

    def load(self):
        try:
            positions = load_positions(self.storage, self.path)
        except StorageError:
            log.exception('Error reading position db %s', self.path)
            positions = {}

        self.store = PositionStore(positions)
        self.flusher = Flusher(self.store, self.storage, self.path, positions)

        if sweep(self.store, self.conf['deleteAfterDays'], self.now()):
            self.flusher.flush()

        self.flusher.start(self.timers, self.conf['saveTimer'])
        return self

    def unload(self):
        self.unloaded = True
        self.prompt.clear()
        self.capture_on_change.cancel()
        self.capture_on_scroll.cancel()

        if self.flusher:
            self.flusher.flush()
            self.flusher.stop()

    def remember(self):
        uri = self.host.get_active_uri()
        if not uri:
            return

        position = capture(self.host)
        if position:
            self.store.set(uri, position.stamped(self.now()))

    def jump(self, uri, position):
        return restore(self.host, uri, position)

    def on_open(self, uri):
        if self.unloaded:
            return

        # Pending trailing captures belong to previous document
        self.capture_on_change.cancel()
        self.capture_on_scroll.cancel()
        self.prompt.clear()
        if not uri:
            return

        position = self.store.get(uri)
        if not position or self.host.has_explicit_navigation():
            return

        self.prompt.show(position, lambda: self.jump(uri, position))

    def on_change(self):
        if not self.unloaded:
            self.capture_on_change()

    def on_scroll(self):
        if not self.unloaded:
            self.capture_on_scroll()

    def on_rename(self, old_uri, new_uri):
        identity.rename(self.store, old_uri, new_uri)

    def on_delete(self, uri):
        identity.delete(self.store, uri)

    def on_quit(self):
        self.unload()
