"""Dirty tracking and batched writes of position db

Edits only touch the in-memory store. Flusher writes the whole store on a
timer tick or on shutdown, and only when the store differs from what was
last written.
"""
import logging
from os.path import dirname

from .storage import StorageError, serialize

log = logging.getLogger(__name__)


class Flusher(object):
    def __init__(self, store, storage, path, saved=None):
        self.store = store
        self.storage = storage
        self.path = path

        # Copy of the store as it was last written or loaded
        self.saved = dict(saved or {})

        self.writing = False
        self.pending = False
        self.timer_id = None
        self.timers = None

    def should_flush(self):
        return self.store != self.saved

    def flush(self):
        """Writes store if it was changed since last successful write

        Returns True if a write was issued. Write can complete later, the
        ``saved`` snapshot is replaced only on completion. A flush requested
        while a write is in flight runs after that write completes.
        """
        if self.writing:
            self.pending = True
            return False

        if not self.should_flush():
            return False

        positions = self.store.snapshot()
        try:
            parent = dirname(self.path)
            if parent and not self.storage.exists(parent):
                self.storage.mkdir(parent)

            self.writing = True
            self.storage.write(self.path, serialize(positions),
                lambda error: self.write_done(positions, error))
        except StorageError as e:
            self.writing = False
            log.error('Can not write position db %s: %s', self.path, e)
            return False

        return True

    def write_done(self, positions, error):
        self.writing = False
        if error:
            self.pending = False
            log.error('Can not write position db %s: %s', self.path, error)
            return

        self.saved = positions
        log.debug('Position db saved to %s (%d entries)', self.path, len(positions))

        if self.pending:
            self.pending = False
            self.flush()

    def start(self, timers, interval):
        self.stop()
        self.timers = timers
        self.timer_id = timers.add(interval, self.on_timer)

    def stop(self):
        if self.timer_id is not None:
            self.timers.remove(self.timer_id)
            self.timer_id = None

    def on_timer(self):
        self.flush()
        return True
