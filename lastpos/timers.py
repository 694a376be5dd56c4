from gi.repository import GLib


class GLibTimers(object):
    """Main loop timers

    Callback returning True keeps timer running, False stops it.
    """
    def add(self, timeout, callback):
        return GLib.timeout_add(timeout, callback)

    def remove(self, timer_id):
        GLib.source_remove(timer_id)
