"""Reading and applying editor positions

``host`` is the editor side of the plugin. It must provide:

* ``get_active_uri()`` -- uri of active document or None
* ``get_selection()`` -- ``(anchor, head)`` pair of ``(line, ch)`` or None
* ``get_scroll()`` -- vertical scroll offset or None
* ``set_selection(anchor, head)``, ``scroll_to_selection()``,
  ``set_scroll(value)`` and ``focus()``
"""
from .position import Position, Point, Cursor, round_scroll

CAPTURE_TIMEOUT = 300

def capture(host):
    """Returns Position of active editor or None if nothing to remember"""
    scroll = host.get_scroll()
    if scroll is not None:
        scroll = round_scroll(scroll)

    cursor = None
    selection = host.get_selection()
    if selection:
        anchor, head = selection
        cursor = Cursor(Point(*anchor), Point(*head))

    position = Position(cursor, scroll)
    if position.is_empty:
        return None

    return position

def restore(host, uri, position):
    """Applies position to active editor if it still shows ``uri``"""
    if host.get_active_uri() != uri:
        return False

    if position.cursor:
        host.set_selection(position.cursor.anchor, position.cursor.head)
        host.scroll_to_selection()

    if position.scroll is not None and host.get_scroll() != position.scroll:
        host.set_scroll(position.scroll)

    host.focus()
    return True


class Debounce(object):
    """Leading edge call limiter

    First call runs ``func`` at once and arms a cooldown. Calls made while
    armed are suppressed and restart the cooldown. If something was
    suppressed ``func`` runs once more when the cooldown elapses.
    """
    def __init__(self, timers, timeout, func):
        self.timers = timers
        self.timeout = timeout
        self.func = func
        self.timer_id = None
        self.suppressed = False

    @property
    def armed(self):
        return self.timer_id is not None

    def __call__(self):
        if self.timer_id is None:
            self.func()
        else:
            self.timers.remove(self.timer_id)
            self.suppressed = True

        self.timer_id = self.timers.add(self.timeout, self.on_cooldown)

    def on_cooldown(self):
        self.timer_id = None
        if self.suppressed:
            self.suppressed = False
            self.func()

        return False

    def cancel(self):
        if self.timer_id is not None:
            self.timers.remove(self.timer_id)
            self.timer_id = None

        self.suppressed = False
