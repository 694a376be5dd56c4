IDLE = 'idle'
SHOWING = 'showing'

FADE_TIMEOUT = 300

def get_label(position):
    if position.cursor:
        return 'Jump to Line %d?' % (position.cursor.anchor.line + 1)

    return 'Jump to Last position?'


class Prompt(object):
    """Offers to jump to the remembered position

    Only one prompt view exists at any time. ``create_view(label, on_jump,
    on_close)`` must return an object with ``hide()`` (starts hide transition)
    and ``destroy()`` methods.
    """
    def __init__(self, timers, duration, create_view):
        self.timers = timers
        self.duration = duration
        self.create_view = create_view

        self.view = None
        self.timer_id = None
        self.on_jump = None

    @property
    def state(self):
        return SHOWING if self.view else IDLE

    def show(self, position, on_jump):
        self.clear()
        self.on_jump = on_jump
        self.view = self.create_view(get_label(position), self.jump, self.clear)
        self.timer_id = self.timers.add(self.duration, self.expire)

    def jump(self, *args):
        if not self.view:
            return

        on_jump = self.on_jump
        try:
            on_jump()
        finally:
            self.clear()

    def expire(self):
        self.timer_id = None
        if self.view:
            self.view.hide()
            self.timer_id = self.timers.add(FADE_TIMEOUT, self.faded)

        return False

    def faded(self):
        self.timer_id = None
        self.clear()
        return False

    def clear(self, *args):
        if self.timer_id is not None:
            self.timers.remove(self.timer_id)
            self.timer_id = None

        if self.view:
            self.view.destroy()
            self.view = None

        self.on_jump = None
