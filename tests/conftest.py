import pytest

from lastpos.storage import StoreWriteFailure


class FakeTimers(object):
    """Main loop timers driven by ``advance``"""
    def __init__(self):
        self.now = 0
        self.timers = {}
        self.last_id = 0

    def add(self, timeout, callback):
        self.last_id += 1
        self.timers[self.last_id] = [self.now + timeout, timeout, callback]
        return self.last_id

    def remove(self, timer_id):
        del self.timers[timer_id]

    def advance(self, ms):
        target = self.now + ms
        while True:
            due = sorted((t[0], tid) for tid, t in self.timers.items() if t[0] <= target)
            if not due:
                break

            when, tid = due[0]
            self.now = when
            keep = self.timers[tid][2]()
            if tid in self.timers:
                if keep:
                    self.timers[tid][0] = when + self.timers[tid][1]
                else:
                    del self.timers[tid]

        self.now = target

    def __len__(self):
        return len(self.timers)


class Clock(object):
    def __init__(self, value=1700000000000):
        self.value = value

    def __call__(self):
        return self.value


class FakePromptView(object):
    def __init__(self, label, on_jump, on_close):
        self.label = label
        self.on_jump = on_jump
        self.on_close = on_close
        self.hidden = False
        self.destroyed = False

    def hide(self):
        self.hidden = True

    def destroy(self):
        self.destroyed = True


class FakeHost(object):
    def __init__(self):
        self.active = None
        self.selection = None
        self.scroll = None
        self.navigated = False
        self.prompts = []
        self.calls = []

    def get_active_uri(self):
        return self.active

    def get_selection(self):
        return self.selection

    def get_scroll(self):
        return self.scroll

    def set_selection(self, anchor, head):
        self.selection = (tuple(anchor), tuple(head))
        self.calls.append('set_selection')

    def scroll_to_selection(self):
        self.calls.append('scroll_to_selection')

    def set_scroll(self, value):
        self.scroll = value
        self.calls.append('set_scroll')

    def focus(self):
        self.calls.append('focus')

    def has_explicit_navigation(self):
        return self.navigated

    def create_prompt(self, label, on_jump, on_close):
        view = FakePromptView(label, on_jump, on_close)
        self.prompts.append(view)
        return view


class MemoryStorage(object):
    """Storage adapter keeping files in dict

    With ``deferred`` writes complete only on ``complete()`` call.
    """
    def __init__(self, files=None, deferred=False):
        self.files = dict(files or {})
        self.dirs = set()
        self.writes = []
        self.deferred = deferred
        self.in_flight = []
        self.fail = False

    def read(self, path):
        return self.files.get(path)

    def exists(self, path):
        return path in self.dirs or path in self.files

    def mkdir(self, path):
        self.dirs.add(path)

    def write(self, path, data, callback):
        self.writes.append((path, data))
        error = StoreWriteFailure('disk is full') if self.fail else None

        def done():
            if not error:
                self.files[path] = data
            callback(error)

        if self.deferred:
            self.in_flight.append(done)
        else:
            done()

    def complete(self):
        self.in_flight.pop(0)()


@pytest.fixture
def timers():
    return FakeTimers()

@pytest.fixture
def clock():
    return Clock()

@pytest.fixture
def host():
    return FakeHost()

@pytest.fixture
def storage():
    return MemoryStorage()

@pytest.fixture
def deferred_storage():
    return MemoryStorage(deferred=True)
