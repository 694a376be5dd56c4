import os

import pytest

pytest.importorskip('gi')

if not (os.environ.get('DISPLAY') or os.environ.get('WAYLAND_DISPLAY')):
    pytest.skip('GTK tests need a display', allow_module_level=True)

try:
    from lastpos import gui
    from lastpos.gui import EditorHost, get_iter_at_point
except ValueError:
    pytest.skip('GTK 3 is not available', allow_module_level=True)

from gi.repository import GLib, Gtk

from lastpos.timers import GLibTimers
from lastpos.memory import PositionMemory
from lastpos.prefs import Settings
from lastpos.position import Position, Cursor, Point

TEXT = 'first\nsecond line\nthird\n'

def make_view(text=TEXT):
    view = Gtk.TextView()
    view.get_buffer().set_text(text)
    sw = Gtk.ScrolledWindow()
    sw.add(view)
    view.scrolled = sw
    return view

def make_host(tmp_path, storage):
    box = Gtk.Box(orientation=Gtk.Orientation.VERTICAL)
    host = EditorHost(box)
    conf = Settings(filename=str(tmp_path / 'settings.json'))
    conf['dbFileName'] = str(tmp_path / 'db' / 'positions.json')
    memory = PositionMemory(host, conf, GLibTimers(), storage)
    host.attach(memory)
    memory.load()
    return host, memory

def test_iter_at_point_must_clamp_to_text():
    buf = Gtk.TextBuffer()
    buf.set_text(TEXT)

    it = get_iter_at_point(buf, (1, 3))
    assert (it.get_line(), it.get_line_offset()) == (1, 3)

    it = get_iter_at_point(buf, (0, 100))
    assert (it.get_line(), it.get_line_offset()) == (0, 5)

    it = get_iter_at_point(buf, (100, 0))
    assert it.get_line() == buf.get_line_count() - 1

def test_host_must_capture_and_restore_selection(tmp_path, storage):
    host, memory = make_host(tmp_path, storage)
    view = make_view()
    host.open('a.txt', view)

    host.set_selection((1, 2), (1, 6))
    assert host.get_selection() == ((1, 2), (1, 6))

    memory.remember()
    assert memory.store.get('a.txt').cursor == Cursor(Point(1, 2), Point(1, 6))

    host.set_selection((0, 0), (0, 0))
    assert memory.jump('a.txt', memory.store.get('a.txt'))
    assert host.get_selection() == ((1, 2), (1, 6))

    memory.unload()

def test_host_open_with_line_must_suppress_prompt(tmp_path, storage):
    host, memory = make_host(tmp_path, storage)
    memory.store.set('a.txt', Position(Cursor(Point(2, 0), Point(2, 0)), saved_time=1))

    host.open('a.txt', make_view(), line=1)
    assert memory.prompt.state == 'idle'

    host.open('a.txt', host.views['a.txt'])
    assert memory.prompt.state == 'showing'

    host.close('a.txt')
    assert memory.prompt.state == 'idle'

    memory.unload()

def test_glib_timers_must_fire_in_main_loop():
    loop = GLib.MainLoop()
    calls = []

    def tick():
        calls.append(1)
        if len(calls) == 2:
            loop.quit()
            return False
        return True

    timers = GLibTimers()
    timers.add(1, tick)
    guard = timers.add(5000, loop.quit)
    loop.run()
    timers.remove(guard)

    assert calls == [1, 1]

def test_styles_must_be_removed_on_unload():
    gui.install_styles()
    assert gui.provider is not None

    gui.remove_styles()
    assert gui.provider is None
