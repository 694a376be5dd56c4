import gi
gi.require_version('Gtk', '3.0')
gi.require_version('Gdk', '3.0')

from gi.repository import Gtk, Gdk, Gio, GLib

from .prompt import FADE_TIMEOUT
from .storage import FileStorage, StoreWriteFailure
from .weak import weak_connect

PROMPT_CSS = b"""
.lastpos-prompt {
    background-color: @theme_base_color;
    border: 1px solid @borders;
    border-radius: 6px;
    padding: 6px 12px;
    font-size: 90%;
}
.lastpos-prompt .lastpos-jump {
    font-weight: bold;
}
"""

provider = None

def install_styles():
    global provider
    if provider:
        return

    screen = Gdk.Screen.get_default()
    if not screen:
        return

    provider = Gtk.CssProvider()
    provider.load_from_data(PROMPT_CSS)
    Gtk.StyleContext.add_provider_for_screen(screen, provider,
        Gtk.STYLE_PROVIDER_PRIORITY_APPLICATION)

def remove_styles():
    global provider
    if not provider:
        return

    screen = Gdk.Screen.get_default()
    if screen:
        Gtk.StyleContext.remove_provider_for_screen(screen, provider)

    provider = None


class PromptBar(object):
    def __init__(self, container, label, on_jump, on_close):
        self.revealer = Gtk.Revealer()
        self.revealer.set_transition_type(Gtk.RevealerTransitionType.SLIDE_DOWN)
        self.revealer.set_transition_duration(FADE_TIMEOUT)

        box = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=10)
        box.get_style_context().add_class('lastpos-prompt')

        self.label = Gtk.Label(label=label)
        box.pack_start(self.label, False, False, 0)

        self.jump_button = Gtk.Button(label='Jump')
        self.jump_button.get_style_context().add_class('lastpos-jump')
        self.jump_button.connect('clicked', on_jump)
        box.pack_start(self.jump_button, False, False, 0)

        self.close_button = Gtk.Button(label='✕')
        self.close_button.set_relief(Gtk.ReliefStyle.NONE)
        self.close_button.connect('clicked', on_close)
        box.pack_start(self.close_button, False, False, 0)

        self.revealer.add(box)
        container.pack_start(self.revealer, False, False, 0)
        container.reorder_child(self.revealer, 0)
        self.revealer.show_all()

        GLib.idle_add(self.reveal)

    def reveal(self):
        if self.revealer:
            self.revealer.set_reveal_child(True)

        return False

    def hide(self):
        if self.revealer:
            self.revealer.set_reveal_child(False)

    def destroy(self):
        if self.revealer:
            self.revealer.destroy()
            self.revealer = None


class GioStorage(FileStorage):
    """File storage with asynchronous writes through Gio"""
    def write(self, path, data, callback):
        f = Gio.File.new_for_path(path)

        def done(f, result):
            try:
                f.replace_contents_finish(result)
            except GLib.Error as e:
                callback(StoreWriteFailure(e.message))
            else:
                callback(None)

        f.replace_contents_bytes_async(GLib.Bytes.new(data), None, False,
            Gio.FileCreateFlags.NONE, None, done)


def get_iter_at_point(buf, point):
    line, ch = point
    line = min(line, buf.get_line_count() - 1)
    it = buf.get_iter_at_line(line)

    end = it.copy()
    if not end.ends_line():
        end.forward_to_line_end()

    it.set_line_offset(min(ch, end.get_line_offset()))
    return it


class EditorHost(object):
    """Feeds Gtk.TextView documents to PositionMemory

    Views must be passed to ``open`` after their text is loaded, otherwise
    loading itself is captured as an edit.
    """
    def __init__(self, container):
        self.container = container
        self.memory = None
        self.views = {}
        self.active = None
        self.navigated = False

    def attach(self, memory):
        self.memory = memory

    @property
    def view(self):
        return self.views.get(self.active)

    def open(self, uri, view, line=None):
        if self.views.get(uri) is not view:
            self.views[uri] = view
            weak_connect(view.get_buffer(), 'changed', self, 'on_buffer_changed')
            adjustment = view.get_vadjustment()
            if adjustment:
                weak_connect(adjustment, 'value-changed', self, 'on_scrolled')

        self.active = uri
        self.navigated = line is not None
        if line is not None:
            buf = view.get_buffer()
            buf.place_cursor(get_iter_at_point(buf, (line, 0)))
            view.scroll_to_mark(buf.get_insert(), 0.001, True, 0.0, 0.5)

        self.memory.on_open(uri)

    def close(self, uri):
        self.views.pop(uri, None)
        if self.active == uri:
            self.active = None
            self.memory.on_open(None)

    def rename(self, old_uri, new_uri):
        if old_uri in self.views:
            self.views[new_uri] = self.views.pop(old_uri)

        if self.active == old_uri:
            self.active = new_uri

        self.memory.on_rename(old_uri, new_uri)

    def delete(self, uri):
        self.close(uri)
        self.memory.on_delete(uri)

    def quit(self):
        self.memory.on_quit()

    def on_buffer_changed(self, buf):
        view = self.view
        if view and view.get_buffer() is buf:
            self.memory.on_change()

    def on_scrolled(self, adjustment):
        view = self.view
        if view and view.get_vadjustment() is adjustment:
            self.memory.on_scroll()

    def get_active_uri(self):
        return self.active

    def get_selection(self):
        view = self.view
        if not view:
            return None

        buf = view.get_buffer()
        anchor = buf.get_iter_at_mark(buf.get_selection_bound())
        head = buf.get_iter_at_mark(buf.get_insert())
        return ((anchor.get_line(), anchor.get_line_offset()),
            (head.get_line(), head.get_line_offset()))

    def get_scroll(self):
        view = self.view
        if not view or not view.get_vadjustment():
            return None

        return view.get_vadjustment().get_value()

    def set_selection(self, anchor, head):
        buf = self.view.get_buffer()
        buf.select_range(get_iter_at_point(buf, head), get_iter_at_point(buf, anchor))

    def scroll_to_selection(self):
        view = self.view
        view.scroll_to_mark(view.get_buffer().get_insert(), 0.001, True, 0.0, 0.5)

    def set_scroll(self, value):
        self.view.get_vadjustment().set_value(value)

    def focus(self):
        self.view.grab_focus()

    def has_explicit_navigation(self):
        return self.navigated

    def create_prompt(self, label, on_jump, on_close):
        return PromptBar(self.container, label, on_jump, on_close)
