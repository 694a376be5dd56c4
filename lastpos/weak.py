import weakref

from gi.repository import GLib


class WeakCallback(object):
    """
    Weak callback functor which disconnects on real callback deletion

    Breaks cyclic reference between sender and callback owner, so a closed
    editor view does not keep the host alive and vice versa.

    Also it can wrap callback in idle_add with specified priority.

    Object and its callback attribute are passed separately because bound
    methods are too weak.
    """
    def __init__(self, obj, attr, idle):
        self.wref = weakref.ref(obj)
        self.callback_attr = attr
        self.gobject_token = None
        self.idle = idle

    def __call__(self, *args):
        obj = self.wref()
        if obj:
            attr = getattr(obj, self.callback_attr)

            if self.idle is False or self.idle is None:
                return attr(*args)
            elif self.idle is True:
                GLib.idle_add(attr, *args)
            else:
                GLib.idle_add(attr, *args, priority=self.idle)

        elif self.gobject_token:
            sender = args[0]
            sender.disconnect(self.gobject_token)
            self.gobject_token = None

        return False


def weak_connect(sender, signal, connector, attr, idle=False, after=False):
    """
    Connects GObject signal to ``connector.attr`` with weak callback
    """
    wc = WeakCallback(connector, attr, idle)

    if after:
        wc.gobject_token = sender.connect_after(signal, wc)
    else:
        wc.gobject_token = sender.connect(signal, wc)

    return wc.gobject_token
