name = 'Last positions'
desc = 'Remembers last edit position for every file and offers to jump back'

from .prefs import Settings
from .memory import PositionMemory

def load(host, conf=None):
    """Creates position memory for GTK host on plugin load

    Caller owns returned memory and must pass it to ``unload``.
    """
    from .timers import GLibTimers
    from .gui import GioStorage, install_styles

    if conf is None:
        conf = Settings().load()

    install_styles()
    memory = PositionMemory(host, conf, GLibTimers(), GioStorage())
    host.attach(memory)
    return memory.load()

def unload(memory):
    from .gui import remove_styles

    memory.unload()
    remove_styles()
