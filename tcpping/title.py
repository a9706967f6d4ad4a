"""Setting the terminal window title.

Windows consoles get ``SetConsoleTitleW``; everything else gets the xterm
OSC 2 escape written to the output stream. Terminals that don't understand
the escape either ignore it or show it once.
"""

import logging
import platform
import sys

logger = logging.getLogger(__name__)

IS_WINDOWS = platform.system().lower().startswith("win")


class TitleSetter:
    def set_title(self, text: str) -> None:
        raise NotImplementedError


class AnsiTitleSetter(TitleSetter):
    def __init__(self, stream=None):
        self.stream = stream if stream is not None else sys.stdout

    def set_title(self, text: str) -> None:
        self.stream.write(f"\x1b]2;{text}\x07")
        self.stream.flush()


class WindowsConsoleTitleSetter(TitleSetter):
    def __init__(self, kernel32=None):
        if kernel32 is None:
            import ctypes
            kernel32 = ctypes.windll.kernel32
        self.kernel32 = kernel32

    def set_title(self, text: str) -> None:
        if not self.kernel32.SetConsoleTitleW(text):
            # no console attached (pythonw, redirected output)
            logger.debug("SetConsoleTitleW failed for %r", text)


def title_setter_for_platform(stream=None) -> TitleSetter:
    if IS_WINDOWS:
        logger.debug("Using the Windows console API for the title")
        return WindowsConsoleTitleSetter()
    return AnsiTitleSetter(stream)
