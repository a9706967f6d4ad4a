"""Terminal output: one colored status line per attempt and the closing summary."""

import sys
import time

# RGB foregrounds per latency tier
GREEN = (6, 156, 86)
ORANGE = (255, 152, 14)
RED = (211, 33, 44)

RESET = "\x1b[0m"


def latency_color(duration_ms):
    if duration_ms <= 99:
        return GREEN
    if duration_ms <= 149:
        return ORANGE
    return RED


def colorize(text, rgb):
    r, g, b = rgb
    return f"\x1b[38;2;{r};{g};{b}m{text}{RESET}"


def connected_line(target, port, duration_ms):
    color = latency_color(duration_ms)
    return (f"{colorize('Connected ', color)}to {colorize(target, color)}"
            f" on port {colorize(port, color)} ms: {colorize(duration_ms, color)}")


def failed_line(target, port):
    return (f"{colorize('Failed ', RED)}to connect to {colorize(target, RED)}"
            f" on port {colorize(port, RED)}")


class Reporter:
    def __init__(self, stream=None, timestamps=False):
        self.stream = stream if stream is not None else sys.stdout
        self.timestamps = timestamps

    def _write(self, line):
        self.stream.write(line + "\n")
        self.stream.flush()

    def report(self, target, port, result):
        if result.connected:
            line = connected_line(target, port, result.duration_ms)
        else:
            line = failed_line(target, port)
        if self.timestamps:
            line = f"[{time.strftime('%H:%M:%S')}] {line}"
        self._write(line)

    def summary(self, target, port, stats):
        self._write(f"\n--- {target} port {port} TCP statistics ---")
        self._write(f"Sent: {stats.sent}, Received: {stats.received}, "
                    f"Lost: {stats.lost} ({stats.loss_pct:.1f}% loss)")
        if stats.rtts:
            self._write(f"Minimum: {min(stats.rtts)} ms")
            self._write(f"Maximum: {max(stats.rtts)} ms")
            self._write(f"Average: {sum(stats.rtts) / len(stats.rtts):.2f} ms")
