import io

import pytest

from tcpping.loop import SessionStats
from tcpping.prober import ProbeResult
from tcpping.reporter import GREEN, ORANGE, RED, Reporter, colorize, latency_color

ANSI = "\x1b["


@pytest.mark.parametrize("ms, color", [
    (0, GREEN),
    (99, GREEN),
    (100, ORANGE),
    (149, ORANGE),
    (150, RED),
    (5000, RED),
])
def test_latency_tiers(ms, color):
    assert latency_color(ms) == color


def test_colorize():
    assert colorize("x", (1, 2, 3)) == "\x1b[38;2;1;2;3mx\x1b[0m"


def strip_ansi(text):
    out = []
    i = 0
    while i < len(text):
        if text.startswith(ANSI, i):
            i = text.index("m", i) + 1
        else:
            out.append(text[i])
            i += 1
    return "".join(out)


def test_connected_line():
    buf = io.StringIO()
    Reporter(buf).report("127.0.0.1", 8080, ProbeResult(True, 42))
    line = buf.getvalue()
    assert strip_ansi(line) == "Connected to 127.0.0.1 on port 8080 ms: 42\n"
    green = colorize("Connected ", GREEN)
    assert line.startswith(green)
    assert colorize("127.0.0.1", GREEN) in line
    assert colorize(8080, GREEN) in line
    assert colorize(42, GREEN) in line


def test_slow_connection_is_orange():
    buf = io.StringIO()
    Reporter(buf).report("10.1.1.1", 22, ProbeResult(True, 120))
    assert buf.getvalue().startswith(colorize("Connected ", ORANGE))
    assert colorize(120, ORANGE) in buf.getvalue()


def test_failed_line_is_red():
    buf = io.StringIO()
    Reporter(buf).report("10.1.1.1", 22, ProbeResult(False, 2000))
    line = buf.getvalue()
    assert strip_ansi(line) == "Failed to connect to 10.1.1.1 on port 22\n"
    assert line.startswith(colorize("Failed ", RED))
    assert colorize("10.1.1.1", RED) in line
    assert colorize(22, RED) in line


def test_timestamp_prefix(monkeypatch):
    monkeypatch.setattr("tcpping.reporter.time.strftime", lambda fmt: "12:34:56")
    buf = io.StringIO()
    Reporter(buf, timestamps=True).report("10.1.1.1", 22, ProbeResult(False, 0))
    assert buf.getvalue().startswith("[12:34:56] ")


def test_summary():
    stats = SessionStats()
    for r in (ProbeResult(True, 10), ProbeResult(False, 2000), ProbeResult(True, 30)):
        stats.record(r)
    buf = io.StringIO()
    Reporter(buf).summary("10.1.1.1", 22, stats)
    text = buf.getvalue()
    assert "Sent: 3, Received: 2, Lost: 1 (33.3% loss)" in text
    assert "Minimum: 10 ms" in text
    assert "Maximum: 30 ms" in text
    assert "Average: 20.00 ms" in text


def test_summary_without_replies():
    stats = SessionStats()
    stats.record(ProbeResult(False, 0))
    buf = io.StringIO()
    Reporter(buf).summary("10.1.1.1", 22, stats)
    assert "100.0% loss" in buf.getvalue()
    assert "Minimum" not in buf.getvalue()
