import socket
import threading

import pytest


@pytest.fixture
def listener():
    """A TCP server on 127.0.0.1 that accepts and drops connections."""
    srv = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    srv.bind(("127.0.0.1", 0))
    srv.listen(16)
    srv.settimeout(0.2)
    done = threading.Event()

    def accept_loop():
        while not done.is_set():
            try:
                conn, _ = srv.accept()
            except socket.timeout:
                continue
            except OSError:
                break
            conn.close()

    t = threading.Thread(target=accept_loop, daemon=True)
    t.start()
    yield srv.getsockname()[1]
    done.set()
    t.join(1)
    srv.close()


@pytest.fixture
def closed_port():
    """A port on 127.0.0.1 that nothing listens on."""
    s = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    s.bind(("127.0.0.1", 0))
    port = s.getsockname()[1]
    s.close()
    return port
