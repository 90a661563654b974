from __future__ import annotations

import socket


def get_local_ip() -> str:
    """Best-effort LAN address of this host, for printing reachable URLs.

    Connecting a UDP socket sends no packets; it only makes the OS pick the
    outbound interface, whose address we then read back.
    """
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        sock.connect(("10.255.255.255", 1))
        return sock.getsockname()[0]
    except OSError:
        return "127.0.0.1"
    finally:
        sock.close()
