from typing import Any


def format_remote_addr(client_address: Any) -> str:
    """Formats a socket peer address as "host:port".

    IPv6 hosts are wrapped into square brackets, i.e. "[::1]:8080".
    Addresses that are not (host, port, ...) tuples are converted with str().
    """
    if not isinstance(client_address, tuple) or len(client_address) < 2:
        return str(client_address)

    host: str = str(client_address[0])
    port: int = client_address[1]
    # Only IPv6 hosts contain colons, including scoped ones like "fe80::1%eth0".
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"
