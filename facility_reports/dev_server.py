"""
Development server with auto-port detection
"""
import socket

import uvicorn

from facility_reports.config import settings


def is_port_available(port: int) -> bool:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        try:
            s.bind(("0.0.0.0", port))
            return True
        except OSError:
            return False


def find_available_port(start: int = None, end: int = None) -> int:
    start = start or settings.port_range_start
    end = end or settings.port_range_end
    for port in range(start, end + 1):
        if is_port_available(port):
            return port
    raise RuntimeError(f"No available ports in range {start}-{end}")


def main() -> None:
    port = find_available_port()
    print(f"Starting {settings.service_name} on port {port}")
    uvicorn.run(
        "facility_reports.main:app",
        host="0.0.0.0",
        port=port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    main()
