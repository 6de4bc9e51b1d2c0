#!/usr/bin/env python3
"""Start the directions proxy with uvicorn on the configured host and port."""

import sys

import uvicorn

from navproxy.config import settings


def main() -> int:
    print(f"Starting server on {settings.host}:{settings.port} (OSRM backend {settings.osrm_base_url})", file=sys.stderr)
    uvicorn.run(
        "navproxy.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        proxy_headers=True,
        forwarded_allow_ips="*",
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
