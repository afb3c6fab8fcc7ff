"""Client connectivity probe used to tell offline failures apart."""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import Sequence

from loguru import logger

from fourleaf.errors import ConfigurationError

# Public DNS resolvers by address, so the probe needs no name resolution.
DEFAULT_PROBE_HOSTS = ("1.1.1.1:53", "8.8.8.8:53")


def parse_probe_host(value: str) -> tuple[str, int]:
    host, sep, port = value.strip().rpartition(":")
    if not sep or not host or not port.isdigit():
        raise ConfigurationError(f"probe host must look like host:port, got {value!r}")
    return host.strip("[]"), int(port)


class NetworkProbe:
    """Async callable reporting whether this machine can reach the network at all.

    The chat backend is never a target. A backend that is down while the
    client is online is a transport failure, not an offline one.
    """

    def __init__(self, hosts: Sequence[str] = DEFAULT_PROBE_HOSTS, *, timeout_seconds: float = 2.0) -> None:
        self.targets = [parse_probe_host(host) for host in hosts]
        self.timeout_seconds = timeout_seconds

    async def __call__(self) -> bool:
        if not self.targets:
            return True
        for host, port in self.targets:
            if await self._reachable(host, port):
                return True
        logger.info("network.probe.offline targets={}", self.targets)
        return False

    async def _reachable(self, host: str, port: int) -> bool:
        try:
            _reader, writer = await asyncio.wait_for(
                asyncio.open_connection(host, port),
                timeout=self.timeout_seconds,
            )
        except (OSError, TimeoutError) as exc:
            logger.debug("network.probe.unreachable host={} port={} error={}", host, port, exc)
            return False
        writer.close()
        with contextlib.suppress(OSError):
            await writer.wait_closed()
        return True
