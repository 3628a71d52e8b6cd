import asyncio

DEFAULT_HOST = "0.0.0.0"
DEFAULT_TIMEOUT = 1.0


async def _noop_handler(reader: asyncio.StreamReader, writer: asyncio.StreamWriter):
    writer.close()


def _close_abandoned(bind: asyncio.Future):
    # a bind that outlived its timeout must not keep the port
    if bind.cancelled() or bind.exception() is not None:
        return
    bind.result().close()


async def check_port(port: int, host: str = DEFAULT_HOST, timeout: float = DEFAULT_TIMEOUT) -> bool:
    """
    Binds a listening server on (host, port) and releases it straight away.

    Returns True only if the bind succeeded. Every failure, whether the port is
    in use, access is denied, the address is bad or the bind hangs past
    `timeout`, collapses to False. The server is closed before returning; a
    bind still running at the timeout is closed as soon as it completes.
    """
    try:
        bind = asyncio.ensure_future(asyncio.start_server(_noop_handler, host, port))
    except Exception:
        # start_server replaced by something that raises instead of returning a coroutine
        return False

    # not wait_for: cancelling right after the bind would drop an open server
    done, _ = await asyncio.wait({bind}, timeout=timeout)
    if not done:
        bind.add_done_callback(_close_abandoned)
        return False

    try:
        server = bind.result()
    except Exception:
        return False

    server.close()
    await server.wait_closed()
    return True
