"""
Async HTTP client with a shared session. The relay only ever talks to the
configured chat-completion host, so a single session is enough.
"""

import aiohttp


_session = None


def _get_session():
    global _session

    if _session is None:
        _session = aiohttp.ClientSession()
    return _session


async def post(url, timeout: float | None = None, **kwargs) -> tuple[int, str]:
    """
    POSTs to **url** and returns the response status together with the raw body,
    leaving the decision about what counts as a failure to the caller.
    """

    session = _get_session()

    if timeout is not None:
        kwargs['timeout'] = aiohttp.ClientTimeout(total=timeout)

    async with session.post(url, **kwargs) as response:
        return response.status, await response.text()


async def close():
    global _session

    if _session is not None:
        await _session.close()

        _session = None


__all__ = ['close', 'post']
