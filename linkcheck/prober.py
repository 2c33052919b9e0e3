"""Decide whether a single link currently resolves.

A probe is a HEAD request with a GET fallback.  Any response at all, whatever
its status code, counts as success: the check only asks whether the transport
completed.  Redirects are followed by hand so that hitting the hop limit ends
the check on the last response instead of raising.
"""

from __future__ import annotations

import logging
import time

import httpx

from linkcheck.models import ProbeConfig, Status

logger = logging.getLogger(__name__)

_METHODS = ("HEAD", "GET")


def build_client(config: ProbeConfig) -> httpx.Client:
    """Return an ``httpx.Client`` configured for probing.

    The client is thread-safe and is meant to be shared by every worker of a
    run.  Automatic redirect handling is off; :func:`_check` follows them.
    """
    return httpx.Client(
        headers={"User-Agent": config.user_agent},
        timeout=config.timeout,
        follow_redirects=False,
    )


def _check(client: httpx.Client, method: str, link: str, config: ProbeConfig) -> httpx.Response:
    """Send *method* to *link*, following at most ``config.max_redirects`` redirects.

    ``max_redirects`` counts hops after the first request, so a check sends
    at most ``max_redirects + 1`` requests.  ``config.timeout`` bounds the
    whole check, redirects included: each request only gets the time left,
    and a response that arrives after the deadline still fails the check.
    The body is never read; every response is closed as soon as its headers
    have arrived.

    Raises:
        httpx.HTTPError: On any transport failure or timeout.
        httpx.InvalidURL: If *link* cannot be turned into a request.
    """
    deadline = time.monotonic() + config.timeout
    request = client.build_request(method, link)
    hops = 0
    while True:
        response = _send_within(client, request, deadline, config.timeout)
        if response.next_request is None or hops >= config.max_redirects:
            return response
        hops += 1
        request = response.next_request


def _send_within(
    client: httpx.Client, request: httpx.Request, deadline: float, budget: float
) -> httpx.Response:
    remaining = deadline - time.monotonic()
    if remaining <= 0:
        raise httpx.TimeoutException(f"check exceeded {budget}s", request=request)
    request.extensions["timeout"] = httpx.Timeout(remaining).as_dict()
    response = client.send(request, stream=True)
    response.close()
    if time.monotonic() > deadline:
        raise httpx.TimeoutException(f"check exceeded {budget}s", request=request)
    return response


def probe(config: ProbeConfig, link: str, client: httpx.Client | None = None) -> Status:
    """Classify *link* as reachable or unreachable.

    HEAD is tried first and GET only if HEAD failed.  Malformed URIs and
    network errors are treated alike.  When *client* is omitted a throwaway
    client is built from *config*.
    """
    if client is None:
        with build_client(config) as own_client:
            return probe(config, link, own_client)

    for method in _METHODS:
        try:
            response = _check(client, method, link, config)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.debug("%s %s failed: %r", method, link, exc)
            continue
        logger.debug("%s %s -> HTTP %s", method, link, response.status_code)
        return Status.REACHABLE

    return Status.UNREACHABLE
