import logging

from ..exceptions import MalformedResponseError, ProviderHTTPError

logger = logging.getLogger(__name__)


def post_json(http, url: str, headers: dict, body: dict, vendor: str, timeout=None) -> dict:
    """POST a JSON body and return the decoded JSON response.

    ``http`` is anything with a requests-style ``post``: the requests module
    itself in production, a fake in tests.

    A non-2xx answer raises ProviderHTTPError with the response text, a 2xx
    answer that is not JSON raises MalformedResponseError.
    """
    logger.info('%s request: POST %s', vendor, url)
    resp = http.post(url, headers=headers, json=body, timeout=timeout)
    if not resp.ok:
        logger.warning('%s answered %s', vendor, resp.status_code)
        raise ProviderHTTPError(vendor, resp.status_code, resp.text)
    try:
        return resp.json()
    except ValueError as exc:
        raise MalformedResponseError(f"{vendor} returned a non JSON body") from exc


def compact(body: dict, additional_config: dict | None) -> dict:
    """Drop unset fields, then let additional_config override anything."""
    merged = {k: v for k, v in body.items() if v is not None}
    merged.update(additional_config or {})
    return merged
