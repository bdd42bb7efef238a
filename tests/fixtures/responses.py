"""Helpers for faking requests.Response objects."""

from unittest.mock import MagicMock

from requests.exceptions import HTTPError


def make_response(status_code: int = 200, json_data=None, text: str = "") -> MagicMock:
    """Build a requests.Response look-alike.

    ``json_data`` may be an exception instance, in which case ``.json()``
    raises it.
    """
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    if isinstance(json_data, Exception):
        response.json.side_effect = json_data
    else:
        response.json.return_value = json_data
    if status_code >= 400:
        response.raise_for_status.side_effect = HTTPError(
            f"{status_code} Client Error", response=response
        )
    else:
        response.raise_for_status.return_value = None
    return response
