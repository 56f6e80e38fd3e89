from urllib.parse import urlencode

from ..schemas import Draft
from .values import stringify


def encode_fields(fields: dict) -> str:
    """URL-encode fields as key=value pairs, keys sorted."""
    return urlencode([(key, stringify(fields[key])) for key in sorted(fields)])


def compose_url(draft: Draft) -> str:
    """Build scheme://host/seg1/seg2, with body fields as the query on GET."""
    url = f"{draft.scheme}://{draft.host}/{'/'.join(draft.path)}"
    if draft.is_get and draft.body:
        url = f"{url}?{encode_fields(draft.body)}"
    return url
