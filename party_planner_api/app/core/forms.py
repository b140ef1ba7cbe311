"""
Conversion of submitted forms into plain dictionaries.

HTML forms flatten everything into string key/value pairs.  Two
conventions are understood on top of that:

* a key sent more than once (checkbox groups such as ``services``)
  becomes a list of its values;
* keys of the form ``items[0][name]`` are grouped into a list of
  dictionaries ordered by index, which is how the budget editor sends
  its item rows.

JSON bodies are accepted as well and passed through unchanged, which is
what the API client uses.
"""

import re
from typing import Any, Dict

from fastapi import HTTPException, Request, status
from starlette.datastructures import FormData


NESTED_KEY = re.compile(r"^(?P<field>[A-Za-z_]\w*)\[(?P<index>\d+)\]\[(?P<attr>[A-Za-z_]\w*)\]$")


def form_to_dict(form: FormData) -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    nested: Dict[str, Dict[int, Dict[str, Any]]] = {}
    for key in dict.fromkeys(form.keys()):
        values = form.getlist(key)
        match = NESTED_KEY.match(key)
        if match:
            row = nested.setdefault(match.group("field"), {}).setdefault(int(match.group("index")), {})
            row[match.group("attr")] = values[-1]
        elif len(values) == 1:
            data[key] = values[0]
        else:
            data[key] = list(values)
    for field, rows in nested.items():
        data[field] = [rows[index] for index in sorted(rows)]
    return data


async def read_payload(request: Request) -> Dict[str, Any]:
    """FastAPI dependency returning the request body as a dictionary."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cuerpo JSON inválido.")
        if not isinstance(body, dict):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Se esperaba un objeto JSON.")
        return body
    return form_to_dict(await request.form())
