import json
import sys
from json.decoder import JSONDecodeError

import click
from requests import Response


def handle_request_error(r: Response) -> dict:
    if not r.ok:
        error_text = r.text
        try:
            error_text = r.json()
        except ValueError:
            pass

        body = r.request.body
        if isinstance(body, bytes):
            body = body.decode("utf-8", errors="replace")
        try:
            body = json.loads(body) if body else body
        except JSONDecodeError:
            pass
        # uploads carry the whole file, keep the context readable
        if isinstance(body, dict) and "file" in body:
            body["file"] = f"<{len(body['file'])} characters>"

        return {
            "context": {
                "url": r.url,
                "method": r.request.method,
                "status": r.status_code,
                "body": body,
            },
            "error": error_text,
        }
    return {"response": r.json()}


def exit_with(out: dict):
    if out.get("error"):
        click.secho(json.dumps(out, indent=2, sort_keys=True), fg="red")
        sys.exit(1)
    click.echo(json.dumps(out, indent=2, sort_keys=True))
    sys.exit(0)
