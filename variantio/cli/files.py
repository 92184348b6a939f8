import mimetypes
import os
import urllib.parse

import click

from variantio import utils

from .util import exit_with, handle_request_error


def file_path(key: str) -> str:
    return f"files/{urllib.parse.quote(key, safe='/')}"


def make(cli: click.Group):
    @cli.command(name="upload", aliases=["put"])
    @click.argument(
        "path", type=click.Path(exists=True, dir_okay=False, resolve_path=True)
    )
    @click.option("--key", type=click.STRING, default=None)
    @click.option("--content-type", type=click.STRING, default=None)
    @click.pass_obj
    def upload(ctx, path, key, content_type):
        if content_type is None:
            content_type, _ = mimetypes.guess_type(path)
        with open(path, "rb") as infile:
            body = infile.read()
        r = ctx["session"].post(
            "files",
            json={
                "file": utils.encode_upload(
                    body, content_type or utils.DEFAULT_UPLOAD_CONTENT_TYPE
                ),
                "fileKey": key or os.path.basename(path),
            },
        )
        exit_with(handle_request_error(r))

    @cli.command(name="download", aliases=["get"])
    @click.argument("key", type=click.STRING)
    @click.option("--compressed", is_flag=True)
    @click.option(
        "--output", "-o", type=click.Path(dir_okay=False, writable=True), default=None
    )
    @click.pass_obj
    def download(ctx, key, compressed, output):
        params = {"variant": "compressed"} if compressed else {}
        r = ctx["session"].get(file_path(key), params=params)
        if not r.ok:
            exit_with(handle_request_error(r))
        if output is None:
            click.get_binary_stream("stdout").write(r.content)
            return
        with open(output, "wb") as outfile:
            outfile.write(r.content)
        click.secho(
            f"{key} ({r.headers.get('Content-Type')}, {len(r.content)} bytes) -> {output}",
            fg="green",
        )

    @cli.command(name="delete", aliases=["rm"])
    @click.argument("key", type=click.STRING)
    @click.pass_obj
    def delete(ctx, key):
        r = ctx["session"].delete(file_path(key))
        exit_with(handle_request_error(r))
