import json
import os
from typing import Any, Dict

import click
from pydantic import BaseModel, ConfigDict, ValidationError
from requests_toolbelt.sessions import BaseUrlSession

from .util import exit_with


class Config(BaseModel):
    api_url: str = "http://localhost:8100/api"


class Ctx(BaseModel):
    config: Config
    configPath: str
    session: BaseUrlSession

    model_config = ConfigDict(arbitrary_types_allowed=True)


def getctx(ctx: Dict[str, Any]) -> Ctx:
    return Ctx(**ctx)


def save(ctx: Ctx):
    parent = os.path.dirname(ctx.configPath)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(ctx.configPath, "w") as out:
        out.write(ctx.config.model_dump_json())


def load_config(path: str) -> Config:
    if os.path.exists(path):
        try:
            with open(path) as config_file:
                return Config(**json.loads(config_file.read()))
        except (OSError, ValueError, ValidationError):
            return Config()
    return Config()


def make(cli: click.Group):
    @click.command(name="configure")
    @click.option("--api-url", type=click.STRING, required=True)
    @click.pass_obj
    def configure(ctx, api_url):
        ctx = getctx(ctx)
        ctx.config.api_url = api_url
        save(ctx)
        out = ctx.config.model_dump()
        out.update({"configPath": ctx.configPath})
        exit_with(out)

    cli.add_command(configure)
