import os

import click
from click_aliases import ClickAliasedGroup
from requests_toolbelt.sessions import BaseUrlSession

from . import config, files, serve


class VioSession(BaseUrlSession):
    def __init__(self, cfg: config.Config):
        base_url = cfg.api_url
        base_url = (
            f'{base_url.rstrip("/")}/'  # tolerate input with or without trailing slash
        )
        super(VioSession, self).__init__(base_url=base_url)
        self.headers.update(
            {
                "User-agent": "vio",
                "Accept": "application/json",
            }
        )


@click.group(cls=ClickAliasedGroup)
@click.option("--api-url", envvar="VIO_ENDPOINT_URL")
@click.option(
    "--config-path",
    default=os.path.join(os.path.expanduser("~"), ".config", "vio.json"),
    envvar="VIO_CONFIG_PATH",
    type=click.Path(dir_okay=False, file_okay=True, writable=True, resolve_path=True),
)
@click.pass_context
def cli(ctx, api_url, config_path):
    conf = config.load_config(config_path)
    if api_url:
        conf.api_url = api_url
    ctx.obj = {
        "configPath": config_path,
        "config": conf,
        "session": VioSession(conf),
    }


config.make(cli)
files.make(cli)
serve.make(cli)
