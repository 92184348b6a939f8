import click


def make(cli: click.Group):
    @cli.command(name="serve")
    @click.option("--host", type=click.STRING, default="127.0.0.1")
    @click.option("--port", type=click.INT, default=8100)
    @click.option("--reload", is_flag=True)
    def serve(host, port, reload):
        import uvicorn

        uvicorn.run(
            "variantio.app:create_app",
            factory=True,
            host=host,
            port=port,
            reload=reload,
        )
