# cli/commands/serve.py
import click

@click.command()
@click.option('--host', default='127.0.0.1', show_default=True, help='Interface to bind')
@click.option('--port', default=8080, type=int, show_default=True, help='Port to listen on')
@click.option('--reload/--no-reload', default=False, help='Restart on code changes')
def serve(host: str, port: int, reload: bool):
    """Run the REST API with uvicorn"""
    import uvicorn

    uvicorn.run("api.main:app", host=host, port=port, reload=reload)
