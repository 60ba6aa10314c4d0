"""
Point d'entrée CLI de MEMOPYK.

Initialise le container DI, configure le logging et fournit les commandes
d'exploitation : serveur web, base de données, cache vidéo.
"""

import asyncio
from typing import Annotated

import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import Settings
from .container import Container
from .logging_config import configure_logging

app = typer.Typer(
    name="memopyk",
    help="Backend du site MEMOPYK (contenus, médias, cache vidéo)",
)
cache_app = typer.Typer(help="Gestion du cache vidéo local")
app.add_typer(cache_app, name="cache")

container = Container()
console = Console()


def get_config() -> Settings:
    """Récupère les paramètres de l'application depuis le container DI."""
    return container.config()


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    typer.echo(f"MEMOPYK v{__version__}")
    typer.echo(f"Base de données : {config.database_url}")
    typer.echo(
        f"Stockage objet : {'activé' if config.storage_enabled else 'désactivé'}"
        f" (bucket {config.storage_bucket})"
    )
    typer.echo(f"Cache vidéo : {config.cache_dir}")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command(name="init-db")
def init_db() -> None:
    """Crée les tables manquantes."""
    container.database.init()
    typer.echo(f"Base initialisée : {get_config().database_url}")


@app.command()
def serve(
    host: Annotated[str, typer.Option(help="Adresse d'écoute")] = "0.0.0.0",
    port: Annotated[int, typer.Option(help="Port d'écoute")] = 5000,
    reload: Annotated[bool, typer.Option(help="Rechargement automatique")] = False,
) -> None:
    """Lance le serveur web MEMOPYK."""
    import uvicorn

    typer.echo(f"Démarrage du serveur sur {host}:{port}")
    uvicorn.run("memopyk.web.app:app", host=host, port=port, reload=reload)


@cache_app.command("status")
def cache_status() -> None:
    """Liste les vidéos présentes dans le cache."""
    info = container.video_cache().get_cache_info()

    table = Table(title=f"Cache vidéo ({info.cache_dir})")
    table.add_column("Fichier", style="cyan")
    table.add_column("Taille (Mo)", justify="right")
    for name in info.files:
        size = (info.cache_dir / name).stat().st_size / (1024 * 1024)
        table.add_row(name, f"{size:.1f}")
    console.print(table)
    console.print(f"[bold]{info.total_files}[/bold] fichier(s), {info.total_size_mb} Mo")


@cache_app.command("warm")
def cache_warm() -> None:
    """Précharge les vidéos d'accueil et de galerie actives."""
    container.database.init()

    async def _run():
        cache = container.video_cache()
        try:
            return await container.cache_warmer().warm_all()
        finally:
            await cache.close()

    report = asyncio.run(_run())
    console.print(
        f"[green]{report.cached_count}[/green] vidéo(s) en cache, "
        f"[red]{len(report.errors)}[/red] erreur(s)"
    )
    for error in report.errors:
        console.print(f"  [red]✗[/red] {error}")
    if report.errors:
        raise typer.Exit(code=1)


@cache_app.command("fetch")
def cache_fetch(url: Annotated[str, typer.Argument(help="URL de la vidéo")]) -> None:
    """Télécharge une vidéo dans le cache."""

    async def _run():
        cache = container.video_cache()
        try:
            return await cache.cache_video(url)
        finally:
            await cache.close()

    result = asyncio.run(_run())
    if not result.success:
        console.print(f"[red]Échec :[/red] {result.error}")
        raise typer.Exit(code=1)
    state = "déjà en cache" if result.existing_file else "téléchargée"
    console.print(f"[green]{result.local_path}[/green] ({state})")


@cache_app.command("delete")
def cache_delete(filename: Annotated[str, typer.Argument(help="Nom du fichier en cache")]) -> None:
    """Supprime un fichier du cache."""
    if not container.video_cache().delete_cached_video(filename):
        console.print(f"[red]Introuvable :[/red] {filename}")
        raise typer.Exit(code=1)
    console.print(f"[green]Supprimé :[/green] {filename}")


def main() -> None:
    """Point d'entrée de l'application."""
    settings = container.config()
    configure_logging(
        log_level=settings.log_level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )
    logger.debug(f"MEMOPYK v{__version__}")
    app()


if __name__ == "__main__":
    main()
