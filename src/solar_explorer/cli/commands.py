"""CLI commands for Solar Explorer.

Commands:
- init-db: Create the database schema and seed planets
- planets: List planets
- create-user: Register an account (e.g. the first teacher)
- ranking: Print the cohort ranking shown on the teacher dashboard
- serve: Run the Web API
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from solar_explorer.config.app_config import load_app_config
from solar_explorer.core.auth import hash_password
from solar_explorer.core.errors import SolarError
from solar_explorer.core.reports import cohort_ranking
from solar_explorer.db.database import init_db
from solar_explorer.db import planets_repository, users_repository
from solar_explorer.utils.validators import validate_email, validate_role

app = typer.Typer(
    name="solar",
    help="Explore the Solar System - learning backend.",
    no_args_is_help=True,
)

console = Console()


def _open_db(db: Path | None) -> Path:
    """Initialize the database at ``db`` or the configured path."""
    return init_db(db or load_app_config().db_path)


@app.command(name="init-db")
def init_database(
    db: Path = typer.Option(None, "--db", help="Database file (default: from config)"),
) -> None:
    """Create the schema and seed the planets."""
    path = _open_db(db)
    count = len(planets_repository.list_planets())
    console.print(f"[green]✓ Database ready:[/green] {path} ({count} planets)")


@app.command(name="planets")
def list_planets(
    db: Path = typer.Option(None, "--db", help="Database file (default: from config)"),
) -> None:
    """List planets ordered by distance from the Sun."""
    _open_db(db)

    table = Table(title="Planets")
    table.add_column("#", justify="right")
    table.add_column("id")
    table.add_column("name")
    table.add_column("radius (Earth=1)", justify="right")
    table.add_column("distance (AU)", justify="right")

    for planet in planets_repository.list_planets():
        table.add_row(
            str(planet.order),
            planet.id,
            planet.name,
            f"{planet.radius:g}",
            f"{planet.distance_au:g}",
        )

    console.print(table)


@app.command(name="create-user")
def create_user(
    name: str = typer.Argument(..., help="Display name"),
    email: str = typer.Argument(..., help="Email address"),
    password: str = typer.Option(..., "--password", "-p", prompt=True, hide_input=True),
    role: str = typer.Option("student", "--role", "-r", help="student | teacher"),
    db: Path = typer.Option(None, "--db", help="Database file (default: from config)"),
) -> None:
    """Register an account."""
    _open_db(db)

    email = users_repository.normalize_email(email)
    if not validate_email(email):
        console.print("[red]✗ Invalid email format[/red]")
        raise typer.Exit(code=1)

    try:
        role = validate_role(role)
        user = users_repository.insert_user(
            name=name,
            email=email,
            password_hash=hash_password(password),
            role=role,
        )
    except SolarError as e:
        console.print(f"[red]✗ {e.message}[/red]")
        raise typer.Exit(code=1)

    console.print(f"[green]✓ Created {user.role}:[/green] {user.name} <{user.email}> ({user.id})")


@app.command(name="ranking")
def ranking(
    db: Path = typer.Option(None, "--db", help="Database file (default: from config)"),
) -> None:
    """Print students ranked by points, visited planets and recency."""
    _open_db(db)

    rows = cohort_ranking()
    if not rows:
        console.print("[yellow]No students registered yet[/yellow]")
        return

    table = Table(title=f"Student ranking ({len(rows)})")
    table.add_column("#", justify="right")
    table.add_column("student")
    table.add_column("points", justify="right")
    table.add_column("visited", justify="right")
    table.add_column("attempts", justify="right")
    table.add_column("avg", justify="right")
    table.add_column("best", justify="right")

    for position, row in enumerate(rows, start=1):
        name = row.student.name if row.student else row.user_id
        table.add_row(
            str(position),
            name,
            str(row.progress.points),
            str(row.progress.visited_count),
            str(row.stats.total_attempts),
            f"{row.stats.avg_correct_ratio:.0%}",
            f"{row.stats.best_correct_ratio:.0%}",
        )

    console.print(table)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host"),
    port: int = typer.Option(4000, "--port"),
    db: Path = typer.Option(None, "--db", help="Database file (default: from config)"),
) -> None:
    """Run the Web API with uvicorn."""
    import uvicorn

    from solar_explorer.web.api import create_app

    console.print(f"[bold]Solar Explorer API[/bold] on http://{host}:{port}")
    uvicorn.run(create_app(db_path=db), host=host, port=port)
