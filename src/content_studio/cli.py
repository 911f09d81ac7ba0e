"""Command-line interface using Typer."""

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn
from rich.table import Table

from content_studio import __version__
from content_studio.domain.enums import Language, VideoMode
from content_studio.exceptions import BulkAbortError, StudioError
from content_studio.logging import setup_logging

# Setup logging
setup_logging()

app = typer.Typer(
    name="content-studio",
    help="Content Studio - YouTube video package generation CLI",
    add_completion=False,
)

# Subcommand groups
projects_app = typer.Typer(help="Project management commands")
channels_app = typer.Typer(help="Channel profile commands")
prompt_app = typer.Typer(help="Global instruction commands")
model_app = typer.Typer(help="Preferred model commands")
app.add_typer(projects_app, name="projects")
app.add_typer(channels_app, name="channels")
app.add_typer(prompt_app, name="prompt")
app.add_typer(model_app, name="model")

console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"Content Studio v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Log at DEBUG level."),
) -> None:
    """Content Studio - hooks, scripts, SEO and thumbnails for YouTube."""
    if verbose:
        setup_logging("DEBUG")


def _store():
    from content_studio.adapters.store import create_store

    return create_store()


def _generator(store):
    from content_studio.services.content_generator import ContentGenerator

    generator = ContentGenerator(store)
    if not generator.is_configured:
        console.print("[bold yellow]Warning: GOOGLE_API_KEY is not set; generation is disabled.[/bold yellow]")
    return generator


def _load_project(store, project_id: str):
    project = asyncio.run(store.get_project(project_id))
    if project is None:
        console.print(f"[bold red]Project not found: {project_id}[/bold red]")
        raise typer.Exit(code=1)
    return project


def _fail(e: Exception) -> None:
    console.print(f"[bold red]Error: {e}[/bold red]")
    raise typer.Exit(code=1)


def _print_usage(project) -> None:
    usage = project.token_usage
    if usage:
        console.print(
            f"[dim]Tokens: {usage.input_tokens} in / {usage.output_tokens} out, "
            f"est. cost ${usage.estimated_cost:.5f}[/dim]"
        )


# =============================================================================
# GENERATOR WIZARD
# =============================================================================


@app.command()
def generate(
    topic: str = typer.Option(..., "--topic", "-t", prompt=True, help="Video topic or reference to rewrite"),
    audience: str = typer.Option(..., "--audience", "-a", prompt=True, help="Target audience"),
    channel_id: Optional[str] = typer.Option(None, "--channel", "-c", help="Channel profile ID"),
    mode: VideoMode = typer.Option(VideoMode.ORIGINAL, "--mode", "-m", help="ORIGINAL or REWRITE"),
    language: Language = typer.Option(Language.EN, "--language", "-l", help="EN, VI or EN_VI"),
    hook: Optional[int] = typer.Option(None, "--hook", help="Pick hook N (1-based) without prompting"),
) -> None:
    """Generate hooks, pick one, and commit a new project blueprint."""
    from content_studio.services.generator_wizard import Brief, GeneratorWizard

    store = _store()
    generator = _generator(store)
    wizard = GeneratorWizard(generator, store)

    if channel_id is None:
        channels = asyncio.run(store.list_channel_profiles())
        channel_id = channels[0].id if channels else ""

    brief = Brief(
        channel_id=channel_id,
        topic=topic,
        target_audience=audience,
        mode=mode,
        language=language,
    )

    try:
        with console.status("[bold blue]Generating hooks...[/bold blue]"):
            hooks = asyncio.run(wizard.generate_hooks(brief))

        table = Table(title="Hooks")
        table.add_column("#", style="dim")
        table.add_column("Type", style="cyan")
        table.add_column("Hook")
        for i, h in enumerate(hooks, start=1):
            table.add_row(str(i), str(h.type), h.content)
        console.print(table)

        choice = hook or typer.prompt("Pick a hook", type=int, default=1)
        if not 1 <= choice <= len(hooks):
            console.print(f"[bold red]Choose a hook between 1 and {len(hooks)}[/bold red]")
            raise typer.Exit(code=1)
        wizard.select_hook(hooks[choice - 1].id)

        with console.status("[bold blue]Generating blueprint...[/bold blue]"):
            project = asyncio.run(wizard.generate_blueprint())
    except StudioError as e:
        _fail(e)

    console.print("[bold green]✓ Project created![/bold green]")
    console.print(f"[cyan]ID:[/cyan] {project.id}")
    console.print(f"[cyan]Title:[/cyan] {project.seo.youtube_title}")
    console.print(f"[cyan]Sections:[/cyan] {len(project.script)}")
    _print_usage(project)
    console.print("\n[dim]Fill the script with:[/dim]")
    console.print(f"[dim]  content-studio fill {project.id}[/dim]")


# =============================================================================
# PROJECT EDITING
# =============================================================================


@app.command()
def fill(
    project_id: str = typer.Argument(..., help="Project ID"),
) -> None:
    """Write voiceover for every unfilled section, three at a time."""
    from content_studio.services.project_editor import ProjectEditor

    store = _store()
    project = _load_project(store, project_id)
    editor = ProjectEditor(_generator(store), store, project)

    pending = len(project.unfilled_indices())
    if pending == 0:
        console.print("[green]All sections are already filled.[/green]")
        return

    with Progress(
        TextColumn("[bold blue]Writing sections"),
        BarColumn(),
        MofNCompleteColumn(),
        console=console,
    ) as progress:
        task = progress.add_task("fill", total=pending)

        def on_progress(completed: int, total: int) -> None:
            progress.update(task, completed=completed, total=total)

        try:
            result = asyncio.run(editor.fill_all(on_progress=on_progress))
        except BulkAbortError as e:
            console.print(
                f"[bold red]Bulk generation stopped: {e.completed}/{e.total} sections saved. "
                f"Failed sections: {', '.join(str(i + 1) for i in e.failed_indices)}[/bold red]"
            )
            raise typer.Exit(code=1)
        except StudioError as e:
            _fail(e)

    console.print(f"[bold green]✓ Filled {result.completed} sections in {result.batches} batches[/bold green]")
    _print_usage(project)


@app.command("fill-section")
def fill_section(
    project_id: str = typer.Argument(..., help="Project ID"),
    section: Optional[int] = typer.Option(None, "--section", "-s", help="Section number (1-based); next unfilled if omitted"),
) -> None:
    """Write (or rewrite) the voiceover for one section."""
    from content_studio.services.project_editor import ProjectEditor

    store = _store()
    project = _load_project(store, project_id)
    editor = ProjectEditor(_generator(store), store, project)

    index = section - 1 if section is not None else editor.next_unfilled_index
    if index is None:
        console.print("[green]All sections are already filled.[/green]")
        return

    try:
        with console.status(f"[bold blue]Writing section {index + 1}...[/bold blue]"):
            text = asyncio.run(editor.fill_section(index))
    except StudioError as e:
        _fail(e)

    console.print(f"[bold green]✓ Section {index + 1}: {len(text.split())} words[/bold green]")
    _print_usage(project)


@app.command()
def image(
    project_id: str = typer.Argument(..., help="Project ID"),
    section: Optional[int] = typer.Option(None, "--section", "-s", help="Section number (1-based)"),
    thumbnail: bool = typer.Option(False, "--thumbnail", help="Generate the thumbnail instead"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Also write the JPEG to this file"),
) -> None:
    """Generate a section preview image or the thumbnail."""
    import base64

    from content_studio.services.project_editor import ProjectEditor

    if thumbnail == (section is not None):
        console.print("[bold red]Pass either --section N or --thumbnail[/bold red]")
        raise typer.Exit(code=1)

    store = _store()
    project = _load_project(store, project_id)
    editor = ProjectEditor(_generator(store), store, project)

    try:
        with console.status("[bold blue]Generating image...[/bold blue]"):
            if thumbnail:
                data_uri = asyncio.run(editor.generate_thumbnail_image())
            else:
                data_uri = asyncio.run(editor.generate_section_image(section - 1))
    except StudioError as e:
        _fail(e)

    console.print("[bold green]✓ Image saved to project[/bold green]")
    if output:
        output.write_bytes(base64.b64decode(data_uri.split(",", 1)[1]))
        console.print(f"[dim]Written to {output}[/dim]")


@app.command()
def repurpose(
    project_id: str = typer.Argument(..., help="Project ID"),
) -> None:
    """Generate shorts ideas, a community post and a social blurb."""
    from content_studio.services.project_editor import ProjectEditor

    store = _store()
    project = _load_project(store, project_id)
    editor = ProjectEditor(_generator(store), store, project)

    try:
        with console.status("[bold blue]Repurposing...[/bold blue]"):
            package = asyncio.run(editor.repurpose())
    except StudioError as e:
        _fail(e)

    table = Table(title="Shorts Ideas")
    table.add_column("Title", style="cyan")
    table.add_column("Visual Concept")
    for idea in package.shorts_ideas:
        table.add_row(idea.title, idea.visual_concept)
    console.print(table)
    console.print(Panel(package.community_post, title="Community Post", border_style="blue"))
    console.print(Panel(package.social_blurb, title="Social Blurb", border_style="blue"))
    _print_usage(project)


# =============================================================================
# PROJECTS COMMANDS
# =============================================================================


@projects_app.command("list")
def projects_list() -> None:
    """List all projects, newest first."""
    store = _store()
    projects = asyncio.run(store.list_projects())

    if not projects:
        console.print("[dim]No projects found. Create one with 'content-studio generate'[/dim]")
        return

    table = Table(title="Projects")
    table.add_column("ID", style="dim")
    table.add_column("Topic", style="cyan")
    table.add_column("Channel")
    table.add_column("Filled", style="green")
    table.add_column("Cost")
    table.add_column("Created")

    for project in projects:
        filled = len(project.script) - len(project.unfilled_indices())
        cost = project.token_usage.estimated_cost if project.token_usage else 0.0
        table.add_row(
            project.id,
            project.topic[:40],
            project.channel_id,
            f"{filled}/{len(project.script)}",
            f"${cost:.5f}",
            project.created_at.strftime("%Y-%m-%d"),
        )

    console.print(table)


@projects_app.command("show")
def projects_show(
    project_id: str = typer.Argument(..., help="Project ID"),
) -> None:
    """Show details of a project."""
    store = _store()
    project = _load_project(store, project_id)

    console.print(Panel.fit(
        f"[bold]{project.seo.youtube_title}[/bold]\n\n"
        f"[cyan]ID:[/cyan] {project.id}\n"
        f"[cyan]Topic:[/cyan] {project.topic}\n"
        f"[cyan]Channel:[/cyan] {project.channel_id}\n"
        f"[cyan]Mode / Language:[/cyan] {project.mode} / {project.language}\n"
        f"[cyan]Audience:[/cyan] {project.target_audience}\n"
        f"[cyan]Hook:[/cyan] {project.selected_hook or 'N/A'}\n"
        f"[cyan]Thumbnail:[/cyan] {project.thumbnail.thumbnail_text}\n"
        f"[cyan]Tags:[/cyan] {', '.join(project.seo.tags)}\n"
        f"[cyan]Created:[/cyan] {project.created_at.strftime('%Y-%m-%d %H:%M')} by {project.created_by}",
        title="Project Details",
        border_style="blue",
    ))

    table = Table(title="Script")
    table.add_column("#", style="dim")
    table.add_column("Section", style="cyan")
    table.add_column("Words")
    table.add_column("Image")
    for i, s in enumerate(project.script, start=1):
        table.add_row(
            str(i),
            s.section_title,
            str(len(s.voiceover_text.split())) if s.is_filled else "[yellow]unfilled[/yellow]",
            "✓" if s.image_url else "-",
        )
    console.print(table)
    _print_usage(project)


@projects_app.command("delete")
def projects_delete(
    project_id: str = typer.Argument(..., help="Project ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a project."""
    store = _store()
    project = _load_project(store, project_id)
    if not yes:
        typer.confirm(f"Delete '{project.topic}'?", abort=True)
    try:
        asyncio.run(store.delete_project(project_id))
    except StudioError as e:
        _fail(e)
    console.print(f"[green]Deleted {project_id}[/green]")


@projects_app.command("export")
def projects_export(
    project_id: str = typer.Argument(..., help="Project ID"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output file"),
) -> None:
    """Export the script as a plain-text document."""
    from content_studio.services.project_editor import export_filename, export_script

    store = _store()
    project = _load_project(store, project_id)
    path = output or Path(export_filename(project))
    path.write_text(export_script(project), encoding="utf-8")
    console.print(f"[green]Script written to {path}[/green]")


# =============================================================================
# CHANNELS / SETTINGS COMMANDS
# =============================================================================


@channels_app.command("list")
def channels_list() -> None:
    """List channel profiles."""
    store = _store()
    table = Table(title="Channels")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    table.add_column("Ref Image")
    for channel in asyncio.run(store.list_channel_profiles()):
        table.add_row(
            channel.id,
            channel.name,
            channel.description,
            "✓" if channel.thumbnail_ref_image else "-",
        )
    console.print(table)


@channels_app.command("delete")
def channels_delete(
    channel_id: str = typer.Argument(..., help="Channel profile ID"),
) -> None:
    """Delete a channel profile. Existing projects keep their channel id."""
    from content_studio.domain.users import DEFAULT_USER, require_owner

    try:
        require_owner(DEFAULT_USER, "delete channel profiles")
        asyncio.run(_store().delete_channel_profile(channel_id))
    except StudioError as e:
        _fail(e)
    console.print(f"[green]Deleted channel {channel_id}[/green]")


@prompt_app.command("show")
def prompt_show() -> None:
    """Show the global instruction sent with every call."""
    console.print(Panel(asyncio.run(_store().get_global_instruction()), title="Global Prompt"))


@prompt_app.command("set")
def prompt_set(
    file: Path = typer.Argument(..., exists=True, readable=True, help="File holding the new prompt"),
) -> None:
    """Replace the global instruction."""
    from content_studio.domain.users import DEFAULT_USER, require_owner

    try:
        require_owner(DEFAULT_USER, "edit the global prompt")
        asyncio.run(_store().set_global_instruction(file.read_text(encoding="utf-8")))
    except StudioError as e:
        _fail(e)
    console.print("[green]Global prompt updated[/green]")


@model_app.command("show")
def model_show() -> None:
    """Show the preferred model and the known options."""
    from content_studio.services.usage import AI_MODELS

    current = _store().get_preferred_model()
    for option in AI_MODELS:
        marker = "[bold green]*[/bold green]" if option.id == current else " "
        console.print(f"{marker} [cyan]{option.id}[/cyan] {option.label} - {option.description}")
    if current not in {m.id for m in AI_MODELS}:
        console.print(f"[bold green]*[/bold green] [cyan]{current}[/cyan] (custom, priced at zero)")


@model_app.command("set")
def model_set(
    model_id: str = typer.Argument(..., help="Model ID"),
) -> None:
    """Change the preferred model."""
    _store().set_preferred_model(model_id)
    console.print(f"[green]Preferred model set to {model_id}[/green]")


@app.command()
def serve() -> None:
    """Start the API server."""
    import uvicorn

    from content_studio.config import settings

    console.print(f"[bold blue]Starting API on {settings.api_host}:{settings.api_port}...[/bold blue]")
    uvicorn.run(
        "content_studio.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
