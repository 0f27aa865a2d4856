"""Command-line interface for Pet Wiki."""

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from pet_wiki.config import get_settings
from pet_wiki.db import Repository, get_session, init_db
from pet_wiki.utils.logging import get_logger, setup_logging
from pet_wiki.utils.text import image_src, truncate_text

app = typer.Typer(
    name="pet-wiki",
    help="Pet encyclopedia and blog: breed profiles, listings and articles",
    add_completion=False,
)

console = Console()
logger = get_logger(__name__)


def init_app():
    """Initialize the application."""
    settings = get_settings()
    setup_logging(settings.log_level)
    init_db()


def _require_species(species: str) -> None:
    from pet_wiki.ingest import VALID_SPECIES

    if species not in VALID_SPECIES:
        console.print(
            f"[red]Unknown species '{species}'. Choose from: {', '.join(VALID_SPECIES)}[/red]"
        )
        raise typer.Exit(1)


# ============================================================================
# Import Commands
# ============================================================================


@app.command("migrate")
def migrate(
    pets_json: Optional[Path] = typer.Option(
        None, "--pets-json", "-p", help="Path to petsData.json"
    ),
    blog_json: Optional[Path] = typer.Option(
        None, "--blog-json", "-b", help="Path to blogData.json"
    ),
):
    """Import categories, breeds and blog posts from JSON."""
    init_app()
    settings = get_settings()

    from pet_wiki.ingest import DataMigrator

    pets_file = pets_json or settings.pets_data_file
    blog_file = blog_json or settings.blog_data_file

    try:
        with get_session() as session:
            stats = DataMigrator(Repository(session)).migrate(pets_file, blog_file)
    except (OSError, ValueError) as e:
        console.print(f"[red]Migration failed: {e}[/red]")
        raise typer.Exit(1)

    console.print("\n[green]Migration completed![/green]")
    console.print(f"  • {stats.categories} categories")
    console.print(f"  • {stats.pets} pets")
    console.print(f"  • {stats.blog_posts} blog posts")
    for species, count in stats.pets_by_species.items():
        if count:
            console.print(f"    {species}: {count}")
    if stats.skipped_subcategories:
        console.print(
            f"[yellow]Skipped subcategories: {', '.join(stats.skipped_subcategories)}[/yellow]"
        )


@app.command("fix-images")
def fix_images():
    """Make stored image paths root-relative."""
    init_app()

    from pet_wiki.ingest import fix_image_paths

    with get_session() as session:
        stats = fix_image_paths(Repository(session))

    console.print(f"[green]Fixed image paths on {stats.total} rows[/green]")
    console.print(f"  • pets: {stats.pets}")
    console.print(f"  • categories: {stats.categories}")
    console.print(f"  • blog posts: {stats.blog_posts}")


# ============================================================================
# Breed Commands
# ============================================================================


@app.command("list-breeds")
def list_breeds(
    species: str = typer.Argument(..., help="Species key, e.g. dogs"),
    search: str = typer.Option("", "--search", "-q", help="Search name, breed or temperament"),
    size: Optional[List[str]] = typer.Option(None, "--size", help="Size label (repeatable)"),
    care_level: Optional[List[str]] = typer.Option(
        None, "--care-level", help="Care level label (repeatable)"
    ),
    temperament: Optional[List[str]] = typer.Option(
        None, "--temperament", "-t", help="Temperament label (repeatable)"
    ),
    prop: Optional[List[str]] = typer.Option(
        None, "--property", help="Advanced property id (repeatable)"
    ),
    sort: str = typer.Option("name-asc", "--sort", "-s", help="Sort option, e.g. size-desc"),
):
    """List breeds of a species with search, facet filters and sorting."""
    init_app()
    _require_species(species)

    from pet_wiki.filtering import FilterEngine, FilterStore, PropertySelectionStore
    from pet_wiki.ingest import SPECIES_CONFIG

    with get_session() as session:
        breeds = Repository(session).get_breed_records(species)

    config = SPECIES_CONFIG[species]
    if not breeds:
        console.print(f"[yellow]Noch keine {config['name']} verfügbar.[/yellow]")
        return

    filter_store = FilterStore()
    property_store = PropertySelectionStore()
    filter_store.update_filter("search", search)
    filter_store.update_filter("size", size or [])
    filter_store.update_filter("care_level", care_level or [])
    filter_store.update_filter("temperament", temperament or [])
    filter_store.set_sort(sort)
    for property_id in prop or []:
        property_store.toggle_property(property_id)

    result = FilterEngine(filter_store, property_store).refresh(breeds)

    if result.count == 0:
        console.print("[yellow]Keine Rassen gefunden. Versuche andere Filter.[/yellow]")
        if property_store.selected_properties:
            console.print(
                f"Aktuell ausgewählt: {len(property_store.selected_properties)} Eigenschaften"
            )
        return

    table = Table(title=f"{config['emoji']} {config['name']}")
    table.add_column("Name", style="cyan")
    table.add_column("Größe")
    table.add_column("Pflege")
    table.add_column("Charakter")
    table.add_column("Matches", justify="right")
    table.add_column("Link", style="dim")

    for breed in result.breeds:
        matched = result.matched_properties(breed)
        table.add_row(
            breed.name,
            breed.size or "-",
            breed.care_level or "-",
            ", ".join((breed.temperament or [])[:3]) or "-",
            str(len(matched)) if matched else "",
            breed.url_path,
        )

    console.print(table)
    console.print(f"{filter_store.filtered_count} von {len(breeds)} Rassen")


@app.command("list-facets")
def list_facets(
    species: str = typer.Argument(..., help="Species key, e.g. dogs"),
):
    """Show the filter values available for a species listing."""
    init_app()
    _require_species(species)

    from pet_wiki.filtering import available_options, collection_stats
    from pet_wiki.filtering.state import FACET_LABELS

    with get_session() as session:
        breeds = Repository(session).get_breed_records(species)

    counts = collection_stats(breeds)
    console.print(
        f"[bold]{counts['breeds']}[/bold] Rassen · {counts['sizes']} Größen · "
        f"{counts['care_levels']} Pflegestufen · {counts['origins']} Länder"
    )

    for facet, values in available_options(breeds).items():
        console.print(f"\n[cyan]{FACET_LABELS[facet]}[/cyan]")
        for value in values:
            console.print(f"  • {value}")


@app.command("show-breed")
def show_breed(
    species: str = typer.Argument(..., help="Species key, e.g. dogs"),
    slug: str = typer.Argument(..., help="Breed slug"),
):
    """Show a breed profile and related breeds."""
    init_app()
    settings = get_settings()

    with get_session() as session:
        repo = Repository(session)
        pet = repo.get_pet_by_slug(slug, species=species)

        if not pet:
            console.print(f"[red]Tier nicht gefunden: {species}/{slug}[/red]")
            raise typer.Exit(1)

        lines = [f"[bold]{pet.name}[/bold]", pet.description]
        if pet.origin:
            lines.append(f"Herkunft: {pet.origin}")
        if pet.size:
            lines.append(f"Größe: {pet.size}")
        if pet.care_level:
            lines.append(f"Pflege: {pet.care_level}")
        if pet.life_expectancy:
            lines.append(f"Lebenserwartung: {pet.life_expectancy}")
        if pet.temperament:
            lines.append(f"Charakter: {', '.join(pet.temperament)}")
        lines.append(f"Bild: {image_src(pet.primary_image, settings.placeholder_image)}")
        console.print(Panel("\n".join(lines), title=f"{pet.name} | {settings.site_name}"))

        for title, text in [
            ("Zusammenfassung", pet.summary),
            ("Charakter", pet.character),
            ("Gesundheit", pet.health),
            ("Pflege", pet.grooming),
            ("Aktivität", pet.activity),
            ("Eignung", pet.suitability),
        ]:
            if text:
                console.print(Panel(text, title=title))

        related = repo.get_related_pets(pet)
        if related:
            console.print("\n[bold]Ähnliche Rassen:[/bold]")
            for other in related:
                console.print(f"  • {other.name} (/{other.species}/{other.slug})")


@app.command("list-properties")
def list_properties(
    category: Optional[str] = typer.Option(
        None, "--category", "-c", help="temperament, care, physical or social"
    ),
):
    """List the advanced filter properties."""
    from pet_wiki.filtering import get_property_catalog

    catalog = get_property_catalog()
    properties = (
        catalog.get_properties_by_category(category) if category else catalog.get_all_properties()
    )

    table = Table(title="Eigenschaften")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Kategorie")
    table.add_column("Beschreibung")

    for prop in properties:
        table.add_row(prop.id, f"{prop.icon} {prop.name}", prop.category, prop.description)

    console.print(table)


# ============================================================================
# Blog Commands
# ============================================================================


@app.command("list-posts")
def list_posts(
    category: Optional[str] = typer.Option(None, "--category", "-c", help="Blog category"),
    search: Optional[str] = typer.Option(None, "--search", "-q", help="Search text"),
    page: int = typer.Option(1, "--page", help="Page number"),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", help="Posts per page"),
):
    """List published blog posts."""
    init_app()
    settings = get_settings()

    with get_session() as session:
        repo = Repository(session)
        result = repo.search_blog_posts(
            category=category,
            search=search,
            page=page,
            limit=limit or settings.blog_page_size,
        )

        if not result.posts:
            console.print("[yellow]No posts found.[/yellow]")
            return

        table = Table(title=f"Blog ({result.total} Artikel)")
        table.add_column("Datum", style="dim")
        table.add_column("Titel", style="cyan")
        table.add_column("Kategorie")
        table.add_column("Auszug")

        for post in result.posts:
            table.add_row(
                post.published_at.strftime("%d.%m.%Y"),
                post.title,
                post.category,
                truncate_text(post.excerpt, 60),
            )

        console.print(table)
        if result.has_more:
            console.print(f"Weitere Artikel: --page {result.page + 1}")


# ============================================================================
# Utility Commands
# ============================================================================


@app.command("init-db")
def init_database():
    """Initialize the database."""
    setup_logging("INFO")
    init_db()
    console.print("[green]Database initialized successfully![/green]")


@app.command("stats")
def stats():
    """Show content counts."""
    init_app()

    from pet_wiki.ingest import SPECIES_CONFIG

    with get_session() as session:
        repo = Repository(session)

        table = Table(title="Inhalte")
        table.add_column("Bereich", style="cyan")
        table.add_column("Anzahl", justify="right")

        table.add_row("Kategorien", str(repo.count_categories()))
        table.add_row("Tiere", str(repo.count_pets()))
        table.add_row("Blog-Artikel", str(repo.count_blog_posts()))
        for species, config in SPECIES_CONFIG.items():
            count = repo.count_pets(species)
            if count:
                table.add_row(f"  {config['emoji']} {config['name']}", str(count))

        console.print(table)


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
