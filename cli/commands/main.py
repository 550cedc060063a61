"""Main CLI interface using Typer."""

import json
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from flowloc.core.exceptions import FlowLocError
from flowloc.core.models import JobStatus
from flowloc.core.pipeline import WorkflowTranslationPipeline, PipelineConfig
from flowloc.extraction.scanner import DocumentScanner, load_document
from flowloc.translation.engines import ENGINE_NAMES, create_engine
from flowloc.translation.languages import get_supported_languages
from flowloc.utils.config_loader import load_config
from flowloc.utils.logger import setup_logger, get_logger

app = typer.Typer(
    name="flowloc",
    help="FlowLoc: translate the text inside workflow-automation JSON files",
    add_completion=False
)

console = Console()


def _read_workflow(input_file: Path) -> dict:
    if not input_file.exists():
        console.print(f"[red]Error: Input file not found: {input_file}[/red]")
        raise typer.Exit(1)
    try:
        return load_document(input_file.read_bytes())
    except FlowLocError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(1)


@app.command()
def scan(
    input_file: Path = typer.Argument(..., help="Workflow JSON file"),
    as_json: bool = typer.Option(False, "--json", help="Print the scan result as JSON"),
):
    """List the translatable texts found in a workflow."""
    document = _read_workflow(input_file)
    result = DocumentScanner().scan(document)
    if not result.success:
        console.print(f"[red]Error: {result.error.message}[/red]")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
        return

    table = Table(title=f"Translatable texts in {input_file.name}")
    table.add_column("ID", style="cyan")
    table.add_column("Path")
    table.add_column("Context")
    table.add_column("Field")
    table.add_column("Text")
    for item in result.extracted_texts:
        text = item.original if len(item.original) <= 60 else item.original[:57] + "..."
        table.add_row(item.id, item.path_string, item.context.value, item.type, text)
    console.print(table)

    metadata = result.metadata
    console.print(
        f"\n{len(result.extracted_texts)} texts | {metadata['node_count']} nodes | "
        f"{metadata['connection_count']} connections | version {metadata['version']}"
    )


@app.command()
def translate(
    input_file: Path = typer.Argument(..., help="Workflow JSON file"),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Output file path"),
    target_lang: Optional[str] = typer.Option(None, "-t", "--target", help="Target language"),
    source_lang: Optional[str] = typer.Option(None, "-s", "--source", help="Source language"),
    engine: Optional[str] = typer.Option(None, "-e", "--engine", help=f"Translation engine ({'/'.join(ENGINE_NAMES)})"),
    config_file: Optional[Path] = typer.Option(None, "-c", "--config", help="YAML configuration file"),
    debug_mode: bool = typer.Option(False, "--debug/--no-debug", help="Enable debug logging"),
):
    """Translate a workflow file and write the translated copy."""
    config = load_config(str(config_file) if config_file else None)
    log_config = config.get("logging", {})
    setup_logger(level="DEBUG" if debug_mode else log_config.get("level", "INFO"), log_file=log_config.get("file"))
    log = get_logger("flowloc.cli")

    pipeline_config = PipelineConfig.from_dict(config)
    if target_lang:
        pipeline_config.target_lang = target_lang
    if source_lang:
        pipeline_config.source_lang = source_lang
    if engine:
        pipeline_config.engine = engine

    try:
        pipeline = WorkflowTranslationPipeline(pipeline_config)
    except FlowLocError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    document = _read_workflow(input_file)
    if output is None:
        output = input_file.with_name(f"{input_file.stem}_{pipeline_config.target_lang}.json")

    console.print(f"[bold blue]FlowLoc Translation[/bold blue]")
    console.print(f"Input: {input_file}")
    console.print(f"Output: {output}")
    console.print(f"Translation: {pipeline_config.source_lang} → {pipeline_config.target_lang}")
    console.print(f"Engine: {pipeline_config.engine}\n")

    with console.status("Translating..."):
        job = pipeline.run_sync(document)

    if job.status is not JobStatus.COMPLETED:
        log.error(f"Job {job.job_id} failed: {job.error_message}")
        console.print(f"[red]Translation failed: {job.error_message}[/red]")
        raise typer.Exit(1)

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(job.translated_document, ensure_ascii=False, indent=2), encoding="utf-8")
    log.info(f"Job {job.job_id} wrote {output}")

    summary = job.summary
    console.print(f"[green]✓ Translated {summary.get('applied', 0)} texts[/green]")
    console.print(f"Engine used: {summary.get('resolved_engine')}")
    console.print(f"Cache hits: {summary.get('cache_hits', 0)}")
    console.print(f"Average quality: {job.quality_score}")
    if summary.get("failed_paths"):
        console.print(f"[yellow]Skipped paths: {summary['failed_paths']}[/yellow]")


@app.command()
def engines(config_file: Optional[Path] = typer.Option(None, "-c", "--config", help="YAML configuration file")):
    """List translation engines and whether they are configured."""
    config = load_config(str(config_file) if config_file else None)
    console.print("\n[bold]Translation Engines[/bold]\n")
    for name in ENGINE_NAMES:
        info = create_engine(name, config).get_info()
        if info["available"]:
            console.print(f"[green]✓ Available[/green] {name} (batch size {info['batch_size']})")
        else:
            console.print(f"[yellow]✗ Not configured[/yellow] {name}")
    console.print("\n[dim]Without google or deepl configured, every request uses the mock engine.[/dim]")


@app.command()
def languages():
    """List supported target languages."""
    table = Table(title="Supported languages")
    table.add_column("Code", style="cyan")
    table.add_column("Name")
    table.add_column("Native name")
    for language in get_supported_languages():
        table.add_row(language["code"], language["name"], language["native_name"])
    console.print(table)


def cli():
    """Main CLI entry point."""
    if len(sys.argv) == 1:
        console.print("[bold blue]FlowLoc[/bold blue]: workflow localization")
        console.print("\n[dim]Type 'flowloc --help' for usage information[/dim]\n")
        return

    app()


if __name__ == "__main__":
    cli()
