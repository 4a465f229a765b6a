#!/usr/bin/env python3
"""
DOM Diff Comparison Tool
Command-line entry point: compare two HTML pages and explain the differences.
"""

import asyncio
import json
import logging
import sys
from typing import Optional

import click
from rich.console import Console
from pydantic import ValidationError
from rich.markup import escape

from core.ai_evaluator import AzureOpenAIEvaluator
from core.config import Settings
from core.diff_analyzer import ComparisonResult, DomDiffAnalyzer
from core.errors import DomDiffError
from core.source_fetcher import Source

console = Console(highlight=False, soft_wrap=True)
error_console = Console(stderr=True, highlight=False, soft_wrap=True)

RULE = '=' * 60


def fail(message: str) -> None:
    error_console.print(f"[red]Error:[/red] {escape(message)}")
    sys.exit(1)


def validate_sources(url1: Optional[str], url2: Optional[str],
                     file1: Optional[str], file2: Optional[str]) -> None:
    if not (url1 or file1) or not (url2 or file2):
        fail("You must specify both sources to compare. Use --url1/--url2 or --file1/--file2")
    if url1 and file1:
        fail("Cannot specify both --url1 and --file1")
    if url2 and file2:
        fail("Cannot specify both --url2 and --file2")


def print_report(result: ComparisonResult) -> None:
    console.print()
    console.print(f"[bold cyan]{RULE}[/bold cyan]")
    console.print("[bold cyan]  DOM Diff Comparison Result[/bold cyan]")
    console.print(f"[bold cyan]{RULE}[/bold cyan]")
    console.print()
    console.print(f"[yellow]Source 1:[/yellow] {escape(result.source1)}")
    console.print(f"[yellow]Source 2:[/yellow] {escape(result.source2)}")
    console.print()
    console.print(f"[bold magenta]Structure Differences:[/bold magenta] {result.diff.count} change(s)")
    if result.diff.summary:
        console.print(f"[bright_black]{escape(result.diff.summary)}[/bright_black]")

    evaluation = result.ai_evaluation
    if evaluation is not None:
        console.print()
        console.print("[bold green]AI Evaluation:[/bold green]")
        console.print(f"Summary: {escape(evaluation.summary)}")
        console.print(f"Change Types: {escape(', '.join(evaluation.change_types))}")
        console.print(f"Impacted Sections: {escape(', '.join(evaluation.impacted_sections))}")
        console.print(f"Likely Intent: {escape(evaluation.likely_intent)}")

    console.print()
    console.print(f"[bold cyan]{RULE}[/bold cyan]")


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.option('--url1', help='URL of the first page to compare')
@click.option('--url2', help='URL of the second page to compare')
@click.option('--file1', help='Path to the first HTML file to compare')
@click.option('--file2', help='Path to the second HTML file to compare')
@click.option('--json', 'as_json', is_flag=True, help='Output in JSON format')
@click.option('--render', '--puppeteer', 'render', is_flag=True,
              help='Render URLs in a headless browser first (SPA support)')
@click.option('--model', help='AI model or deployment to use')
@click.option('--no-ai', is_flag=True, help='Skip the AI evaluation')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def main(url1, url2, file1, file2, as_json, render, model, no_ai, verbose):
    """Compare the DOM structure of two HTML pages.

    \b
    Examples:
      domdiff --url1 http://localhost:3000 --url2 http://localhost:3001
      domdiff --file1 ./v1.html --file2 ./v2.html --json
    """
    try:
        settings = Settings.from_env()
    except ValidationError as e:
        fail(f"Invalid configuration: {e}")
    level = logging.DEBUG if verbose else getattr(logging, (settings.log_level or 'ERROR').upper(), logging.ERROR)
    logging.basicConfig(level=level, stream=sys.stderr)

    validate_sources(url1, url2, file1, file2)

    source1 = Source(location=file1, is_file=True) if file1 else Source(location=url1)
    source2 = Source(location=file2, is_file=True) if file2 else Source(location=url2)

    evaluator = None if no_ai else AzureOpenAIEvaluator(settings)
    analyzer = DomDiffAnalyzer(evaluator=evaluator, fetch_timeout=settings.fetch_timeout)

    if not as_json:
        console.print("[blue]Comparing sources...[/blue]")

    try:
        result = asyncio.run(analyzer.compare_sources(
            source1, source2, model=model, evaluate=not no_ai, render=render
        ))
    except DomDiffError as e:
        fail(str(e))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        return

    console.print(f"[green]Found {result.diff.count} difference(s)[/green]")
    print_report(result)


if __name__ == "__main__":
    main()
