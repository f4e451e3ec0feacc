"""
Command-line interface for Bill Search Tool
"""

import click
import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from tqdm import tqdm

from storage.record_store import RecordStore, RecordLoadError
from search.criteria import SearchCriteria, UnknownCriterionError
from search.single_search import first_segment
from search.orchestrator import BillSearch, ResultsWriteError
from utils.config import AppConfig, load_config
from utils.exporters import ExportConfig, ExportError, get_exporter, get_supported_formats, \
    export_committee_statistics
from utils.logging_config import init_from_environment

# Load environment variables
load_dotenv('config.env')

logger = logging.getLogger(__name__)


@click.group()
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.option('--config', 'config_file', default='config.env', help='Path to configuration file')
@click.pass_context
def cli(ctx, debug, config_file):
    """Bill Search Tool - filter a legislative bill spreadsheet by search criteria"""

    if debug:
        logging.getLogger().setLevel(logging.DEBUG)

    ctx.ensure_object(dict)
    ctx.obj['debug'] = debug
    ctx.obj['config'] = load_config(config_file)


def _load_store(file_path: Optional[str], config: AppConfig) -> RecordStore:
    """Load the spreadsheet named on the command line or in the configuration"""
    path = file_path or config.data_file
    if not path:
        raise click.UsageError("Please load a file first: pass FILE or set BILLSEARCH_DATA_FILE")

    logger.debug(f"Loading bills from {path}")
    store = RecordStore()
    with tqdm(desc=f"Loading {Path(path).name}", unit="rows", leave=False) as pbar:
        def progress(count):
            pbar.update(count - pbar.n)

        store.load(path, progress_callback=progress)
    return store


def resolve_output_path(output: Optional[str], config: AppConfig, export_format: str) -> str:
    """
    Turn the --output value into a results file path

    A directory gets the configured results file name; anything else is
    taken as a file path whose folder must already exist.
    """
    target = output or config.output_dir

    if os.path.isdir(target):
        return config.results_path_for(export_format, output_dir=target)

    parent = os.path.dirname(target) or '.'
    if not os.path.isdir(parent):
        raise click.BadParameter(f"Please select a valid output folder ({parent} does not exist)",
                                 param_hint="'--output'")
    return target


@cli.command()
@click.argument('file', required=False)
@click.option('--output', '-o', help='Output folder or file for the results')
@click.option('--title', '-t', help="Title (such as '2023 Senate Bill 1')")
@click.option('--description', '-d', help='Text contained in the description')
@click.option('--session', '-s', 'legislative_session', help='Legislative session')
@click.option('--committee', '-c', help="Committee (such as 'Committee on Universities and Revenue')")
@click.option('--senator-author', help="Senate author (such as 'Larson' or 'Joint Legislative Council')")
@click.option('--representative-author', help="Representative author (such as 'Sinicki')")
@click.option('--keywords', '-k', help="Keywords, comma separated (such as 'Drugs, Physician')")
@click.option('--senators', 'senators_intro_committee',
              help="Senators/intro committees, comma separated (such as 'Larson, Carpenter')")
@click.option('--representatives', '-r', help="Representatives, comma separated (such as 'Sinicki, Andraca')")
@click.option('--trim-tokens', is_flag=True,
              help='Strip spaces around comma separated terms')
@click.option('--format', '-f', 'export_format', type=click.Choice(get_supported_formats()),
              help='Results file format')
@click.option('--preview', '-p', default=0, help='Print the first N matching bills')
@click.pass_context
def search(ctx, file, output, title, description, legislative_session, committee,
           senator_author, representative_author, keywords, senators_intro_committee,
           representatives, trim_tokens, export_format, preview):
    """Search a bill spreadsheet and save the matching bills"""

    config: AppConfig = ctx.obj['config']
    export_format = export_format or config.export_format
    trim_tokens = trim_tokens or config.trim_tokens

    try:
        output_path = resolve_output_path(output, config, export_format)
        store = _load_store(file, config)

        criteria = SearchCriteria.from_form(
            title=title,
            description=description,
            legislative_session=legislative_session,
            committee=committee,
            senator_author=senator_author,
            representative_author=representative_author,
            keywords=keywords,
            senators_intro_committee=senators_intro_committee,
            representatives=representatives
        )

        bill_search = BillSearch(
            store,
            exporter=get_exporter(export_format, ExportConfig(format=export_format)),
            trim_tokens=trim_tokens
        )

        click.echo(f"🔍 Searching {len(store)} bills: {criteria.describe()}")
        outcome = bill_search.search_by_criteria(criteria, output_path)

        if not outcome.found:
            click.echo("No matching results found.")
            return

        click.echo(f"Search results saved to: \n{outcome.output_path}")
        click.echo(f"📄 {outcome.match_count} matching bills")

        if preview:
            for i, record in enumerate(outcome.records[:preview], 1):
                _echo_record(i, record)

    except (RecordLoadError, ResultsWriteError, UnknownCriterionError, ValueError) as e:
        click.echo(f"❌ An error occurred: {e}", err=True)
        if ctx.obj['debug']:
            raise
        ctx.exit(1)


@cli.command()
@click.argument('file', required=False)
@click.option('--output', '-o', help='Statistics file (defaults to the configured name in the output folder)')
@click.option('--top', default=10, help='Number of committees to display')
@click.pass_context
def stats(ctx, file, output, top):
    """Count bills per committee and save the counts"""

    config: AppConfig = ctx.obj['config']

    try:
        store = _load_store(file, config)
        statistics = store.committee_statistics()

        output_path = output or os.path.join(config.output_dir, config.stats_filename)
        export_committee_statistics(statistics, output_path)

        click.echo(f"📊 {len(store):,} bills across {len(statistics)} committees\n")
        for stat in sorted(statistics, key=lambda s: s.count, reverse=True)[:top]:
            click.echo(f"   • {stat.committee or '(no committee)'}: {stat.count:,}")

        click.echo(f"\nCommittee statistics have been generated and saved to {output_path}")

    except (RecordLoadError, ExportError) as e:
        click.echo(f"❌ Failed to generate statistics: {e}", err=True)
        if ctx.obj['debug']:
            raise
        ctx.exit(1)


@cli.command('list-records')
@click.argument('file', required=False)
@click.option('--limit', '-l', default=10, help='Number of records to display')
@click.pass_context
def list_records(ctx, file, limit):
    """List bills in a spreadsheet"""

    config: AppConfig = ctx.obj['config']

    try:
        store = _load_store(file, config)

        click.echo(f"📋 Bills in {store.source_path} (showing {min(limit, len(store))} of {len(store)}):\n")

        for i, record in enumerate(store.records[:limit], 1):
            _echo_record(i, record)

        if not len(store):
            click.echo("   No records found!")

    except RecordLoadError as e:
        click.echo(f"❌ Failed to list records: {e}", err=True)
        if ctx.obj['debug']:
            raise
        ctx.exit(1)


@cli.command()
@click.option('--host', default='localhost', help='Host to bind to')
@click.option('--port', default=8000, help='Port to bind to')
@click.option('--reload', is_flag=True, help='Enable auto-reload for development')
@click.pass_context
def serve(ctx, host, port, reload):
    """Start the web search form"""

    import uvicorn

    click.echo(f"🌐 Starting web interface at http://{host}:{port}")
    click.echo("   Press Ctrl+C to stop")

    uvicorn.run(
        "web.app:app",
        host=host,
        port=port,
        reload=reload,
        log_level="info"
    )


def _echo_record(index: int, record) -> None:
    click.echo(f"{index:3d}. {record.title or 'Untitled'}")
    if record.legislative_session:
        click.echo(f"     📅 Session: {record.legislative_session}")
    author = first_segment(record.senators_intro_committee) or first_segment(record.representatives)
    if author:
        click.echo(f"     ✍️  Author: {author.strip()}")
    if record.committee:
        click.echo(f"     🏛️  Committee: {record.committee}")
    if record.description:
        desc = record.description[:200] + "..." if len(record.description) > 200 else record.description
        click.echo(f"     📝 {desc}")


def main():
    """Main entry point"""
    init_from_environment()
    cli()


if __name__ == '__main__':
    main()
