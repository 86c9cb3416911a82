"""
ReleaseHub administration CLI.

Commands to inspect and publish release binaries and to query the
download and version-check audits.
"""

import json
import sys
from contextlib import contextmanager
from datetime import date, datetime
from pathlib import Path
from typing import Dict, Iterator, Optional

import click
from botocore.exceptions import BotoCoreError, ClientError
from sqlalchemy.orm import Session

from releasehub import __version__
from releasehub.config.settings import get_settings
from releasehub.db.database import get_db, init_db
from releasehub.models.platform import PlatformType
from releasehub.services.artifact_service import ArtifactService
from releasehub.services.audit_service import AuditService
from releasehub.services.exceptions import ServiceError
from releasehub.services.issue_service import IssueService
from releasehub.storage import create_storage_adapter
from releasehub.utils.version import VersionCodec


PLATFORM_CHOICES = [p.name.lower() for p in PlatformType]


def _fail(message: str) -> None:
    click.echo(click.style("Error: ", fg="red", bold=True) + message, err=True)
    sys.exit(1)


def _artifact_service() -> ArtifactService:
    settings = get_settings()
    return ArtifactService(create_storage_adapter(settings), VersionCodec(settings.version_pattern))


@contextmanager
def _db_session() -> Iterator[Session]:
    init_db()
    yield from get_db()


def _parse_date(ctx, param, value: Optional[str]) -> Optional[date]:
    """Click callback parsing YYYY-MM-DD."""
    if value is None:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise click.BadParameter(f"'{value}' is not a date in YYYY-MM-DD format")


def _echo_counts(counts: Dict[date, int], as_json: bool) -> None:
    ordered = sorted(counts.items())
    if as_json:
        click.echo(json.dumps({d.isoformat(): n for d, n in ordered}, indent=2))
        return
    if not ordered:
        click.echo("No events in range.")
        return
    for day, count in ordered:
        click.echo(f"{day.isoformat()}  {count}")


@click.group()
@click.version_option(version=__version__, prog_name="releasehub")
def cli() -> None:
    """
    ReleaseHub - release binary distribution.

    Storage and database are configured through RELEASEHUB_* environment
    variables or a .env file.
    """


@cli.command()
@click.option("--platform", "platform_name", type=click.Choice(PLATFORM_CHOICES),
              help="Only resolve this platform")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def latest(platform_name: Optional[str], as_json: bool) -> None:
    """Show the latest binary of each platform."""
    try:
        service = _artifact_service()
        if platform_name:
            artifact = service.latest(PlatformType.parse(platform_name))
            artifacts = [artifact] if artifact else []
        else:
            artifacts = service.latest_all()
    except (ServiceError, ValueError, OSError, ClientError, BotoCoreError) as e:
        _fail(str(e))

    if as_json:
        click.echo(json.dumps([a.to_dict() for a in artifacts], indent=2))
        return
    if not artifacts:
        click.echo("No binaries found.")
        return
    for artifact in artifacts:
        click.echo(
            f"{artifact.platform_type.name.lower():<18} {artifact.version:<10} "
            f"{artifact.size_bytes:>12}  {artifact.location}"
        )


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def upload(file: Path) -> None:
    """Upload FILE, replacing any binary of the same name."""
    try:
        _artifact_service().upload_or_replace(file.name, file.read_bytes())
    except (ServiceError, ValueError, OSError, ClientError, BotoCoreError) as e:
        _fail(str(e))
    click.echo(click.style("Uploaded ", fg="green") + file.name)


@cli.command()
@click.argument("name")
def delete(name: str) -> None:
    """Delete the binary NAME if it exists."""
    try:
        _artifact_service().delete_if_exists(name)
    except (ServiceError, ValueError, OSError, ClientError, BotoCoreError) as e:
        _fail(str(e))
    click.echo(f"Deleted {name}")


@cli.command()
@click.option("--platform", "platform_name", type=click.Choice(PLATFORM_CHOICES), required=True)
@click.option("--start", "start_date", required=True, callback=_parse_date, help="YYYY-MM-DD")
@click.option("--end", "end_date", required=True, callback=_parse_date, help="YYYY-MM-DD")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def downloads(platform_name: str, start_date: date, end_date: date, as_json: bool) -> None:
    """Show downloads per day for a platform."""
    with _db_session() as db:
        try:
            counts = AuditService(db).downloads_by_date(
                PlatformType.parse(platform_name), start_date, end_date
            )
        except ServiceError as e:
            _fail(str(e))
    _echo_counts(counts, as_json)


@cli.command("version-checks")
@click.option("--start", "start_date", required=True, callback=_parse_date, help="YYYY-MM-DD")
@click.option("--end", "end_date", required=True, callback=_parse_date, help="YYYY-MM-DD")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def version_checks(start_date: date, end_date: date, as_json: bool) -> None:
    """Show version checks per day across all platforms."""
    with _db_session() as db:
        try:
            counts = AuditService(db).version_checks_by_date(start_date, end_date)
        except ServiceError as e:
            _fail(str(e))
    _echo_counts(counts, as_json)


@cli.command()
@click.option("--offset", default=0, show_default=True, type=int)
@click.option("--limit", default=20, show_default=True, type=int)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def issues(offset: int, limit: int, as_json: bool) -> None:
    """List reported issues, newest first."""
    with _db_session() as db:
        service = IssueService(db, get_settings().app_version_pattern)
        try:
            page = service.list_issues(offset=offset, limit=limit)
        except ServiceError as e:
            _fail(str(e))
        items = [issue.to_dict() for issue in page.items]

    if as_json:
        click.echo(json.dumps({"total": page.total, "items": items}, indent=2))
        return
    click.echo(f"{page.total} issue(s)")
    for item in items:
        click.echo(f"#{item['id']:<6} {item['occurred_at']}  {item['app_version']:<16} {item['value']}")


@cli.command("download-counts")
def download_counts() -> None:
    """Show total downloads per version and platform."""
    with _db_session() as db:
        rows = AuditService(db).download_counts_by_version()
    if not rows:
        click.echo("No downloads recorded.")
        return
    for row in rows:
        click.echo(f"{row.app_version:<10} {row.platform_type.name.lower():<18} {row.count}")


def main() -> None:
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
