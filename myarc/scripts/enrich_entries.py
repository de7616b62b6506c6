"""CLI command for backfilling enrichment on entries that never got it.

Usage:
    flask enrich-entries                  # All users
    flask enrich-entries --user 1         # One user
    flask enrich-entries --limit 50
"""

from __future__ import annotations

import click
from flask.cli import with_appcontext


@click.command("enrich-entries")
@click.option("--user", "-u", type=int, help="Only entries owned by this user ID")
@click.option("--limit", "-l", type=int, default=100, show_default=True, help="Maximum entries to process")
@with_appcontext
def enrich_entries_command(user: int | None, limit: int):
    """Run the enrichment pipeline for entries without analysis."""
    from myarc.core.ai.clients import get_ai_clients
    from myarc.domains.journal.models import JournalEntry
    from myarc.domains.journal.services.enrichment_service import enrich_entry

    if not get_ai_clients().gemini.configured:
        click.echo("GEMINI_API_KEY is not set; nothing to do.", err=True)
        return

    query = JournalEntry.query.filter(JournalEntry.analyzed_at.is_(None))
    if user:
        query = query.filter(JournalEntry.user_id == user)
    entries = query.order_by(JournalEntry.created_at.asc()).limit(limit).all()

    analyzed = 0
    for entry in entries:
        if enrich_entry(entry) is not None:
            analyzed += 1
    click.echo(f"Processed {len(entries)} entries, analyzed {analyzed}.")


def register_commands(app):
    """Register CLI commands with the app."""
    app.cli.add_command(enrich_entries_command)
