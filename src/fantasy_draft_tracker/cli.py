import logging

import typer

from fantasy_draft_tracker.draft.cli import draft_app

app = typer.Typer(help="Fantasy baseball draft tracker.")
app.add_typer(draft_app, name="draft")


@app.callback()
def main_callback(
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="Increase verbosity (-v info, -vv debug)."),
) -> None:
    if verbose >= 1:
        logging.basicConfig(
            level=logging.DEBUG if verbose >= 2 else logging.INFO,
            format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
