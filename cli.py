import asyncio
import sys
from functools import partial
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from config.logic import apply_cli_overrides, load_and_merge_configs
from core.applier import confirm
from core.contracts.models import Proposal
from core.pipeline import CommitPipeline
from utils.errors import AICommandError
from utils.logger import setup_logger, logger


def run_proposal(pipeline: CommitPipeline) -> Optional[Proposal]:
    """
    Runs the inspection, description and generation stages.
    """
    return asyncio.run(pipeline.propose())


@click.group(invoke_without_command=True)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Enable debug logging.",
)
@click.pass_context
def cli(ctx, verbose: bool):
    """
    Commit working-tree changes with an AI-generated semantic commit message.

    Runs 'generate' when no sub-command is given.
    """
    setup_logger(log_level="DEBUG" if verbose else "WARNING")

    ctx.obj = {'verbose': verbose}

    if ctx.invoked_subcommand is None:
        ctx.invoke(generate)


@cli.command("generate")
@click.option(
    "-c", "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to a configuration file that replaces all others.",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Generate the commit message but do not commit.",
)
@click.option("--provider", type=str, help="Override the completion provider (e.g. 'openai').")
@click.option("--model", type=str, help="Override the model name (e.g. 'gpt-4-turbo').")
@click.pass_context
def generate(ctx, config_path: Optional[str], dry_run: bool, provider: Optional[str], model: Optional[str]):
    """
    Generate a commit message for the working-tree changes and commit them.
    """
    console = Console()
    verbose = (ctx.obj or {}).get('verbose', False)

    try:
        config = load_and_merge_configs(custom_config_path=config_path)
        setup_logger(
            log_level="DEBUG" if verbose else config.logging.level,
            log_file=config.logging.file,
        )
        config = apply_cli_overrides(config, provider, model)

        pipeline = CommitPipeline(config)
        with console.status("[bold green]Generating commit message...[/bold green]"):
            proposal = run_proposal(pipeline)

        if proposal is None:
            console.print("No changes to commit.")
            return

        console.print("Generated commit message:")
        console.print(Panel(Text(proposal.message), border_style="cyan", expand=False))

        if dry_run:
            console.print("\n[yellow]Dry run: nothing was committed.[/yellow]")
            return

        prompt_fn = partial(click.prompt, default="", show_default=False)
        if not confirm(prompt_fn, config.commit.confirm_token):
            console.print("Commit aborted by user.")
            return

        record = pipeline.apply(proposal.message)
        console.print(f"Committed changes with hash: {record.hexsha}")

    except AICommandError as e:
        logger.opt(exception=verbose).error(f"{type(e).__name__}: {e}")
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}", highlight=False)
        sys.exit(1)
    except click.exceptions.Abort:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        console.print(f"[bold red]Unexpected error:[/bold red] {escape(str(e))}", highlight=False)
        sys.exit(1)


def main():
    cli()


if __name__ == "__main__":
    main()
