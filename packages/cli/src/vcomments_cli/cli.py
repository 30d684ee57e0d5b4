"""CLI entry point for vcomments.

Commands:
  comment  — reconcile a violations file against a pull request's comments
"""

from __future__ import annotations

import importlib.metadata

import click

from vcomments_cli.commands.comment import comment_cmd


@click.group()
@click.version_option(
    version=importlib.metadata.version("vcomments"),
    prog_name="vcomments",
)
@click.option(
    "--config",
    "config_path",
    default=".vcomments.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="VCOMMENTS_CONFIG",
)
@click.pass_context
def main(ctx: click.Context, config_path: str):
    """Comment static-analysis violations on GitHub pull requests."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


main.add_command(comment_cmd)
