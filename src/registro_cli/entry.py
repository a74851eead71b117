#!/usr/bin/env python3
# -*- coding: utf-8 -*-
import asyncio
import logging
import signal
import click
from typing import Optional, Sequence
from prompt_toolkit import PromptSession

from rich.logging import RichHandler
from rich.panel import Panel
from rich.text import Text

from registro_cli.client import HttpClient
from registro_cli.display import Notifier, console, print_rule
from registro_cli.form import FileInput, RegistrationForm
from registro_cli.submitter import FormSubmitter
from registro_cli.utils import Config, SubmitResult

logger = logging.getLogger(__name__)


def setup_logging(debug: bool):
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=debug)],
        force=True,
    )


def build_submitter(cfg: Config, notifier: Optional[Notifier] = None) -> FormSubmitter:
    return FormSubmitter(
        form=RegistrationForm(fields=list(cfg.fields)),
        file_input=FileInput(),
        http=HttpClient(cfg),
        notifier=notifier or Notifier(),
    )


def parse_field_args(pairs: Sequence[str]) -> dict:
    values = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise click.BadParameter(f"Expected name=value, got {pair!r}", param_hint="--field")
        values[name.strip()] = value
    return values


# ========== Application Orchestrator ==========
class App:
    def __init__(self, cfg: Config):
        self.cfg = cfg
        self.submitter = build_submitter(cfg)
        self.session = PromptSession()
        self.counter = 1

    def run(self):
        self._print_banner()

        while True:
            try:
                self._fill_form()
                self._handle_submit()
                self.counter += 1
            except KeyboardInterrupt:
                console.print("[warn] Input cancelled.（Ctrl+C）[/warn]")
                continue
            except EOFError:
                console.print("\n[info]Exited.（Ctrl+D）[/info]")
                break
            except Exception as e:
                logger.exception("Unexpected error in registration #%d", self.counter)
                console.print(Panel.fit(Text(repr(e), no_wrap=False), title="Unexpected error !", border_style="red"))
                self.counter += 1
                continue

    # ========== Internal helpers ==========
    def _fill_form(self):
        form = self.submitter.form
        print_rule(f"Registro #{self.counter}")
        for fld in form.fields:
            mark = "*" if fld.required else " "
            value = self.session.prompt(f"{mark} {fld.label}: ", default=form.get(fld.name))
            form.set(fld.name, value)
        path = self.session.prompt("  Archivo (opcional): ").strip()
        self.submitter.file_input.select(path or None)

    def _handle_submit(self):
        console.print(f"[info]Send registration to ->[/info] {self.cfg.url}")
        result = asyncio.run(self.submitter.submit())
        if self.cfg.debug:
            console.print(Panel.fit(Text(repr(result), no_wrap=False), title="Result", border_style="cyan"))

    def _print_banner(self):
        console.rule("[info]Start[/info]")
        console.print(Panel.fit(
                Text(
                        "Descriptions：\n"
                        " - Fields marked with * are required\n"
                        " - Leave the file path empty to send without attachment\n"
                        " - Cancel：Ctrl+C\n"
                        " - Exit：Ctrl+D",
                        no_wrap=False
                ),
                title="Help", border_style="cyan"
        ))
        console.print(f"[info]Your endpoint：[/info]{self.cfg.url}")
        if not self.cfg.verify_tls:
            console.print("[warn] Disable tls verification !（--insecure）[/warn]")


# ========== CLI with Click ==========

@click.group()
@click.option("--url", help="Registration endpoint, once config, anytime use in ~/.registro.cli.toml")
@click.option("--timeout", type=int, default=None, help="Max timeout in seconds.  [default: 30]")
@click.option("--insecure", is_flag=True, help="Whether disable tls.")
@click.option("--debug", "-d", is_flag=True, help="Start with debug mode.")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="Config file.  [default: ~/.registro.cli.toml]")
@click.pass_context
def cli(ctx, url, timeout, insecure, debug, config_path):
    """
    registro-cli: Send registration forms to a remote endpoint.
    """
    signal.signal(signal.SIGINT, signal.SIG_DFL)

    class Args:
        pass
    args = Args()
    args.url = url
    args.timeout = timeout
    args.insecure = insecure
    args.debug = debug
    args.config = config_path
    try:
        cfg = Config.init_form_args(args)
    except ValueError as e:
        raise click.UsageError(str(e))
    setup_logging(cfg.debug)
    ctx.obj = {"cfg": cfg}


@cli.command("submit")
@click.option("--field", "-f", "fields", multiple=True, metavar="NAME=VALUE", help="Form field value, repeatable.")
@click.option("--archivo", "-a", type=click.Path(dir_okay=False), help="Optional file to attach.")
@click.pass_context
def submit_cmd(ctx, fields, archivo):
    """Submit the form once."""
    cfg = ctx.obj["cfg"]
    submitter = build_submitter(cfg)
    try:
        for name, value in parse_field_args(fields).items():
            submitter.form.set(name, value)
    except KeyError as e:
        raise click.BadParameter(str(e.args[0]), param_hint="--field")
    submitter.file_input.select(archivo)

    result: SubmitResult = asyncio.run(submitter.submit())
    ctx.exit(0 if result.ok else 1)


@cli.command("run")
@click.pass_context
def run_cmd(ctx):
    """Start the interactive registration app."""
    cfg = ctx.obj["cfg"]
    app = App(cfg)
    app.run()


def main():
    cli(prog_name="registro-cli")


if __name__ == "__main__":
    main()
