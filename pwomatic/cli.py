"""CLI for Password-O-Matic: serve, sample, generate, config (show/set)."""

import argparse
import json
from rich import print
from rich.table import Table
from rich.text import Text

from .certs import ensure_self_signed_cert
from .config import DEFAULTS, config_path, load_config, policy_from_config, save_config
from .errors import CertificateError, GenerationError, WordListError
from .generator import Mode, generate
from .logs import setup_logging
from .spweb.api import create_app
from .wordlist import load_wordlist

def _load_words(args):
    path = args.dictionary or args.cfg["dictionary"]
    try:
        return load_wordlist(path)
    except WordListError as e:
        print(f"[red]Failed to load dictionary: {e}[/red]")
        return None

def _load_policy(args):
    try:
        return policy_from_config(args.cfg)
    except ValueError as e:
        print(f"[red]Invalid password settings in config: {e}[/red]")
        return None

def cmd_serve(args):
    cfg = args.cfg
    policy = _load_policy(args)
    if policy is None:
        return 1
    words = _load_words(args)
    if words is None:
        return 1
    cert = args.cert or cfg["cert_file"]
    key = args.key or cfg["key_file"]
    try:
        ensure_self_signed_cert(cert, key)
    except CertificateError as e:
        print(f"[red]Could not create TLS cert: {e}[/red]")
        return 1
    host = args.host or cfg["host"]
    port = args.port or cfg["port"]
    batch = args.batch_size or cfg["batch_size"]
    app = create_app(words, batch_size=batch, policy=policy)
    print(f"[bold green]Serving on https://{host}:{port}[/bold green] (copy button will work with HTTPS)")
    app.run(host=host, port=port, ssl_context=(cert, key))
    return 0

def cmd_sample(args):
    """Print passwords prefixed by their length, to eyeball the length bounds."""
    policy = _load_policy(args)
    if policy is None:
        return 1
    words = _load_words(args)
    if words is None:
        return 1
    count = args.count if args.count is not None else args.cfg["sample_size"]
    for _ in range(count):
        try:
            result = generate(args.mode, words, policy=policy)
        except GenerationError as e:
            print(f"[red]error: {e}[/red]")
            continue
        print(Text(f"{len(result.password)} {result.password}"))
    return 0

def cmd_generate(args):
    policy = _load_policy(args)
    if policy is None:
        return 1
    words = _load_words(args)
    if words is None:
        return 1
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("#", width=4)
    table.add_column(f"Password ({Mode.parse(args.mode).value})")
    fell_back = False
    for i in range(args.copies):
        try:
            result = generate(args.mode, words, policy=policy)
        except GenerationError as e:
            print(f"[red]Could not generate password: {e}[/red]")
            return 1
        fell_back = fell_back or result.fell_back
        table.add_row(str(i + 1), Text(result.password))
    print(table)
    if fell_back:
        print("[yellow]Fell back to normal mode for some passwords.[/yellow]")
    return 0

# Config subcommands

def cmd_config_show(args):
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Setting")
    table.add_column("Value")
    for name in sorted(args.cfg):
        table.add_row(name, Text(json.dumps(args.cfg[name])))
    print(table)
    print(f"Config file: {args.config or config_path()}")
    return 0

def cmd_config_set(args):
    """Update one setting and write the config file."""
    if args.key not in DEFAULTS:
        print(f"[red]Unknown setting: {args.key}[/red]")
        return 1
    try:
        value = json.loads(args.value)
    except ValueError:
        value = args.value
    cfg = dict(args.cfg)
    cfg[args.key] = value
    try:
        policy_from_config(cfg)
    except ValueError as e:
        print(f"[red]Invalid password settings: {e}[/red]")
        return 1
    path = save_config(cfg, args.config)
    print(f"[green]Saved {args.key} to:[/green] {path}")
    return 0

def _add_dictionary(p):
    p.add_argument("--dictionary", "-d", type=str, help="Word list file, one word per line")

def _add_mode(p, default):
    p.add_argument("--mode", "-m", type=str, default=default,
                   help="normal, readability or random (unknown values mean normal)")

def main(argv=None):
    parser = argparse.ArgumentParser(prog="pwomatic")
    parser.add_argument("--config", "-c", type=str, help="Path to config.json")
    parser.add_argument("--log-level", type=str, help="Log level (DEBUG, INFO, WARNING...)")
    sub = parser.add_subparsers(dest="cmd", required=True)

    srv = sub.add_parser("serve", help="Serve the password page over HTTPS")
    _add_dictionary(srv)
    srv.add_argument("--host", type=str, help="Bind address")
    srv.add_argument("--port", type=int, help="Port")
    srv.add_argument("--cert", type=str, help="TLS certificate (created if missing)")
    srv.add_argument("--key", type=str, help="TLS private key (created if missing)")
    srv.add_argument("--batch-size", type=int, help="Passwords per page")
    srv.set_defaults(func=cmd_serve)

    smp = sub.add_parser("sample", help="Print sample passwords with their lengths")
    _add_dictionary(smp)
    _add_mode(smp, Mode.NORMAL.value)
    smp.add_argument("--count", "-n", type=int, help="How many passwords to print")
    smp.set_defaults(func=cmd_sample)

    gen = sub.add_parser("generate", help="Generate one or more passwords")
    _add_dictionary(gen)
    _add_mode(gen, Mode.NORMAL.value)
    gen.add_argument("--copies", type=int, default=1, help="How many passwords to generate")
    gen.set_defaults(func=cmd_generate)

    c = sub.add_parser("config", help="Show or change settings")
    csub = c.add_subparsers(dest="ccmd", required=True)

    c_show = csub.add_parser("show", help="Show the effective settings")
    c_show.set_defaults(func=cmd_config_show)

    c_set = csub.add_parser("set", help="Change a setting and save the config file")
    c_set.add_argument("key", type=str, help="Setting name (see config show)")
    c_set.add_argument("value", type=str, help="New value, parsed as JSON when possible")
    c_set.set_defaults(func=cmd_config_set)

    args = parser.parse_args(argv)
    args.cfg = load_config(args.config)
    setup_logging(args.log_level or args.cfg["log_level"])
    return args.func(args)

if __name__ == "__main__":
    raise SystemExit(main())
