from __future__ import annotations

import logging
from typing import Optional

import typer

from vigenerecracker.classical.polyalphabetic.vigenere import VigenereEngine
from vigenerecracker.core.errors import VigenereError
from vigenerecracker.core.utils import estimate_seconds, format_duration, restrict_to_range

app = typer.Typer(help="Vigenère cipher tools: encrypt, decrypt, layer, and brute-force key search.")


@app.callback()
def _init(
    ctx: typer.Context,
    first: str = typer.Option("A", "--first", envvar="VIGENERE_FIRST", help="First character of the alphabet."),
    last: str = typer.Option("Z", "--last", envvar="VIGENERE_LAST", help="Last character of the alphabet."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log search progress to stderr."),
):
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    try:
        ctx.obj = VigenereEngine.from_chars(first, last)
    except VigenereError as e:
        raise typer.BadParameter(str(e))


def _prepare(engine: VigenereEngine, text: str, clean: bool) -> str:
    if clean:
        return restrict_to_range(text, engine.alphabet.start, engine.alphabet.end)
    return text


@app.command()
def encrypt(
    ctx: typer.Context,
    key: str = typer.Option(..., "--key", "-k", help="Encryption key."),
    text: str = typer.Argument(..., help="Plaintext to encrypt."),
    clean: bool = typer.Option(False, "--clean", help="Drop characters outside the alphabet first."),
):
    """Encrypt plaintext with a repeating key."""
    engine: VigenereEngine = ctx.obj
    try:
        typer.echo(engine.encrypt(key, _prepare(engine, text, clean)))
    except VigenereError as e:
        raise typer.BadParameter(str(e))


@app.command()
def decrypt(
    ctx: typer.Context,
    key: str = typer.Option(..., "--key", "-k", help="Decryption key."),
    text: str = typer.Argument(..., help="Ciphertext to decrypt."),
    clean: bool = typer.Option(False, "--clean", help="Drop characters outside the alphabet first."),
):
    """Decrypt ciphertext when you already have the key."""
    engine: VigenereEngine = ctx.obj
    try:
        typer.echo(engine.decrypt(key, _prepare(engine, text, clean)))
    except VigenereError as e:
        raise typer.BadParameter(str(e))


@app.command()
def layer(ctx: typer.Context, text: str = typer.Argument(...)):
    """Encrypt text using itself as the key."""
    engine: VigenereEngine = ctx.obj
    try:
        typer.echo(engine.layer(text))
    except VigenereError as e:
        raise typer.BadParameter(str(e))


@app.command("next-key")
def next_key(
    ctx: typer.Context,
    key: str = typer.Argument(...),
    count: int = typer.Option(1, "--count", "-n", help="How many successors to print."),
):
    """Print the key(s) that follow KEY in enumeration order."""
    engine: VigenereEngine = ctx.obj
    try:
        for _ in range(count):
            key = engine.next_key(key)
            typer.echo(key)
    except VigenereError as e:
        raise typer.BadParameter(str(e))


@app.command()
def crack(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Ciphertext to attack."),
    length: int = typer.Option(..., "--length", "-l", help="Key length to search."),
    target: Optional[str] = typer.Option(
        None, "--scan", "-s", help="Stop at the first key whose decryption contains this word."
    ),
    workers: int = typer.Option(1, "--workers", "-w", min=1, help="Worker processes; only valid with --scan."),
    clean: bool = typer.Option(False, "--clean", help="Drop characters outside the alphabet first."),
):
    """
    Try every key of the given length. Without --scan, print every attempt
    as KEY: PLAINTEXT.
    """
    engine: VigenereEngine = ctx.obj
    ciphertext = _prepare(engine, text, clean)

    if target is None:
        if workers > 1:
            raise typer.BadParameter("--workers only applies together with --scan.")
        try:
            candidates = engine.brute_force(length, ciphertext)
        except VigenereError as e:
            raise typer.BadParameter(str(e))
        for c in candidates:
            typer.echo(f"{c.key}: {c.plaintext}")
        return

    try:
        if workers > 1:
            from vigenerecracker.core.parallel import parallel_search

            result = parallel_search(engine, length, target, ciphertext, workers=workers)
        else:
            result = engine.search(length, target, ciphertext)
    except VigenereError as e:
        raise typer.BadParameter(str(e))

    if not result.found:
        typer.echo(f"Not found ({result.keys_tried} keys tried).")
        raise typer.Exit(code=1)

    typer.echo(f"key={result.key}  keys_tried={result.keys_tried}")
    typer.echo(engine.decrypt(result.key, ciphertext))


@app.command()
def estimate(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Sample ciphertext used to time decryption."),
    length: int = typer.Option(..., "--length", "-l", help="Largest key length to project."),
    sample: int = typer.Option(2000, "--sample", min=1, help="Keys to time before extrapolating."),
):
    """Measure brute-force speed and project exhaustive search time per key length."""
    engine: VigenereEngine = ctx.obj
    try:
        rate = engine.measure_rate(min(length, 3), text, sample=sample)
        typer.echo(f"rate: {rate:,.0f} keys/s")
        for klen in range(1, length + 1):
            space = engine.keyspace_size(klen)
            typer.echo(f"  L={klen:2d}  keys={space:,}  time={format_duration(estimate_seconds(space, rate))}")
    except VigenereError as e:
        raise typer.BadParameter(str(e))


def main():
    app()


if __name__ == "__main__":
    main()
