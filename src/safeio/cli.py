"""CLI implementation for safeio."""

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

import typer

from . import read_source, read_source_sync
from .core.model import ReadResult
from .core.size import ByteSize, parse_byte_size
from .core.util import result_asdict
from .io import DEFAULT_LIMIT, close_global_client

app = typer.Typer(add_completion=False, help="Read files and URLs to completion under a size limit.")


def iter_sources(files: list[str]) -> list[str]:
    """Get list of sources from files argument or stdin."""
    if "-" in files:
        # stdin mode
        stdin_lines = [ln.strip() for ln in sys.stdin if ln.strip()]
        if not stdin_lines:
            return []
        return stdin_lines
    elif files:
        return list(files)
    return []


def _parse_limit(value: str) -> ByteSize:
    try:
        return parse_byte_size(value)
    except ValueError as e:
        raise typer.BadParameter(str(e))


async def _batch_read(sources: list[str], limit: ByteSize) -> list[ReadResult]:
    """Asynchronously read a list of sources."""
    tasks = [read_source(src, limit) for src in sources]
    try:
        results = await asyncio.gather(*tasks, return_exceptions=True)
    finally:
        await close_global_client()
    processed_results = []
    for res in results:
        if isinstance(res, Exception):
            processed_results.append(ReadResult(data=b"", error=res, limit=limit))
        else:
            processed_results.append(res)
    return processed_results


@app.command()
def main(
    files: list[str] = typer.Argument(None, help="Files or URLs to read, or '-' for stdin"),
    limit: str = typer.Option(str(int(DEFAULT_LIMIT)), "--limit", "-l", envvar="SAFEIO_LIMIT",
                              help="Maximum bytes to keep per source, e.g. 512, 64KB, 10MB"),
    bytes: Optional[int] = typer.Option(None, "--bytes", min=0, help="Peek first N bytes (Base64)"),
    fields: Optional[str] = typer.Option(None, "--fields", help="Comma-separated subset of keys to emit"),
    jsonl: bool = typer.Option(False, "--jsonl", help="Force JSON-lines output"),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Write to PATH instead of stdout"),
    sync: bool = typer.Option(False, "--sync", help="Force synchronous I/O"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr"),
):
    """Read one or many local paths or URLs, refusing to keep more than --limit bytes each."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr,
                            format="%(levelname)s %(name)s: %(message)s")

    max_bytes = _parse_limit(limit)
    sel_fields = set(fields.split(",")) if fields else None
    sources = iter_sources(files or [])

    if not sources:
        typer.echo("No input files given.", err=True)
        raise typer.Exit(code=1)

    results: list[ReadResult] = []
    if sync:
        for src in sources:
            try:
                parsed_url = urlparse(src)
                if parsed_url.scheme and parsed_url.netloc:  # It's a URL
                    res = read_source_sync(src, max_bytes)
                else:  # It's a local path
                    res = read_source_sync(str(Path(src).resolve()), max_bytes)
            except Exception as e:
                res = ReadResult(data=b"", error=e, limit=max_bytes)
            results.append(res)
    else:
        results = asyncio.run(_batch_read(sources, max_bytes))

    # open output sink
    sink = open(output, "w", encoding="utf-8") if output else sys.stdout
    try:
        # choose output style
        if len(sources) == 1 and not jsonl:
            obj = result_asdict(results[0], source=sources[0], peek=bytes, fields=sel_fields)
            json.dump(obj, sink, indent=2)
            sink.write("\n")
        else:
            for src, res in zip(sources, results):
                obj = result_asdict(res, source=src, peek=bytes, fields=sel_fields)
                sink.write(json.dumps(obj))
                sink.write("\n")
    finally:
        if output:
            sink.close()

    # exit code
    if any(not r.success for r in results):
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
