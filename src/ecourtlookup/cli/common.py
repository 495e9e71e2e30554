"""
Shared helpers for the ecourtlookup CLI commands.

Every command builds a CourtLookupClient from the ClientConfig stored on the
Click context by the main group, runs one coroutine against it with
asyncio.run(), and translates the client's typed errors into exit codes:

    0  success
    1  any error (network, credential issuance, bad parameters, backend error)
    2  not found
"""

import asyncio
import json
import sys
from typing import Any, Awaitable, Callable, Dict, TypeVar

import click
from pydantic import ValidationError

from ..apis.ecourts import CourtLookupClient
from ..errors import EcourtsError, NotFoundError
from ..utils.config import ClientConfig

T = TypeVar("T")

EXIT_ERROR = 1
EXIT_NOT_FOUND = 2


def get_config(ctx: click.Context) -> ClientConfig:
    obj = ctx.find_root().obj or {}
    return obj.get("config") or ClientConfig()


def run_lookup(
    ctx: click.Context, operation: Callable[[CourtLookupClient], Awaitable[T]]
) -> T:
    """
    Run one async operation against a fresh client and map errors to exit codes.

    Args:
        ctx: Current Click context; the root context carries the ClientConfig.
        operation: Coroutine function receiving the open client.

    Returns:
        Whatever the operation returns.
    """
    config = get_config(ctx)

    async def _run() -> T:
        async with CourtLookupClient(config) as client:
            return await operation(client)

    try:
        return asyncio.run(_run())
    except NotFoundError as e:
        click.echo(f"Not found: {e.message}", err=True)
        sys.exit(EXIT_NOT_FOUND)
    except EcourtsError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_ERROR)
    except (ValueError, ValidationError) as e:
        click.echo(f"Invalid input: {e}", err=True)
        sys.exit(EXIT_ERROR)
    except KeyboardInterrupt:
        click.echo("\nInterrupted", err=True)
        sys.exit(EXIT_ERROR)


def echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False, default=str))


def describe(item: Any) -> str:
    """Render a backend listing entry as "<code>  <name>" where possible."""
    if not isinstance(item, dict):
        return str(item)

    code = _first_value(item, "code") or _first_value(item, "id")
    name = _first_value(item, "name")
    if code is not None and name is not None:
        return f"{code:>6}  {name}"
    return json.dumps(item, ensure_ascii=False)


def _first_value(item: Dict[str, Any], fragment: str) -> Any:
    for key, value in item.items():
        if fragment in key.lower():
            return value
    return None
